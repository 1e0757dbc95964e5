import pytest

from csmacd.main import main

SMALL = ["--time", "0.5", "--seed", "5"]


def test_run(capsys):
    assert main(["run", "--nodes", "4", "--rate", "10"] + SMALL) == 0
    out = capsys.readouterr().out
    assert "efficiency" in out
    assert "persistent" in out


def test_run_history(capsys):
    main(["run", "--nodes", "2", "--sensing", "non-persistent", "--history"] + SMALL)
    out = capsys.readouterr().out
    assert "non-persistent" in out
    assert "send" in out


def test_sweep_table(capsys):
    main(["sweep", "--node-list", "2", "4", "--rates", "5", "--repeat", "2", "--no-plot"] + SMALL)
    lines = capsys.readouterr().out.splitlines()
    # header plus one row per sensing discipline and node count
    assert len(lines) == 1 + 2 * 2
    assert lines[1].split()[:3] == ["persistent", "2", "5"]
    assert lines[-1].split()[:3] == ["non-persistent", "4", "5"]


def test_sweep_plots(tmp_path):
    prefix = str(tmp_path / "sweep")
    main(["sweep", "--node-list", "2", "3", "--rates", "5", "--output", prefix] + SMALL)
    assert (tmp_path / "sweep_efficiency.png").exists()
    assert (tmp_path / "sweep_throughput.png").exists()


def test_bad_setting(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["run", "--nodes", "0"])
    assert exc.value.code == 2
    assert "node_num" in capsys.readouterr().err
