import pytest

from csmacd.setting import BackoffAnchor, ConfigError, Sensing, Setting


def test_derived_values():
    s = Setting(node_num=4, packet_length=1500, bit_rate=1e6, node_distance=10, propagation_speed=2e8, seed=7)
    assert s.t_trans == pytest.approx(1.5e-3)
    assert s.t_prop == pytest.approx(5e-8)
    assert s.slot_time == pytest.approx(512e-6)
    assert s.horizon_margin == pytest.approx(s.t_trans + 3 * s.t_prop)
    assert s.arrival_limit == pytest.approx(s.total_time + s.horizon_margin)
    assert s.seed == 7


def test_defaults():
    s = Setting()
    assert s.sensing is Sensing.PERSISTENT
    assert s.backoff_anchor is BackoffAnchor.FARTHEST_COLLISION
    assert s.max_collisions == 10
    assert 1 <= s.seed <= 10000


def test_enum_values_accepted():
    s = Setting(sensing="non-persistent", backoff_anchor="own")
    assert s.sensing is Sensing.NON_PERSISTENT
    assert s.backoff_anchor is BackoffAnchor.OWN


def test_max_distance():
    s = Setting(node_num=5)
    assert [s.max_distance(i) for i in range(5)] == [4, 3, 2, 3, 4]
    assert Setting(node_num=1).max_distance(0) == 0


@pytest.mark.parametrize("kw", [
    dict(node_num=0),
    dict(node_num=2.5),
    dict(node_num=True),
    dict(arrival_rate=0),
    dict(packet_length=-1),
    dict(bit_rate=0),
    dict(propagation_speed=0),
    dict(total_time=0),
    dict(node_distance=-1),
    dict(max_collisions=0),
    dict(queue_capacity=0),
    dict(horizon_margin=-0.5),
    dict(sensing="sometimes"),
    dict(backoff_anchor="middle"),
])
def test_invalid(kw):
    with pytest.raises(ConfigError):
        Setting(**kw)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        Setting(node_num=0)
