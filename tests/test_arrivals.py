import pytest

from csmacd.arrivals import ExponentialArrivals, ScriptedArrivals


def test_exponential_mean():
    gen = ExponentialArrivals(seed=1)
    samples = [gen.sample_interarrival(4.0) for _ in range(20000)]
    assert min(samples) > 0
    assert sum(samples) / len(samples) == pytest.approx(0.25, abs=0.01)


def test_exponential_seeded():
    a = ExponentialArrivals(seed=42)
    b = ExponentialArrivals(seed=42)
    assert [a.sample_interarrival(2.0) for _ in range(5)] == [b.sample_interarrival(2.0) for _ in range(5)]


def test_scripted():
    gen = ScriptedArrivals([1.0, 2.5])
    assert gen.sample_interarrival(9.0) == 1.0
    assert gen.sample_interarrival(9.0) == 2.5
    with pytest.raises(IndexError):
        gen.sample_interarrival(9.0)
