import matplotlib

matplotlib.use("Agg")

import pytest

from csmacd.setting import Setting


class ScriptedRandom():
    """Backoff source that hands out fixed draws, 0 once the script runs out."""

    def __init__(self, values=()):
        self.values = list(values)
        self.calls = []

    def randint(self, a, b):
        v = self.values.pop(0) if self.values else 0
        assert a <= v <= b
        self.calls.append((a, b))
        return v


@pytest.fixture
def make_setting():
    # t_trans = 1.0s and slot_time = 0.512s, no propagation delay unless overridden
    def _make(**kw):
        params = dict(node_num=2, arrival_rate=1.0, packet_length=1000, bit_rate=1000, node_distance=0.0,
                      propagation_speed=1.0, total_time=10.0, horizon_margin=0.0, seed=1)
        params.update(kw)
        return Setting(**params)
    return _make
