import random


class ExponentialArrivals():
    """Exponentially distributed interarrival gaps (a Poisson arrival process)."""

    def __init__(self, seed=None, rng=None):
        self.rng = rng if rng is not None else random.Random(seed)

    def sample_interarrival(self, rate):
        gap = self.rng.expovariate(rate)
        while gap <= 0: # expovariate returns 0.0 when random() draws exactly 0
            gap = self.rng.expovariate(rate)
        return gap


class ScriptedArrivals():
    """Replays a fixed sequence of gaps, ignoring the rate.

    Nodes are populated in index order, so e.g. gaps [5.0, 100, 5.0, 100] with
    a horizon of 10 gives node 0 and node 1 exactly one frame each at t=5.0.
    """

    def __init__(self, gaps):
        self.gaps = list(gaps)
        self.idx = 0

    def sample_interarrival(self, rate):
        if self.idx == len(self.gaps):
            raise IndexError("scripted arrivals exhausted")
        gap = self.gaps[self.idx]
        self.idx += 1
        return gap
