import random
from enum import Enum


class ConfigError(ValueError):
    pass


class Sensing(Enum):
    PERSISTENT = "persistent"
    NON_PERSISTENT = "non-persistent"


class BackoffAnchor(Enum):
    OWN = "own"
    FARTHEST_COLLISION = "farthest"


class Setting():
    def __init__(self, node_num=20, arrival_rate=7.0, packet_length=1500, bit_rate=1e6, node_distance=10.0,
                 propagation_speed=2e8, total_time=1000.0, sensing=Sensing.PERSISTENT,
                 backoff_anchor=BackoffAnchor.FARTHEST_COLLISION, max_collisions=10, slot_bits=512,
                 queue_capacity=1000000, horizon_margin=None, seed=None):
        self.node_num = node_num
        self.arrival_rate = arrival_rate # frames per second, per node
        self.packet_length = packet_length # bits
        self.bit_rate = bit_rate # bits per second
        self.node_distance = node_distance # metres between adjacent nodes
        self.propagation_speed = propagation_speed # metres per second
        self.total_time = total_time # simulation horizon in seconds
        self.max_collisions = max_collisions # retry ceiling before a frame is dropped
        self.slot_bits = slot_bits
        self.queue_capacity = queue_capacity
        try:
            self.sensing = Sensing(sensing)
            self.backoff_anchor = BackoffAnchor(backoff_anchor)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        self.validate()

        self.t_prop = node_distance / propagation_speed # one hop between adjacent nodes
        self.t_trans = packet_length / bit_rate
        self.slot_time = slot_bits / bit_rate

        if horizon_margin is None:
            # long enough for a frame sent at the horizon to clear the whole bus
            self.horizon_margin = self.t_trans + self.t_prop * (node_num - 1)
        elif horizon_margin < 0:
            raise ConfigError("horizon_margin must not be negative")
        else:
            self.horizon_margin = horizon_margin

        if seed is None:
            self.seed = random.randint(1, 10000)
        else:
            self.seed = seed

    def validate(self):
        if isinstance(self.node_num, bool) or not isinstance(self.node_num, int):
            raise ConfigError(f"node_num must be an integer, got {self.node_num!r}")
        if self.node_num < 1:
            raise ConfigError("node_num must be at least 1")
        for name in ("arrival_rate", "packet_length", "bit_rate", "propagation_speed", "total_time"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.node_distance < 0:
            raise ConfigError("node_distance must not be negative")
        if self.max_collisions < 1:
            raise ConfigError("max_collisions must be at least 1")
        if self.slot_bits < 0:
            raise ConfigError("slot_bits must not be negative")
        if self.queue_capacity < 1:
            raise ConfigError("queue_capacity must be at least 1")

    @property
    def arrival_limit(self):
        return self.total_time + self.horizon_margin

    def max_distance(self, node):
        """Hops from `node` to the farthest end of the bus."""
        return max(node, self.node_num - 1 - node)

    def describe(self):
        return (f"N={self.node_num} A={self.arrival_rate} L={self.packet_length} R={self.bit_rate:g} "
                f"D={self.node_distance} S={self.propagation_speed:g} T={self.total_time} "
                f"{self.sensing.value} anchor={self.backoff_anchor.value} seed={self.seed}")
