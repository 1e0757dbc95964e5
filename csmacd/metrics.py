class Metrics():
    def __init__(self):
        self.attempted = 0 # includes every node involved in a collision
        self.succeeded = 0
        self.collisions = 0 # collision steps
        self.dropped = 0
        self.generated = 0

    def record_success(self):
        self.attempted += 1
        self.succeeded += 1

    def record_collision(self, num_nodes):
        self.collisions += 1
        self.attempted += num_nodes

    def record_drop(self):
        self.dropped += 1

    def efficiency(self):
        if self.attempted == 0: return 0.0
        return self.succeeded / self.attempted

    def throughput(self, horizon, packet_length):
        """Delivered bits per second over the horizon."""
        if horizon <= 0: return 0.0
        return self.succeeded * packet_length / horizon

    def snapshot(self):
        return {
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "collisions": self.collisions,
            "dropped": self.dropped,
            "generated": self.generated,
        }
