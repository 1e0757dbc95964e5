from collections import deque

SENTINEL = -1 # peek_head() value for a node with no further attempts


class EmptyQueueError(AssertionError):
    pass


class QueueOverflowError(OverflowError):
    pass


class NodeEventQueue():
    """Pending transmission attempts of one node, earliest first.

    Timestamps are kept weakly increasing: they are pushed in arrival order and
    only ever moved later by advance_all_below(), which keeps the order. The
    entries at or below a threshold are therefore always a prefix of the queue.
    """

    def __init__(self, capacity, node_id=0):
        self.capacity = capacity
        self.node_id = node_id
        self.times = deque()
        self.collisions = 0
        self.deferrals = 0 # busy-bus sensing retries, non-persistent mode only

    def __len__(self):
        return len(self.times)

    def __iter__(self):
        return iter(self.times)

    def is_empty(self):
        return len(self.times) == 0

    def is_full(self):
        return len(self.times) >= self.capacity

    def push(self, timestamp):
        if self.is_full():
            raise QueueOverflowError(f"node {self.node_id}: queue capacity {self.capacity} exhausted")
        self.times.append(timestamp)

    def peek_head(self):
        if not self.times: return SENTINEL
        return self.times[0]

    def pop_head(self):
        if not self.times:
            raise EmptyQueueError(f"node {self.node_id}: pop_head on an empty queue")
        return self.times.popleft()

    def advance_all_below(self, threshold):
        """Defer every attempt at or before `threshold` to exactly `threshold`."""
        idx = 0
        while idx < len(self.times) and self.times[idx] <= threshold:
            self.times[idx] = threshold
            idx += 1
        return idx

    def increment_collision(self):
        self.collisions += 1
        return self.collisions

    def reset_collision(self):
        self.collisions = 0

    def collision_count(self):
        return self.collisions

    def increment_deferral(self):
        self.deferrals += 1
        return self.deferrals

    def reset_deferral(self):
        self.deferrals = 0

    def deferral_count(self):
        return self.deferrals

    def clear(self):
        self.times.clear()
        self.collisions = 0
        self.deferrals = 0
