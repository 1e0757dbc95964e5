import logging
import random
from collections import namedtuple

from csmacd.arrivals import ExponentialArrivals
from csmacd.bus import SharedBus
from csmacd.metrics import Metrics
from csmacd.node_queue import SENTINEL, NodeEventQueue
from csmacd.setting import BackoffAnchor, Sensing

logger = logging.getLogger(__name__)

Result = namedtuple("Result", ["attempted", "succeeded", "efficiency", "throughput"])


class SensingEngine():
    """CSMA/CD on a linear bus, resolved one event per step().

    Node i sits i hops from node 0; a signal needs `t_prop` per hop. Every
    node's arrivals are drawn up front, then step() repeatedly picks the
    earliest pending attempt and either commits it to the bus or resolves the
    collision it causes.
    """

    def __init__(self, setting, arrivals=None, rng=None, record=False):
        self.setting = setting
        self.rng = rng if rng is not None else random.Random(setting.seed)
        if arrivals is None:
            arrivals = ExponentialArrivals(rng=self.rng)
        self.bus = SharedBus()
        self.metrics = Metrics()
        self.finished = False
        self.closed = False
        self.last_clearance = None
        self.history = [] if record else None

        self.nodes = [NodeEventQueue(setting.queue_capacity, i) for i in range(setting.node_num)]
        for node in self.nodes:
            self.populate(node, arrivals)
        logger.info("engine ready: %s, %d frames generated", setting.describe(), self.metrics.generated)

    def populate(self, node, arrivals):
        limit = self.setting.arrival_limit
        current_time = 0.0
        while True:
            current_time += arrivals.sample_interarrival(self.setting.arrival_rate)
            if current_time >= limit: break
            node.push(current_time) # raises QueueOverflowError instead of truncating
            self.metrics.generated += 1

    def record(self, time, event, nodes):
        if self.history is not None:
            self.history.append((time, event, tuple(nodes)))

    def backoff_time(self, count):
        k = self.rng.randint(0, 2**count - 1)
        return k * self.setting.slot_time

    # ---- bus -------------------------------------------------------------

    def clear_bus(self):
        clearance = self.bus.clearance_time(self.setting)
        sender, start_time = self.bus.release()
        self.last_clearance = clearance
        self.record(clearance, "clear", [sender])
        logger.debug("bus cleared at %.9f (node %d sent at %.9f)", clearance, sender, start_time)

        for i, node in enumerate(self.nodes):
            if node.peek_head() == SENTINEL: continue
            if i == sender:
                # the sender's next frame queues behind the one on the wire
                node.advance_all_below(start_time + self.setting.t_trans)
            elif self.setting.sensing is Sensing.PERSISTENT:
                node.advance_all_below(clearance)
            else:
                self.sense_busy(i, node, clearance)

    def sense_busy(self, idx, node, clearance):
        """Non-persistent: back off and sense again until the bus is free."""
        while node.peek_head() != SENTINEL and node.peek_head() <= clearance:
            sense_time = node.peek_head()
            while sense_time <= clearance:
                count = node.increment_deferral()
                if count >= self.setting.max_collisions:
                    self.drop(idx, node, sense_time)
                    node.reset_deferral()
                    break
                sense_time += self.backoff_time(count)
            else:
                node.advance_all_below(sense_time)

    # ---- selection and collisions -----------------------------------------

    def find_earliest_timestamp(self):
        """(node, time) of the earliest pending attempt, lowest index on ties."""
        min_node, min_time = None, None
        for i, node in enumerate(self.nodes):
            head = node.peek_head()
            if head == SENTINEL: continue
            if min_time is None or head < min_time:
                min_node, min_time = i, head
        return min_node, min_time

    def find_collisions(self, sender, start_time):
        """[(node, time sender's signal reaches it)] for nodes that transmit before sensing it."""
        collisions = []
        for i, node in enumerate(self.nodes):
            if i == sender: continue
            head = node.peek_head()
            if head == SENTINEL: continue
            arrival = start_time + self.setting.t_prop * abs(sender - i)
            if head <= arrival:
                collisions.append((i, arrival))
        return collisions

    def drop(self, idx, node, time):
        node.pop_head()
        self.metrics.record_drop()
        self.record(time, "drop", [idx])
        logger.debug("node %d dropped a frame at %.9f", idx, time)

    def collide(self, idx, anchor, num_peers):
        node = self.nodes[idx]
        ceiling = self.setting.max_collisions
        for _ in range(num_peers):
            if node.increment_collision() >= ceiling: break

        count = node.collision_count()
        if count >= ceiling:
            self.drop(idx, node, node.peek_head())
            node.reset_collision()
            return
        if self.setting.backoff_anchor is BackoffAnchor.OWN:
            anchor = node.peek_head()
        node.advance_all_below(anchor + self.backoff_time(count))

    def resolve_collision(self, sender, start_time, collisions):
        self.metrics.record_collision(len(collisions) + 1)
        involved = [sender] + [i for i, _ in collisions]
        self.record(start_time, "collision", involved)
        logger.debug("collision at %.9f between nodes %s", start_time, involved)

        farthest = max(arrival for _, arrival in collisions)
        for i, arrival in collisions:
            self.collide(i, arrival, 1)
        self.collide(sender, farthest, len(collisions))

    def commit(self, sender, start_time):
        node = self.nodes[sender]
        node.pop_head()
        node.reset_collision()
        node.reset_deferral()
        self.metrics.record_success()
        self.bus.occupy(sender, start_time)
        self.record(start_time, "send", [sender])
        logger.debug("node %d transmits at %.9f", sender, start_time)

    # ---- public API --------------------------------------------------------

    def step(self):
        """Resolve one event.

        Returns the start time of a committed frame, the time of the
        unresolved earliest attempt after a collision, or None once every
        node is exhausted.
        """
        if self.closed:
            raise RuntimeError("step() on a released engine")
        if self.finished: return None

        if self.bus.busy:
            self.clear_bus()

        sender, start_time = self.find_earliest_timestamp()
        if sender is None:
            self.finished = True
            return None

        collisions = self.find_collisions(sender, start_time)
        if collisions:
            self.resolve_collision(sender, start_time, collisions)
        else:
            self.commit(sender, start_time)
        return start_time

    def get_metrics(self):
        return dict(attempted=self.metrics.attempted, succeeded=self.metrics.succeeded)

    def deinit(self):
        for node in self.nodes:
            node.clear()
        self.nodes = []
        self.closed = True

    def print_history(self):
        if self.history is None: return
        for time, event, nodes in self.history:
            print("{:14.9f}  {:<9}  {}".format(time, event, " ".join(f"n{i}" for i in nodes)))


def simulate(setting, arrivals=None, rng=None, show_history=False):
    """Step until every node is exhausted or the horizon is passed."""
    engine = SensingEngine(setting, arrivals, rng, record=show_history)
    while True:
        time = engine.step()
        if time is None or time > setting.total_time: break

    if show_history:
        print(setting.sensing.value)
        engine.print_history()

    metrics = engine.metrics
    if metrics.attempted == 0:
        logger.warning("no transmission attempted before t=%s", setting.total_time)
    result = Result(metrics.attempted, metrics.succeeded, metrics.efficiency(),
                    metrics.throughput(setting.total_time, setting.packet_length))
    logger.info("run finished: attempted=%d succeeded=%d dropped=%d efficiency=%.4f",
                metrics.attempted, metrics.succeeded, metrics.dropped, result.efficiency)
    engine.deinit()
    return result
