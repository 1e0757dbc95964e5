from csmacd.arrivals import ExponentialArrivals, ScriptedArrivals
from csmacd.bus import SharedBus
from csmacd.metrics import Metrics
from csmacd.node_queue import SENTINEL, EmptyQueueError, NodeEventQueue, QueueOverflowError
from csmacd.protocols import Result, SensingEngine, simulate
from csmacd.setting import BackoffAnchor, ConfigError, Sensing, Setting
