from .history import HistoryWindow
from .detector import AnomalyDetector, BaselineRule
from .aggregator import SnapshotAggregator
from .scheduler import Scheduler
from .emitter import JsonLinesEmitter

__all__ = [
    "HistoryWindow",
    "AnomalyDetector",
    "BaselineRule",
    "SnapshotAggregator",
    "Scheduler",
    "JsonLinesEmitter",
]
