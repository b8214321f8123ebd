"""Snapshots and the history buffer that records them."""

from scalemind.instrumentation.history import HistoryBuffer
from scalemind.instrumentation.snapshot import METRIC_FIELDS, MetricsSnapshot

__all__ = [
    "HistoryBuffer",
    "METRIC_FIELDS",
    "MetricsSnapshot",
]
