"""Load, degradation, bottleneck and status models."""

from scalemind.model.bottlenecks import (
    CATALOG,
    Bottleneck,
    BottleneckId,
    Severity,
    detect_active,
    diff_active,
    get_bottleneck,
)
from scalemind.model.degradation import DegradedMetrics, compute_metrics, utilization
from scalemind.model.load import LoadFigures, compute_load
from scalemind.model.status import (
    StatusMessage,
    StatusThresholds,
    SystemStatus,
    classify,
    resource_status,
    status_message,
)

__all__ = [
    "Bottleneck",
    "BottleneckId",
    "CATALOG",
    "DegradedMetrics",
    "LoadFigures",
    "Severity",
    "StatusMessage",
    "StatusThresholds",
    "SystemStatus",
    "classify",
    "compute_load",
    "compute_metrics",
    "detect_active",
    "diff_active",
    "get_bottleneck",
    "resource_status",
    "status_message",
    "utilization",
]
