"""Health classification of a snapshot for learner-facing status banners."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scalemind.instrumentation.snapshot import MetricsSnapshot


class SystemStatus(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class StatusThresholds:
    """Limits above which a metric is considered degraded.

    Comparisons are strict: a value equal to a limit does not trip it.
    """

    warning_error_rate: float = 2.0
    critical_error_rate: float = 10.0
    warning_response_time: float = 200.0
    critical_response_time: float = 500.0
    warning_cpu: float = 70.0
    critical_cpu: float = 90.0
    warning_resource: float = 70.0
    critical_resource: float = 90.0


DEFAULT_THRESHOLDS = StatusThresholds()


@dataclass(frozen=True)
class StatusMessage:
    title: str
    description: str


STATUS_MESSAGES: dict[SystemStatus, StatusMessage] = {
    SystemStatus.HEALTHY: StatusMessage(
        title="System stable",
        description="The system handles the current load well. Try adding more users!",
    ),
    SystemStatus.WARNING: StatusMessage(
        title="Warning",
        description="The system is starting to slow down. Response times are rising.",
    ),
    SystemStatus.CRITICAL: StatusMessage(
        title="Critical",
        description="Too much load! Users are seeing errors and significant delays.",
    ),
}


def classify(
    snapshot: MetricsSnapshot,
    thresholds: StatusThresholds = DEFAULT_THRESHOLDS,
) -> SystemStatus:
    """Overall status: the worst level reached by error rate, latency or CPU."""
    if (
        snapshot.error_rate > thresholds.critical_error_rate
        or snapshot.response_time > thresholds.critical_response_time
        or snapshot.cpu_usage > thresholds.critical_cpu
    ):
        return SystemStatus.CRITICAL
    if (
        snapshot.error_rate > thresholds.warning_error_rate
        or snapshot.response_time > thresholds.warning_response_time
        or snapshot.cpu_usage > thresholds.warning_cpu
    ):
        return SystemStatus.WARNING
    return SystemStatus.HEALTHY


def resource_status(
    percent: float,
    thresholds: StatusThresholds = DEFAULT_THRESHOLDS,
) -> SystemStatus:
    """Gauge status for a single CPU or memory percentage."""
    if percent > thresholds.critical_resource:
        return SystemStatus.CRITICAL
    if percent > thresholds.warning_resource:
        return SystemStatus.WARNING
    return SystemStatus.HEALTHY


def status_message(status: SystemStatus) -> StatusMessage:
    return STATUS_MESSAGES[status]
