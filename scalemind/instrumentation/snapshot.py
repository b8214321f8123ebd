"""Immutable per-tick metrics record."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from scalemind.core.temporal import Instant

METRIC_FIELDS: tuple[str, ...] = (
    "active_users",
    "requests_per_second",
    "response_time",
    "error_rate",
    "cpu_usage",
    "memory_usage",
)


@dataclass(frozen=True)
class MetricsSnapshot:
    """One fully computed set of metrics.

    Attributes:
        tick: Clock tick that produced the snapshot (0 for the initial one).
        timestamp: Simulation time of the computation.
        active_users: Simulated concurrent users.
        requests_per_second: Offered request rate.
        response_time: Milliseconds.
        error_rate: Percentage of failed requests, in [0, 100].
        cpu_usage: Percentage, in [0, 100].
        memory_usage: Percentage, in [0, 100].
    """

    tick: int
    timestamp: Instant
    active_users: int
    requests_per_second: int
    response_time: float
    error_rate: float
    cpu_usage: float
    memory_usage: float

    def to_dict(self) -> dict[str, float | int]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.to_seconds()
        return data
