"""Catalog of scalability bottlenecks and the detector that activates them.

Each bottleneck engages once the active user count reaches its threshold.
Thresholds are increasing tiers, so bottlenecks switch on one after another
as load grows and the learner can attribute each new symptom to a cause.

The catalog is static. The active subset is recomputed from scratch for
every load value and never stored here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence


class BottleneckId(str, Enum):
    SINGLE_DB_CONNECTION = "single_db_connection"
    NO_CACHING = "no_caching"
    STATEFUL_SESSIONS = "stateful_sessions"
    SYNCHRONOUS_PROCESSING = "synchronous_processing"
    SINGLE_SERVER = "single_server"
    NO_RATE_LIMITING = "no_rate_limiting"


@dataclass(frozen=True)
class Severity:
    """Penalty layered on the base degradation curves while a bottleneck is active.

    Attributes:
        response_time_factor: Multiplier applied to response time (>= 1).
        error_rate_points: Percentage points added to the error rate.
        cpu_points: Percentage points added to CPU usage.
        memory_points: Percentage points added to memory usage.
    """

    response_time_factor: float = 1.0
    error_rate_points: float = 0.0
    cpu_points: float = 0.0
    memory_points: float = 0.0

    def __post_init__(self) -> None:
        if self.response_time_factor < 1.0:
            raise ValueError(
                f"response_time_factor must be >= 1, got {self.response_time_factor}"
            )
        for name in ("error_rate_points", "cpu_points", "memory_points"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


@dataclass(frozen=True)
class Bottleneck:
    id: BottleneckId
    name: str
    description: str
    activation_threshold: int
    severity: Severity = field(default_factory=Severity)

    def is_active(self, active_users: int) -> bool:
        return active_users >= self.activation_threshold


CATALOG: tuple[Bottleneck, ...] = (
    Bottleneck(
        id=BottleneckId.SINGLE_DB_CONNECTION,
        name="Single database connection",
        description=(
            "Every request waits its turn on one shared database connection. "
            "Queries line up and response time climbs. A connection pool lets "
            "several queries run at once."
        ),
        activation_threshold=2000,
        severity=Severity(response_time_factor=1.5, error_rate_points=0.5),
    ),
    Bottleneck(
        id=BottleneckId.NO_CACHING,
        name="No caching layer",
        description=(
            "The same data is recomputed and re-read on every request. "
            "The CPU burns cycles on repeated work. A cache would answer "
            "most of these requests from memory."
        ),
        activation_threshold=3000,
        severity=Severity(response_time_factor=1.1, cpu_points=15.0),
    ),
    Bottleneck(
        id=BottleneckId.STATEFUL_SESSIONS,
        name="Sessions stored in server memory",
        description=(
            "Each logged-in user keeps session data inside the server process. "
            "Memory fills up with every new user and the server cannot be "
            "cloned freely. Stateless servers with an external session store scale out."
        ),
        activation_threshold=4000,
        severity=Severity(memory_points=15.0),
    ),
    Bottleneck(
        id=BottleneckId.SYNCHRONOUS_PROCESSING,
        name="Synchronous request handling",
        description=(
            "Slow work such as sending emails runs inside the request. "
            "Workers stay blocked while they wait. A background queue would "
            "free them to serve other users."
        ),
        activation_threshold=5000,
        severity=Severity(response_time_factor=1.3, error_rate_points=2.0),
    ),
    Bottleneck(
        id=BottleneckId.SINGLE_SERVER,
        name="Single server, no load balancer",
        description=(
            "All traffic hits one machine. When it saturates there is nowhere "
            "else for requests to go. A load balancer spreads traffic over "
            "several identical servers."
        ),
        activation_threshold=7000,
        severity=Severity(error_rate_points=5.0, cpu_points=10.0),
    ),
    Bottleneck(
        id=BottleneckId.NO_RATE_LIMITING,
        name="No rate limiting",
        description=(
            "Bursts of traffic are accepted without limit and overwhelm the "
            "system for everyone. Rate limiting rejects the excess early and "
            "protects the users already being served."
        ),
        activation_threshold=9000,
        severity=Severity(response_time_factor=1.2, error_rate_points=8.0),
    ),
)


def validate_catalog(catalog: Iterable[Bottleneck]) -> tuple[Bottleneck, ...]:
    """Return the catalog as a tuple, rejecting duplicate ids or negative thresholds."""
    entries = tuple(catalog)
    seen: set[BottleneckId] = set()
    for entry in entries:
        if entry.id in seen:
            raise ValueError(f"Duplicate bottleneck id {entry.id.value!r}")
        if entry.activation_threshold < 0:
            raise ValueError(
                f"Bottleneck {entry.id.value!r} has negative threshold "
                f"{entry.activation_threshold}"
            )
        seen.add(entry.id)
    return entries


def detect_active(
    active_users: int,
    catalog: Sequence[Bottleneck] = CATALOG,
) -> tuple[Bottleneck, ...]:
    """Bottlenecks engaged at ``active_users``, in catalog declaration order."""
    return tuple(b for b in catalog if b.is_active(active_users))


def get_bottleneck(
    bottleneck_id: BottleneckId | str,
    catalog: Sequence[Bottleneck] = CATALOG,
) -> Bottleneck:
    """Look up a catalog entry by id.

    Raises:
        KeyError: If no entry has that id.
    """
    try:
        key = BottleneckId(bottleneck_id)
    except ValueError:
        raise KeyError(f"Unknown bottleneck id {bottleneck_id!r}") from None
    for entry in catalog:
        if entry.id is key:
            return entry
    raise KeyError(f"Bottleneck {key.value!r} not in catalog")


def diff_active(
    previous: Sequence[Bottleneck],
    current: Sequence[Bottleneck],
) -> tuple[tuple[Bottleneck, ...], tuple[Bottleneck, ...]]:
    """Split a change of active set into (activated, deactivated)."""
    previous_ids = {b.id for b in previous}
    current_ids = {b.id for b in current}
    activated = tuple(b for b in current if b.id not in previous_ids)
    deactivated = tuple(b for b in previous if b.id not in current_ids)
    return activated, deactivated
