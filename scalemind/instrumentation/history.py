"""Bounded time series of metric snapshots for charting.

HistoryBuffer keeps the most recent ``capacity`` snapshots, oldest first.
Appending to a full buffer evicts the oldest entry. The engine is the only
writer; consumers read ``all()`` or the column helpers after each tick.
"""

from __future__ import annotations

from collections import deque
from typing import Iterator

import pandas as pd

from scalemind.instrumentation.snapshot import METRIC_FIELDS, MetricsSnapshot


class HistoryBuffer:
    """FIFO buffer of MetricsSnapshot with fixed capacity.

    Args:
        capacity: Maximum number of snapshots retained. Must be >= 1.
    """

    def __init__(self, capacity: int = 30) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._snapshots: deque[MetricsSnapshot] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, snapshot: MetricsSnapshot) -> None:
        """Push to the back, evicting the oldest snapshot when full."""
        self._snapshots.append(snapshot)

    def all(self) -> tuple[MetricsSnapshot, ...]:
        """All retained snapshots, oldest first."""
        return tuple(self._snapshots)

    def clear(self) -> None:
        self._snapshots.clear()

    @property
    def latest(self) -> MetricsSnapshot | None:
        """Most recent snapshot, or None if empty."""
        if not self._snapshots:
            return None
        return self._snapshots[-1]

    # === Columns ===

    def times(self) -> list[float]:
        """Snapshot timestamps in seconds."""
        return [s.timestamp.to_seconds() for s in self._snapshots]

    def series(self, field: str) -> list[float]:
        """Values of one metric across the buffer.

        Raises:
            KeyError: If ``field`` is not a metric name.
        """
        if field not in METRIC_FIELDS:
            raise KeyError(
                f"Unknown metric {field!r}. Expected one of: {', '.join(METRIC_FIELDS)}"
            )
        return [getattr(s, field) for s in self._snapshots]

    def to_dict(self) -> dict[str, list]:
        """Return dict with keys: tick, time_s and one list per metric."""
        result: dict[str, list] = {
            "tick": [s.tick for s in self._snapshots],
            "time_s": self.times(),
        }
        for field in METRIC_FIELDS:
            result[field] = self.series(field)
        return result

    def to_dataframe(self) -> pd.DataFrame:
        """Snapshots as a DataFrame, one row per snapshot indexed by tick."""
        frame = pd.DataFrame(self.to_dict(), columns=["tick", "time_s", *METRIC_FIELDS])
        return frame.set_index("tick")

    def __iter__(self) -> Iterator[MetricsSnapshot]:
        return iter(tuple(self._snapshots))

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return len(self._snapshots) > 0
