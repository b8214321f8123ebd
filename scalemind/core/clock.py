"""Tick clock with a Running/Paused state machine.

The clock does not own a timer. Callers feed it elapsed time through
``advance()`` (the engine's async runner does this with ``asyncio.sleep``,
tests do it directly), and the clock fires one callback per whole tick
interval that elapsed while it was running.

While paused, elapsed time is discarded: no tick fires and no catch-up burst
happens on resume. A partially elapsed interval from before the pause is
kept, so ticking resumes from the next scheduled tick.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from scalemind.core.temporal import Instant

logger = logging.getLogger(__name__)

TickCallback = Callable[[int, Instant], None]
"""Receives the 1-based tick index and the simulation time of the tick."""


class ClockState(Enum):
    RUNNING = "running"
    PAUSED = "paused"


class SimulationClock:
    """Periodic tick source honoring pause state.

    Args:
        tick_interval_s: Seconds of running time between ticks.
        on_tick: Called synchronously for each tick.
    """

    def __init__(self, tick_interval_s: float, on_tick: TickCallback | None = None):
        self._interval = Instant.from_seconds(tick_interval_s)
        if self._interval <= Instant.Epoch:
            raise ValueError(f"tick_interval_s must be positive, got {tick_interval_s}")
        self._on_tick = on_tick
        self._state = ClockState.RUNNING
        self._ticks = 0
        self._last_tick_time = Instant.Epoch
        self._pending_ns = 0

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def is_paused(self) -> bool:
        return self._state is ClockState.PAUSED

    @property
    def ticks(self) -> int:
        """Number of ticks fired since creation or the last reset."""
        return self._ticks

    @property
    def tick_interval(self) -> Instant:
        return self._interval

    @property
    def last_tick_time(self) -> Instant:
        return self._last_tick_time

    @property
    def now(self) -> Instant:
        """Running time elapsed, including the partial interval since the last tick."""
        return Instant(self._last_tick_time.nanoseconds + self._pending_ns)

    def pause(self) -> None:
        if self._state is ClockState.PAUSED:
            return
        self._state = ClockState.PAUSED
        logger.info("Clock paused at tick %d", self._ticks)

    def resume(self) -> None:
        if self._state is ClockState.RUNNING:
            return
        self._state = ClockState.RUNNING
        logger.info("Clock resumed at tick %d", self._ticks)

    def toggle(self) -> ClockState:
        """Flip between Running and Paused. Returns the new state."""
        if self._state is ClockState.RUNNING:
            self.pause()
        else:
            self.resume()
        return self._state

    def advance(self, elapsed_s: float) -> int:
        """Feed elapsed wall time to the clock.

        Args:
            elapsed_s: Seconds elapsed since the previous call. Must be >= 0.

        Returns:
            Number of ticks fired.
        """
        if elapsed_s < 0:
            raise ValueError(f"elapsed_s must be non-negative, got {elapsed_s}")
        if self._state is ClockState.PAUSED:
            logger.debug("Clock paused, discarding %.3fs", elapsed_s)
            return 0

        self._pending_ns += round(elapsed_s * 1_000_000_000)
        fired = 0
        interval_ns = self._interval.nanoseconds
        while self._pending_ns >= interval_ns and self._state is ClockState.RUNNING:
            self._pending_ns -= interval_ns
            self._last_tick_time = self._last_tick_time + self._interval
            self._ticks += 1
            fired += 1
            if self._on_tick is not None:
                self._on_tick(self._ticks, self._last_tick_time)
        if self._state is ClockState.PAUSED:
            # paused from inside a tick callback
            self._pending_ns = min(self._pending_ns, interval_ns - 1)
        return fired

    def advance_to_next_tick(self) -> int:
        """Skip the rest of the current interval and fire the next tick now.

        Returns 1 if a tick fired, 0 if the clock is paused.
        """
        if self._state is ClockState.PAUSED:
            return 0
        self._pending_ns = self._interval.nanoseconds
        return self.advance(0.0)

    def reset(self) -> None:
        """Return to Running at Epoch with no ticks fired."""
        self._state = ClockState.RUNNING
        self._ticks = 0
        self._last_tick_time = Instant.Epoch
        self._pending_ns = 0
        logger.debug("Clock reset")
