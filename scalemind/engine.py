"""Scalability simulation engine.

SimulationEngine owns the whole model for one learner session: the mutable
config, the tick clock, the history buffer and the bottleneck catalog. On
every tick it runs the pipeline

    load model -> bottleneck detector -> degradation model -> snapshot

and appends the snapshot to history. Presentation code reads the accessors
after each tick (or registers an ``on_tick`` hook) and mutates state only
through the three control operations: ``set_user_multiplier``,
``toggle_pause`` and ``reset``.

Everything runs on one thread. Snapshot assembly completes before the
snapshot is published, so readers never observe a half-computed tick.

Usage::

    engine = SimulationEngine()
    engine.set_user_multiplier(5.0)
    engine.advance(3.0)              # three ticks at the default 1s interval
    engine.current_metrics.response_time

    # Or let the engine tick in real time:
    await engine.run()
"""

from __future__ import annotations

import asyncio
import logging
import math
import uuid
from dataclasses import replace
from typing import Callable, Sequence

from scalemind.core.clock import ClockState, SimulationClock
from scalemind.core.config import EngineSettings, ModelParameters, SimulationConfig
from scalemind.core.temporal import Instant
from scalemind.instrumentation.history import HistoryBuffer
from scalemind.instrumentation.snapshot import MetricsSnapshot
from scalemind.model.bottlenecks import (
    CATALOG,
    Bottleneck,
    detect_active,
    diff_active,
    validate_catalog,
)
from scalemind.model.degradation import compute_metrics
from scalemind.model.load import compute_load
from scalemind.model.status import SystemStatus, classify

logger = logging.getLogger(__name__)

TickHook = Callable[[MetricsSnapshot], None]


def clamp_multiplier(value: float, max_multiplier: float) -> float:
    """Clamp a raw slider value into ``[0, max_multiplier]``.

    NaN and negative values map to 0, values above the range (including
    +inf) map to ``max_multiplier``.
    """
    value = float(value)
    if math.isnan(value):
        return 0.0
    return min(max_multiplier, max(0.0, value))


class SimulationEngine:
    """Single-owner simulation engine.

    Args:
        settings: Clock, history and slider settings. Defaults to EngineSettings().
        params: Constants of the simulated service. Defaults to ModelParameters().
        catalog: Bottleneck catalog. Defaults to the built-in CATALOG.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        params: ModelParameters | None = None,
        catalog: Sequence[Bottleneck] = CATALOG,
    ) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._params = params if params is not None else ModelParameters()
        self._catalog = validate_catalog(catalog)

        self._config = SimulationConfig()
        self._history = HistoryBuffer(self._settings.history_capacity)
        self._clock = SimulationClock(self._settings.tick_interval_s, on_tick=self._handle_tick)
        self._tick_hooks: dict[str, TickHook] = {}
        self._active: tuple[Bottleneck, ...] = ()

        self._is_running = False
        self._stop_requested = False
        self._disposed = False

        self._current = self._compute(tick=0, timestamp=Instant.Epoch)
        self._history.append(self._current)
        logger.info(
            "Engine created: tick=%.3fs history=%d max_multiplier=%g catalog=%d",
            self._settings.tick_interval_s,
            self._settings.history_capacity,
            self._settings.max_multiplier,
            len(self._catalog),
        )

    @classmethod
    def create(cls, **kwargs) -> SimulationEngine:
        """Build an engine with settings read from SM_* environment variables."""
        kwargs.setdefault("settings", EngineSettings.from_env())
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def current_metrics(self) -> MetricsSnapshot:
        return self._current

    @property
    def config(self) -> SimulationConfig:
        """A copy of the current config. Mutate via the control operations."""
        return replace(self._config)

    @property
    def history(self) -> tuple[MetricsSnapshot, ...]:
        """Snapshots produced by ticks, oldest first."""
        return self._history.all()

    @property
    def history_buffer(self) -> HistoryBuffer:
        """The underlying buffer, for column and DataFrame helpers. Treat as read-only."""
        return self._history

    @property
    def active_bottlenecks(self) -> tuple[Bottleneck, ...]:
        return self._active

    @property
    def all_bottlenecks(self) -> tuple[Bottleneck, ...]:
        return self._catalog

    @property
    def status(self) -> SystemStatus:
        return classify(self._current)

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def params(self) -> ModelParameters:
        return self._params

    @property
    def clock_state(self) -> ClockState:
        return self._clock.state

    @property
    def is_paused(self) -> bool:
        return self._config.is_paused

    @property
    def is_running(self) -> bool:
        """True while ``run()`` is driving the clock."""
        return self._is_running

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def tick_count(self) -> int:
        return self._clock.ticks

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def set_user_multiplier(self, value: float) -> float:
        """Set the load multiplier, clamping silently into the allowed range.

        While running, the current snapshot is recomputed immediately so the
        change is visible before the next tick. That snapshot is not added
        to history and the tick schedule is unchanged. While paused, only
        the config is updated.

        Returns:
            The multiplier actually applied.
        """
        self._ensure_usable()
        applied = clamp_multiplier(value, self._settings.max_multiplier)
        if applied != value:
            logger.debug("Multiplier %r clamped to %g", value, applied)
        self._config.user_multiplier = applied

        if not self._config.is_paused:
            self._current = self._compute(tick=self._clock.ticks, timestamp=self._clock.now)
        return applied

    def toggle_pause(self) -> bool:
        """Flip between Running and Paused. Returns the new ``is_paused`` value.

        On resume the current snapshot is recomputed out of band, so a
        multiplier changed during the pause is reflected at once. As with
        ``set_user_multiplier``, history and hooks are untouched.
        """
        self._ensure_usable()
        state = self._clock.toggle()
        self._config.is_paused = state is ClockState.PAUSED
        if not self._config.is_paused:
            self._current = self._compute(tick=self._clock.ticks, timestamp=self._clock.now)
        logger.info("Simulation %s", "paused" if self._config.is_paused else "resumed")
        return self._config.is_paused

    def reset(self) -> None:
        """Restore defaults, clear history and start over in Running state.

        Pending ticks are cancelled. One fresh snapshot is computed at tick 0
        and appended, so history holds exactly one entry afterwards.
        """
        self._ensure_usable()
        self._clock.reset()
        self._config.restore_defaults()
        self._history.clear()
        self._current = self._compute(tick=0, timestamp=Instant.Epoch)
        self._history.append(self._current)
        logger.info("Simulation reset")

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------

    def tick(self) -> MetricsSnapshot | None:
        """Fire the next tick immediately.

        Returns:
            The new snapshot, or None if paused.
        """
        self._ensure_usable()
        if self._clock.advance_to_next_tick() == 0:
            return None
        return self._current

    def advance(self, elapsed_s: float) -> int:
        """Feed elapsed time to the clock. Returns the number of ticks fired."""
        self._ensure_usable()
        return self._clock.advance(elapsed_s)

    async def run(self, max_ticks: int | None = None) -> int:
        """Tick in real time until stopped.

        Sleeps one tick interval between clock advances. Intervals that
        elapse while paused produce no snapshot.

        Args:
            max_ticks: Stop after this many intervals. None runs until
                ``stop()`` or ``dispose()``.

        Returns:
            Number of ticks fired.

        Raises:
            RuntimeError: If already running or disposed.
        """
        self._ensure_usable()
        if self._is_running:
            raise RuntimeError("Engine is already running")

        self._is_running = True
        self._stop_requested = False
        interval = self._settings.tick_interval_s
        intervals = 0
        fired = 0
        logger.info("Engine run loop started")
        try:
            while not self._stop_requested and not self._disposed:
                if max_ticks is not None and intervals >= max_ticks:
                    break
                await asyncio.sleep(interval)
                if self._stop_requested or self._disposed:
                    break
                fired += self._clock.advance(interval)
                intervals += 1
        finally:
            self._is_running = False
            logger.info("Engine run loop stopped after %d tick(s)", fired)
        return fired

    def stop(self) -> None:
        """Ask ``run()`` to return after its current sleep."""
        self._stop_requested = True

    # ------------------------------------------------------------------
    # Hooks and lifecycle
    # ------------------------------------------------------------------

    def on_tick(self, callback: TickHook) -> str:
        """Register a callback receiving each snapshot appended by a tick.

        Returns:
            A hook ID for ``remove_hook()``.
        """
        self._ensure_usable()
        hook_id = str(uuid.uuid4())[:8]
        self._tick_hooks[hook_id] = callback
        return hook_id

    def remove_hook(self, hook_id: str) -> None:
        """Remove a tick hook.

        Raises:
            KeyError: If the ID is not registered.
        """
        if hook_id not in self._tick_hooks:
            raise KeyError(f"Hook {hook_id!r} not found")
        del self._tick_hooks[hook_id]

    def dispose(self) -> None:
        """Stop the run loop and drop hooks. The engine cannot be used afterwards."""
        if self._disposed:
            return
        self._stop_requested = True
        self._disposed = True
        self._tick_hooks.clear()
        logger.info("Engine disposed after %d tick(s)", self._clock.ticks)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_usable(self) -> None:
        if self._disposed:
            raise RuntimeError("Engine has been disposed")

    def _handle_tick(self, tick: int, timestamp: Instant) -> None:
        snapshot = self._compute(tick=tick, timestamp=timestamp)
        self._history.append(snapshot)
        self._current = snapshot
        logger.debug(
            "Tick %d: users=%d rps=%d rt=%.1fms err=%.1f%% cpu=%.1f%% mem=%.1f%%",
            tick,
            snapshot.active_users,
            snapshot.requests_per_second,
            snapshot.response_time,
            snapshot.error_rate,
            snapshot.cpu_usage,
            snapshot.memory_usage,
            extra={"tick": tick, "active_users": snapshot.active_users},
        )
        for callback in list(self._tick_hooks.values()):
            callback(snapshot)

    def _compute(self, tick: int, timestamp: Instant) -> MetricsSnapshot:
        load = compute_load(self._config.user_multiplier, self._params)
        active = detect_active(load.active_users, self._catalog)
        metrics = compute_metrics(
            load.active_users, load.requests_per_second, active, self._params
        )
        snapshot = MetricsSnapshot(
            tick=tick,
            timestamp=timestamp,
            active_users=load.active_users,
            requests_per_second=load.requests_per_second,
            response_time=metrics.response_time,
            error_rate=metrics.error_rate,
            cpu_usage=metrics.cpu_usage,
            memory_usage=metrics.memory_usage,
        )

        activated, deactivated = diff_active(self._active, active)
        for bottleneck in activated:
            logger.info(
                "Bottleneck engaged at %d users: %s",
                load.active_users,
                bottleneck.name,
                extra={"active_users": load.active_users, "bottleneck": bottleneck.id.value},
            )
        for bottleneck in deactivated:
            logger.info(
                "Bottleneck cleared at %d users: %s",
                load.active_users,
                bottleneck.name,
                extra={"active_users": load.active_users, "bottleneck": bottleneck.id.value},
            )
        self._active = active
        return snapshot
