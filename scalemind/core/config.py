"""Engine configuration.

Three layers:

- ``SimulationConfig``: the mutable, learner-controlled state (load multiplier
  and pause flag). Only the engine's control surface writes to it.
- ``ModelParameters``: frozen constants of the hypothetical service that the
  load and degradation models read.
- ``EngineSettings``: frozen runtime settings (tick interval, history size,
  slider range). ``EngineSettings.from_env()`` overrides them from
  environment variables.

Environment variables:
    SM_TICK_INTERVAL: Seconds between ticks.
    SM_HISTORY_CAPACITY: Number of snapshots kept for charting.
    SM_MAX_MULTIPLIER: Upper bound of the load multiplier.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

DEFAULT_USER_MULTIPLIER = 1.0


@dataclass
class SimulationConfig:
    """Mutable simulation state owned by the engine."""

    user_multiplier: float = DEFAULT_USER_MULTIPLIER
    is_paused: bool = False

    def restore_defaults(self) -> None:
        self.user_multiplier = DEFAULT_USER_MULTIPLIER
        self.is_paused = False


@dataclass(frozen=True)
class ModelParameters:
    """Constants describing the simulated service.

    Attributes:
        base_user_count: Nominal user population at multiplier 1.0.
        requests_per_user_per_second: Request rate generated by one user.
        capacity_rps: Requests per second the service sustains at 100% utilization.
        base_latency_ms: Response time with no load.
        queueing_coefficient_ms: Scale of the hyperbolic queueing delay term.
        capacity_clamp: Utilization above which latency grows linearly.
        epsilon: Lower bound for the ``1 - u`` denominator.
        overload_latency_slope_ms: Extra milliseconds per unit of utilization
            past ``capacity_clamp``.
        error_onset_utilization: Utilization at which errors start to appear.
        error_slope: Error-rate percentage points per unit of utilization
            above the onset.
        cpu_scale_factor: CPU percent at 100% utilization.
        base_memory_percent: Memory used by an idle service.
        memory_per_user_percent: Memory consumed per connected user.
    """

    base_user_count: int = 1000
    requests_per_user_per_second: float = 1.0
    capacity_rps: float = 6000.0
    base_latency_ms: float = 50.0
    queueing_coefficient_ms: float = 20.0
    capacity_clamp: float = 0.98
    epsilon: float = 1e-3
    overload_latency_slope_ms: float = 2000.0
    error_onset_utilization: float = 0.70
    error_slope: float = 100.0
    cpu_scale_factor: float = 100.0
    base_memory_percent: float = 20.0
    memory_per_user_percent: float = 0.008

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ValueError(f"{f.name} must be finite, got {value}")
        if self.capacity_rps <= 0:
            raise ValueError(f"capacity_rps must be positive, got {self.capacity_rps}")
        if not 0.0 < self.capacity_clamp < 1.0:
            raise ValueError(
                f"capacity_clamp must be in (0, 1), got {self.capacity_clamp}"
            )
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        for f in fields(self):
            if f.name in ("capacity_rps", "capacity_clamp", "epsilon"):
                continue
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")


@dataclass(frozen=True)
class EngineSettings:
    """Runtime settings for the engine's clock, history and control surface."""

    tick_interval_s: float = 1.0
    history_capacity: int = 30
    max_multiplier: float = 10.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.tick_interval_s) and self.tick_interval_s > 0):
            raise ValueError(
                f"tick_interval_s must be positive and finite, got {self.tick_interval_s}"
            )
        if self.history_capacity < 1:
            raise ValueError(
                f"history_capacity must be >= 1, got {self.history_capacity}"
            )
        if not (math.isfinite(self.max_multiplier) and self.max_multiplier > 0):
            raise ValueError(
                f"max_multiplier must be positive and finite, got {self.max_multiplier}"
            )

    @classmethod
    def from_env(cls) -> EngineSettings:
        """Build settings from SM_* environment variables, falling back to defaults."""
        overrides: dict[str, float | int] = {}

        tick = os.environ.get("SM_TICK_INTERVAL", "")
        if tick:
            overrides["tick_interval_s"] = float(tick)

        capacity = os.environ.get("SM_HISTORY_CAPACITY", "")
        if capacity:
            overrides["history_capacity"] = int(capacity)

        max_multiplier = os.environ.get("SM_MAX_MULTIPLIER", "")
        if max_multiplier:
            overrides["max_multiplier"] = float(max_multiplier)

        if overrides:
            logger.debug("Engine settings overridden from environment: %s", overrides)
        return cls(**overrides)
