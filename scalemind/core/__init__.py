"""Time, clock and configuration primitives."""

from scalemind.core.clock import ClockState, SimulationClock
from scalemind.core.config import EngineSettings, ModelParameters, SimulationConfig
from scalemind.core.temporal import Instant

__all__ = [
    "ClockState",
    "EngineSettings",
    "Instant",
    "ModelParameters",
    "SimulationClock",
    "SimulationConfig",
]
