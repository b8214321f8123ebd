"""scalemind: a teaching simulator for scalability.

A single load multiplier drives a deterministic model of a hypothetical web
service. Each tick produces a snapshot of traffic, latency, error rate and
resource usage, plus the set of bottlenecks responsible for the degradation.
"""

import logging

logging.getLogger("scalemind").addHandler(logging.NullHandler())

from scalemind.core.clock import ClockState, SimulationClock
from scalemind.core.config import EngineSettings, ModelParameters, SimulationConfig
from scalemind.core.temporal import Instant
from scalemind.engine import SimulationEngine, clamp_multiplier
from scalemind.instrumentation.history import HistoryBuffer
from scalemind.instrumentation.snapshot import MetricsSnapshot
from scalemind.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from scalemind.model.bottlenecks import (
    CATALOG,
    Bottleneck,
    BottleneckId,
    Severity,
    detect_active,
)
from scalemind.model.degradation import DegradedMetrics, compute_metrics, utilization
from scalemind.model.load import LoadFigures, compute_load
from scalemind.model.status import SystemStatus, classify, resource_status

__all__ = [
    "Bottleneck",
    "BottleneckId",
    "CATALOG",
    "ClockState",
    "DegradedMetrics",
    "EngineSettings",
    "HistoryBuffer",
    "Instant",
    "LoadFigures",
    "MetricsSnapshot",
    "ModelParameters",
    "Severity",
    "SimulationClock",
    "SimulationConfig",
    "SimulationEngine",
    "SystemStatus",
    "clamp_multiplier",
    "classify",
    "compute_load",
    "compute_metrics",
    "configure_from_env",
    "detect_active",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "resource_status",
    "set_level",
    "set_module_level",
    "utilization",
]
