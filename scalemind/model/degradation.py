"""Degradation model: derive latency, errors and resource usage from load.

The curves follow queueing theory rather than a linear ramp. With
utilization ``u = rps / capacity``, the queueing delay of an M/M/1 server
grows as ``u / (1 - u)``, which stays small at low load and explodes as the
server approaches saturation. Learners see this as a "knee" in the chart.

::

    response_time = base + k * (1 / max(eps, 1 - min(u, clamp)) - 1)     u <  clamp
                  = rt(clamp) + overload_slope * (u - clamp)              u >= clamp

    error_rate    = clip((u - onset) * error_slope, 0, 100)
    cpu_usage     = min(100, u * cpu_scale)
    memory_usage  = min(100, base_memory + users * memory_per_user)

The ``- 1`` shifts the hyperbola down so that zero load yields exactly the
base latency. Past the clamp latency keeps rising linearly, which avoids the
singularity at ``u = 1`` while still signalling overload.

Active bottlenecks are layered on top: latency factors multiply, the other
penalties add percentage points before clamping. Factors are >= 1 and
points are >= 0, so engaging a bottleneck never improves a metric.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from scalemind.core.config import ModelParameters
from scalemind.model.bottlenecks import Bottleneck


@dataclass(frozen=True)
class DegradedMetrics:
    response_time: float
    error_rate: float
    cpu_usage: float
    memory_usage: float


def _clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def utilization(requests_per_second: float, params: ModelParameters) -> float:
    """Offered load over capacity. Values above 1.0 mean overload."""
    return max(0.0, requests_per_second) / params.capacity_rps


def base_response_time(u: float, params: ModelParameters) -> float:
    """Response time in ms before bottleneck penalties."""
    clamped = min(u, params.capacity_clamp)
    headroom = max(params.epsilon, 1.0 - clamped)
    queueing = params.queueing_coefficient_ms * (1.0 / headroom - 1.0)
    overload = params.overload_latency_slope_ms * max(0.0, u - params.capacity_clamp)
    return params.base_latency_ms + queueing + overload


def base_error_rate(u: float, params: ModelParameters) -> float:
    return _clamp_percent((u - params.error_onset_utilization) * params.error_slope)


def base_cpu_usage(u: float, params: ModelParameters) -> float:
    return _clamp_percent(u * params.cpu_scale_factor)


def base_memory_usage(active_users: int, params: ModelParameters) -> float:
    return _clamp_percent(
        params.base_memory_percent + max(0, active_users) * params.memory_per_user_percent
    )


def compute_metrics(
    active_users: int,
    requests_per_second: int,
    active_bottlenecks: Iterable[Bottleneck] = (),
    params: ModelParameters | None = None,
) -> DegradedMetrics:
    """Compute the four degraded metrics for one load level."""
    if params is None:
        params = ModelParameters()

    u = utilization(requests_per_second, params)
    response_time = base_response_time(u, params)
    error_rate = base_error_rate(u, params)
    cpu_usage = base_cpu_usage(u, params)
    memory_usage = base_memory_usage(active_users, params)

    for bottleneck in active_bottlenecks:
        severity = bottleneck.severity
        response_time *= severity.response_time_factor
        error_rate += severity.error_rate_points
        cpu_usage += severity.cpu_points
        memory_usage += severity.memory_points

    return DegradedMetrics(
        response_time=response_time,
        error_rate=_clamp_percent(error_rate),
        cpu_usage=_clamp_percent(cpu_usage),
        memory_usage=_clamp_percent(memory_usage),
    )
