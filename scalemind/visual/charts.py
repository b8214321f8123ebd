"""Matplotlib charts for simulation history and degradation curves."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from scalemind.core.config import EngineSettings, ModelParameters
from scalemind.instrumentation.history import HistoryBuffer
from scalemind.model.bottlenecks import CATALOG, Bottleneck, detect_active
from scalemind.model.degradation import compute_metrics
from scalemind.model.load import compute_load
from scalemind.model.status import DEFAULT_THRESHOLDS, StatusThresholds

logger = logging.getLogger(__name__)


def plot_history(
    history: HistoryBuffer,
    path: str | Path,
    thresholds: StatusThresholds = DEFAULT_THRESHOLDS,
) -> Path:
    """Save a three-panel chart of the buffered snapshots.

    Panels: response time, error rate, CPU and memory usage. Dashed lines
    mark the warning and critical status limits.

    Returns:
        The path of the written PNG.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    times = history.times()
    fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

    ax1 = axes[0]
    ax1.plot(times, history.series("response_time"), "b-", linewidth=2, label="Response time")
    ax1.axhline(y=thresholds.warning_response_time, color="orange", linestyle="--", label="Warning")
    ax1.axhline(y=thresholds.critical_response_time, color="r", linestyle="--", label="Critical")
    ax1.set_ylabel("Latency (ms)")
    ax1.set_title("Response Time")
    ax1.legend(loc="upper left")
    ax1.grid(True, alpha=0.3)

    ax2 = axes[1]
    ax2.plot(times, history.series("error_rate"), "r-", linewidth=2, label="Error rate")
    ax2.axhline(y=thresholds.warning_error_rate, color="orange", linestyle="--")
    ax2.axhline(y=thresholds.critical_error_rate, color="r", linestyle="--")
    ax2.set_ylabel("Errors (%)")
    ax2.set_ylim(0, 100)
    ax2.set_title("Error Rate")
    ax2.grid(True, alpha=0.3)

    ax3 = axes[2]
    ax3.plot(times, history.series("cpu_usage"), "m-", linewidth=2, label="CPU")
    ax3.plot(times, history.series("memory_usage"), "g-", linewidth=2, label="Memory")
    ax3.axhline(y=thresholds.warning_resource, color="orange", linestyle="--")
    ax3.axhline(y=thresholds.critical_resource, color="r", linestyle="--")
    ax3.set_xlabel("Time (s)")
    ax3.set_ylabel("Usage (%)")
    ax3.set_ylim(0, 100)
    ax3.set_title("System Resources")
    ax3.legend(loc="upper left")
    ax3.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Saved history chart: %s", path)
    return path


def plot_degradation_curve(
    path: str | Path,
    params: ModelParameters | None = None,
    settings: EngineSettings | None = None,
    catalog: Sequence[Bottleneck] = CATALOG,
    points: int = 200,
) -> Path:
    """Sweep the multiplier range and plot latency and error rate against users.

    Vertical lines mark the user count at which each bottleneck engages, so
    the knee of the curve can be read against its causes.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    params = params if params is not None else ModelParameters()
    settings = settings if settings is not None else EngineSettings()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    users: list[int] = []
    latencies: list[float] = []
    errors: list[float] = []
    for i in range(points + 1):
        multiplier = settings.max_multiplier * i / points
        load = compute_load(multiplier, params)
        active = detect_active(load.active_users, catalog)
        metrics = compute_metrics(load.active_users, load.requests_per_second, active, params)
        users.append(load.active_users)
        latencies.append(metrics.response_time)
        errors.append(metrics.error_rate)

    fig, ax1 = plt.subplots(figsize=(12, 6))
    ax1.plot(users, latencies, "b-", linewidth=2, label="Response time (ms)")
    ax1.set_xlabel("Active users")
    ax1.set_ylabel("Latency (ms)")
    ax1.set_yscale("log")
    ax1.grid(True, alpha=0.3)

    ax2 = ax1.twinx()
    ax2.plot(users, errors, "r-", linewidth=1.5, label="Error rate (%)")
    ax2.set_ylabel("Errors (%)")
    ax2.set_ylim(0, 100)

    for bottleneck in catalog:
        ax1.axvline(x=bottleneck.activation_threshold, color="gray", linestyle=":", alpha=0.7)
        ax1.annotate(
            bottleneck.name,
            xy=(bottleneck.activation_threshold, ax1.get_ylim()[1]),
            rotation=90,
            va="top",
            ha="right",
            fontsize=8,
        )

    ax1.set_title("Degradation Under Load")
    fig.legend(loc="upper left")
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Saved degradation chart: %s", path)
    return path
