"""Chart rendering (requires matplotlib)."""

from scalemind.visual.charts import plot_degradation_curve, plot_history

__all__ = [
    "plot_degradation_curve",
    "plot_history",
]
