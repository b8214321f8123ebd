"""Full-session scenarios with chart output.

Drives an engine from idle to overload the way a learner would with the
slider, checks the narrative the metrics tell, and saves charts under
test_output/ for inspection.

Run:
    pytest tests/integration/test_ramp_visualization.py -v
"""

from __future__ import annotations

import pytest

from scalemind import CATALOG, EngineSettings, SimulationEngine, SystemStatus
from scalemind.visual.charts import plot_degradation_curve, plot_history

STEPS = (1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0)
TICKS_PER_STEP = 5


def _ramp(engine: SimulationEngine) -> list[SystemStatus]:
    statuses = []
    for multiplier in STEPS:
        engine.set_user_multiplier(multiplier)
        engine.advance(TICKS_PER_STEP * engine.settings.tick_interval_s)
        statuses.append(engine.status)
    return statuses


class TestRampToOverload:
    def test_status_escalates_and_never_recovers_while_rising(self):
        engine = SimulationEngine(settings=EngineSettings(history_capacity=60))
        statuses = _ramp(engine)
        order = [SystemStatus.HEALTHY, SystemStatus.WARNING, SystemStatus.CRITICAL]
        ranks = [order.index(s) for s in statuses]
        assert ranks == sorted(ranks)
        assert statuses[0] is SystemStatus.HEALTHY
        assert statuses[-1] is SystemStatus.CRITICAL

    def test_bottlenecks_engage_progressively(self):
        engine = SimulationEngine(settings=EngineSettings(history_capacity=60))
        counts = []
        for multiplier in STEPS:
            engine.set_user_multiplier(multiplier)
            engine.tick()
            counts.append(len(engine.active_bottlenecks))
        assert counts == sorted(counts)
        assert counts[0] == 0
        assert counts[-1] == len(CATALOG)

    def test_history_window_holds_latest_ticks(self):
        engine = SimulationEngine(settings=EngineSettings(history_capacity=30))
        _ramp(engine)
        history = engine.history
        assert len(history) == 30
        assert history[-1].tick == len(STEPS) * TICKS_PER_STEP
        assert history[0].tick == history[-1].tick - 29

    def test_ramp_down_recovers(self):
        engine = SimulationEngine()
        engine.set_user_multiplier(10.0)
        engine.advance(3.0)
        engine.set_user_multiplier(0.5)
        engine.tick()
        assert engine.status is SystemStatus.HEALTHY
        assert engine.active_bottlenecks == ()


class TestCharts:
    def test_history_chart(self, test_output_dir):
        pytest.importorskip("matplotlib")
        engine = SimulationEngine(settings=EngineSettings(history_capacity=60))
        _ramp(engine)

        path = plot_history(engine.history_buffer, test_output_dir / "history.png")
        assert path.exists()
        assert path.stat().st_size > 0

        engine.history_buffer.to_dataframe().to_csv(test_output_dir / "history.csv")
        assert (test_output_dir / "history.csv").exists()

    def test_degradation_curve_chart(self, test_output_dir):
        pytest.importorskip("matplotlib")
        path = plot_degradation_curve(test_output_dir / "degradation.png", points=50)
        assert path.exists()
