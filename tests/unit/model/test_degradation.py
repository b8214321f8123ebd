"""Unit tests for the degradation model curves."""

import pytest

from scalemind.core.config import ModelParameters
from scalemind.model.bottlenecks import CATALOG, Bottleneck, BottleneckId, Severity, detect_active
from scalemind.model.degradation import (
    base_response_time,
    compute_metrics,
    utilization,
)
from scalemind.model.load import compute_load

PARAMS = ModelParameters()


def _metrics_at(multiplier: float, params: ModelParameters = PARAMS):
    load = compute_load(multiplier, params)
    active = detect_active(load.active_users)
    return compute_metrics(load.active_users, load.requests_per_second, active, params)


class TestZeroLoad:
    def test_no_degradation_at_zero(self):
        m = _metrics_at(0.0)
        assert m.error_rate == 0.0
        assert m.response_time == PARAMS.base_latency_ms
        assert m.cpu_usage == 0.0
        assert m.memory_usage == PARAMS.base_memory_percent


class TestCurves:
    def test_utilization(self):
        assert utilization(3000, PARAMS) == pytest.approx(0.5)
        assert utilization(12000, PARAMS) == pytest.approx(2.0)

    def test_no_errors_below_onset(self):
        # 4000 rps = 66.7% utilization, below the 70% onset
        m = compute_metrics(4000, 4000, (), PARAMS)
        assert m.error_rate == 0.0

    def test_errors_rise_past_onset(self):
        m = compute_metrics(4800, 4800, (), PARAMS)
        # 80% utilization, 10 points above onset
        assert m.error_rate == pytest.approx(10.0)

    def test_latency_has_a_knee(self):
        low_step = base_response_time(0.2, PARAMS) - base_response_time(0.1, PARAMS)
        high_step = base_response_time(0.9, PARAMS) - base_response_time(0.8, PARAMS)
        assert high_step > 10 * low_step

    def test_latency_is_continuous_at_clamp(self):
        clamp = PARAMS.capacity_clamp
        below = base_response_time(clamp - 1e-9, PARAMS)
        at = base_response_time(clamp, PARAMS)
        assert at == pytest.approx(below, rel=1e-4)

    def test_latency_grows_linearly_past_clamp(self):
        a = base_response_time(1.2, PARAMS)
        b = base_response_time(1.4, PARAMS)
        c = base_response_time(1.6, PARAMS)
        assert b - a == pytest.approx(c - b)
        assert b - a == pytest.approx(0.2 * PARAMS.overload_latency_slope_ms)

    def test_latency_stays_finite_under_extreme_overload(self):
        m = compute_metrics(10**7, 10**7, (), PARAMS)
        assert m.response_time < float("inf")
        assert m.error_rate == 100.0
        assert m.cpu_usage == 100.0
        assert m.memory_usage == 100.0

    def test_percentages_are_bounded(self):
        for multiplier in (0.0, 1.0, 3.3, 6.0, 10.0):
            m = _metrics_at(multiplier)
            for value in (m.error_rate, m.cpu_usage, m.memory_usage):
                assert 0.0 <= value <= 100.0


class TestMonotonicity:
    def test_metrics_non_decreasing_in_load(self):
        multipliers = [i * 0.05 for i in range(201)]
        previous = _metrics_at(multipliers[0])
        for multiplier in multipliers[1:]:
            current = _metrics_at(multiplier)
            assert current.response_time >= previous.response_time
            assert current.error_rate >= previous.error_rate
            assert current.cpu_usage >= previous.cpu_usage
            assert current.memory_usage >= previous.memory_usage
            previous = current

    def test_five_times_load_is_slower(self):
        assert _metrics_at(5.0).response_time > _metrics_at(1.0).response_time


class TestBottleneckPenalties:
    def _single(self, severity: Severity) -> Bottleneck:
        return Bottleneck(
            id=BottleneckId.NO_CACHING,
            name="test",
            description="test",
            activation_threshold=0,
            severity=severity,
        )

    def test_latency_factor_multiplies(self):
        base = compute_metrics(1000, 1000, (), PARAMS)
        slowed = compute_metrics(
            1000, 1000, (self._single(Severity(response_time_factor=2.0)),), PARAMS
        )
        assert slowed.response_time == pytest.approx(2 * base.response_time)

    def test_points_add_and_clamp(self):
        hot = self._single(Severity(error_rate_points=3.0, cpu_points=95.0, memory_points=1.0))
        base = compute_metrics(1000, 1000, (), PARAMS)
        m = compute_metrics(1000, 1000, (hot,), PARAMS)
        assert m.error_rate == pytest.approx(base.error_rate + 3.0)
        assert m.cpu_usage == 100.0
        assert m.memory_usage == pytest.approx(base.memory_usage + 1.0)

    def test_database_bottleneck_drives_latency(self):
        db = next(b for b in CATALOG if b.id is BottleneckId.SINGLE_DB_CONNECTION)
        base = compute_metrics(2000, 2000, (), PARAMS)
        m = compute_metrics(2000, 2000, (db,), PARAMS)
        assert m.response_time > base.response_time
        assert m.cpu_usage == base.cpu_usage

    def test_cache_bottleneck_drives_cpu(self):
        cache = next(b for b in CATALOG if b.id is BottleneckId.NO_CACHING)
        base = compute_metrics(3000, 3000, (), PARAMS)
        m = compute_metrics(3000, 3000, (cache,), PARAMS)
        assert m.cpu_usage - base.cpu_usage == pytest.approx(cache.severity.cpu_points)
