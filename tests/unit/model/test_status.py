"""Unit tests for system status classification."""

import pytest

from scalemind.core.temporal import Instant
from scalemind.instrumentation.snapshot import MetricsSnapshot
from scalemind.model.status import (
    STATUS_MESSAGES,
    SystemStatus,
    classify,
    resource_status,
    status_message,
)


def _snapshot(response_time=50.0, error_rate=0.0, cpu=10.0, memory=20.0) -> MetricsSnapshot:
    return MetricsSnapshot(
        tick=0,
        timestamp=Instant.Epoch,
        active_users=1000,
        requests_per_second=1000,
        response_time=response_time,
        error_rate=error_rate,
        cpu_usage=cpu,
        memory_usage=memory,
    )


class TestClassify:
    def test_healthy(self):
        assert classify(_snapshot()) is SystemStatus.HEALTHY

    @pytest.mark.parametrize(
        "kwargs",
        [{"error_rate": 2.5}, {"response_time": 201.0}, {"cpu": 71.0}],
    )
    def test_warning(self, kwargs):
        assert classify(_snapshot(**kwargs)) is SystemStatus.WARNING

    @pytest.mark.parametrize(
        "kwargs",
        [{"error_rate": 10.5}, {"response_time": 501.0}, {"cpu": 91.0}],
    )
    def test_critical(self, kwargs):
        assert classify(_snapshot(**kwargs)) is SystemStatus.CRITICAL

    def test_limits_are_strict(self):
        assert classify(_snapshot(error_rate=2.0, response_time=200.0, cpu=70.0)) is SystemStatus.HEALTHY

    def test_memory_does_not_affect_overall_status(self):
        assert classify(_snapshot(memory=99.0)) is SystemStatus.HEALTHY


class TestResourceStatus:
    @pytest.mark.parametrize(
        "percent,expected",
        [
            (0.0, SystemStatus.HEALTHY),
            (70.0, SystemStatus.HEALTHY),
            (70.1, SystemStatus.WARNING),
            (90.0, SystemStatus.WARNING),
            (90.1, SystemStatus.CRITICAL),
        ],
    )
    def test_gauge_levels(self, percent, expected):
        assert resource_status(percent) is expected


class TestMessages:
    def test_every_status_has_a_message(self):
        assert set(STATUS_MESSAGES) == set(SystemStatus)
        for status in SystemStatus:
            message = status_message(status)
            assert message.title
            assert message.description
