"""Unit tests for Instant."""

from scalemind.core.temporal import Instant


class TestInstant:
    def test_epoch_is_zero(self):
        assert Instant.Epoch.nanoseconds == 0
        assert Instant.Epoch.to_seconds() == 0.0

    def test_from_seconds_int_and_float(self):
        assert Instant.from_seconds(2).nanoseconds == 2_000_000_000
        assert Instant.from_seconds(0.5).nanoseconds == 500_000_000

    def test_repeated_addition_has_no_drift(self):
        step = Instant.from_seconds(0.1)
        t = Instant.Epoch
        for _ in range(1000):
            t = t + step
        assert t == Instant.from_seconds(100)

    def test_add_seconds(self):
        assert Instant.from_seconds(1) + 0.25 == Instant.from_seconds(1.25)

    def test_subtract(self):
        assert Instant.from_seconds(3) - Instant.from_seconds(1) == Instant.from_seconds(2)

    def test_ordering(self):
        a = Instant.from_seconds(1)
        b = Instant.from_seconds(2)
        assert a < b
        assert a <= b
        assert b > a
        assert b >= a
        assert a <= Instant.from_seconds(1)

    def test_hashable(self):
        assert {Instant.from_seconds(1), Instant.from_seconds(1.0)} == {Instant.from_seconds(1)}

    def test_comparison_with_other_type_is_not_equal(self):
        assert Instant.from_seconds(1) != 1
