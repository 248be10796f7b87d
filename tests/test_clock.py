"""
Tests for millisecond clocks.
"""

import pytest

from endless_runner.runner_core.clock import ManualClock, MonotonicClock


class TestManualClock:

    def test_starts_at_given_reading(self):
        assert ManualClock().now_ms() == 0.0
        assert ManualClock(start_ms=250).now_ms() == 250.0

    def test_advance(self):
        clock = ManualClock()
        assert clock.advance(16.0) == 16.0
        assert clock.advance(0.0) == 16.0
        assert clock.now_ms() == 16.0

    def test_negative_advance_rejected(self):
        with pytest.raises(ValueError):
            ManualClock().advance(-1.0)

    def test_set(self):
        clock = ManualClock(start_ms=100)
        clock.set(500)
        assert clock.now_ms() == 500.0

        with pytest.raises(ValueError):
            clock.set(499)


class TestMonotonicClock:

    def test_reads_milliseconds_since_construction(self):
        readings = iter([10.0, 10.5, 12.0])
        clock = MonotonicClock(time_source=lambda: next(readings))

        assert clock.now_ms() == pytest.approx(500.0)
        assert clock.now_ms() == pytest.approx(2000.0)

    def test_default_source_is_non_decreasing(self):
        clock = MonotonicClock()
        first = clock.now_ms()
        assert clock.now_ms() >= first >= 0.0
