"""
Tests for the difficulty ramp.
"""

import pytest

from endless_runner.runner_core.config_loader import load_config
from endless_runner.runner_core.difficulty import DifficultyRamp


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def ramp(config):
    return DifficultyRamp(config)


class TestDifficultyRamp:
    """Test speed growth and interval shrink."""

    def test_initial_values(self, ramp):
        assert ramp.speed == 5.0
        assert ramp.obstacle_interval_ms == 1200

    def test_single_step(self, ramp):
        ramp.step(time_dilated=False)
        assert ramp.speed == pytest.approx(5.001)
        assert ramp.obstacle_interval_ms == pytest.approx(1199.9)

    def test_dilated_step_is_halved(self, ramp):
        ramp.step(time_dilated=True)
        assert ramp.speed == pytest.approx(5.0005)
        assert ramp.obstacle_interval_ms == pytest.approx(1199.95)

    def test_monotonic_and_floored(self, ramp):
        previous_speed = ramp.speed
        previous_interval = ramp.obstacle_interval_ms
        for i in range(8000):
            ramp.step(time_dilated=(i % 3 == 0))
            assert ramp.speed >= previous_speed
            assert ramp.obstacle_interval_ms <= previous_interval
            assert ramp.obstacle_interval_ms >= 500
            previous_speed = ramp.speed
            previous_interval = ramp.obstacle_interval_ms

    def test_interval_reaches_floor_exactly(self, ramp):
        for _ in range(7100):
            ramp.step(time_dilated=False)
        assert ramp.obstacle_interval_ms == 500

    def test_speed_keeps_growing_after_floor(self, ramp):
        for _ in range(7100):
            ramp.step(time_dilated=False)
        speed = ramp.speed
        ramp.step(time_dilated=False)
        assert ramp.speed > speed
        assert ramp.obstacle_interval_ms == 500

    def test_reset_restores_initial_constants(self, ramp):
        for _ in range(100):
            ramp.step(time_dilated=False)
        ramp.reset()
        assert ramp.speed == 5.0
        assert ramp.obstacle_interval_ms == 1200
