"""
Tests for spawn timing.
"""

import pytest

from endless_runner.runner_core.config_loader import load_config
from endless_runner.runner_core.spawner import Spawner, SpawnTimer


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def spawner(config):
    return Spawner(config, seed=42)


class TestSpawnTimer:
    """Test a single spawn timer."""

    def test_first_check_anchors_without_firing(self):
        timer = SpawnTimer()
        assert timer.last_spawn_ms is None
        assert not timer.check(1000.0, 100.0)
        assert timer.last_spawn_ms == 1000.0

    def test_fires_strictly_after_interval(self):
        timer = SpawnTimer()
        timer.check(0.0, 100.0)
        assert not timer.check(100.0, 100.0)
        assert timer.check(100.5, 100.0)

    def test_firing_resets_last_spawn(self):
        timer = SpawnTimer()
        timer.check(0.0, 100.0)
        timer.check(150.0, 100.0)
        assert timer.last_spawn_ms == 150.0
        assert not timer.check(240.0, 100.0)
        assert timer.check(251.0, 100.0)

    def test_reset_unanchors(self):
        timer = SpawnTimer()
        timer.check(0.0, 100.0)
        timer.reset()
        assert not timer.check(10_000.0, 100.0)


class TestSpawner:
    """Test obstacle and power-up spawning."""

    def test_nothing_on_first_frame(self, spawner):
        result = spawner.update(0.0, 1200.0, False)
        assert result.obstacles == []
        assert result.powerups == []

    def test_obstacle_after_interval(self, spawner):
        spawner.update(0.0, 1200.0, False)
        assert spawner.update(1200.0, 1200.0, False).obstacles == []

        result = spawner.update(1201.0, 1200.0, False)
        assert len(result.obstacles) == 1
        assert result.obstacles[0].x == 800
        assert result.powerups == []

    def test_obstacle_interval_follows_difficulty(self, spawner):
        spawner.update(0.0, 1200.0, False)
        result = spawner.update(600.0, 500.0, False)
        assert len(result.obstacles) == 1

    def test_powerup_after_interval(self, spawner):
        spawner.update(0.0, 1200.0, False)
        assert spawner.update(5000.0, 100_000.0, False).powerups == []

        result = spawner.update(5001.0, 100_000.0, False)
        assert len(result.powerups) == 1
        assert result.powerups[0].x == 800

    def test_dilation_doubles_intervals(self, spawner):
        spawner.update(0.0, 1200.0, False)

        assert spawner.update(2000.0, 1200.0, True).obstacles == []
        assert len(spawner.update(2401.0, 1200.0, True).obstacles) == 1

    def test_dilation_doubles_powerup_interval(self, spawner):
        spawner.update(0.0, 100_000.0, False)
        assert spawner.update(9000.0, 100_000.0, True).powerups == []
        assert len(spawner.update(10_001.0, 100_000.0, True).powerups) == 1

    def test_timers_are_independent(self, spawner):
        spawner.update(0.0, 1200.0, False)
        spawner.update(1300.0, 1200.0, False)

        result = spawner.update(5001.0, 1200.0, False)
        assert len(result.obstacles) == 1
        assert len(result.powerups) == 1
        assert spawner.obstacle_timer.last_spawn_ms == 5001.0
        assert spawner.powerup_timer.last_spawn_ms == 5001.0

    def test_same_seed_same_powerups(self, config):
        kinds = []
        for _ in range(2):
            spawner = Spawner(config, seed=7)
            spawner.update(0.0, 1e9, False)
            sequence = []
            for i in range(1, 30):
                for powerup in spawner.update(i * 5001.0, 1e9, False).powerups:
                    sequence.append((powerup.kind, powerup.y))
            kinds.append(sequence)

        assert len(kinds[0]) == 29
        assert kinds[0] == kinds[1]

    def test_reset_with_seed_restores_sequence(self, config):
        spawner = Spawner(config, seed=5)
        spawner.update(0.0, 1e9, False)
        first = spawner.update(5001.0, 1e9, False).powerups[0]

        spawner.reset(seed=5)
        spawner.update(0.0, 1e9, False)
        again = spawner.update(5001.0, 1e9, False).powerups[0]

        assert (first.kind, first.y) == (again.kind, again.y)

    def test_reset_unanchors_both_timers(self, spawner):
        spawner.update(0.0, 1200.0, False)
        spawner.reset()
        result = spawner.update(50_000.0, 1200.0, False)
        assert result.obstacles == []
        assert result.powerups == []
