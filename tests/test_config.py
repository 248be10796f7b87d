"""
Tests for configuration loading and validation.
"""

import os

import pytest
import yaml

from endless_runner.runner_core import config_loader
from endless_runner.runner_core.config_loader import get_config, load_config, reload_config

DEFAULT_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "endless_runner",
    "game_config.yaml"
)


def write_config(tmp_path, section, key, value):
    with open(DEFAULT_PATH, "r") as f:
        raw = yaml.safe_load(f)
    raw[section][key] = value
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(raw))
    return str(path)


class TestDefaults:
    """Test the shipped configuration."""

    def test_field_and_ground(self):
        config = load_config()
        assert config.field.width == 800
        assert config.field.height == 400
        assert config.ground_y == 370

    def test_physics(self):
        config = load_config()
        assert config.physics.gravity == 0.5
        assert config.physics.jump_force == -12
        assert config.physics.high_jump_force == -18

    def test_timings(self):
        config = load_config()
        assert config.spawn.obstacle_interval_ms == 1200
        assert config.spawn.powerup_interval_ms == 5000
        assert config.powerup.duration_ms == 5000
        assert config.difficulty.interval_floor == 500
        assert config.render.frame_ms == pytest.approx(1000 / 60)

    def test_defaults(self):
        config = load_config()
        assert config.powerup.overlap_policy == "refresh"
        assert config.persistence.backend == "json"
        assert set(config.powerup.colors) == set(config_loader.POWERUP_KINDS)


class TestValidation:
    """Test rejection of inconsistent configs."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_unknown_overlap_policy(self, tmp_path):
        path = write_config(tmp_path, "powerup", "overlap_policy", "stack")
        with pytest.raises(ValueError, match="overlap_policy"):
            load_config(path)

    def test_unknown_backend(self, tmp_path):
        path = write_config(tmp_path, "persistence", "backend", "sqlite")
        with pytest.raises(ValueError, match="backend"):
            load_config(path)

    def test_floor_above_initial_interval(self, tmp_path):
        path = write_config(tmp_path, "difficulty", "interval_floor", 2000)
        with pytest.raises(ValueError, match="interval_floor"):
            load_config(path)

    def test_dilation_factor_below_one(self, tmp_path):
        path = write_config(tmp_path, "spawn", "dilation_factor", 0.5)
        with pytest.raises(ValueError, match="dilation_factor"):
            load_config(path)

    @pytest.mark.parametrize("section, key, value, match", [
        ("difficulty", "initial_speed", -5.0, "initial_speed"),
        ("difficulty", "initial_speed", 0, "initial_speed"),
        ("scoring", "boosted_multiplier", 0, "boosted_multiplier"),
        ("physics", "gravity", 0, "gravity"),
        ("physics", "gravity", -0.5, "gravity"),
        ("physics", "jump_force", 12.0, "jump_force"),
        ("physics", "high_jump_force", 0, "high_jump_force"),
    ])
    def test_values_that_break_motion_or_scoring(self, tmp_path, section, key, value, match):
        path = write_config(tmp_path, section, key, value)
        with pytest.raises(ValueError, match=match):
            load_config(path)

    def test_bad_color(self, tmp_path):
        path = write_config(tmp_path, "player", "color", [1, 2])
        with pytest.raises(ValueError, match="Color"):
            load_config(path)

    def test_custom_value_is_loaded(self, tmp_path):
        path = write_config(tmp_path, "caps", "max_frames", 5)
        assert load_config(path).caps.max_frames == 5


class TestCache:
    """Test the cached accessor."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_replaces_cache(self, tmp_path):
        path = write_config(tmp_path, "caps", "max_frames", 7)
        try:
            assert reload_config(path).caps.max_frames == 7
            assert get_config().caps.max_frames == 7
        finally:
            reload_config()
        assert get_config().caps.max_frames == 100000
