"""
Difficulty Ramp
===============

Per-frame increase of obstacle speed and obstacle spawn frequency.
"""

from __future__ import annotations

from typing import Optional

from endless_runner.runner_core.config_loader import GameConfig, get_config


class DifficultyRamp:
    """
    Obstacle speed and spawn interval for the current run.

    Speed only grows and the interval only shrinks (down to a floor). Both
    steps are scaled down while time is slowed.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._initial_speed = config.difficulty.initial_speed
        self._initial_interval = config.spawn.obstacle_interval_ms
        self._speed_step = config.difficulty.speed_step
        self._interval_step = config.difficulty.interval_step
        self._interval_floor = config.difficulty.interval_floor
        self._dilation_scale = config.difficulty.dilation_scale

        self.speed = self._initial_speed
        self.obstacle_interval_ms = self._initial_interval

    @property
    def interval_floor(self) -> float:
        return self._interval_floor

    def step(self, time_dilated: bool) -> None:
        """Advance the ramp by one frame."""
        scale = self._dilation_scale if time_dilated else 1.0
        self.speed += self._speed_step * scale
        if self.obstacle_interval_ms > self._interval_floor:
            self.obstacle_interval_ms = max(
                self._interval_floor,
                self.obstacle_interval_ms - self._interval_step * scale
            )

    def reset(self) -> None:
        """Restore initial speed and interval."""
        self.speed = self._initial_speed
        self.obstacle_interval_ms = self._initial_interval
