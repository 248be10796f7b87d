"""
Spawner
=======

Time-based creation of obstacles and power-ups.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from endless_runner.runner_core.config_loader import GameConfig, get_config
from endless_runner.runner_core.entities import Obstacle, PowerUp

logger = logging.getLogger(__name__)


class SpawnTimer:
    """
    Tracks the last spawn instant of one entity kind.

    The timer is unanchored until the first check, which stamps the current
    time and never fires.
    """

    def __init__(self):
        self._last_spawn_ms: Optional[float] = None

    @property
    def last_spawn_ms(self) -> Optional[float]:
        return self._last_spawn_ms

    def check(self, now_ms: float, interval_ms: float) -> bool:
        """
        Fire if strictly more than interval_ms has elapsed since the last spawn.

        Firing resets the last spawn instant to now_ms.
        """
        if self._last_spawn_ms is None:
            self._last_spawn_ms = now_ms
            return False
        if now_ms - self._last_spawn_ms > interval_ms:
            self._last_spawn_ms = now_ms
            return True
        return False

    def reset(self) -> None:
        self._last_spawn_ms = None


@dataclass
class SpawnResult:
    """Entities created during one frame."""
    obstacles: List[Obstacle] = field(default_factory=list)
    powerups: List[PowerUp] = field(default_factory=list)


class Spawner:
    """
    Two independent timers, one for obstacles and one for power-ups.

    The obstacle interval is supplied by the difficulty ramp each frame;
    the power-up interval is fixed. Time dilation multiplies both.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for power-up kind and height. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._powerup_interval = config.spawn.powerup_interval_ms
        self._dilation_factor = config.spawn.dilation_factor

        self.obstacle_timer = SpawnTimer()
        self.powerup_timer = SpawnTimer()

    def update(
        self,
        now_ms: float,
        obstacle_interval_ms: float,
        time_dilated: bool
    ) -> SpawnResult:
        """
        Run both timers for this frame.

        Args:
            now_ms: Frame timestamp.
            obstacle_interval_ms: Current obstacle interval from the difficulty ramp.
            time_dilated: True while slow_time is active.

        Returns:
            SpawnResult with at most one new obstacle and one new power-up.
        """
        factor = self._dilation_factor if time_dilated else 1.0
        result = SpawnResult()

        if self.obstacle_timer.check(now_ms, obstacle_interval_ms * factor):
            result.obstacles.append(Obstacle.spawn(self._config))

        if self.powerup_timer.check(now_ms, self._powerup_interval * factor):
            powerup = PowerUp.spawn(self._config, self._rng)
            logger.debug("Spawned %r at t=%.0fms", powerup, now_ms)
            result.powerups.append(powerup)

        return result

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Unanchor both timers.

        Args:
            seed: New random seed. Keeps current generator if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self.obstacle_timer.reset()
        self.powerup_timer.reset()
