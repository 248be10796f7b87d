"""
State Snapshot
==============

Packs session state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING

import numpy as np

from endless_runner.runner_core.config_loader import GameConfig, get_config
from endless_runner.runner_core.entities import PowerUpKind

if TYPE_CHECKING:
    from endless_runner.runner_core.session import Session

# Stable integer ids for power-up kinds in observations
POWERUP_KIND_IDS: Dict[PowerUpKind, int] = {
    kind: index for index, kind in enumerate(PowerUpKind)
}


@dataclass
class GameSnapshot:
    """
    Complete session state snapshot.

    All arrays are fixed-size with masking for variable entity counts.
    Entities are packed in list order, which is nearest-first since they
    spawn at the right edge and move left at a common speed.
    """
    # Player
    player_y: float
    player_vy: float
    grounded: bool

    # Run state
    score: int
    frame_index: int
    obstacle_speed: float
    obstacle_interval_ms: float

    # Modifiers
    score_multiplier: int
    shield: bool
    jump_force: float
    time_dilated: bool

    # Field info (for normalization)
    field_width: float
    ground_y: float

    # Derived
    obstacles_count: int
    powerups_count: int
    nearest_obstacle_distance: float  # Gap from player's right edge, field_width if none

    # Obstacle arrays (fixed size, padded)
    obstacle_x: np.ndarray            # (MAX_OBS,) float32
    obstacle_y: np.ndarray            # (MAX_OBS,) float32
    obstacle_mask: np.ndarray         # (MAX_OBS,) bool

    # Power-up arrays (fixed size, padded)
    powerup_x: np.ndarray             # (MAX_PU,) float32
    powerup_y: np.ndarray             # (MAX_PU,) float32
    powerup_kind: np.ndarray          # (MAX_PU,) int8, -1 for empty slots
    powerup_mask: np.ndarray          # (MAX_PU,) bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "player_y": np.array(self.player_y, dtype=np.float32),
            "player_vy": np.array(self.player_vy, dtype=np.float32),
            "grounded": np.array(int(self.grounded), dtype=np.int8),

            "score": np.array(self.score, dtype=np.int64),
            "obstacle_speed": np.array(self.obstacle_speed, dtype=np.float32),
            "obstacle_interval_ms": np.array(self.obstacle_interval_ms, dtype=np.float32),

            "score_multiplier": np.array(self.score_multiplier, dtype=np.int32),
            "shield": np.array(int(self.shield), dtype=np.int8),
            "jump_force": np.array(self.jump_force, dtype=np.float32),
            "time_dilated": np.array(int(self.time_dilated), dtype=np.int8),

            "nearest_obstacle_distance": np.array(self.nearest_obstacle_distance, dtype=np.float32),

            "obstacle_x": self.obstacle_x,
            "obstacle_y": self.obstacle_y,
            "obstacle_mask": self.obstacle_mask,
            "powerup_x": self.powerup_x,
            "powerup_y": self.powerup_y,
            "powerup_kind": self.powerup_kind,
            "powerup_mask": self.powerup_mask,
        }


class SnapshotBuilder:
    """Builds session snapshots into fixed-size arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_obstacles = config.observation.max_obstacles
        self._max_powerups = config.observation.max_powerups

    @property
    def max_obstacles(self) -> int:
        return self._max_obstacles

    @property
    def max_powerups(self) -> int:
        return self._max_powerups

    def build(self, session: "Session") -> GameSnapshot:
        """Build a snapshot from current session state."""
        obstacle_x = np.zeros(self._max_obstacles, dtype=np.float32)
        obstacle_y = np.zeros(self._max_obstacles, dtype=np.float32)
        obstacle_mask = np.zeros(self._max_obstacles, dtype=bool)

        obstacles = session.obstacles[:self._max_obstacles]
        for i, obstacle in enumerate(obstacles):
            obstacle_x[i] = obstacle.x
            obstacle_y[i] = obstacle.y
            obstacle_mask[i] = True

        powerup_x = np.zeros(self._max_powerups, dtype=np.float32)
        powerup_y = np.zeros(self._max_powerups, dtype=np.float32)
        powerup_kind = np.full(self._max_powerups, -1, dtype=np.int8)
        powerup_mask = np.zeros(self._max_powerups, dtype=bool)

        for i, powerup in enumerate(session.powerups[:self._max_powerups]):
            powerup_x[i] = powerup.x
            powerup_y[i] = powerup.y
            powerup_kind[i] = POWERUP_KIND_IDS[powerup.kind]
            powerup_mask[i] = True

        # Distance from the player's right edge to the closest obstacle ahead
        player = session.player
        field_width = float(self._config.field.width)
        ahead = [o.x - (player.x + player.width) for o in session.obstacles if o.x + o.width > player.x]
        nearest = max(0.0, min(ahead)) if ahead else field_width

        modifiers = session.modifiers
        return GameSnapshot(
            player_y=player.y,
            player_vy=player.velocity_y,
            grounded=player.grounded,
            score=session.score,
            frame_index=session.frame_index,
            obstacle_speed=session.difficulty.speed,
            obstacle_interval_ms=session.difficulty.obstacle_interval_ms,
            score_multiplier=modifiers.score_multiplier,
            shield=modifiers.shield,
            jump_force=modifiers.jump_force,
            time_dilated=modifiers.time_dilated,
            field_width=field_width,
            ground_y=self._config.ground_y,
            obstacles_count=len(session.obstacles),
            powerups_count=len(session.powerups),
            nearest_obstacle_distance=min(nearest, field_width),
            obstacle_x=obstacle_x,
            obstacle_y=obstacle_y,
            obstacle_mask=obstacle_mask,
            powerup_x=powerup_x,
            powerup_y=powerup_y,
            powerup_kind=powerup_kind,
            powerup_mask=powerup_mask
        )
