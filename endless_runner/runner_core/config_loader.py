"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml


POWERUP_KINDS = ("score_multiplier", "shield", "high_jump", "slow_time")
OVERLAP_POLICIES = ("refresh", "independent")
PERSISTENCE_BACKENDS = ("json", "memory")


@dataclass(frozen=True)
class FieldConfig:
    """Visible field geometry."""
    width: int
    height: int
    ground_margin: int

    @property
    def ground_y(self) -> float:
        """Y coordinate of the ground line (entities rest on it)."""
        return float(self.height - self.ground_margin)


@dataclass(frozen=True)
class PlayerConfig:
    """Player avatar geometry."""
    x: float
    width: float
    height: float
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class PhysicsConfig:
    """Vertical physics parameters."""
    gravity: float
    jump_force: float
    high_jump_force: float


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle geometry."""
    width: float
    height: float
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class PowerUpConfig:
    """Power-up geometry, duration and overlap behaviour."""
    width: float
    height: float
    duration_ms: float
    min_lift: float
    lift_range: float
    overlap_policy: str
    colors: Dict[str, Tuple[int, int, int]]


@dataclass(frozen=True)
class SpawnConfig:
    """Spawn timer intervals."""
    obstacle_interval_ms: float
    powerup_interval_ms: float
    dilation_factor: float


@dataclass(frozen=True)
class DifficultyConfig:
    """Difficulty ramp parameters."""
    initial_speed: float
    speed_step: float
    interval_step: float
    interval_floor: float
    dilation_scale: float


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    boosted_multiplier: int


@dataclass(frozen=True)
class RenderConfig:
    """Frame rate and background parameters."""
    fps: int
    background_scroll_speed: float
    star_count: int

    @property
    def frame_ms(self) -> float:
        return 1000.0 / self.fps


@dataclass(frozen=True)
class PersistenceConfig:
    """Best-score storage."""
    backend: str
    path: str


@dataclass(frozen=True)
class CapsConfig:
    """Headless limits."""
    max_frames: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_obstacles: int
    max_powerups: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    field: FieldConfig
    player: PlayerConfig
    physics: PhysicsConfig
    obstacle: ObstacleConfig
    powerup: PowerUpConfig
    spawn: SpawnConfig
    difficulty: DifficultyConfig
    scoring: ScoringConfig
    render: RenderConfig
    persistence: PersistenceConfig
    caps: CapsConfig
    observation: ObservationConfig

    @property
    def ground_y(self) -> float:
        return self.field.ground_y


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    sizes = {
        "field.width": config.field.width,
        "field.height": config.field.height,
        "player.width": config.player.width,
        "player.height": config.player.height,
        "obstacle.width": config.obstacle.width,
        "obstacle.height": config.obstacle.height,
        "powerup.width": config.powerup.width,
        "powerup.height": config.powerup.height,
    }
    for name, value in sizes.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    if not 0 <= config.field.ground_margin < config.field.height:
        raise ValueError(
            f"field.ground_margin ({config.field.ground_margin}) must lie "
            f"within the field height ({config.field.height})"
        )

    # Intervals and durations
    if config.spawn.obstacle_interval_ms <= 0 or config.spawn.powerup_interval_ms <= 0:
        raise ValueError("Spawn intervals must be positive")
    if config.spawn.dilation_factor < 1:
        raise ValueError(f"spawn.dilation_factor must be >= 1, got {config.spawn.dilation_factor}")
    if config.powerup.duration_ms <= 0:
        raise ValueError(f"powerup.duration_ms must be positive, got {config.powerup.duration_ms}")

    # Player must fall back down and jumps must go up
    physics = config.physics
    if physics.gravity <= 0:
        raise ValueError(f"physics.gravity must be positive, got {physics.gravity}")
    if physics.jump_force >= 0 or physics.high_jump_force >= 0:
        raise ValueError(
            f"physics.jump_force ({physics.jump_force}) and physics.high_jump_force "
            f"({physics.high_jump_force}) must be negative"
        )

    # Score never decreases
    if config.scoring.boosted_multiplier < 1:
        raise ValueError(
            f"scoring.boosted_multiplier must be >= 1, got {config.scoring.boosted_multiplier}"
        )

    # Difficulty ramp must stay monotonic
    difficulty = config.difficulty
    if difficulty.initial_speed <= 0:
        raise ValueError(f"difficulty.initial_speed must be positive, got {difficulty.initial_speed}")
    if difficulty.speed_step < 0 or difficulty.interval_step < 0:
        raise ValueError("Difficulty steps must be non-negative")
    if difficulty.interval_floor > config.spawn.obstacle_interval_ms:
        raise ValueError(
            f"difficulty.interval_floor ({difficulty.interval_floor}) exceeds "
            f"spawn.obstacle_interval_ms ({config.spawn.obstacle_interval_ms})"
        )
    if not 0 < difficulty.dilation_scale <= 1:
        raise ValueError(f"difficulty.dilation_scale must be in (0, 1], got {difficulty.dilation_scale}")

    # Power-ups
    if config.powerup.overlap_policy not in OVERLAP_POLICIES:
        raise ValueError(
            f"powerup.overlap_policy must be one of {OVERLAP_POLICIES}, "
            f"got '{config.powerup.overlap_policy}'"
        )
    missing = [kind for kind in POWERUP_KINDS if kind not in config.powerup.colors]
    if missing:
        raise ValueError(f"powerup.colors is missing entries for: {', '.join(missing)}")

    if config.persistence.backend not in PERSISTENCE_BACKENDS:
        raise ValueError(
            f"persistence.backend must be one of {PERSISTENCE_BACKENDS}, "
            f"got '{config.persistence.backend}'"
        )
    if config.render.fps <= 0:
        raise ValueError(f"render.fps must be positive, got {config.render.fps}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    field_data = raw["field"]
    field = FieldConfig(
        width=int(field_data["width"]),
        height=int(field_data["height"]),
        ground_margin=int(field_data.get("ground_margin", 30))
    )

    player_data = raw["player"]
    player = PlayerConfig(
        x=float(player_data["x"]),
        width=float(player_data["width"]),
        height=float(player_data["height"]),
        color=_parse_color(player_data["color"])
    )

    physics_data = raw["physics"]
    physics = PhysicsConfig(
        gravity=float(physics_data["gravity"]),
        jump_force=float(physics_data["jump_force"]),
        high_jump_force=float(physics_data["high_jump_force"])
    )

    obstacle_data = raw["obstacle"]
    obstacle = ObstacleConfig(
        width=float(obstacle_data["width"]),
        height=float(obstacle_data["height"]),
        color=_parse_color(obstacle_data["color"])
    )

    powerup_data = raw["powerup"]
    powerup = PowerUpConfig(
        width=float(powerup_data["width"]),
        height=float(powerup_data["height"]),
        duration_ms=float(powerup_data["duration_ms"]),
        min_lift=float(powerup_data.get("min_lift", 40)),
        lift_range=float(powerup_data.get("lift_range", 80)),
        overlap_policy=str(powerup_data.get("overlap_policy", "refresh")),
        colors={
            str(kind): _parse_color(color)
            for kind, color in powerup_data.get("colors", {}).items()
        }
    )

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        obstacle_interval_ms=float(spawn_data["obstacle_interval_ms"]),
        powerup_interval_ms=float(spawn_data["powerup_interval_ms"]),
        dilation_factor=float(spawn_data.get("dilation_factor", 2.0))
    )

    difficulty_data = raw["difficulty"]
    difficulty = DifficultyConfig(
        initial_speed=float(difficulty_data["initial_speed"]),
        speed_step=float(difficulty_data["speed_step"]),
        interval_step=float(difficulty_data["interval_step"]),
        interval_floor=float(difficulty_data["interval_floor"]),
        dilation_scale=float(difficulty_data.get("dilation_scale", 0.5))
    )

    scoring_data = raw.get("scoring", {})
    scoring = ScoringConfig(
        boosted_multiplier=int(scoring_data.get("boosted_multiplier", 2))
    )

    render_data = raw.get("render", {})
    render = RenderConfig(
        fps=int(render_data.get("fps", 60)),
        background_scroll_speed=float(render_data.get("background_scroll_speed", 1.0)),
        star_count=int(render_data.get("star_count", 50))
    )

    persistence_data = raw.get("persistence", {})
    persistence = PersistenceConfig(
        backend=str(persistence_data.get("backend", "json")),
        path=str(persistence_data.get("path", "~/.endless_runner/best_score.json"))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_frames=int(caps_data.get("max_frames", 100000))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_obstacles=int(obs_data.get("max_obstacles", 16)),
        max_powerups=int(obs_data.get("max_powerups", 4))
    )

    config = GameConfig(
        field=field,
        player=player,
        physics=physics,
        obstacle=obstacle,
        powerup=powerup,
        spawn=spawn,
        difficulty=difficulty,
        scoring=scoring,
        render=render,
        persistence=persistence,
        caps=caps,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
