"""
Entity Models
=============

Player, Obstacle and PowerUp state with their per-frame update rules.

Entities never hold a reference to the session. Everything they need from
shared state (gravity, jump force, effective speed) is passed in by the
orchestrator on each call.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from endless_runner.runner_core.config_loader import GameConfig, get_config
from endless_runner.runner_core.errors import require_finite, require_positive


class PowerUpKind(Enum):
    """The four timed modifiers a power-up can grant."""
    SCORE_MULTIPLIER = "score_multiplier"
    SHIELD = "shield"
    HIGH_JUMP = "high_jump"
    SLOW_TIME = "slow_time"


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box (y grows downwards)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def effective_speed(base_speed: float, time_dilated: bool) -> float:
    """Per-frame horizontal displacement, halved while time is slowed."""
    return base_speed / 2 if time_dilated else base_speed


class Player:
    """
    The runner avatar.

    Only moves vertically. Rests on the ground line when grounded and can
    jump only from there.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self.width = config.player.width
        self.height = config.player.height
        require_positive("Player size", self.width, self.height)

        self.color = config.player.color
        self.ground_y = config.ground_y
        self.x = config.player.x
        self.y = self.rest_y
        self.velocity_y = 0.0
        self.grounded = True

    @property
    def rest_y(self) -> float:
        """Top edge y when standing on the ground line."""
        return self.ground_y - self.height

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    def update(self, gravity: float) -> None:
        """
        Apply gravity and integrate one frame.

        Landing (reaching or passing the ground line) clamps the player to
        the ground, zeroes velocity and sets grounded.
        """
        if not self.grounded:
            self.velocity_y += gravity
        self.y += self.velocity_y

        if self.y >= self.rest_y:
            self.y = self.rest_y
            self.velocity_y = 0.0
            self.grounded = True

        require_finite("Player position", self.x, self.y, self.velocity_y)

    def jump(self, jump_force: float) -> bool:
        """
        Start a jump if grounded.

        Args:
            jump_force: Initial vertical velocity (negative is upwards).

        Returns:
            True if the jump took effect, False if airborne (request ignored).
        """
        if not self.grounded:
            return False
        require_finite("Jump force", jump_force)
        self.grounded = False
        self.velocity_y = jump_force
        return True

    def render_data(self, shielded: bool = False) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "color": self.color,
            "shielded": shielded,
        }


class _Scroller:
    """Shared leftward motion for obstacles and power-ups."""

    def __init__(self, x: float, y: float, width: float, height: float,
                 color: Tuple[int, int, int]):
        require_positive(f"{type(self).__name__} size", width, height)
        require_finite(f"{type(self).__name__} position", x, y)
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.color = color

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    @property
    def is_off_screen(self) -> bool:
        """True once the trailing edge has passed the left boundary."""
        return self.x + self.width <= 0

    def update(self, speed: float) -> None:
        """Move left by the effective speed for this frame."""
        require_finite(f"{type(self).__name__} speed", speed)
        self.x -= speed
        require_finite(f"{type(self).__name__} position", self.x)

    def render_data(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "color": self.color,
        }


class Obstacle(_Scroller):
    """Ground-level block the player must jump over."""

    @classmethod
    def spawn(cls, config: GameConfig) -> "Obstacle":
        """Create an obstacle resting on the ground at the right edge."""
        cfg = config.obstacle
        return cls(
            x=config.field.width,
            y=config.ground_y - cfg.height,
            width=cfg.width,
            height=cfg.height,
            color=cfg.color
        )

    def __repr__(self) -> str:
        return f"Obstacle(x={self.x:.1f}, y={self.y:.1f})"


class PowerUp(_Scroller):
    """
    Collectible that grants a timed modifier.

    The height is chosen once at creation. duration_ms is the activation
    length handed to the state machine on pickup; it is never decremented.
    """

    def __init__(self, x: float, y: float, width: float, height: float,
                 color: Tuple[int, int, int], kind: PowerUpKind, duration_ms: float):
        super().__init__(x, y, width, height, color)
        require_positive("PowerUp duration", duration_ms)
        self.kind = kind
        self.duration_ms = float(duration_ms)

    @classmethod
    def spawn(
        cls,
        config: GameConfig,
        rng: random.Random,
        kind: Optional[PowerUpKind] = None
    ) -> "PowerUp":
        """
        Create a power-up at the right edge, floating in a random band above the ground.

        Args:
            config: Game configuration.
            rng: Random source for kind and height.
            kind: Force a specific kind. Chosen uniformly if None.
        """
        cfg = config.powerup
        if kind is None:
            kind = rng.choice(list(PowerUpKind))
        y = config.ground_y - cfg.height - rng.random() * cfg.lift_range - cfg.min_lift
        return cls(
            x=config.field.width,
            y=y,
            width=cfg.width,
            height=cfg.height,
            color=cfg.colors[kind.value],
            kind=kind,
            duration_ms=cfg.duration_ms
        )

    def render_data(self) -> Dict[str, Any]:
        data = super().render_data()
        data["kind"] = self.kind.value
        return data

    def __repr__(self) -> str:
        return f"PowerUp({self.kind.value}, x={self.x:.1f}, y={self.y:.1f})"
