"""
Collision & Effects
===================

Player-vs-entity overlap tests and the effects they trigger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from endless_runner.runner_core.entities import Box, Obstacle, Player, PowerUp
from endless_runner.runner_core.modifiers import PowerUpStateMachine

logger = logging.getLogger(__name__)


def boxes_overlap(a: Box, b: Box) -> bool:
    """Strict AABB overlap; boxes that only touch do not collide."""
    return (
        a.x < b.right and
        a.right > b.x and
        a.y < b.bottom and
        a.bottom > b.y
    )


@dataclass
class CollisionResult:
    """Effects applied during one collision pass."""
    game_over: bool = False
    absorbed: List[Obstacle] = field(default_factory=list)
    collected: List[PowerUp] = field(default_factory=list)


class CollisionEngine:
    """
    Resolves player collisions against live obstacles and power-ups.

    Obstacles are checked first, in list order. A shielded hit spends the
    shield and destroys that obstacle; an unshielded hit ends the run and
    stops the pass. Power-ups touched by the player are removed and
    activated in list order.
    """

    def __init__(self, modifiers: PowerUpStateMachine):
        self._state = modifiers

    def resolve(
        self,
        player: Player,
        obstacles: List[Obstacle],
        powerups: List[PowerUp],
        now_ms: float
    ) -> CollisionResult:
        """
        Run one collision pass, mutating the entity lists in place.

        Args:
            player: The player.
            obstacles: Live obstacles (absorbed ones are removed).
            powerups: Live power-ups (collected ones are removed).
            now_ms: Frame timestamp, used as the activation instant.

        Returns:
            CollisionResult describing what happened.
        """
        result = CollisionResult()
        player_box = player.box

        for obstacle in list(obstacles):
            if not boxes_overlap(player_box, obstacle.box):
                continue
            if self._state.modifiers.shield:
                self._state.consume_shield()
                obstacles.remove(obstacle)
                result.absorbed.append(obstacle)
                logger.info("Shield absorbed %r", obstacle)
            else:
                result.game_over = True
                return result

        for powerup in list(powerups):
            if boxes_overlap(player_box, powerup.box):
                powerups.remove(powerup)
                self._state.activate(powerup.kind, now_ms, powerup.duration_ms)
                result.collected.append(powerup)

        return result
