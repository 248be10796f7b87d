"""
Core Game
=========

Main game orchestrator combining entities, spawning, collisions, power-ups,
difficulty and scoring into one frame step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from endless_runner.runner_core.collision import CollisionEngine
from endless_runner.runner_core.config_loader import GameConfig, get_config
from endless_runner.runner_core.entities import PowerUpKind, effective_speed
from endless_runner.runner_core.persistence import BestScoreStore, make_store
from endless_runner.runner_core.session import Session

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """Result of a single simulation frame."""
    frame_index: int
    game_over: bool
    delta_score: int = 0
    spawned_obstacles: int = 0
    spawned_powerups: int = 0
    collected: List[PowerUpKind] = field(default_factory=list)
    absorbed: int = 0
    expired: List[PowerUpKind] = field(default_factory=list)
    new_best: bool = False


class CoreGame:
    """
    Main game simulation class.

    Orchestrates, once per frame while running:
    - Power-up reversions due at the frame timestamp
    - Player physics and obstacle/power-up motion
    - Spawning
    - Collisions and their effects
    - Difficulty ramp
    - Scoring
    - Culling of off-screen entities

    The frame driver calls on_frame() with a millisecond timestamp and
    forwards the single jump-or-restart command to handle_input().
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        store: Optional[BestScoreStore] = None,
        session: Optional[Session] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible spawning.
            store: Best-score storage. Built from config if None.
            session: Existing session to drive. A new one is created if None.
        """
        if config is None:
            config = get_config() if session is None else session.config

        self._config = config
        if session is None:
            if store is None:
                store = make_store(config)
            session = Session(config, store=store, seed=seed)
        self._session = session
        self._collisions = CollisionEngine(session.powerup_state)

        logger.info(
            "Run %d started (best score %d)", session.runs, session.best_score
        )

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def session(self) -> Session:
        """Current run state."""
        return self._session

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def best_score(self) -> int:
        return self._session.best_score

    @property
    def is_over(self) -> bool:
        """True if the run has ended."""
        return self._session.is_over

    def on_frame(self, timestamp_ms: float) -> FrameResult:
        """
        Advance the simulation by one frame.

        Args:
            timestamp_ms: Frame timestamp from the driver's clock.

        Returns:
            FrameResult describing what happened. While GameOver nothing
            is simulated and the result is empty.
        """
        session = self._session
        if session.is_over:
            return FrameResult(frame_index=session.frame_index, game_over=True)

        session.frame_index += 1
        result = FrameResult(frame_index=session.frame_index, game_over=False)

        # Reversions fire between frames, before any entity moves
        result.expired = [e.kind for e in session.powerup_state.expire(timestamp_ms)]

        session.player.update(self._config.physics.gravity)
        speed = effective_speed(session.difficulty.speed, session.modifiers.time_dilated)
        for obstacle in session.obstacles:
            obstacle.update(speed)
        for powerup in session.powerups:
            powerup.update(speed)
        session.background_offset -= self._config.render.background_scroll_speed

        spawned = session.spawner.update(
            timestamp_ms,
            session.difficulty.obstacle_interval_ms,
            session.modifiers.time_dilated
        )
        session.obstacles.extend(spawned.obstacles)
        session.powerups.extend(spawned.powerups)
        result.spawned_obstacles = len(spawned.obstacles)
        result.spawned_powerups = len(spawned.powerups)

        collision = self._collisions.resolve(
            session.player, session.obstacles, session.powerups, timestamp_ms
        )
        result.absorbed = len(collision.absorbed)
        result.collected = [p.kind for p in collision.collected]
        if collision.game_over:
            result.game_over = True
            result.new_best = session.end()
            return result

        session.difficulty.step(session.modifiers.time_dilated)
        result.delta_score = session.scorer.add_frame(session.modifiers.score_multiplier)

        session.obstacles = [o for o in session.obstacles if not o.is_off_screen]
        session.powerups = [p for p in session.powerups if not p.is_off_screen]

        return result

    def handle_input(self, now_ms: Optional[float] = None) -> str:
        """
        Apply the single jump-or-restart command.

        Args:
            now_ms: Input timestamp. Reversions due by then fire before the
                jump reads its force. If None, the modifiers of the last
                frame apply.

        Returns:
            "jump" if the player jumped, "ignored" if airborne, "restart"
            if a finished run was restarted.
        """
        if self._session.is_over:
            self.restart()
            return "restart"
        if self.jump(now_ms):
            return "jump"
        return "ignored"

    def jump(self, now_ms: Optional[float] = None) -> bool:
        """Jump if grounded. Returns whether the jump took effect."""
        session = self._session
        if session.is_over:
            return False
        if now_ms is not None:
            session.powerup_state.expire(now_ms)
        return session.player.jump(session.modifiers.jump_force)

    def restart(self, seed: Optional[int] = None) -> None:
        """Start a fresh run, keeping the best score."""
        self._session.restart(seed)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium and tools."""
        session = self._session
        modifiers = session.modifiers
        return {
            "score": session.score,
            "best_score": session.best_score,
            "frame_index": session.frame_index,
            "game_over": session.is_over,
            "obstacle_speed": session.difficulty.speed,
            "obstacle_interval_ms": session.difficulty.obstacle_interval_ms,
            "score_multiplier": modifiers.score_multiplier,
            "shield": modifiers.shield,
            "jump_force": modifiers.jump_force,
            "time_dilated": modifiers.time_dilated,
            "obstacles": len(session.obstacles),
            "powerups": len(session.powerups),
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with field geometry, entity boxes, background offset and UI text.
        """
        session = self._session
        data = {
            "field_width": self._config.field.width,
            "field_height": self._config.field.height,
            "ground_y": self._config.ground_y,
            "background_offset": session.background_offset,
            "player": session.player.render_data(shielded=session.modifiers.shield),
            "obstacles": [o.render_data() for o in session.obstacles],
            "powerups": [p.render_data() for p in session.powerups],
            "score": session.score,
            "best_score": session.best_score,
            "modifier_labels": session.powerup_state.labels(),
            "game_over": session.is_over,
        }
        if session.is_over:
            data["game_over_lines"] = [
                "Game Over",
                f"Your score: {session.score}",
                "Press SPACE to restart",
            ]
        return data
