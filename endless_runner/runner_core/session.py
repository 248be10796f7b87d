"""
Game Session
============

Owns the state of the current run and its Running/GameOver transitions.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from endless_runner.runner_core.config_loader import GameConfig, get_config
from endless_runner.runner_core.difficulty import DifficultyRamp
from endless_runner.runner_core.entities import Obstacle, Player, PowerUp
from endless_runner.runner_core.modifiers import ActiveModifiers, PowerUpStateMachine
from endless_runner.runner_core.persistence import BestScoreStore
from endless_runner.runner_core.scoring import ScoreTracker
from endless_runner.runner_core.spawner import Spawner

logger = logging.getLogger(__name__)


class SessionState(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class Session:
    """
    One player's run state, reused across restarts.

    Owns the player, the live obstacles and power-ups, the modifier state
    machine, the difficulty ramp, the spawner and the score tracker.
    Nothing in here is global: independent sessions can coexist.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[BestScoreStore] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize session.

        Args:
            config: Game configuration. Uses default if None.
            store: Best-score storage. In-memory if None.
            seed: Random seed for spawning.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed

        self.powerup_state = PowerUpStateMachine(config)
        self.difficulty = DifficultyRamp(config)
        self.spawner = Spawner(config, seed)
        self.scorer = ScoreTracker(store)

        self.player = Player(config)
        self.obstacles: List[Obstacle] = []
        self.powerups: List[PowerUp] = []
        self.state = SessionState.RUNNING
        self.background_offset = 0.0
        self.frame_index = 0
        self.runs = 1

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def modifiers(self) -> ActiveModifiers:
        return self.powerup_state.modifiers

    @property
    def is_running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def is_over(self) -> bool:
        return self.state is SessionState.GAME_OVER

    @property
    def score(self) -> int:
        return self.scorer.score

    @property
    def best_score(self) -> int:
        return self.scorer.best_score

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def end(self) -> bool:
        """
        Enter GameOver and record the score.

        Returns:
            True if the run set a new best score.
        """
        if self.is_over:
            return False
        self.state = SessionState.GAME_OVER
        new_best = self.scorer.finalize()
        logger.info(
            "Run %d over after %d frames: score=%d best=%d",
            self.runs, self.frame_index, self.score, self.best_score
        )
        return new_best

    def restart(self, seed: Optional[int] = None) -> None:
        """
        Start a fresh run.

        Reinitializes the player, clears entities, resets difficulty, score
        and modifiers (cancelling pending reversions) and re-enters Running.

        Args:
            seed: New random seed for spawning. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed

        self.player = Player(self._config)
        self.obstacles = []
        self.powerups = []
        self.powerup_state.reset()
        self.difficulty.reset()
        self.spawner.reset(seed)
        self.scorer.reset()
        self.background_offset = 0.0
        self.frame_index = 0
        self.state = SessionState.RUNNING
        self.runs += 1
        logger.info("Run %d started", self.runs)
