"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the runner.
Reward is always 0.0 - agents must compute their own from info.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from endless_runner.runner_core.clock import ManualClock
from endless_runner.runner_core.config_loader import GameConfig, load_config
from endless_runner.runner_core.entities import PowerUpKind
from endless_runner.runner_core.game import CoreGame
from endless_runner.runner_core.persistence import MemoryBestScoreStore
from endless_runner.runner_core.state_snapshot import GameSnapshot, SnapshotBuilder

logger = logging.getLogger(__name__)


class RunnerEnv(gym.Env):
    """
    Endless runner as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = do nothing, 1 = jump.

    Observation Space:
        Dict of player state, modifiers, difficulty and padded entity arrays.

    Reward:
        Always 0.0. Agents compute their own reward from the info dict.

    Each step is one frame; a ManualClock advances by 1000 / fps ms per step.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
    ):
        """
        Initialize runner environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_width: Override rendered image width.
            image_height: Override rendered image height.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode

        self._img_width = image_width or self._config.field.width
        self._img_height = image_height or self._config.field.height

        self.metadata = {**self.metadata, "render_fps": self._config.render.fps}

        self._clock = ManualClock()
        self._frame_ms = self._config.render.frame_ms
        self._game = CoreGame(config=self._config, store=MemoryBestScoreStore())
        self._snapshot_builder = SnapshotBuilder(self._config)

        self._renderer = None

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        field = self._config.field
        max_obs = self._config.observation.max_obstacles
        max_pu = self._config.observation.max_powerups

        return spaces.Dict({
            "player_y": spaces.Box(low=-np.inf, high=field.height, shape=(), dtype=np.float32),
            "player_vy": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "grounded": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),

            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "obstacle_speed": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "obstacle_interval_ms": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),

            "score_multiplier": spaces.Box(low=1, high=self._config.scoring.boosted_multiplier, shape=(), dtype=np.int32),
            "shield": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "jump_force": spaces.Box(low=-np.inf, high=0, shape=(), dtype=np.float32),
            "time_dilated": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),

            "nearest_obstacle_distance": spaces.Box(low=0, high=field.width, shape=(), dtype=np.float32),

            "obstacle_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obs,), dtype=np.float32),
            "obstacle_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obs,), dtype=np.float32),
            "obstacle_mask": spaces.MultiBinary(max_obs),
            "powerup_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_pu,), dtype=np.float32),
            "powerup_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_pu,), dtype=np.float32),
            "powerup_kind": spaces.Box(low=-1, high=len(PowerUpKind) - 1, shape=(max_pu,), dtype=np.int8),
            "powerup_mask": spaces.MultiBinary(max_pu),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.restart(seed=seed)

        obs = self._snapshot_to_obs(self._snapshot_builder.build(self._game.session))
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one frame.

        Args:
            action: 0 for no-op, 1 for jump.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        # A finished run is only restarted through reset()
        if action == 1:
            self._game.jump()

        result = self._game.on_frame(self._clock.advance(self._frame_ms))

        obs = self._snapshot_to_obs(self._snapshot_builder.build(self._game.session))
        reward = 0.0

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["collected"] = [kind.value for kind in result.collected]
        info["absorbed"] = result.absorbed

        terminated = result.game_over
        truncated = (
            not terminated
            and self._game.session.frame_index >= self._config.caps.max_frames
        )
        if terminated:
            logger.debug("Episode terminated at frame %d, score %d", result.frame_index, self._game.score)

        return obs, reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        return snapshot.to_obs_dict()

    def _render_to_array(self) -> np.ndarray:
        """Render field to RGB array."""
        if self._renderer is None:
            self._init_renderer()

        return self._renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def _init_renderer(self) -> None:
        from endless_runner.runner_core.render_pygame import PygameRenderer
        self._renderer = PygameRenderer(self._config)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._renderer is None:
                self._init_renderer()
            self._renderer.render_to_screen(self._game.get_render_data())
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
