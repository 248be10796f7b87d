"""
Runner Core - The per-frame simulation of the endless runner.

This module provides the core game simulation, its session state, the
Gymnasium environment wrapper and all supporting systems (entities, spawning,
collisions, power-ups, difficulty, scoring, persistence).

Main exports:
- CoreGame: Frame orchestrator driven by on_frame(timestamp_ms)
- Session: Run state with Running/GameOver transitions
- RunnerEnv: Gymnasium environment for agent training
- GameConfig: Configuration loaded from game_config.yaml
"""

from endless_runner.runner_core.config_loader import GameConfig, load_config
from endless_runner.runner_core.clock import Clock, ManualClock, MonotonicClock
from endless_runner.runner_core.entities import Obstacle, Player, PowerUp, PowerUpKind
from endless_runner.runner_core.game import CoreGame, FrameResult
from endless_runner.runner_core.session import Session, SessionState
from endless_runner.runner_core.persistence import (
    BestScoreStore,
    JsonBestScoreStore,
    MemoryBestScoreStore,
    make_store,
)
from endless_runner.runner_core.env_gym import RunnerEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "Obstacle",
    "Player",
    "PowerUp",
    "PowerUpKind",
    "CoreGame",
    "FrameResult",
    "Session",
    "SessionState",
    "BestScoreStore",
    "JsonBestScoreStore",
    "MemoryBestScoreStore",
    "make_store",
    "RunnerEnv",
]
