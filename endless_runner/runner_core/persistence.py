"""
Best-Score Persistence
======================

Durable single-slot storage for the best score.

Storage failures never interrupt a run: loading falls back to 0 and saving
is best-effort, both logging a warning.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from endless_runner.runner_core.config_loader import GameConfig, get_config

logger = logging.getLogger(__name__)


class BestScoreStore:
    """Interface for best-score storage."""

    def load(self) -> int:
        raise NotImplementedError

    def save(self, score: int) -> None:
        raise NotImplementedError


class MemoryBestScoreStore(BestScoreStore):
    """Process-local store, used for tests and headless environments."""

    def __init__(self, initial: int = 0):
        self._value = int(initial)
        self.saves = 0

    def load(self) -> int:
        return self._value

    def save(self, score: int) -> None:
        self._value = int(score)
        self.saves += 1


class JsonBestScoreStore(BestScoreStore):
    """
    Best score kept as {"best_score": N} in a JSON file.
    """

    KEY = "best_score"

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> int:
        try:
            with open(self._path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as e:
            logger.warning("Could not read best score from %s (%s); using 0", self._path, e)
            return 0
        try:
            value = data[self.KEY]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"invalid best score {value!r}")
            return value
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Could not read best score from %s (%s); using 0", self._path, e)
            return 0

    def save(self, score: int) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self._path.parent), prefix=".best_score", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump({self.KEY: int(score)}, f)
                os.replace(tmp_path, self._path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.warning("Could not save best score to %s: %s", self._path, e)


def make_store(config: Optional[GameConfig] = None) -> BestScoreStore:
    """Build the store selected by persistence.backend."""
    if config is None:
        config = get_config()

    if config.persistence.backend == "memory":
        return MemoryBestScoreStore()
    return JsonBestScoreStore(config.persistence.path)
