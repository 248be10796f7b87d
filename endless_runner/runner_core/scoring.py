"""
Scoring System
==============

Per-frame score accumulation and best-score tracking.
"""

from __future__ import annotations

import logging
from typing import Optional

from endless_runner.runner_core.persistence import BestScoreStore, MemoryBestScoreStore

logger = logging.getLogger(__name__)


class ScoreTracker:
    """
    Tracks the run score and the best score across runs.

    The best score is loaded once from the store and written back only when
    a finished run beats it.
    """

    def __init__(self, store: Optional[BestScoreStore] = None):
        """
        Initialize score tracker.

        Args:
            store: Best-score storage. In-memory if None.
        """
        self._store = store if store is not None else MemoryBestScoreStore()
        self._score: int = 0
        self._best: int = self._store.load()

    @property
    def score(self) -> int:
        """Current run score."""
        return self._score

    @property
    def best_score(self) -> int:
        """Best score over all finished runs."""
        return self._best

    def add_frame(self, multiplier: int) -> int:
        """Award one frame of survival and return the points added."""
        self._score += multiplier
        return multiplier

    def finalize(self) -> bool:
        """
        Close the run: persist the score if it beats the best.

        Returns:
            True if a new best score was recorded.
        """
        if self._score <= self._best:
            return False
        self._best = self._score
        self._store.save(self._best)
        logger.info("New best score: %d", self._best)
        return True

    def reset(self) -> None:
        """Reset run score to zero (best score is kept)."""
        self._score = 0
