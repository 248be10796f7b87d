"""
Clock
=====

Millisecond time sources for frame drivers.

The simulation core never reads a clock itself: the frame driver owns one and
passes its reading to CoreGame.on_frame().
"""

from __future__ import annotations

from time import monotonic
from typing import Callable, Optional


class Clock:
    """Interface for millisecond time sources."""

    def now_ms(self) -> float:
        raise NotImplementedError


class MonotonicClock(Clock):
    """Wall-clock time in milliseconds since construction."""

    def __init__(self, time_source: Optional[Callable[[], float]] = None):
        self._time_source = time_source or monotonic
        self._origin = self._time_source()

    def now_ms(self) -> float:
        return (self._time_source() - self._origin) * 1000.0


class ManualClock(Clock):
    """
    Clock advanced explicitly by the caller.

    Used by headless drivers (Gymnasium env, tests) to produce a deterministic
    timestamp sequence.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        """
        Move the clock forward.

        Args:
            delta_ms: Milliseconds to advance. Must be >= 0.

        Returns:
            The new reading.
        """
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be >= 0, got {delta_ms}")
        self._now += delta_ms
        return self._now

    def set(self, now_ms: float) -> None:
        """Jump to an absolute reading that is not earlier than the current one."""
        if now_ms < self._now:
            raise ValueError(f"Clock cannot go backwards ({now_ms} < {self._now})")
        self._now = float(now_ms)
