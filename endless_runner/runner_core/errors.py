"""
Errors
======

Fatal conditions raised by the simulation core.
"""

from __future__ import annotations

import math


class InvariantViolation(AssertionError):
    """A physics or spawn bug produced an impossible entity state."""


def require_finite(name: str, *values: float) -> None:
    """Raise InvariantViolation if any value is NaN or infinite."""
    for value in values:
        if not math.isfinite(value):
            raise InvariantViolation(f"{name} must be finite, got {value}")


def require_positive(name: str, *values: float) -> None:
    """Raise InvariantViolation if any value is not strictly positive."""
    for value in values:
        if not value > 0:
            raise InvariantViolation(f"{name} must be positive, got {value}")
