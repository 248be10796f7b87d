"""
Power-Up State Machine
======================

Tracks the timed modifiers granted by power-ups and reverts them when their
duration elapses.

Reversions are expiry records checked against the frame timestamp at the
start of each frame, so they are always serialized between frame updates and
are discarded wholesale on restart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from endless_runner.runner_core.config_loader import GameConfig, get_config
from endless_runner.runner_core.entities import PowerUpKind

logger = logging.getLogger(__name__)


# Which ActiveModifiers field each kind drives
_FIELD_BY_KIND: Dict[PowerUpKind, str] = {
    PowerUpKind.SCORE_MULTIPLIER: "score_multiplier",
    PowerUpKind.SHIELD: "shield",
    PowerUpKind.HIGH_JUMP: "jump_force",
    PowerUpKind.SLOW_TIME: "time_dilated",
}


@dataclass
class ActiveModifiers:
    """Current in-effect power-up outcomes, read by physics, motion and spawning."""
    score_multiplier: int
    shield: bool
    jump_force: float
    time_dilated: bool

    @classmethod
    def baseline(cls, config: GameConfig) -> "ActiveModifiers":
        """Modifiers with nothing active."""
        return cls(
            score_multiplier=1,
            shield=False,
            jump_force=config.physics.jump_force,
            time_dilated=False
        )

    def get(self, kind: PowerUpKind):
        return getattr(self, _FIELD_BY_KIND[kind])

    def set(self, kind: PowerUpKind, value) -> None:
        setattr(self, _FIELD_BY_KIND[kind], value)


@dataclass
class Expiry:
    """A scheduled reversion of one modifier."""
    kind: PowerUpKind
    expires_at_ms: float
    baseline: object
    seq: int

    @property
    def sort_key(self) -> Tuple[float, int]:
        return (self.expires_at_ms, self.seq)


class PowerUpStateMachine:
    """
    Activation and reversion of modifiers.

    Overlap policies (powerup.overlap_policy):
    - refresh: re-activating an active kind pushes its expiry out to
      now + duration and keeps the baseline captured by the first activation.
    - independent: every activation schedules its own reversion. High jump
      captures the jump force in effect at that instant as its baseline, the
      other kinds revert to their off value. An earlier reversion can cut a
      later activation short.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize state machine.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._policy = config.powerup.overlap_policy
        self._modifiers = ActiveModifiers.baseline(config)
        self._pending: List[Expiry] = []
        self._seq = 0

    @property
    def modifiers(self) -> ActiveModifiers:
        return self._modifiers

    @property
    def policy(self) -> str:
        return self._policy

    @property
    def pending(self) -> List[Expiry]:
        """Scheduled reversions in firing order."""
        return sorted(self._pending, key=lambda e: e.sort_key)

    def _active_value(self, kind: PowerUpKind):
        if kind is PowerUpKind.SCORE_MULTIPLIER:
            return self._config.scoring.boosted_multiplier
        if kind is PowerUpKind.HIGH_JUMP:
            return self._config.physics.high_jump_force
        return True

    def _off_value(self, kind: PowerUpKind):
        return ActiveModifiers.baseline(self._config).get(kind)

    def is_active(self, kind: PowerUpKind) -> bool:
        """True while the modifier differs from its off value."""
        return self._modifiers.get(kind) != self._off_value(kind)

    def activate(self, kind: PowerUpKind, now_ms: float, duration_ms: float) -> Expiry:
        """
        Switch a modifier on and schedule its reversion.

        Args:
            kind: Modifier to activate.
            now_ms: Activation instant (frame timestamp).
            duration_ms: Time until reversion.

        Returns:
            The scheduled Expiry.
        """
        existing = self._pending_for(kind)
        refreshed = self._policy == "refresh" and bool(existing)
        if refreshed:
            baseline = existing[0].baseline
            for expiry in existing:
                self._pending.remove(expiry)
        elif kind is PowerUpKind.HIGH_JUMP or self._policy == "refresh":
            baseline = self._modifiers.get(kind)
        else:
            baseline = self._off_value(kind)

        self._modifiers.set(kind, self._active_value(kind))
        self._seq += 1
        expiry = Expiry(kind, now_ms + duration_ms, baseline, self._seq)
        self._pending.append(expiry)

        logger.info(
            "Power-up %s active until t=%.0fms%s",
            kind.value, expiry.expires_at_ms, " (refreshed)" if refreshed else ""
        )
        return expiry

    def expire(self, now_ms: float) -> List[Expiry]:
        """
        Fire every reversion due at or before now_ms, in timestamp order.

        Returns:
            The fired expiries.
        """
        due = [e for e in self._pending if e.expires_at_ms <= now_ms]
        due.sort(key=lambda e: e.sort_key)
        for expiry in due:
            self._pending.remove(expiry)
            self._modifiers.set(expiry.kind, expiry.baseline)
            logger.info("Power-up %s expired at t=%.0fms", expiry.kind.value, now_ms)
        return due

    def consume_shield(self) -> None:
        """Spend the shield on an obstacle hit."""
        self._modifiers.shield = False
        if self._policy == "refresh":
            for expiry in self._pending_for(PowerUpKind.SHIELD):
                self._pending.remove(expiry)

    def reset(self) -> None:
        """Drop every pending reversion and restore all off values."""
        if self._pending:
            logger.debug("Cancelling %d pending reversions", len(self._pending))
        self._pending.clear()
        self._modifiers = ActiveModifiers.baseline(self._config)

    def labels(self) -> List[Tuple[str, Tuple[int, int, int]]]:
        """UI labels for active modifiers, with their power-up colors."""
        colors = self._config.powerup.colors
        labels = []
        if self._modifiers.score_multiplier > 1:
            labels.append((f"Multiplier: x{self._modifiers.score_multiplier}",
                           colors[PowerUpKind.SCORE_MULTIPLIER.value]))
        if self._modifiers.shield:
            labels.append(("Shield Active!", colors[PowerUpKind.SHIELD.value]))
        if self.is_active(PowerUpKind.HIGH_JUMP):
            labels.append(("High Jump!", colors[PowerUpKind.HIGH_JUMP.value]))
        if self._modifiers.time_dilated:
            labels.append(("Time Slowed!", colors[PowerUpKind.SLOW_TIME.value]))
        return labels

    def _pending_for(self, kind: PowerUpKind) -> List[Expiry]:
        return [e for e in self._pending if e.kind is kind]
