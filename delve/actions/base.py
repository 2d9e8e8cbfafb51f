"""Intent records — the per-tick currency between input/AI and the World."""

from __future__ import annotations

from dataclasses import dataclass

from delve.core.models import Vector2


@dataclass(frozen=True, slots=True)
class MeleeIntent:
    """One actor declares a strike on another this tick.

    Collected centrally by the WorldLoop and discarded once the combat
    resolver has processed it.
    """

    attacker_id: int
    target_id: int

    def __repr__(self) -> str:
        return f"Melee(attacker={self.attacker_id}, target={self.target_id})"


@dataclass(frozen=True, slots=True)
class MoveIntent:
    """A player movement delta from the input collaborator."""

    dx: int
    dy: int

    @property
    def valid(self) -> bool:
        return self.dx in (-1, 0, 1) and self.dy in (-1, 0, 1)

    @property
    def delta(self) -> Vector2:
        return Vector2(self.dx, self.dy)

    def __repr__(self) -> str:
        return f"Move({self.dx:+d}, {self.dy:+d})"
