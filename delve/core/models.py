"""Core data models: Vector2, Rect, CombatStats, Viewshed, Entity."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from delve.core.enums import AIState


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate (col, row)."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def distance(self, other: Vector2) -> float:
        """Euclidean (Pythagorean) distance."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned room rectangle with inclusive bounds."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def with_size(cls, x: int, y: int, w: int, h: int) -> Rect:
        return cls(x, y, x + w, y + h)

    def intersects(self, other: Rect) -> bool:
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def center(self) -> Vector2:
        return Vector2((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)


@dataclass(slots=True)
class CombatStats:
    """Mutable melee statistics for an actor."""

    max_hp: int = 16
    hp: int = 16
    defense: int = 1
    power: int = 3

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def copy(self) -> CombatStats:
        return CombatStats(max_hp=self.max_hp, hp=self.hp, defense=self.defense, power=self.power)


@dataclass(slots=True)
class Viewshed:
    """Cells an actor currently sees, its sight range and a recompute flag."""

    range: int = 8
    visible_tiles: set[Vector2] = field(default_factory=set)
    dirty: bool = True

    def copy(self) -> Viewshed:
        return Viewshed(range=self.range, visible_tiles=set(self.visible_tiles), dirty=self.dirty)


@dataclass(slots=True)
class Entity:
    """A simulation actor: the player or a monster."""

    id: int
    kind: str
    pos: Vector2
    name: str = ""
    stats: CombatStats | None = field(default_factory=CombatStats)
    viewshed: Viewshed | None = field(default_factory=Viewshed)
    is_blocking: bool = True
    is_player: bool = False
    shown: bool = False
    ai_state: AIState = AIState.IDLE

    @property
    def alive(self) -> bool:
        """Actors without combat stats never die."""
        return self.stats is None or self.stats.alive

    def mark_dirty(self) -> None:
        if self.viewshed is not None:
            self.viewshed.dirty = True

    def copy(self) -> Entity:
        """Deep copy for snapshot generation."""
        return Entity(
            id=self.id,
            kind=self.kind,
            pos=self.pos,
            name=self.name,
            stats=self.stats.copy() if self.stats else None,
            viewshed=self.viewshed.copy() if self.viewshed else None,
            is_blocking=self.is_blocking,
            is_player=self.is_player,
            shown=self.shown,
            ai_state=self.ai_state,
        )
