"""Immutable snapshot of the world state for the rendering collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from delve.core.enums import SessionStatus, TileKind
from delve.core.models import Entity, Rect
from delve.core.world_state import WorldState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of one tick, safe to share across threads.

    Entities are deep-copied and the per-cell flags are frozen into
    tuples, so later ticks cannot change what a reader already holds.
    """

    tick: int
    seed: int
    cols: int
    rows: int
    status: SessionStatus
    tiles: tuple[TileKind, ...]
    revealed: tuple[bool, ...]
    visible: tuple[bool, ...]
    rooms: tuple[Rect, ...]
    entities: Mapping[int, Entity]
    player_id: int | None

    @classmethod
    def from_world(cls, world: WorldState) -> Snapshot:
        grid = world.grid
        copied_entities = {eid: e.copy() for eid, e in world.entities.items()}
        return cls(
            tick=world.tick,
            seed=world.seed,
            cols=grid.cols,
            rows=grid.rows,
            status=world.status,
            tiles=tuple(grid.tiles),
            revealed=tuple(grid.revealed),
            visible=tuple(grid.visible),
            rooms=tuple(grid.rooms),
            entities=MappingProxyType(copied_entities),
            player_id=world.player_id,
        )

    @property
    def player(self) -> Entity | None:
        if self.player_id is None:
            return None
        return self.entities.get(self.player_id)

    def tile_at(self, x: int, y: int) -> TileKind:
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise IndexError(f"Cell ({x}, {y}) outside {self.cols}x{self.rows} grid")
        return self.tiles[y * self.cols + x]
