"""Mutable authoritative world state — only mutated by the WorldLoop."""

from __future__ import annotations

from collections.abc import Iterator

from delve.core.enums import SessionStatus, TileKind
from delve.core.grid import Grid
from delve.core.models import Entity, Vector2


class MissingPlayerError(RuntimeError):
    """A stage that requires the player ran without one in the directory."""


class WorldState:
    """The single source of truth for the simulation session.

    Owns the grid and the actor directory. Actors are addressed by stable
    integer handles that are never reused within a session.
    """

    __slots__ = ("tick", "seed", "entities", "grid", "status", "player_id", "_next_entity_id")

    def __init__(self, seed: int, grid: Grid) -> None:
        self.tick: int = 0
        self.seed: int = seed
        self.entities: dict[int, Entity] = {}
        self.grid: Grid = grid
        self.status: SessionStatus = SessionStatus.PLAYING
        self.player_id: int | None = None
        self._next_entity_id: int = 1

    def allocate_entity_id(self) -> int:
        eid = self._next_entity_id
        self._next_entity_id += 1
        return eid

    def add_entity(self, entity: Entity) -> None:
        if entity.is_player:
            if self.player_id is not None and self.player_id in self.entities:
                raise ValueError(f"Player already present as entity {self.player_id}")
            self.player_id = entity.id
        self.entities[entity.id] = entity

    def remove_entity(self, entity_id: int) -> Entity | None:
        """Drop an actor from the directory and from the occupancy index."""
        entity = self.entities.pop(entity_id, None)
        if entity is None:
            return None
        grid = self.grid
        cells = {grid.pos_to_index(entity.pos)}
        # The actor may have moved since the last index rebuild
        for idx, content in enumerate(grid.tile_content):
            if entity_id in content:
                content.remove(entity_id)
                cells.add(idx)
        for idx in cells:
            cell = grid.index_to_pos(idx)
            grid.blocked[idx] = grid.tiles[idx] == TileKind.WALL or any(
                other.is_blocking and other.pos == cell for other in self.entities.values()
            )
        if entity_id == self.player_id:
            self.player_id = None
            self.status = SessionStatus.PLAYER_DEFEATED
        return entity

    def move_entity(self, entity_id: int, new_pos: Vector2) -> None:
        entity = self.entities.get(entity_id)
        if entity is None:
            return
        entity.pos = new_pos
        entity.mark_dirty()

    # -- lookups --

    @property
    def player_defeated(self) -> bool:
        return self.status == SessionStatus.PLAYER_DEFEATED

    def find_player(self) -> Entity | None:
        if self.player_id is None:
            return None
        return self.entities.get(self.player_id)

    def player(self) -> Entity:
        """Return the player actor; its absence is a programming error."""
        player = self.find_player()
        if player is None:
            raise MissingPlayerError("No player actor in the directory")
        return player

    def monsters(self) -> Iterator[Entity]:
        """Non-player actors in handle order."""
        for eid in sorted(self.entities):
            entity = self.entities[eid]
            if not entity.is_player:
                yield entity

    def entities_at(self, pos: Vector2) -> list[Entity]:
        """Actors indexed at *pos* as of the last occupancy rebuild."""
        content = self.grid.tile_content[self.grid.pos_to_index(pos)]
        return [self.entities[eid] for eid in content if eid in self.entities]
