"""Per-tick occupancy index: which actors stand on which cell."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from delve.core.world_state import WorldState


def index_actors(world: WorldState) -> None:
    """Rebuild ``blocked`` and ``tile_content`` from scratch.

    Walls are blocked, then every blocking actor blocks its cell. The
    per-cell content lists are cleared in place so their storage is
    reused from tick to tick.
    """
    grid = world.grid
    grid.populate_blocked()
    grid.clear_content_index()

    for eid in sorted(world.entities):
        entity = world.entities[eid]
        idx = grid.pos_to_index(entity.pos)
        if entity.is_blocking:
            grid.blocked[idx] = True
        grid.tile_content[idx].append(eid)
