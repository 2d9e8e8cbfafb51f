"""Field of view (viewsheds) via symmetric shadow casting.

The sweep walks each of the four quadrants (two octants apiece) row by
row, narrowing a pair of slopes whenever a wall interrupts the row. A
floor cell is reported only when its center lies inside the open slope
range, which makes the result symmetric: if a floor cell B is visible
from A, then A is visible from B. Walls bordering a lit region are
always reported so the renderer can draw them.

Usage:
    tiles = field_of_view(grid, Vector2(5, 5), radius=8)
    update_viewsheds(world)
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import TYPE_CHECKING

from delve.core.models import Vector2

if TYPE_CHECKING:
    from delve.core.grid import Grid
    from delve.core.world_state import WorldState

logger = logging.getLogger(__name__)

_NORTH, _EAST, _SOUTH, _WEST = range(4)


def field_of_view(grid: Grid, origin: Vector2, radius: int) -> set[Vector2]:
    """Return every in-bounds cell visible from *origin* within *radius*."""
    visible: set[Vector2] = set()
    if not grid.in_bounds(origin):
        return visible
    visible.add(origin)
    if radius <= 0:
        return visible

    for quadrant in (_NORTH, _EAST, _SOUTH, _WEST):
        _scan(grid, quadrant, origin.x, origin.y, radius, 1, Fraction(-1), Fraction(1), visible)
    return visible


def _transform(quadrant: int, ox: int, oy: int, depth: int, col: int) -> tuple[int, int]:
    if quadrant == _NORTH:
        return ox + col, oy - depth
    if quadrant == _SOUTH:
        return ox + col, oy + depth
    if quadrant == _EAST:
        return ox + depth, oy + col
    return ox - depth, oy + col


def _slope(depth: int, col: int) -> Fraction:
    return Fraction(2 * col - 1, 2 * depth)


def _round_ties_up(n: Fraction) -> int:
    return math.floor(n + Fraction(1, 2))


def _round_ties_down(n: Fraction) -> int:
    return math.ceil(n - Fraction(1, 2))


def _scan(
    grid: Grid,
    quadrant: int,
    ox: int,
    oy: int,
    radius: int,
    depth: int,
    start: Fraction,
    end: Fraction,
    out: set[Vector2],
) -> None:
    if depth > radius:
        return

    radius_sq = radius * radius
    prev_wall: bool | None = None
    for col in range(_round_ties_up(depth * start), _round_ties_down(depth * end) + 1):
        x, y = _transform(quadrant, ox, oy, depth, col)
        wall = grid.is_opaque(x, y)

        symmetric = depth * start <= col <= depth * end
        if (wall or symmetric) and col * col + depth * depth <= radius_sq and grid.in_bounds_xy(x, y):
            out.add(Vector2(x, y))

        if prev_wall is True and not wall:
            start = _slope(depth, col)
        if prev_wall is False and wall:
            _scan(grid, quadrant, ox, oy, radius, depth + 1, start, _slope(depth, col), out)
        prev_wall = wall

    if prev_wall is False:
        _scan(grid, quadrant, ox, oy, radius, depth + 1, start, end, out)


def update_viewsheds(world: WorldState) -> int:
    """Recompute dirty viewsheds, then refresh monster render flags.

    The player's result overwrites the grid's ``visible`` flags and is
    merged into ``revealed``. A monster is shown iff the cell it stands
    on is currently visible to the player; shown monsters are re-dirtied
    so their perception stays current while on screen.

    Returns the number of viewsheds recomputed.
    """
    grid = world.grid
    recomputed = 0

    for eid in sorted(world.entities):
        entity = world.entities[eid]
        viewshed = entity.viewshed
        if viewshed is None or not viewshed.dirty:
            continue
        viewshed.visible_tiles = field_of_view(grid, entity.pos, viewshed.range)
        viewshed.dirty = False
        recomputed += 1

        if entity.is_player:
            visible = grid.visible
            for i in range(len(visible)):
                visible[i] = False
            for cell in viewshed.visible_tiles:
                idx = grid.pos_to_index(cell)
                visible[idx] = True
                grid.revealed[idx] = True

    for entity in world.monsters():
        entity.shown = grid.visible[grid.pos_to_index(entity.pos)]
        if entity.shown:
            entity.mark_dirty()

    if recomputed:
        logger.debug("Tick %d: recomputed %d viewsheds", world.tick, recomputed)
    return recomputed
