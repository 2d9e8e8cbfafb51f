"""Dungeon generation: random room placement and L-shaped corridors.

Also spawns the level's actors: the player in room 0 and one monster in
the center of every other room.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.core.enums import AIState, Domain, TileKind
from delve.core.grid import Grid
from delve.core.models import CombatStats, Entity, Rect, Vector2, Viewshed
from delve.core.world_state import WorldState
from delve.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from delve.config import SimulationConfig

logger = logging.getLogger(__name__)

MAX_ROOMS = 20
MIN_SIZE = 6
MAX_SIZE = 10

# Draw slots within one placement attempt
_SLOT_W, _SLOT_H, _SLOT_X, _SLOT_Y, _SLOT_FLIP = range(5)


def generate(
    cols: int,
    rows: int,
    seed_or_rng: int | DeterministicRNG,
    max_rooms: int = MAX_ROOMS,
    min_size: int = MIN_SIZE,
    max_size: int = MAX_SIZE,
) -> Grid:
    """Build a walled grid with up to *max_rooms* rooms chained by corridors."""
    rng = seed_or_rng if isinstance(seed_or_rng, DeterministicRNG) else DeterministicRNG(seed_or_rng)
    grid = Grid(cols, rows, default=TileKind.WALL)

    for attempt in range(max_rooms):
        w = rng.next_int(Domain.MAP_GEN, attempt, _SLOT_W, min_size, max_size - 1)
        h = rng.next_int(Domain.MAP_GEN, attempt, _SLOT_H, min_size, max_size - 1)
        if cols - w - 1 < 1 or rows - h - 1 < 1:
            continue
        x = rng.next_int(Domain.MAP_GEN, attempt, _SLOT_X, 1, cols - w - 1)
        y = rng.next_int(Domain.MAP_GEN, attempt, _SLOT_Y, 1, rows - h - 1)
        room = Rect.with_size(x, y, w, h)

        if any(room.intersects(other) for other in grid.rooms):
            continue

        _carve_room(grid, room)
        if grid.rooms:
            prev = grid.rooms[-1].center()
            new = room.center()
            if rng.next_bool(Domain.MAP_GEN, attempt, _SLOT_FLIP):
                _carve_horizontal(grid, prev.x, new.x, prev.y)
                _carve_vertical(grid, prev.y, new.y, new.x)
            else:
                _carve_vertical(grid, prev.y, new.y, prev.x)
                _carve_horizontal(grid, prev.x, new.x, new.y)
        grid.rooms.append(room)

    _seal_border(grid)
    grid.populate_blocked()
    logger.info("Generated %dx%d dungeon with %d rooms (seed=%d)", cols, rows, len(grid.rooms), rng.seed)
    return grid


def spawn_point(grid: Grid) -> Vector2:
    """Center of room 0, or the middle of the map when no room was placed."""
    if not grid.rooms:
        return Vector2(grid.cols // 2, grid.rows // 2)
    return grid.rooms[0].center()


def populate(world: WorldState, config: SimulationConfig) -> None:
    """Spawn the player in room 0 and one monster per remaining room."""
    grid = world.grid
    if not grid.rooms:
        logger.info("No rooms generated — player spawns at map center")

    player = Entity(
        id=world.allocate_entity_id(),
        kind="player",
        name="Player",
        pos=spawn_point(grid),
        stats=CombatStats(
            max_hp=config.player_max_hp, hp=config.player_max_hp,
            defense=config.player_defense, power=config.player_power,
        ),
        viewshed=Viewshed(range=config.vision_range),
        is_blocking=False,
        is_player=True,
    )
    world.add_entity(player)

    for i, room in enumerate(grid.rooms):
        if i == 0:
            continue
        monster = Entity(
            id=world.allocate_entity_id(),
            kind="monster",
            name=f"Monster #{i}",
            pos=room.center(),
            stats=CombatStats(
                max_hp=config.monster_max_hp, hp=config.monster_max_hp,
                defense=config.monster_defense, power=config.monster_power,
            ),
            viewshed=Viewshed(range=config.vision_range),
            is_blocking=True,
            ai_state=AIState.IDLE,
        )
        world.add_entity(monster)

    logger.info("Spawned player at %s and %d monsters", player.pos, len(world.entities) - 1)


# -- carving --

def _carve_room(grid: Grid, room: Rect) -> None:
    for y in range(room.y1, room.y2 + 1):
        for x in range(room.x1, room.x2 + 1):
            if grid.in_bounds_xy(x, y):
                grid.set_xy(x, y, TileKind.FLOOR)


def _carve_horizontal(grid: Grid, x1: int, x2: int, y: int) -> None:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        if grid.in_bounds_xy(x, y):
            grid.set_xy(x, y, TileKind.FLOOR)


def _carve_vertical(grid: Grid, y1: int, y2: int, x: int) -> None:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        if grid.in_bounds_xy(x, y):
            grid.set_xy(x, y, TileKind.FLOOR)


def _seal_border(grid: Grid) -> None:
    last_col, last_row = grid.cols - 1, grid.rows - 1
    for x in range(grid.cols):
        grid.set_xy(x, 0, TileKind.WALL)
        grid.set_xy(x, last_row, TileKind.WALL)
    for y in range(grid.rows):
        grid.set_xy(0, y, TileKind.WALL)
        grid.set_xy(last_col, y, TileKind.WALL)


def build_level(config: SimulationConfig) -> WorldState:
    """Generate a dungeon from *config* and spawn its actors."""
    grid = generate(
        config.grid_cols,
        config.grid_rows,
        DeterministicRNG(config.world_seed),
        max_rooms=config.max_rooms,
        min_size=config.room_min_size,
        max_size=config.room_max_size,
    )
    world = WorldState(seed=config.world_seed, grid=grid)
    populate(world, config)
    return world
