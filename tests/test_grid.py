"""Tests for the Grid, the occupancy index and the actor directory."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.core.enums import SessionStatus, TileKind
from delve.core.grid import Grid
from delve.core.models import Vector2
from delve.core.snapshot import Snapshot
from delve.core.world_state import MissingPlayerError, WorldState
from delve.systems.occupancy import index_actors
from tests.helpers.arena import DungeonArena


# ---------------------------------------------------------------------------
# Indexing
# ---------------------------------------------------------------------------

class TestIndexing:
    def test_row_major_round_trip(self):
        g = Grid(10, 5)
        assert g.xy_to_index(3, 2) == 23
        assert g.index_to_xy(23) == (3, 2)
        assert g.index_to_pos(g.pos_to_index(Vector2(9, 4))) == Vector2(9, 4)

    @pytest.mark.parametrize("x,y", [(10, 0), (0, 5), (-1, 0), (0, -1)])
    def test_out_of_bounds_coordinates_raise(self, x, y):
        g = Grid(10, 5)
        with pytest.raises(IndexError):
            g.xy_to_index(x, y)

    def test_out_of_bounds_index_raises(self):
        g = Grid(10, 5)
        with pytest.raises(IndexError):
            g.index_to_xy(50)
        with pytest.raises(IndexError):
            g.index_to_xy(-1)

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(ValueError):
            Grid(0, 5)
        with pytest.raises(ValueError):
            Grid(5, -2)

    def test_new_grid_is_all_wall_and_unseen(self):
        g = Grid(4, 3)
        assert all(t == TileKind.WALL for t in g.tiles)
        assert not any(g.revealed)
        assert not any(g.visible)
        assert all(c == [] for c in g.tile_content)

    def test_off_map_cells_are_opaque(self):
        g = Grid(4, 4, default=TileKind.FLOOR)
        assert g.is_opaque(-1, 0)
        assert g.is_opaque(4, 1)
        assert not g.is_opaque(1, 1)


# ---------------------------------------------------------------------------
# Occupancy index
# ---------------------------------------------------------------------------

class TestOccupancy:
    def test_walls_block_floor_does_not(self):
        arena = DungeonArena(cols=6, rows=6)
        g = arena.grid
        assert g.blocked[g.xy_to_index(0, 0)]
        assert not g.blocked[g.xy_to_index(2, 2)]

    def test_blocking_actor_blocks_its_cell(self):
        arena = DungeonArena()
        m = arena.add_monster((4, 4))
        index_actors(arena.world)
        idx = arena.grid.pos_to_index(m.pos)
        assert arena.grid.blocked[idx]
        assert arena.grid.tile_content[idx] == [m.id]

    def test_player_is_indexed_but_not_blocking(self):
        arena = DungeonArena()
        p = arena.add_player((3, 3))
        index_actors(arena.world)
        idx = arena.grid.pos_to_index(p.pos)
        assert not arena.grid.blocked[idx]
        assert arena.grid.tile_content[idx] == [p.id]

    def test_rebuild_forgets_previous_positions(self):
        arena = DungeonArena()
        m = arena.add_monster((4, 4))
        index_actors(arena.world)
        arena.world.move_entity(m.id, Vector2(5, 4))
        index_actors(arena.world)
        old_idx = arena.grid.xy_to_index(4, 4)
        new_idx = arena.grid.xy_to_index(5, 4)
        assert not arena.grid.blocked[old_idx]
        assert arena.grid.tile_content[old_idx] == []
        assert arena.grid.blocked[new_idx]

    def test_content_lists_are_reused(self):
        arena = DungeonArena()
        arena.add_monster((4, 4))
        before = [id(c) for c in arena.grid.tile_content]
        index_actors(arena.world)
        index_actors(arena.world)
        assert [id(c) for c in arena.grid.tile_content] == before

    def test_entities_at(self):
        arena = DungeonArena()
        p = arena.add_player((3, 3))
        m = arena.add_monster((4, 3))
        index_actors(arena.world)
        assert arena.world.entities_at(Vector2(4, 3)) == [m]
        assert arena.world.entities_at(Vector2(3, 3)) == [p]
        assert arena.world.entities_at(Vector2(5, 5)) == []


# ---------------------------------------------------------------------------
# Actor directory
# ---------------------------------------------------------------------------

class TestDirectory:
    def test_handles_are_never_reused(self):
        arena = DungeonArena()
        a = arena.add_monster((2, 2))
        arena.world.remove_entity(a.id)
        b = arena.add_monster((3, 3))
        assert b.id > a.id

    def test_second_player_rejected(self):
        arena = DungeonArena()
        arena.add_player((2, 2))
        with pytest.raises(ValueError):
            arena.add_player((3, 3))

    def test_missing_player_raises(self):
        arena = DungeonArena()
        arena.add_monster((2, 2))
        assert arena.world.find_player() is None
        with pytest.raises(MissingPlayerError):
            arena.world.player()

    def test_monsters_in_handle_order(self):
        arena = DungeonArena()
        m1 = arena.add_monster((2, 2))
        arena.add_player((5, 5))
        m2 = arena.add_monster((3, 3))
        assert [m.id for m in arena.world.monsters()] == [m1.id, m2.id]

    def test_remove_clears_occupancy_immediately(self):
        arena = DungeonArena()
        m = arena.add_monster((4, 4))
        index_actors(arena.world)
        idx = arena.grid.pos_to_index(m.pos)
        removed = arena.world.remove_entity(m.id)
        assert removed is m
        assert not arena.grid.blocked[idx]
        assert m.id not in arena.grid.tile_content[idx]
        assert arena.world.remove_entity(m.id) is None

    def test_remove_keeps_cell_blocked_for_other_occupant(self):
        arena = DungeonArena()
        m1 = arena.add_monster((4, 4))
        arena.add_monster((4, 4))
        index_actors(arena.world)
        arena.world.remove_entity(m1.id)
        assert arena.grid.blocked[arena.grid.xy_to_index(4, 4)]

    def test_removing_player_ends_session(self):
        arena = DungeonArena()
        p = arena.add_player((2, 2))
        arena.world.remove_entity(p.id)
        assert arena.world.player_id is None
        assert arena.world.status == SessionStatus.PLAYER_DEFEATED
        assert arena.world.player_defeated


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

class TestSnapshot:
    def test_snapshot_is_detached_from_world(self):
        arena = DungeonArena()
        p = arena.add_player((2, 2))
        snap = Snapshot.from_world(arena.world)
        p.stats.hp = 1
        arena.world.move_entity(p.id, Vector2(3, 3))
        assert snap.player.stats.hp == 30
        assert snap.player.pos == Vector2(2, 2)

    def test_tile_at(self):
        arena = DungeonArena(cols=6, rows=6)
        snap = Snapshot.from_world(arena.world)
        assert snap.tile_at(0, 0) == TileKind.WALL
        assert snap.tile_at(2, 2) == TileKind.FLOOR
        with pytest.raises(IndexError):
            snap.tile_at(6, 0)

    def test_snapshot_without_player(self):
        g = Grid(4, 4)
        snap = Snapshot.from_world(WorldState(seed=1, grid=g))
        assert snap.player is None
        assert snap.status == SessionStatus.PLAYING
