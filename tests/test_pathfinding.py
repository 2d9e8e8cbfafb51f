"""Unit tests for A* pathfinding over the dungeon grid."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.ai.pathfinding import Pathfinder, available_exits, find_path
from delve.core.enums import TileKind
from delve.core.grid import Grid
from tests.helpers.arena import corridor_grid, open_grid, wall


def _idx(g: Grid, x: int, y: int) -> int:
    return g.xy_to_index(x, y)


# ---------------------------------------------------------------------------
# Basic A* tests
# ---------------------------------------------------------------------------

class TestAStarBasic:
    def test_straight_corridor(self):
        g = corridor_grid(10)
        path = find_path(g, _idx(g, 1, 2), _idx(g, 10, 2))
        assert path.success
        assert len(path.steps) == 10
        assert path.steps[0] == _idx(g, 1, 2)
        assert path.steps[-1] == _idx(g, 10, 2)
        assert path.cost == pytest.approx(9.0)

    def test_same_start_and_goal(self):
        g = open_grid(8, 8)
        path = find_path(g, _idx(g, 3, 3), _idx(g, 3, 3))
        assert path.success
        assert path.steps == [_idx(g, 3, 3)]
        assert path.cost == 0.0

    def test_adjacent_goal(self):
        g = open_grid(8, 8)
        path = find_path(g, _idx(g, 3, 3), _idx(g, 4, 3))
        assert path.steps == [_idx(g, 3, 3), _idx(g, 4, 3)]
        assert path.cost == pytest.approx(1.0)

    def test_pure_diagonal(self):
        g = open_grid(8, 8)
        path = find_path(g, _idx(g, 1, 1), _idx(g, 4, 4))
        assert len(path.steps) == 4
        assert path.cost == pytest.approx(3 * 1.45)

    def test_knight_move_uses_one_diagonal(self):
        g = open_grid(8, 8)
        path = find_path(g, _idx(g, 1, 1), _idx(g, 3, 2))
        assert len(path.steps) == 3
        assert path.cost == pytest.approx(1.0 + 1.45)

    def test_consecutive_steps_are_neighbors(self):
        g = open_grid(12, 12)
        path = find_path(g, _idx(g, 1, 1), _idx(g, 10, 7))
        for a, b in zip(path.steps, path.steps[1:]):
            ax, ay = g.index_to_xy(a)
            bx, by = g.index_to_xy(b)
            assert max(abs(ax - bx), abs(ay - by)) == 1


# ---------------------------------------------------------------------------
# Obstacles
# ---------------------------------------------------------------------------

class TestObstacles:
    def test_path_around_wall(self):
        g = open_grid(10, 10)
        wall(g, *[(5, y) for y in range(1, 8)])
        path = find_path(g, _idx(g, 2, 4), _idx(g, 8, 4))
        assert path.success
        assert path.steps[-1] == _idx(g, 8, 4)
        for step in path.steps:
            assert not g.blocked[step], f"Step {g.index_to_xy(step)} is blocked"
        assert any(g.index_to_xy(s)[1] == 8 for s in path.steps)

    def test_enclosed_goal_unreachable(self):
        g = open_grid(10, 10)
        wall(g, *[(5 + dx, 5 + dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy])
        path = find_path(g, _idx(g, 1, 1), _idx(g, 5, 5))
        assert not path.success
        assert path.steps == []

    def test_blocked_goal_unreachable(self):
        g = open_grid(10, 10)
        g.blocked[_idx(g, 6, 6)] = True
        assert not find_path(g, _idx(g, 2, 2), _idx(g, 6, 6)).success

    def test_blocked_flags_read_at_query_time(self):
        g = corridor_grid(6)
        pf = Pathfinder(g)
        assert pf.find_path(_idx(g, 1, 2), _idx(g, 6, 2)).success
        g.blocked[_idx(g, 3, 2)] = True
        assert not pf.find_path(_idx(g, 1, 2), _idx(g, 6, 2)).success

    def test_border_margin_is_never_entered(self):
        g = Grid(6, 6, default=TileKind.FLOOR)
        g.populate_blocked()
        assert not find_path(g, _idx(g, 2, 2), _idx(g, 0, 2)).success
        path = find_path(g, _idx(g, 1, 1), _idx(g, 4, 4))
        for step in path.steps:
            x, y = g.index_to_xy(step)
            assert 1 <= x < 5 and 1 <= y < 5


# ---------------------------------------------------------------------------
# Exits and limits
# ---------------------------------------------------------------------------

class TestExits:
    def test_open_cell_has_eight_exits(self):
        g = open_grid(8, 8)
        exits = available_exits(g, _idx(g, 4, 4))
        assert len(exits) == 8
        assert sorted(cost for _, cost in exits) == [1.0] * 4 + [1.45] * 4

    def test_corner_cell_respects_margin(self):
        g = Grid(6, 6, default=TileKind.FLOOR)
        g.populate_blocked()
        exits = {g.index_to_xy(i) for i, _ in available_exits(g, _idx(g, 1, 1))}
        assert exits == {(2, 1), (1, 2), (2, 2)}

    def test_custom_costs(self):
        g = open_grid(8, 8)
        path = Pathfinder(g, orthogonal_cost=2.0, diagonal_cost=2.5).find_path(_idx(g, 1, 1), _idx(g, 3, 1))
        assert path.cost == pytest.approx(4.0)

    def test_node_budget_exhausted(self):
        g = open_grid(30, 30)
        path = Pathfinder(g, max_nodes=3).find_path(_idx(g, 1, 1), _idx(g, 28, 28))
        assert not path.success

    def test_out_of_range_start_raises(self):
        g = open_grid(8, 8)
        with pytest.raises(IndexError):
            find_path(g, 999, _idx(g, 3, 3))
