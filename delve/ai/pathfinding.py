"""A* pathfinding over the dungeon grid.

Provides a `Pathfinder` class that computes optimal 8-directional paths
through the grid, respecting the per-tick ``blocked`` flags.

Usage:
    pf = Pathfinder(grid)
    path = pf.find_path(from_idx, to_idx)     # NavigationPath
    if path.success and len(path.steps) > 1:
        next_idx = path.steps[1]
"""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from delve.core.grid import Grid

# ---------------------------------------------------------------------------
# Step costs
# ---------------------------------------------------------------------------
# Diagonals cost slightly more than sqrt(2) so that, between equally long
# routes, the one with fewer diagonal steps wins.

ORTHOGONAL_COST = 1.0
DIAGONAL_COST = 1.45

_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL = ((-1, -1), (1, -1), (-1, 1), (1, 1))


@dataclass(slots=True)
class NavigationPath:
    """Result of an A* search, as grid indices from start to goal."""

    success: bool = False
    steps: list[int] = field(default_factory=list)
    cost: float = 0.0


def available_exits(
    grid: Grid,
    idx: int,
    orthogonal_cost: float = ORTHOGONAL_COST,
    diagonal_cost: float = DIAGONAL_COST,
) -> list[tuple[int, float]]:
    """Neighbors of *idx* that can be entered right now, with step costs."""
    x, y = grid.index_to_xy(idx)
    cols = grid.cols
    exits: list[tuple[int, float]] = []
    for dx, dy in _ORTHOGONAL:
        if grid.is_exit_valid(x + dx, y + dy):
            exits.append(((y + dy) * cols + x + dx, orthogonal_cost))
    for dx, dy in _DIAGONAL:
        if grid.is_exit_valid(x + dx, y + dy):
            exits.append(((y + dy) * cols + x + dx, diagonal_cost))
    return exits


class Pathfinder:
    """A* pathfinder operating on the simulation Grid.

    Reads ``blocked`` at query time, so a path is only valid for the
    tick it was computed in.
    """

    __slots__ = ("_grid", "_orthogonal_cost", "_diagonal_cost", "_max_nodes")

    def __init__(
        self,
        grid: Grid,
        orthogonal_cost: float = ORTHOGONAL_COST,
        diagonal_cost: float = DIAGONAL_COST,
        max_nodes: int | None = None,
    ) -> None:
        self._grid = grid
        self._orthogonal_cost = orthogonal_cost
        self._diagonal_cost = diagonal_cost
        self._max_nodes = max_nodes

    def _heuristic(self, idx: int, goal_x: int, goal_y: int) -> float:
        x, y = self._grid.index_to_xy(idx)
        # Scaled so it never exceeds the cheapest per-distance step cost
        unit = min(self._orthogonal_cost, self._diagonal_cost / math.sqrt(2))
        return math.hypot(x - goal_x, y - goal_y) * unit

    def find_path(self, from_idx: int, to_idx: int) -> NavigationPath:
        """Compute an A* path from *from_idx* to *to_idx*.

        On success ``steps[0] == from_idx`` and ``steps[-1] == to_idx``.
        Returns an unsuccessful, empty path when the goal is unreachable
        (or the optional node budget runs out).
        """
        grid = self._grid
        gx, gy = grid.index_to_xy(to_idx)
        grid.index_to_xy(from_idx)  # raises on an out-of-range start

        if from_idx == to_idx:
            return NavigationPath(success=True, steps=[from_idx], cost=0.0)

        # A* open set: (f_score, counter, idx)
        counter = 0
        open_heap: list[tuple[float, int, int]] = []
        heapq.heappush(open_heap, (self._heuristic(from_idx, gx, gy), counter, from_idx))

        g_score: dict[int, float] = {from_idx: 0.0}
        came_from: dict[int, int] = {}
        closed: set[int] = set()
        nodes_explored = 0

        while open_heap:
            if self._max_nodes is not None and nodes_explored >= self._max_nodes:
                break
            _, _, current = heapq.heappop(open_heap)

            if current == to_idx:
                return NavigationPath(
                    success=True,
                    steps=self._reconstruct(came_from, current),
                    cost=g_score[current],
                )

            if current in closed:
                continue
            closed.add(current)
            nodes_explored += 1

            current_g = g_score[current]
            for neighbor, step_cost in available_exits(
                grid, current, self._orthogonal_cost, self._diagonal_cost
            ):
                if neighbor in closed:
                    continue
                tentative_g = current_g + step_cost
                if tentative_g < g_score.get(neighbor, float("inf")):
                    g_score[neighbor] = tentative_g
                    came_from[neighbor] = current
                    counter += 1
                    heapq.heappush(
                        open_heap,
                        (tentative_g + self._heuristic(neighbor, gx, gy), counter, neighbor),
                    )

        return NavigationPath(success=False, steps=[])

    @staticmethod
    def _reconstruct(came_from: dict[int, int], current: int) -> list[int]:
        """Walk back through came_from to build the path, start included."""
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path


def find_path(grid: Grid, from_idx: int, to_idx: int) -> NavigationPath:
    """One-shot A* search with the default step costs."""
    return Pathfinder(grid).find_path(from_idx, to_idx)
