"""Grid / map system."""

from __future__ import annotations

from delve.core.enums import TileKind
from delve.core.models import Rect, Vector2


class Grid:
    """2D tile grid backed by flat row-major lists.

    Alongside the tile kinds the grid carries the per-cell state every
    simulation stage shares: movement blocking, the occupancy (content)
    index, and the player's revealed/visible memory.
    """

    __slots__ = ("cols", "rows", "_tiles", "blocked", "tile_content", "revealed", "visible", "rooms")

    def __init__(self, cols: int, rows: int, default: TileKind = TileKind.WALL) -> None:
        if cols <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {cols}x{rows}")
        self.cols = cols
        self.rows = rows
        size = cols * rows
        self._tiles: list[TileKind] = [default] * size
        self.blocked: list[bool] = [False] * size
        self.tile_content: list[list[int]] = [[] for _ in range(size)]
        self.revealed: list[bool] = [False] * size
        self.visible: list[bool] = [False] * size
        self.rooms: list[Rect] = []

    @property
    def size(self) -> int:
        return self.cols * self.rows

    @property
    def tiles(self) -> list[TileKind]:
        return self._tiles

    # -- indexing --

    def xy_to_index(self, x: int, y: int) -> int:
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise IndexError(f"Cell ({x}, {y}) outside {self.cols}x{self.rows} grid")
        return y * self.cols + x

    def index_to_xy(self, idx: int) -> tuple[int, int]:
        if not 0 <= idx < self.size:
            raise IndexError(f"Index {idx} outside grid of {self.size} cells")
        return idx % self.cols, idx // self.cols

    def pos_to_index(self, pos: Vector2) -> int:
        return self.xy_to_index(pos.x, pos.y)

    def index_to_pos(self, idx: int) -> Vector2:
        x, y = self.index_to_xy(idx)
        return Vector2(x, y)

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.cols and 0 <= pos.y < self.rows

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    # -- tiles --

    def get(self, pos: Vector2) -> TileKind:
        return self._tiles[self.xy_to_index(pos.x, pos.y)]

    def get_xy(self, x: int, y: int) -> TileKind:
        return self._tiles[self.xy_to_index(x, y)]

    def set_xy(self, x: int, y: int, kind: TileKind) -> None:
        self._tiles[self.xy_to_index(x, y)] = kind

    def is_opaque(self, x: int, y: int) -> bool:
        """True if the cell blocks sight. Cells off the map are opaque."""
        if 0 <= x < self.cols and 0 <= y < self.rows:
            return self._tiles[y * self.cols + x] == TileKind.WALL
        return True

    # -- blocking --

    def populate_blocked(self) -> None:
        """Reset ``blocked`` to the static terrain (walls only)."""
        tiles = self._tiles
        blocked = self.blocked
        for i in range(len(tiles)):
            blocked[i] = tiles[i] == TileKind.WALL

    def clear_content_index(self) -> None:
        """Empty every per-cell content list, keeping the list objects."""
        for content in self.tile_content:
            content.clear()

    def is_exit_valid(self, x: int, y: int) -> bool:
        """A pathfinding exit: one cell inside the border and not blocked."""
        if x < 1 or x >= self.cols - 1 or y < 1 or y >= self.rows - 1:
            return False
        return not self.blocked[y * self.cols + x]
