"""
level.py

The level grid and cursors used to walk it.

A level is a fixed mesh of cells built once per generation run. Cells live in
a flat, row-major list owned by the Grid; each cell stores the indices of its
four neighbors (None at an edge). Generation code never looks cells up by
coordinate: it moves a Cursor from neighbor to neighbor, which keeps every
walk bounded by the edges of the map.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from tileset import BLANK, LAST_SOLID_TILE

DIRECTIONS = ("up", "left", "down", "right")


@dataclass(eq=False)
class Cell:
    """One space in the level.

    Tile ids are relative to the custom tileset when `palette` > 0. With
    palette 0 the tile id is an absolute id from the base tileset (air,
    coins, ? blocks...).
    """

    index: int
    # row/col are labels for log messages only
    row: int
    col: int

    tile: int = BLANK
    palette: int = 0
    entity: Optional[int] = None

    up: Optional[int] = None
    left: Optional[int] = None
    down: Optional[int] = None
    right: Optional[int] = None

    # solvability pass bookkeeping
    discovered: bool = False
    finish: bool = False

    def solid(self) -> bool:
        # Only custom tiles are classified; palette 0 tiles never collide here.
        return self.palette > 0 and self.tile <= LAST_SOLID_TILE

    def set_tile_by_palette(self, tile: int, palette: Optional[int] = None) -> None:
        """Set the tile, and the palette if one is given (0 selects the base tileset)."""
        self.tile = tile
        if palette is not None:
            self.palette = palette


class Grid:
    """A width x height mesh of linked cells, made of square sections."""

    def __init__(self, section_size: int, section_count: int) -> None:
        if section_size < 1 or section_count < 1:
            raise ValueError(
                f"Grid needs at least one section of size >= 1 "
                f"(got size={section_size}, sections={section_count})"
            )
        self.section_size = section_size
        self.section_count = section_count
        self.width = section_size * section_count
        self.height = section_size

        self.cells: List[Cell] = []
        for i in range(self.width * self.height):
            cell = Cell(index=i, row=i // self.width, col=i % self.width)

            if cell.col > 0:
                cell.left = i - 1
                self.cells[i - 1].right = i

            if cell.row > 0:
                cell.up = i - self.width
                self.cells[i - self.width].down = i

            self.cells.append(cell)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    @property
    def top_left(self) -> Cell:
        return self.cells[0]

    def neighbor(self, cell: Cell, direction: str) -> Optional[Cell]:
        idx = getattr(cell, direction)
        return None if idx is None else self.cells[idx]

    def nonsolid_above_solid(self, cell: Cell) -> bool:
        """True if the cell is open and stands on a solid cell. Used to find floors."""
        below = self.neighbor(cell, "down")
        return below is not None and below.solid() and not cell.solid()

    def nonsolid_after_solid(self, cell: Cell) -> bool:
        """True if the cell is open and follows a solid cell on its left."""
        before = self.neighbor(cell, "left")
        return before is not None and before.solid() and not cell.solid()

    def cursor(self, cell: Optional[Cell] = None) -> "Cursor":
        return Cursor(self, cell if cell is not None else self.top_left)


def build_grid(section_size: int, section_count: int) -> Grid:
    """Create an empty level of `section_count` square sections."""
    return Grid(section_size, section_count)


class Cursor:
    """Points to a single cell and walks the grid through neighbor links."""

    __slots__ = ("grid", "cell")

    def __init__(self, grid: Grid, cell: Cell) -> None:
        self.grid = grid
        self.cell = cell

    def __repr__(self) -> str:
        return f"Cursor(row={self.cell.row}, col={self.cell.col})"

    def copy(self) -> "Cursor":
        return Cursor(self.grid, self.cell)

    def jump(self, cell: Cell) -> None:
        self.cell = cell

    @property
    def up(self) -> Optional[Cell]:
        return self.grid.neighbor(self.cell, "up")

    @property
    def left(self) -> Optional[Cell]:
        return self.grid.neighbor(self.cell, "left")

    @property
    def down(self) -> Optional[Cell]:
        return self.grid.neighbor(self.cell, "down")

    @property
    def right(self) -> Optional[Cell]:
        return self.grid.neighbor(self.cell, "right")

    def at_topmost(self) -> bool:
        return self.cell.up is None

    def at_leftmost(self) -> bool:
        return self.cell.left is None

    def at_bottommost(self) -> bool:
        return self.cell.down is None

    def at_rightmost(self) -> bool:
        return self.cell.right is None

    def solid(self) -> bool:
        return self.cell.solid()

    def nonsolid_above_solid(self) -> bool:
        return self.grid.nonsolid_above_solid(self.cell)

    def nonsolid_after_solid(self) -> bool:
        return self.grid.nonsolid_after_solid(self.cell)

    def move(self, dx: int, dy: int) -> Tuple[int, int]:
        """Move right/down by (dx, dy) cells; negative values move left/up.

        The cursor walks one cell at a time and stops at the edge of the map.
        Returns the signed number of steps actually taken on each axis.
        """
        taken_x = self._walk("right" if dx > 0 else "left", abs(dx))
        taken_y = self._walk("down" if dy > 0 else "up", abs(dy))
        return (taken_x if dx > 0 else -taken_x, taken_y if dy > 0 else -taken_y)

    def _walk(self, direction: str, steps: int) -> int:
        taken = 0
        for _ in range(steps):
            nxt = getattr(self.cell, direction)
            if nxt is None:
                break
            self.cell = self.grid.cells[nxt]
            taken += 1
        return taken
