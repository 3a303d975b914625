"""
spawners.py

Finds the player's starting position once the level is built.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from entities import SPAWN
from level import Cell, Cursor, Grid

logger = logging.getLogger(__name__)

# 0-based columns checked before any other, in order (3rd, 4th, 5th, 2nd, 1st)
PRIORITY_COLUMNS = (2, 3, 4, 1, 0)
CLEAR_RADIUS = 4


class SpawnLocator:
    """Places the spawn on the first spot where the player has two cells of floor.

    Columns are searched top-down from the third row, the first five in
    priority order and the rest left to right; if nothing is found the top
    two rows are searched as a last resort.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.spawn_cell: Optional[Cell] = None

    def generate(self, topleft: Cursor) -> bool:
        for candidate in self._candidates(topleft):
            if self._standable(candidate):
                self._place(candidate)
                return True

        logger.warning("No spawn position found")
        return False

    def _candidates(self, topleft: Cursor) -> Iterator[Cursor]:
        width, height = self.grid.width, self.grid.height
        priority = [c for c in PRIORITY_COLUMNS if c < width]
        rest = range(max(PRIORITY_COLUMNS) + 1, width - 1)

        for col in priority + list(rest):
            cursor = topleft.copy()
            cursor.move(col, 2)
            for _ in range(height - 2):
                yield cursor.copy()
                cursor.move(0, 1)

        # Second row from the top, then the top row
        for row in (1, 0):
            cursor = topleft.copy()
            if cursor.move(0, row)[1] != row:
                continue
            for _ in range(width):
                yield cursor.copy()
                cursor.move(1, 0)

    def _standable(self, cursor: Cursor) -> bool:
        right = cursor.right
        return (
            right is not None
            and cursor.nonsolid_above_solid()
            and self.grid.nonsolid_above_solid(right)
        )

    def _place(self, center: Cursor) -> None:
        # clear out enemies around the spawn
        corner = center.copy()
        corner.move(-CLEAR_RADIUS, -CLEAR_RADIUS)
        for dy in range(CLEAR_RADIUS * 2 + 1):
            cursor = corner.copy()
            cursor.move(0, dy)
            for _ in range(CLEAR_RADIUS * 2 + 1):
                cursor.cell.entity = None
                cursor.move(1, 0)

        center.cell.entity = SPAWN
        self.spawn_cell = center.cell
        logger.info("Spawn placed at row %d, col %d", center.cell.row, center.cell.col)
