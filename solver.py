"""
solver.py

Walks the level from the spawn and removes blockades until the finish is
reachable or the walk runs off the right side of the map.

The walk is a breadth-first flood over open cells. When the flood dies out,
it is forced one cell to the right of the first cell of the last frontier;
if that cell is solid, the cheapest solid run around it is dug out. This
does not guarantee the player can actually finish the level (jumps, enemies
and pits are not considered), only that no wall of tiles separates the spawn
from the flagpole.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from level import DIRECTIONS, Cell, Cursor, Grid
from tileset import LAST_SOLID_TILE
from utils import ceil_div

logger = logging.getLogger(__name__)

# expansion order matters: the first frontier cursor is the one forced right
EXPANSION_ORDER = ("right", "up", "down", "left")

# rows at the top of the map excluded from the search (flagpole approach)
BLOCKED_TOP_ROWS = 2


@dataclass
class Run:
    """A horizontal run of solid cells that could be dug out."""

    score: int
    cells: List[Cell] = field(default_factory=list)


class SolutionGenerator:
    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.unblocked_cells = 0

    def solve(self, spawn: Cell) -> bool:
        """Flood from the spawn to any finish cell, digging through blockades.

        The flood only ever steps into open cells, so once a level is solved
        the same open path is there for the next pass and nothing more gets
        dug. Returns False (after logging) if the right edge is reached first.
        """
        grid = self.grid
        self._reset_discovered()

        spawn.discovered = True
        frontier: List[Cursor] = [grid.cursor(spawn)]
        flooded = {spawn.index}

        while frontier:
            if any(cursor.cell.finish for cursor in frontier):
                logger.info("Solution found (%d cells unblocked)", self.unblocked_cells)
                return True

            expanded: List[Cursor] = []
            for cursor in frontier:
                for direction in EXPANSION_ORDER:
                    nxt = grid.neighbor(cursor.cell, direction)
                    if nxt is not None and not nxt.solid() and not nxt.discovered:
                        nxt.discovered = True
                        expanded.append(grid.cursor(nxt))

            if not expanded:
                expanded = self._force_right(frontier[0], flooded)

            flooded.update(cursor.cell.index for cursor in expanded)
            frontier = expanded

        logger.warning("Solution not found!")
        return False

    def _force_right(self, furthest: Cursor, flooded: Set[int]) -> List[Cursor]:
        """Push the stalled flood one cell right, digging if that cell is solid.

        When the dug run lies in another row, the flood resumes from the dug
        cells it touches. If it touches none of them, the blocked cell itself
        is opened.
        """
        grid = self.grid
        ahead = furthest.right
        if ahead is None:
            return []

        if ahead.solid():
            logger.info(
                "Player is blocked at row %d, col %d, unblocking...",
                furthest.cell.row,
                furthest.cell.col,
            )
            dug = self._dig(self._best_run(grid.cursor(ahead)))

            if ahead.solid():
                reachable = [cell for cell in dug if self._touches(cell, flooded)]
                if reachable:
                    for cell in reachable:
                        cell.discovered = True
                    return [grid.cursor(cell) for cell in reachable]

                logger.debug("Dug run is out of reach, opening row %d, col %d", ahead.row, ahead.col)
                dug.extend(self._dig(Run(score=0, cells=[ahead])))

            self.unblocked_cells += len(dug)

        ahead.discovered = True
        return [grid.cursor(ahead)]

    def _touches(self, cell: Cell, flooded: Set[int]) -> bool:
        for direction in DIRECTIONS:
            other = self.grid.neighbor(cell, direction)
            if other is not None and other.index in flooded:
                return True
        return False

    def unblock(self, target: Cursor) -> int:
        """Dig out the best-scoring solid run around `target`.

        Returns the number of cells made nonsolid.
        """
        return len(self._dig(self._best_run(target)))

    def _best_run(self, target: Cursor) -> Optional[Run]:
        best: Optional[Run] = None
        for run in self.calc_path(target, False, False):
            logger.debug("Row %d scored %d", run.cells[-1].row, run.score)
            if best is None or run.score < best.score:
                best = run
        return best

    def _dig(self, run: Optional[Run]) -> List[Cell]:
        if run is None:
            return []
        for cell in run.cells:
            cell.tile += LAST_SOLID_TILE
        return list(run.cells)

    def calc_path(self, row_start: Cursor, from_above: bool, from_below: bool) -> List[Run]:
        """Collect candidate runs through `row_start` and the solid rows touching it.

        A run starts where the solid stretch containing `row_start` starts and
        closes at the first cell with an opening to its right, or with an
        opening right after a wall just above or below it. Runs that hit the
        left or right edge of the map are dropped. Rows above are explored
        upward only and rows below downward only, once per row.
        """
        grid = self.grid
        cursor = row_start.copy()

        above = cursor.up
        checked_above = from_above or above is None or above.discovered
        checked_below = from_below or cursor.at_bottommost()

        runs: List[Run] = []

        # rows above this one; prefers runs near the middle of the map
        _, climbed = cursor.copy().move(0, -grid.height)
        run = Run(score=abs(-climbed + 1 - ceil_div(grid.height, 2)))

        while not cursor.at_leftmost() and cursor.left.solid():
            cursor.move(-1, 0)
        if cursor.at_leftmost():
            return runs

        while not cursor.at_rightmost():
            run.cells.append(cursor.cell)
            run.score += 1

            above = cursor.up
            below = cursor.down
            if not checked_above and above is not None and above.solid():
                runs.extend(self.calc_path(grid.cursor(above), False, True))
                checked_above = True
            if not checked_below and below is not None and below.solid():
                runs.extend(self.calc_path(grid.cursor(below), True, False))
                checked_below = True

            if (
                not cursor.right.solid()
                or (above is not None and grid.nonsolid_after_solid(above))
                or (below is not None and grid.nonsolid_after_solid(below))
            ):
                runs.append(run)
                return runs

            cursor.move(1, 0)

        return runs

    def _reset_discovered(self) -> None:
        for cell in self.grid:
            cell.discovered = False

        row = self.grid.cursor()
        for i in range(BLOCKED_TOP_ROWS):
            if i > 0 and row.move(0, 1) == (0, 0):
                break
            cursor = row.copy()
            cursor.cell.discovered = True
            while not cursor.at_rightmost():
                cursor.move(1, 0)
                cursor.cell.discovered = True
