"""
structures.py

Paintable structures used by the generators to build maps.

Every structure is a small frozen dataclass with a bounding box (width and
height) and a `paint(cursor)` method that writes tiles, palettes and entities
relative to the cursor, which points at the top left of the box. Painting
moves the cursor through neighbor links, so a structure that hangs off the
edge of the map is simply clipped there. The box is positioning metadata for
the generators; it is not enforced.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from entities import AXE, BOWSER, BULLETBILL, FLAG, PLANT
from level import Cell, Cursor
from tileset import (
    BG_TREE_ALT_OFFSET,
    BG_TREE_BASE,
    BLASTER_BASE,
    BLASTER_MOUNT,
    BLASTER_TOP,
    BUSH_CENTER,
    BUSH_LEFT,
    BUSH_RIGHT,
    CASTLE_ALT_OFFSET,
    CASTLE_BRIDGE,
    CASTLE_BRIDGE_CHAIN,
    CASTLE_DOORWAY,
    CASTLE_LEFT_WINDOW,
    CASTLE_RAMPART,
    CASTLE_RIGHT_WINDOW,
    CASTLE_TOP,
    CASTLE_WALL,
    CLOUD_LOWER_CENTER,
    CLOUD_LOWER_LEFT,
    CLOUD_LOWER_RIGHT,
    CLOUD_PLATFORM_CENTER,
    CLOUD_PLATFORM_LEFT,
    CLOUD_PLATFORM_RIGHT,
    CLOUD_UPPER_CENTER,
    CLOUD_UPPER_LEFT,
    CLOUD_UPPER_RIGHT,
    COIN,
    DOOR,
    FIRST_BLOCK_TILE,
    FLAGPOLE,
    FLAGPOLE_TOP,
    HILL_INSIDE,
    HILL_LEFT,
    HILL_RIGHT,
    HILL_TOP,
    HILL_TREES,
    HILL_TREES_ALT_OFFSET,
    HORIZONTAL_PIPE_LOWER_BASE,
    HORIZONTAL_PIPE_LOWER_SPOUT,
    HORIZONTAL_PIPE_UPPER_BASE,
    HORIZONTAL_PIPE_UPPER_SPOUT,
    LARGE_BG_TREE_CENTER,
    LARGE_BG_TREE_LOWER,
    LARGE_BG_TREE_UPPER,
    LAST_SOLID_TILE,
    LAVA_CENTER,
    LAVA_TOP,
    MUSHROOM_PLATFORM_BASE,
    MUSHROOM_PLATFORM_CENTER,
    MUSHROOM_PLATFORM_LEFT,
    MUSHROOM_PLATFORM_RIGHT,
    MUSHROOM_PLATFORM_STALK,
    SKY_BRIDGE,
    SKY_BRIDGE_ALT_OFFSET,
    SKY_BRIDGE_ROPE,
    SMALL_BG_TREE,
    TREETOPS_ALT_OFFSET,
    TREETOPS_BASE,
    TREETOPS_BASE_ALT_OFFSET,
    TREETOPS_CENTER,
    TREETOPS_LEFT,
    TREETOPS_RIGHT,
    VERTICAL_PIPE_LEFT_BASE,
    VERTICAL_PIPE_LEFT_SPOUT,
    VERTICAL_PIPE_RIGHT_BASE,
    VERTICAL_PIPE_RIGHT_SPOUT,
)
from utils import ceil_div


def _open(cell: Optional[Cell]) -> bool:
    return cell is not None and not cell.solid()


@dataclass(frozen=True)
class Structure:
    width: int = 0
    height: int = 0
    palette: int = 0

    def paint(self, topleft: Cursor) -> None:
        raise NotImplementedError


# ----------------------------
# Basic structures (any tile)
# ----------------------------


@dataclass(frozen=True)
class RowStructure(Structure):
    height: int = 1
    tile: int = 1

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        for _ in range(self.width):
            cursor.cell.set_tile_by_palette(self.tile, self.palette)
            cursor.move(1, 0)


@dataclass(frozen=True)
class ColumnStructure(Structure):
    width: int = 1
    tile: int = 1

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        for _ in range(self.height):
            cursor.cell.set_tile_by_palette(self.tile, self.palette)
            cursor.move(0, 1)


@dataclass(frozen=True)
class RectangleStructure(Structure):
    tile: int = 1

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        row = RowStructure(width=self.width, palette=self.palette, tile=self.tile)
        for _ in range(self.height):
            row.paint(cursor)
            cursor.move(0, 1)


@dataclass(frozen=True)
class StairStructure(Structure):
    """A staircase; `open_corner` numbers the empty corner clockwise from top left."""

    tile: int = 0
    open_corner: int = 1

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()

        if self.open_corner == 1:  # top left
            cursor.move(0, self.height - 1)
            hstep, vstep = 1, -1
        elif self.open_corner == 2:  # top right
            cursor.move(0, self.height - 1)
            hstep, vstep = 0, -1
        elif self.open_corner == 3:  # bottom left
            hstep, vstep = 1, 1
        else:  # bottom right
            hstep, vstep = 0, 1

        for step in range(self.height):
            RowStructure(
                width=self.width - step, palette=self.palette, tile=self.tile
            ).paint(cursor)
            cursor.move(hstep, vstep)


@dataclass(frozen=True)
class CheckerboardStructure(Structure):
    """Alternating tiles, mostly for coins."""

    tile: int = COIN
    start_with_tile: bool = True

    def paint(self, topleft: Cursor) -> None:
        row_start = topleft.copy()
        starts_with_tile = self.start_with_tile

        for _ in range(self.height):
            cursor = row_start.copy()
            first = 0
            if not starts_with_tile:
                first = 1
                cursor.move(1, 0)
            for _ in range(first, self.width, 2):
                cursor.cell.set_tile_by_palette(self.tile, self.palette)
                cursor.move(2, 0)
            starts_with_tile = not starts_with_tile
            row_start.move(0, 1)


# ----------------------------
# Solid structures
# ----------------------------


@dataclass(frozen=True)
class VerticalPipeStructure(Structure):
    width: int = 2
    active: bool = False

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        grid = cursor.grid

        column = ColumnStructure(
            height=self.height, palette=self.palette, tile=VERTICAL_PIPE_LEFT_BASE
        )
        column.paint(cursor)
        cursor.move(1, 0)
        replace(column, tile=VERTICAL_PIPE_RIGHT_BASE).paint(cursor)

        # Spouts go on whichever end opens into the air
        above = cursor.up
        above_left = grid.neighbor(above, "left") if above is not None else None
        if _open(above) and _open(above_left) and cursor.left is not None:
            cursor.cell.set_tile_by_palette(VERTICAL_PIPE_RIGHT_SPOUT, self.palette)
            cursor.left.set_tile_by_palette(VERTICAL_PIPE_LEFT_SPOUT, self.palette)
            if self.active:
                above_left.entity = PLANT

        cursor.move(0, self.height - 1)
        below = cursor.down
        below_left = grid.neighbor(below, "left") if below is not None else None
        if _open(below) and _open(below_left) and cursor.left is not None:
            cursor.cell.set_tile_by_palette(VERTICAL_PIPE_RIGHT_SPOUT, self.palette)
            cursor.left.set_tile_by_palette(VERTICAL_PIPE_LEFT_SPOUT, self.palette)


@dataclass(frozen=True)
class HorizontalPipeStructure(Structure):
    height: int = 2

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        grid = cursor.grid

        row = RowStructure(
            width=self.width, palette=self.palette, tile=HORIZONTAL_PIPE_UPPER_BASE
        )
        row.paint(cursor)
        cursor.move(0, 1)
        replace(row, tile=HORIZONTAL_PIPE_LOWER_BASE).paint(cursor)

        for side, offset in (("left", 0), ("right", self.width - 1)):
            cursor.move(offset, 0)
            beside = grid.neighbor(cursor.cell, side)
            beside_up = grid.neighbor(beside, "up") if beside is not None else None
            if _open(beside) and _open(beside_up) and cursor.up is not None:
                cursor.cell.set_tile_by_palette(HORIZONTAL_PIPE_LOWER_SPOUT, self.palette)
                cursor.up.set_tile_by_palette(HORIZONTAL_PIPE_UPPER_SPOUT, self.palette)


@dataclass(frozen=True)
class BlasterStructure(Structure):
    width: int = 1
    active: bool = False

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        ColumnStructure(
            height=self.height, palette=self.palette, tile=BLASTER_BASE
        ).paint(cursor)

        cursor.cell.set_tile_by_palette(BLASTER_TOP, self.palette)
        if self.active:
            cursor.cell.entity = BULLETBILL

        cursor.move(0, 1)
        cursor.cell.set_tile_by_palette(BLASTER_MOUNT, self.palette)


@dataclass(frozen=True)
class CloudPlatformStructure(Structure):
    height: int = 1

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        RowStructure(
            width=self.width, palette=self.palette, tile=CLOUD_PLATFORM_CENTER
        ).paint(cursor)
        cursor.cell.set_tile_by_palette(CLOUD_PLATFORM_LEFT, self.palette)
        cursor.move(self.width - 1, 0)
        cursor.cell.set_tile_by_palette(CLOUD_PLATFORM_RIGHT, self.palette)


# ----------------------------
# Semisolid structures
# ----------------------------


@dataclass(frozen=True)
class TreetopsStructure(Structure):
    tree_palette: int = 0
    base_palette: int = 0
    alt_tree: bool = False
    alt_base: bool = False

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        base_offset = TREETOPS_BASE_ALT_OFFSET if self.alt_base else 0
        tree_offset = TREETOPS_ALT_OFFSET if self.alt_tree else 0

        cursor.move(1, 0)
        RectangleStructure(
            width=self.width - 2,
            height=self.height,
            palette=self.base_palette,
            tile=TREETOPS_BASE + base_offset,
        ).paint(cursor)
        cursor.move(-1, 0)
        RowStructure(
            width=self.width,
            palette=self.tree_palette,
            tile=TREETOPS_CENTER + tree_offset,
        ).paint(cursor)

        cursor.cell.set_tile_by_palette(TREETOPS_LEFT + tree_offset, self.tree_palette)
        cursor.move(self.width - 1, 0)
        cursor.cell.set_tile_by_palette(TREETOPS_RIGHT + tree_offset, self.tree_palette)


@dataclass(frozen=True)
class MushroomStructure(Structure):
    base_palette: int = 0
    mushroom_palette: int = 0

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()

        cursor.move(ceil_div(self.width, 2) - 1, 0)
        ColumnStructure(
            height=self.height, palette=self.base_palette, tile=MUSHROOM_PLATFORM_BASE
        ).paint(cursor)
        if cursor.down is not None:
            cursor.down.set_tile_by_palette(MUSHROOM_PLATFORM_STALK, self.base_palette)

        cursor.jump(topleft.cell)
        RowStructure(
            width=self.width,
            palette=self.mushroom_palette,
            tile=MUSHROOM_PLATFORM_CENTER,
        ).paint(cursor)
        cursor.cell.set_tile_by_palette(MUSHROOM_PLATFORM_LEFT, self.mushroom_palette)
        cursor.move(self.width - 1, 0)
        cursor.cell.set_tile_by_palette(MUSHROOM_PLATFORM_RIGHT, self.mushroom_palette)


@dataclass(frozen=True)
class SkyBridgeStructure(Structure):
    base_palette: int = 0
    rope_palette: int = 0
    alt_bridge: bool = False
    block_tile: int = 0

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        offset = SKY_BRIDGE_ALT_OFFSET if self.alt_bridge else 0

        RowStructure(
            width=self.width, palette=self.rope_palette, tile=SKY_BRIDGE_ROPE
        ).paint(cursor)
        cursor.move(0, 1 if self.height > 1 else 0)
        RowStructure(
            width=self.width, palette=self.base_palette, tile=SKY_BRIDGE + offset
        ).paint(cursor)

        if self.height <= 2:
            return

        supports = ColumnStructure(
            height=self.height - 1, palette=self.base_palette, tile=self.block_tile
        )
        supports.paint(cursor)
        cursor.move(self.width - 1, 0)
        supports.paint(cursor)


@dataclass(frozen=True)
class CastleBridgeStructure(Structure):
    active: bool = False

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()

        cursor.move(0, self.height - 1)
        RowStructure(
            width=self.width, palette=self.palette, tile=CASTLE_BRIDGE
        ).paint(cursor)
        if self.active:
            cursor.cell.entity = BOWSER

        # Chain runs diagonally up to the right end of the bridge
        cursor.move(max(self.width - self.height + 1, 0), -1)
        for _ in range(min(self.width, self.height - 1)):
            cursor.cell.set_tile_by_palette(CASTLE_BRIDGE_CHAIN, self.palette)
            cursor.move(1, -1)

        if self.active:
            cursor.cell.entity = AXE


@dataclass(frozen=True)
class FlagpoleStructure(Structure):
    width: int = 1
    base_palette: int = 0
    pole_palette: int = 0
    block_tile: int = FIRST_BLOCK_TILE
    active: bool = False

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        ColumnStructure(
            height=self.height, palette=self.pole_palette, tile=FLAGPOLE
        ).paint(cursor)

        cursor.cell.set_tile_by_palette(FLAGPOLE_TOP, self.pole_palette)
        cursor.move(0, self.height - 1)
        cursor.cell.set_tile_by_palette(self.block_tile, self.base_palette)
        if self.active:
            cursor.cell.entity = FLAG


# ----------------------------
# Background structures (nothing solid)
# ----------------------------


@dataclass(frozen=True)
class HillStructure(Structure):
    """A hill grown downward from its peak; each row is two cells wider."""

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()

        for row in range(1, self.height + 1):
            width = row * 2 - 1
            for col in range(1, width + 1):
                if width == 1:
                    tile = HILL_TOP
                elif col == 1:
                    tile = HILL_LEFT
                elif row <= 3 and col == 2:
                    tile = HILL_TREES
                elif row <= 3 and col == width - 1:
                    tile = HILL_TREES + HILL_TREES_ALT_OFFSET
                elif col == width:
                    tile = HILL_RIGHT
                else:
                    tile = HILL_INSIDE
                cursor.cell.set_tile_by_palette(tile, self.palette)
                cursor.move(1, 0)
            cursor.move(-width - 1, 1)


@dataclass(frozen=True)
class LavaStructure(Structure):
    def paint(self, topleft: Cursor) -> None:
        RectangleStructure(
            width=self.width, height=self.height, palette=self.palette, tile=LAVA_CENTER
        ).paint(topleft)
        RowStructure(width=self.width, palette=self.palette, tile=LAVA_TOP).paint(topleft)


@dataclass(frozen=True)
class BushStructure(Structure):
    height: int = 1

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        RowStructure(width=self.width, palette=self.palette, tile=BUSH_CENTER).paint(cursor)
        cursor.cell.set_tile_by_palette(BUSH_LEFT, self.palette)
        cursor.move(self.width - 1, 0)
        cursor.cell.set_tile_by_palette(BUSH_RIGHT, self.palette)


@dataclass(frozen=True)
class CloudStructure(Structure):
    height: int = 2

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        RowStructure(
            width=self.width, palette=self.palette, tile=CLOUD_UPPER_CENTER
        ).paint(cursor)
        cursor.move(0, 1)
        RowStructure(
            width=self.width, palette=self.palette, tile=CLOUD_LOWER_CENTER
        ).paint(cursor)

        for lower, upper, offset in (
            (CLOUD_LOWER_LEFT, CLOUD_UPPER_LEFT, 0),
            (CLOUD_LOWER_RIGHT, CLOUD_UPPER_RIGHT, self.width - 1),
        ):
            cursor.move(offset, 0)
            cursor.cell.set_tile_by_palette(lower, self.palette)
            if cursor.up is not None:
                cursor.up.set_tile_by_palette(upper, self.palette)


@dataclass(frozen=True)
class TreeStructure(Structure):
    width: int = 1
    tree_palette: int = 0
    trunk_palette: int = 0
    alt_tree: bool = False

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        offset = BG_TREE_ALT_OFFSET if self.alt_tree else 0

        for row in range(1, self.height + 1):
            if row == 1 and row == self.height - 1:
                cursor.cell.set_tile_by_palette(SMALL_BG_TREE + offset, self.tree_palette)
            elif row == 1:
                cursor.cell.set_tile_by_palette(LARGE_BG_TREE_UPPER + offset, self.tree_palette)
            elif row == self.height - 1:
                cursor.cell.set_tile_by_palette(LARGE_BG_TREE_LOWER + offset, self.tree_palette)
            elif row == self.height:
                cursor.cell.set_tile_by_palette(BG_TREE_BASE, self.trunk_palette)
            else:
                cursor.cell.set_tile_by_palette(LARGE_BG_TREE_CENTER + offset, self.tree_palette)
            cursor.move(0, 1)


@dataclass(frozen=True)
class CastleStructure(Structure):
    width: int = 5
    height: int = 5
    alt_brick: bool = False

    def paint(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        offset = CASTLE_ALT_OFFSET if self.alt_brick else 0
        inner = RowStructure(
            width=self.width - 2, palette=self.palette, tile=CASTLE_TOP + offset
        )

        # roof
        cursor.move(1, 0)
        inner.paint(cursor)

        # windows
        cursor.move(0, 1)
        replace(inner, tile=CASTLE_WALL + offset).paint(cursor)
        cursor.cell.set_tile_by_palette(CASTLE_LEFT_WINDOW + offset, self.palette)
        cursor.move(self.width - 3, 0)
        cursor.cell.set_tile_by_palette(CASTLE_RIGHT_WINDOW + offset, self.palette)

        # rampart
        cursor.move(3 - self.width, 1)
        replace(inner, tile=CASTLE_RAMPART + offset).paint(cursor)
        cursor.move(-1, 0)
        cursor.cell.set_tile_by_palette(CASTLE_TOP + offset, self.palette)
        cursor.move(self.width - 1, 0)
        cursor.cell.set_tile_by_palette(CASTLE_TOP + offset, self.palette)
        cursor.move(1 - self.width, 0)

        wall = RowStructure(width=self.width, palette=self.palette, tile=CASTLE_WALL + offset)
        for _ in range(4, self.height + 1):
            cursor.move(0, 1)
            wall.paint(cursor)

        cursor.move(self.width // 2, 0)
        cursor.cell.set_tile_by_palette(DOOR, self.palette)
        cursor.move(0, -1)
        cursor.cell.set_tile_by_palette(CASTLE_DOORWAY + offset, self.palette)


# ----------------------------
# Utility structures (alter what is already there)
# ----------------------------


@dataclass(frozen=True)
class NonsolidStructure(Structure):
    """Turns every solid tile in the box into its nonsolid counterpart."""

    def paint(self, topleft: Cursor) -> None:
        for row in range(self.height):
            cursor = topleft.copy()
            cursor.move(0, row)
            for _ in range(self.width):
                if cursor.cell.solid():
                    cursor.cell.tile += LAST_SOLID_TILE
                cursor.move(1, 0)
