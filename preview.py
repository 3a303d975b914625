"""
preview.py

Renders a generated level to an image so it can be looked at without the game.

Tiles are drawn as flat colored squares: solid tiles in their palette's color,
open custom tiles in a faded version of it, base-tileset tiles (coins, ? blocks)
with fixed colors. Entities are drawn as circles on top.
"""

from __future__ import annotations

import colorsys
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

from entities import FLAG, SPAWN
from level import Cell, Grid
from tileset import BLANK, COIN, PALETTES, PRIZE_BLOCK

Color = Tuple[int, int, int]

SKY: Color = (92, 148, 252)
FINISH: Color = (255, 255, 255)
ENEMY: Color = (200, 30, 30)

BASE_TILE_COLORS: Dict[int, Color] = {
    COIN: (252, 216, 40),
    PRIZE_BLOCK: (228, 140, 20),
}

ENTITY_COLORS: Dict[int, Color] = {
    SPAWN: (40, 220, 60),
    FLAG: (250, 250, 250),
}


def palette_color(palette: int, faded: bool = False) -> Color:
    """Spread the palettes evenly around the color wheel."""
    hue = ((palette - 1) % PALETTES) / PALETTES
    saturation, value = (0.25, 0.95) if faded else (0.7, 0.6)
    r, g, b = colorsys.hsv_to_rgb(hue, saturation, value)
    return int(r * 255), int(g * 255), int(b * 255)


def tile_color(cell: Cell) -> Optional[Color]:
    """Color of the cell's tile, or None for plain air."""
    if cell.palette > 0:
        return palette_color(cell.palette, faded=not cell.solid())
    if cell.tile == BLANK:
        return None
    return BASE_TILE_COLORS.get(cell.tile, (160, 160, 160))


def render_level(grid: Grid, tile_size: int = 8) -> pygame.Surface:
    """Draw the whole grid onto a new surface, one square per cell."""
    if tile_size < 1:
        raise ValueError(f"tile_size must be >= 1 (got {tile_size})")

    surf = pygame.Surface((grid.width * tile_size, grid.height * tile_size))
    surf.fill(SKY)

    for cell in grid:
        r = pygame.Rect(cell.col * tile_size, cell.row * tile_size, tile_size, tile_size)

        color = tile_color(cell)
        if color is not None:
            pygame.draw.rect(surf, color, r)

        if cell.finish:
            pygame.draw.rect(surf, FINISH, r, 1)

        if cell.entity is not None:
            radius = max(1, int(tile_size * 0.33))
            pygame.draw.circle(surf, ENTITY_COLORS.get(cell.entity, ENEMY), r.center, radius)

    return surf


def save_preview(grid: Grid, path: Path, tile_size: int = 8) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(render_level(grid, tile_size), str(path))
    return path
