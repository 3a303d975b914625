from __future__ import annotations

from level import Cell, Grid
from models import LevelConfig


def cell_at(grid: Grid, row: int, col: int) -> Cell:
    return grid.cells[row * grid.width + col]


def fill_row(grid: Grid, row: int, palette: int = 1, tile: int = 1, cols=None) -> None:
    """Make a row (or some of its columns) solid ground."""
    for col in cols if cols is not None else range(grid.width):
        cell_at(grid, row, col).set_tile_by_palette(tile, palette)


def make_config(world: int = 1, level: int = 1, section_size: int = 15, **overrides) -> LevelConfig:
    values = dict(
        world=world,
        level=level,
        worlds=8,
        levels=4,
        section_size=section_size,
        ground_palette=1,
        block_palette=2,
        plant_palette=3,
        pipe_palette=4,
        weather_palette=5,
        ground_tile=1,
        block_tile=9,
        alt_brick=False,
        alt_sky_bridge=False,
        alt_treetop=False,
        alt_treetop_base=False,
        alt_background_tree=False,
    )
    values.update(overrides)
    return LevelConfig(**values)
