from entities import GOOMBA, SPAWN
from level import build_grid
from level_test_utils import cell_at, fill_row
from spawners import SpawnLocator


def test_spawn_prefers_third_column():
    grid = build_grid(15, 2)
    fill_row(grid, 14)
    locator = SpawnLocator(grid)

    assert locator.generate(grid.cursor())
    spawn = locator.spawn_cell
    assert (spawn.row, spawn.col) == (13, 2)
    assert spawn.entity == SPAWN


def test_spawn_needs_two_cells_of_floor():
    grid = build_grid(15, 2)
    fill_row(grid, 14, cols=range(3))
    locator = SpawnLocator(grid)

    assert locator.generate(grid.cursor())
    # column 3 (1-based) fails because its right neighbor has no floor
    assert (locator.spawn_cell.row, locator.spawn_cell.col) == (13, 1)


def test_spawn_searches_past_the_priority_columns():
    grid = build_grid(15, 2)
    fill_row(grid, 10, cols=range(8, 10))
    locator = SpawnLocator(grid)

    assert locator.generate(grid.cursor())
    assert (locator.spawn_cell.row, locator.spawn_cell.col) == (9, 8)


def test_spawn_clears_nearby_enemies():
    grid = build_grid(15, 2)
    fill_row(grid, 14)
    for col in (0, 5, 6, 11):
        cell_at(grid, 13, col).entity = GOOMBA
    cell_at(grid, 9, 4).entity = GOOMBA

    SpawnLocator(grid).generate(grid.cursor())

    entities = {(c.row, c.col): c.entity for c in grid if c.entity is not None}
    assert entities == {(13, 2): SPAWN, (13, 11): GOOMBA}


def test_spawn_falls_back_to_top_rows():
    grid = build_grid(15, 2)
    fill_row(grid, 2)
    locator = SpawnLocator(grid)

    assert locator.generate(grid.cursor())
    assert (locator.spawn_cell.row, locator.spawn_cell.col) == (1, 0)


def test_no_spawn_on_an_empty_level(caplog):
    grid = build_grid(15, 1)
    locator = SpawnLocator(grid)

    assert not locator.generate(grid.cursor())
    assert locator.spawn_cell is None
    assert all(c.entity is None for c in grid)
    assert "No spawn position found" in caplog.text
