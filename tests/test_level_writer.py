import pytest

from level import Cell, build_grid
from level_test_utils import cell_at
from level_writer import LevelWriter, classic_background, encode_cell, serialize_level
from models import GeneratedLevel


def _level(background=(1, 2, 200), world=1, level=2):
    grid = build_grid(14, 1)
    return GeneratedLevel(
        world=world,
        level=level,
        grid=grid,
        spawn_found=True,
        solved=True,
        unblocked=0,
        background=background,
        spriteset=2,
        music=3,
    )


def test_encode_cell():
    assert encode_cell(Cell(index=0, row=0, col=0)) == "1"
    assert encode_cell(Cell(index=0, row=0, col=0, tile=5, palette=2)) == "313"
    assert encode_cell(Cell(index=0, row=0, col=0, tile=5, palette=2, entity=6)) == "313-6"
    assert encode_cell(Cell(index=0, row=0, col=0, tile=116, entity=8)) == "116-8"


@pytest.mark.parametrize("blue,expected", [(0, 1), (85, 1), (86, 2), (170, 2), (171, 3), (255, 3)])
def test_classic_background_thresholds(blue, expected):
    assert classic_background((0, 0, blue)) == expected


def test_cells_are_row_major():
    generated = _level()
    cell_at(generated.grid, 0, 1).set_tile_by_palette(3, 1)
    cell_at(generated.grid, 1, 0).entity = 8

    cells = serialize_level(generated, "1.6").split(";")[0].split(",")
    assert len(cells) == 14 * 14
    assert cells[1] == "223"
    assert cells[14] == "1-8"


def test_classic_format():
    text = serialize_level(_level(), "1.6")
    assert text.endswith(";background=3;spriteset=2;music=3;timelimit=0;scrollfactor=0")
    assert "height=" not in text


def test_ae_format():
    text = serialize_level(_level(), "AE")
    assert ";height=14;background=1,2,200;spriteset=2;" in text


def test_se_format():
    text = serialize_level(_level(), "SE")
    assert ";backgroundr=1;backgroundg=2;backgroundb=200;spriteset=2;" in text
    assert "height=" not in text


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        serialize_level(_level(), "1.5")


def test_writer_names_files_after_the_level(tmp_path):
    writer = LevelWriter(tmp_path / "out", "AE")
    path = writer.write(_level(world=3, level=4))

    assert path == tmp_path / "out" / "3-4.txt"
    assert path.read_text(encoding="utf-8") == serialize_level(_level(), "AE")
    assert writer.paths_for(3, 4).preview_path.name == "3-4.png"
