"""
level_writer.py

Serializes generated levels into Mari0 level files.

A level file is a single line: every cell of the grid in row-major order,
comma separated, followed by `;key=value` properties. The property set
depends on the targeted Mari0 flavor:

- 1.6: background is one of three presets (1 = light blue, 2 = dark, 3 = black)
- AE:  `height=` property and an RGB background
- SE:  RGB background split into three properties
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from level import Cell
from models import MODES, GeneratedLevel
from tileset import CUSTOM_TILES_OFFSET, TILES_PER_PALETTE

logger = logging.getLogger(__name__)


def encode_cell(cell: Cell) -> str:
    """Absolute tile id of the cell, plus `-entity` if one is placed there."""
    if cell.palette > 0:
        tile = CUSTOM_TILES_OFFSET + (cell.palette - 1) * TILES_PER_PALETTE + cell.tile
    else:
        tile = cell.tile

    if cell.entity is not None:
        return f"{tile}-{cell.entity}"
    return str(tile)


def classic_background(background: Tuple[int, int, int]) -> int:
    """Map an RGB color onto the 1.6 background presets by its blue component."""
    blue = background[2]
    if blue > 170:
        return 3
    if blue > 85:
        return 2
    return 1


def serialize_level(level: GeneratedLevel, mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r} (expected one of {', '.join(MODES)})")

    parts: List[str] = [",".join(encode_cell(cell) for cell in level.grid)]

    if mode == "AE":
        parts.append(f"height={level.grid.height}")

    r, g, b = level.background
    if mode == "AE":
        parts.append(f"background={r},{g},{b}")
    elif mode == "SE":
        parts.append(f"backgroundr={r}")
        parts.append(f"backgroundg={g}")
        parts.append(f"backgroundb={b}")
    else:
        parts.append(f"background={classic_background(level.background)}")

    parts.append(f"spriteset={level.spriteset}")
    parts.append(f"music={level.music}")
    parts.append("timelimit=0")
    parts.append("scrollfactor=0")
    return ";".join(parts)


@dataclass(frozen=True)
class LevelPaths:
    level_path: Path
    preview_path: Path


class LevelWriter:
    def __init__(self, directory: Path, mode: str = "1.6") -> None:
        self.directory = directory
        self.mode = mode

    def paths_for(self, world: int, level: int) -> LevelPaths:
        name = f"{world}-{level}"
        return LevelPaths(
            level_path=self.directory / f"{name}.txt",
            preview_path=self.directory / f"{name}.png",
        )

    def write(self, level: GeneratedLevel) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.paths_for(level.world, level.level).level_path
        path.write_text(serialize_level(level, self.mode), encoding="utf-8")
        logger.debug("Wrote %s", path)
        return path
