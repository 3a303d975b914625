from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Tuple

from level import Grid
from randomness import coinflip
from tileset import (
    FIRST_BLOCK_TILE,
    FIRST_GROUND_TILE,
    LAST_BLOCK_TILE,
    LAST_GROUND_TILE,
    PALETTES,
)

DEFAULT_SEED = "Cartridge Tilt"
MODES = ("1.6", "AE", "SE")


@dataclass(frozen=True)
class GeneratorSettings:
    """Settings for a whole generation run (all worlds and levels)."""

    seed: str = DEFAULT_SEED
    mode: str = "1.6"
    section_size: int = 15
    worlds: int = 8
    levels: int = 4
    min_sections: int = 8
    max_sections: int = 12
    enemies: bool = True
    castle_ends: bool = False
    strict: bool = False
    max_attempts: int = 20
    preview_tile_size: int = 8

    def level_seed(self, world: int, level: int) -> str:
        """Seed for one level's random stream; levels never share a stream."""
        return f"{self.seed}:{world}-{level}"


@dataclass(frozen=True)
class LevelConfig:
    """Everything the generators of one level share. Built once per level."""

    world: int
    level: int
    worlds: int
    levels: int
    section_size: int

    ground_palette: int
    block_palette: int
    plant_palette: int
    pipe_palette: int
    weather_palette: int

    ground_tile: int
    block_tile: int
    alt_brick: bool
    alt_sky_bridge: bool
    alt_treetop: bool
    alt_treetop_base: bool
    alt_background_tree: bool

    enemies: bool = True

    @property
    def palettes(self) -> Tuple[int, int, int, int, int]:
        return (
            self.ground_palette,
            self.block_palette,
            self.plant_palette,
            self.pipe_palette,
            self.weather_palette,
        )

    @property
    def is_castle(self) -> bool:
        return self.level == self.levels

    @classmethod
    def draw(
        cls,
        rng: random.Random,
        settings: GeneratorSettings,
        world: int,
        level: int,
    ) -> "LevelConfig":
        """Pick the palettes, tiles and styles for a level from its stream."""
        return cls(
            world=world,
            level=level,
            worlds=settings.worlds,
            levels=settings.levels,
            section_size=settings.section_size,
            ground_palette=rng.randint(1, PALETTES),
            block_palette=rng.randint(1, PALETTES),
            plant_palette=rng.randint(1, PALETTES),
            pipe_palette=rng.randint(1, PALETTES),
            weather_palette=rng.randint(1, PALETTES),
            ground_tile=rng.randint(FIRST_GROUND_TILE, LAST_GROUND_TILE),
            block_tile=rng.randint(FIRST_BLOCK_TILE, LAST_BLOCK_TILE),
            alt_brick=coinflip(rng),
            alt_sky_bridge=coinflip(rng),
            alt_treetop=coinflip(rng),
            alt_treetop_base=coinflip(rng),
            alt_background_tree=coinflip(rng),
            enemies=settings.enemies,
        )


@dataclass
class GeneratedLevel:
    world: int
    level: int
    grid: Grid
    spawn_found: bool
    solved: bool
    unblocked: int
    background: Tuple[int, int, int]
    spriteset: int
    music: int

    @property
    def name(self) -> str:
        return f"{self.world}-{self.level}"
