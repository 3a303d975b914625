"""
generators.py

Section generators. A generator acts on one square section of the level,
given a cursor to the section's top left cell, and builds structures or
places entities there.

The chaos generator decides on a pool of candidate structures with random
sizes and positions, then builds a random number of them drawn from that pool
with replacement. Structures are painted without any awareness of each other
or of the player; the solvability pass repairs the level afterwards.

"Chaos" grows with the world number: more and larger platforms, less basic
terrain, and shifted odds for every structure.
"""

from __future__ import annotations

import logging
import random
from typing import List

from entities import EntityTable, airborne_enemy_table, floor_enemy_table
from level import Cell, Cursor
from models import LevelConfig
from randomness import (
    WeightedSelector,
    coinflip,
    diminishing_random,
    shuffle,
    skewed_random,
)
from structures import (
    BlasterStructure,
    BushStructure,
    CastleBridgeStructure,
    CastleStructure,
    CheckerboardStructure,
    CloudPlatformStructure,
    CloudStructure,
    FlagpoleStructure,
    HillStructure,
    HorizontalPipeStructure,
    LavaStructure,
    MushroomStructure,
    NonsolidStructure,
    RectangleStructure,
    RowStructure,
    SkyBridgeStructure,
    StairStructure,
    TreeStructure,
    TreetopsStructure,
    VerticalPipeStructure,
)
from tileset import COIN, FENCE, LAST_SOLID_TILE, TILES_PER_PALETTE
from utils import ceil_div

logger = logging.getLogger(__name__)


class Generator:
    """Base generator: one level's config, its random stream, one section's size."""

    def __init__(self, config: LevelConfig, rng: random.Random) -> None:
        self.config = config
        self.rng = rng
        self.width = config.section_size
        self.height = config.section_size

    def generate(self, topleft: Cursor) -> None:
        raise NotImplementedError

    def _offset(self, span: int) -> int:
        """Random offset in [0, span) (0 when the span is empty)."""
        return self.rng.randint(0, max(1, span) - 1)


def _selector(table: EntityTable) -> WeightedSelector:
    selector = WeightedSelector()
    for entity, weight in table:
        selector.add(entity, weight)
    return selector


# ----------------------------
# Chaos (structures)
# ----------------------------


class ChaosGenerator(Generator):
    def __init__(self, config: LevelConfig, rng: random.Random) -> None:
        super().__init__(config, rng)
        worlds = config.worlds
        self.chaos = config.world
        self.inverse_chaos = worlds - config.world + 1
        self.half_chaos = ceil_div(config.world, 2)
        self.inverse_half_chaos = ceil_div(worlds - config.world + 1, 2)

    def generate(self, topleft: Cursor) -> None:
        pool = self.build_pool()
        count = self.rng.randint(self.width, self.width + self.chaos * 2)
        logger.debug(
            "chaos section at col %d: %d builds from %d candidates",
            topleft.cell.col,
            count,
            len(pool),
        )

        cursor = topleft.copy()
        for _ in range(count):
            structure, dx, dy = pool.select(self.rng)
            cursor.move(dx, dy)
            structure.paint(cursor)
            cursor.jump(topleft.cell)

    def build_pool(self) -> WeightedSelector:
        """Decide on every structure this section might get, with its weight.

        Entries are (structure, dx, dy), relative to the section's top left.
        """
        cfg = self.config
        rng = self.rng
        w, h = self.width, self.height
        chaos, inverse_chaos = self.chaos, self.inverse_chaos
        half, inverse_half = self.half_chaos, self.inverse_half_chaos
        pool = WeightedSelector()

        # Ceiling (left- and right-aligned)
        for i in range(2):
            height = rng.randint(1, 5)
            width = w - diminishing_random(rng, w - 10) - chaos
            rect = RectangleStructure(
                width=width, height=height, palette=cfg.ground_palette, tile=cfg.ground_tile
            )
            pool.add((rect, w - width if i == 1 else 0, 2), cfg.level**2 * 2)

        # Floor (left- and right-aligned)
        for i in range(2):
            height = rng.randint(1, 5)
            width = w - diminishing_random(rng, w - 10) - chaos
            rect = RectangleStructure(
                width=width, height=height, palette=cfg.ground_palette, tile=cfg.ground_tile
            )
            pool.add((rect, w - width if i == 1 else 0, h - height), inverse_chaos * 8)

        # Stairs
        width = rng.randint(2, 2 + half)
        height = rng.randint(2, width)
        stairs = StairStructure(
            width=width,
            height=height,
            palette=cfg.block_palette,
            tile=cfg.block_tile,
            open_corner=skewed_random(rng, 4, half),
        )
        pool.add((stairs, self._offset(w - width), self._offset(h - height)), cfg.worlds * 4)

        # Pits
        for _ in range(chaos):
            pit = NonsolidStructure(width=1, height=h)
            pool.add((pit, self._offset(w), 0), chaos)

        # Vertical pipes
        for _ in range(inverse_half):
            height = skewed_random(rng, 3, 6 - cfg.level + chaos, 3)
            pipe = VerticalPipeStructure(
                height=height,
                palette=cfg.plant_palette,
                active=cfg.enemies and coinflip(rng, 0.1 * chaos),
            )
            pool.add((pipe, self._offset(w - 2), self._offset(h - height)), 5 - cfg.level)

        # Horizontal pipes
        for _ in range(inverse_half):
            width = skewed_random(rng, 3, 6 - cfg.level + chaos, 3)
            pipe = HorizontalPipeStructure(width=width, palette=cfg.plant_palette)
            pool.add((pipe, self._offset(w - width), self._offset(h - 2)), 5 - cfg.level)

        # Blasters
        for _ in range(inverse_half):
            height = rng.randint(2, max(2, ceil_div(h, 2) - cfg.level))
            blaster = BlasterStructure(
                height=height,
                palette=cfg.block_palette,
                active=cfg.enemies and coinflip(rng, 0.1 * chaos),
            )
            pool.add((blaster, self._offset(w), self._offset(h - height)), chaos * 2)

        # Cloud platforms
        for _ in range(inverse_half):
            width = rng.randint(2, max(2, ceil_div(w, 2) - cfg.level))
            cloud = CloudPlatformStructure(width=width, palette=cfg.weather_palette)
            pool.add((cloud, self._offset(w - width), self._offset(h)), chaos * 2)

        # Treetop platforms
        for _ in range(half):
            width = rng.randint(3, 10)
            height = rng.randint(3, 10)
            treetops = TreetopsStructure(
                width=width,
                height=height,
                base_palette=cfg.block_palette,
                tree_palette=cfg.plant_palette,
                alt_base=cfg.alt_treetop_base,
                alt_tree=cfg.alt_treetop,
            )
            pool.add((treetops, self._offset(w - width), h - height), inverse_half)

        # Mushroom platforms
        for _ in range(inverse_half):
            width = rng.randint(1, 4) * 2 + 1
            height = rng.randint(3, 10)
            mushroom = MushroomStructure(
                width=width,
                height=height,
                base_palette=cfg.block_palette,
                mushroom_palette=cfg.plant_palette,
            )
            pool.add((mushroom, self._offset(w - width), h - height), half)

        # Sky bridges
        for _ in range(inverse_half):
            width = rng.randint(3, 10)
            bridge = SkyBridgeStructure(
                width=width,
                height=2,
                base_palette=cfg.block_palette,
                rope_palette=cfg.plant_palette,
                alt_bridge=cfg.alt_sky_bridge,
                block_tile=cfg.block_tile,
            )
            pool.add((bridge, self._offset(w - width), self._offset(h - 2)), half)

        # Castle bridges
        for _ in range(half):
            width = rng.randint(3, 10)
            height = rng.randint(1, width)
            bridge = CastleBridgeStructure(width=width, height=height, palette=cfg.pipe_palette)
            pool.add((bridge, self._offset(w - width), self._offset(h - height)), inverse_half)

        # Flagpoles
        for _ in range(half * 2):
            height = skewed_random(rng, 3, 10, 2 + inverse_chaos)
            flagpole = FlagpoleStructure(
                height=height,
                base_palette=cfg.block_palette,
                pole_palette=cfg.pipe_palette,
                block_tile=cfg.block_tile,
            )
            pool.add((flagpole, self._offset(w), self._offset(h - height)), inverse_half * 2)

        # Hill, centered-ish; it grows leftward from its peak
        height = rng.randint(4, 4 + half)
        hill = HillStructure(height=height, palette=cfg.plant_palette)
        x = skewed_random(rng, height - 1, w - height + 1, ceil_div(w, 2)) - 1
        pool.add((hill, x, h - height), inverse_half * 4)

        # Bushes
        for _ in range(2):
            width = skewed_random(rng, 3, 3 + half, 3)
            bush = BushStructure(width=width, palette=cfg.plant_palette)
            x = self._offset(w - width)
            y = skewed_random(rng, ceil_div(h, 2), h, ceil_div(h * 3, 4)) - 1
            pool.add((bush, x, y), (cfg.levels - cfg.level + 1) * 2)

        # Background clouds
        for _ in range(2):
            width = skewed_random(rng, 3, 3 + half, 3)
            cloud = CloudStructure(width=width, palette=cfg.weather_palette)
            x = self._offset(w - width)
            y = skewed_random(rng, ceil_div(h, 2), ceil_div(h, 4)) - 1
            pool.add((cloud, x, y), (cfg.levels - cfg.level + 1) * 2)

        # Trees
        for _ in range(4):
            height = skewed_random(rng, 2, 4, 2)
            tree = TreeStructure(
                height=height,
                tree_palette=cfg.plant_palette,
                trunk_palette=cfg.block_palette,
                alt_tree=cfg.alt_background_tree,
            )
            x = self._offset(w)
            y = skewed_random(rng, h - height, h - height)
            pool.add((tree, x, y), inverse_chaos * 2)

        # Fences
        for _ in range(2):
            width = rng.randint(half + 1, chaos + 2)
            fence = RowStructure(width=width, palette=cfg.block_palette, tile=FENCE)
            x = self._offset(w - width)
            y = skewed_random(rng, h, ceil_div(h * 3, 4)) - 1
            pool.add((fence, x, y), cfg.worlds // 2)

        # Rows of coins
        for _ in range(2):
            width = rng.randint(inverse_half, inverse_chaos + 1)
            coins = RowStructure(width=width, palette=0, tile=COIN)
            pool.add((coins, self._offset(w - width), rng.randint(1, h) - 2), inverse_chaos)

        # Group of coins
        height = rng.randint(2, 3)
        width = rng.randint(inverse_half, inverse_chaos + 1)
        coins = CheckerboardStructure(
            width=width,
            height=height,
            palette=0,
            tile=COIN,
            start_with_tile=height % 2 != 0,
        )
        pool.add((coins, self._offset(w - width), rng.randint(1, h) - 2), inverse_half)

        return pool


# ----------------------------
# Enemies
# ----------------------------


class EnemyGenerator(Generator):
    """Places enemies on floors found by scanning shuffled columns."""

    def generate(self, topleft: Cursor) -> None:
        cfg = self.config
        enemies = skewed_random(self.rng, cfg.world + 1, ceil_div(cfg.world, 2) + 1) - 1
        if enemies < 1:
            return

        columns = list(range(self.width))
        shuffle(self.rng, columns)

        for column in columns[:enemies]:
            cursor = topleft.copy()
            cursor.move(column, 2)

            floors: List[Cell] = []
            while not cursor.at_bottommost():
                cursor.move(0, 1)
                if cursor.nonsolid_above_solid():
                    floors.append(cursor.cell)

            if not floors:
                # no floor in this column: something that flies or swims
                cursor.move(0, -self.rng.randint(0, self.height - 3))
                table = airborne_enemy_table(cfg.level, cfg.levels)
                cursor.cell.entity = _selector(table).select(self.rng)
                continue

            spot = floors[self.rng.randint(0, len(floors) - 1)] if len(floors) > 1 else floors[0]
            table = floor_enemy_table(cfg.world, cfg.worlds, len(floors))
            spot.entity = _selector(table).select(self.rng)


# ----------------------------
# Distortions
# ----------------------------


class DistortionGenerator(Generator):
    """Overwrites random cells with random tiles.

    Cosmetic distortions keep each cell's collision: solid cells get another
    solid tile and open cells another open tile.
    """

    def __init__(self, config: LevelConfig, rng: random.Random, cosmetic: bool = False) -> None:
        super().__init__(config, rng)
        self.cosmetic = cosmetic

    def generate(self, topleft: Cursor) -> None:
        cfg = self.config
        strength = cfg.world * cfg.level
        distortions = self.rng.randint(strength, ceil_div(self.width, 4) * strength)

        palettes = WeightedSelector()
        for palette in cfg.palettes:
            palettes.add(palette)

        cursor = topleft.copy()
        for _ in range(distortions):
            cursor.move(self.rng.randint(0, self.width - 1), self.rng.randint(0, self.height - 1))
            cell = cursor.cell

            min_tile, max_tile = 1, TILES_PER_PALETTE
            if self.cosmetic and cell.solid():
                max_tile = LAST_SOLID_TILE
            elif self.cosmetic:
                min_tile = LAST_SOLID_TILE + 1

            tile = self.rng.randint(min_tile, max_tile)
            palette = cell.palette if cell.palette > 0 else palettes.select(self.rng)
            cell.set_tile_by_palette(tile, palette)

            cursor.jump(topleft.cell)


# ----------------------------
# Fixed sections
# ----------------------------


class LavaGenerator(Generator):
    def generate(self, topleft: Cursor) -> None:
        cursor = topleft.copy()
        cursor.move(0, self.height - 2)
        LavaStructure(width=self.width, height=2, palette=self.config.weather_palette).paint(cursor)


class LevelEndGenerator(Generator):
    """Flagpole, ground and castle; marks the pole as the finish."""

    POLE_HEIGHT = 11

    def generate(self, topleft: Cursor) -> None:
        cfg = self.config
        cursor = topleft.copy()

        # nothing may stand in the way of the flagpole
        cursor.move(1, 0)
        NonsolidStructure(width=3, height=self.height).paint(cursor)

        cursor.move(-1, self.height - self.POLE_HEIGHT - 2)
        FlagpoleStructure(
            height=self.POLE_HEIGHT,
            base_palette=cfg.block_palette,
            pole_palette=cfg.plant_palette,
            block_tile=cfg.block_tile,
            active=True,
        ).paint(cursor)

        for _ in range(self.POLE_HEIGHT - 1):
            cursor.cell.finish = True
            cursor.move(0, 1)

        cursor.move(0, 1)
        RectangleStructure(
            width=self.width, height=2, palette=cfg.ground_palette, tile=cfg.ground_tile
        ).paint(cursor)

        cursor.move(4, -5)
        CastleStructure(palette=cfg.block_palette, alt_brick=cfg.alt_brick).paint(cursor)


class CastleEndGenerator(Generator):
    """Final rooms of a castle: Bowser's bridge and the axe.

    The ceiling and bridge reach back into the previous section.
    """

    def generate(self, topleft: Cursor) -> None:
        cfg = self.config
        w, h = self.width, self.height
        cursor = topleft.copy()

        cursor.move(-w, 2)
        RowStructure(width=w * 2, palette=cfg.ground_palette, tile=cfg.ground_tile).paint(cursor)

        cursor.move(0, h - 9)
        NonsolidStructure(width=w, height=2).paint(cursor)
        cursor.move(0, 1)
        CastleBridgeStructure(width=w, height=2, palette=cfg.pipe_palette, active=True).paint(cursor)

        cursor.jump(topleft.cell)
        cursor.move(1, 2)
        RectangleStructure(
            width=1, height=h - 11, palette=cfg.ground_palette, tile=cfg.ground_tile
        ).paint(cursor)

        cursor.move(-1, h - 11)
        NonsolidStructure(width=2, height=3).paint(cursor)

        cursor.move(0, 3)
        if cursor.up is not None:
            cursor.up.finish = True
        RectangleStructure(
            width=2, height=6, palette=cfg.ground_palette, tile=cfg.ground_tile
        ).paint(cursor)

        cursor.jump(topleft.cell)
        cursor.move(0, h - 2)
        RectangleStructure(
            width=w, height=2, palette=cfg.ground_palette, tile=cfg.ground_tile
        ).paint(cursor)
