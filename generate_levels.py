#!/usr/bin/env python3
"""
generate_levels.py

Generates a full set of glitchy-looking Mari0 levels (8 worlds x 4 levels by
default) using a structure-based generation system.

Per level w-l:
- Writes:   <directory>/w-l.txt
- Writes:   <directory>/w-l.png   (with --preview)

Per level pipeline:
- Every section but the last: chaos structures, enemies, distortions
- Last section: flagpole and castle (or Bowser's bridge), cosmetic distortions
- Spawn placed near the left edge
- Blockades between spawn and flagpole dug out by the solvability pass

Each level draws from its own random stream seeded with "<seed>:<w>-<l>", so
any level can be regenerated on its own.
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import Iterator, List, Optional

from config_io import load_json_config
from config_parsing import parse_generator_settings
from generators import (
    CastleEndGenerator,
    ChaosGenerator,
    DistortionGenerator,
    EnemyGenerator,
    Generator,
    LavaGenerator,
    LevelEndGenerator,
)
from level import Grid, build_grid
from level_writer import LevelWriter
from models import MODES, GeneratedLevel, GeneratorSettings, LevelConfig
from preview import save_preview
from solver import SolutionGenerator
from spawners import SpawnLocator

logger = logging.getLogger(__name__)


class LevelGenerationError(RuntimeError):
    """Raised in strict mode when a level cannot be made playable."""


# ----------------------------
# Generator orchestration
# ----------------------------


class LevelGenerator:
    def __init__(
        self,
        settings: GeneratorSettings,
        directory: Path,
        preview: bool = False,
    ) -> None:
        self.settings = settings
        self.directory = directory
        self.preview = preview
        self.writer = LevelWriter(directory, settings.mode)

    def levels(self) -> Iterator[GeneratedLevel]:
        """Generate every level of every world, in play order."""
        for world in range(1, self.settings.worlds + 1):
            for level in range(1, self.settings.levels + 1):
                yield self.generate_level(world, level)

    def generate(self) -> List[GeneratedLevel]:
        self.directory.mkdir(parents=True, exist_ok=True)

        results: List[GeneratedLevel] = []
        for generated in self.levels():
            path = self.writer.write(generated)
            if self.preview:
                save_preview(
                    generated.grid,
                    self.writer.paths_for(generated.world, generated.level).preview_path,
                    self.settings.preview_tile_size,
                )
            logger.info(
                "Generated %s: %dx%d | unblocked=%d%s",
                path.name,
                generated.grid.width,
                generated.grid.height,
                generated.unblocked,
                "" if generated.solved else " (unsolved)",
            )
            results.append(generated)
        return results

    def generate_level(self, world: int, level: int) -> GeneratedLevel:
        settings = self.settings
        logger.info("Generating %d-%d", world, level)
        rng = random.Random(settings.level_seed(world, level))

        attempts = settings.max_attempts if settings.strict else 1
        generated: Optional[GeneratedLevel] = None
        for attempt in range(1, attempts + 1):
            generated = self._generate_one(rng, world, level)
            if generated.spawn_found and generated.solved:
                return generated
            if settings.strict:
                logger.warning(
                    "Level %s is not playable (attempt %d/%d)", generated.name, attempt, attempts
                )

        assert generated is not None
        if settings.strict:
            raise LevelGenerationError(
                f"Failed to generate a playable map for level {generated.name} "
                f"after {attempts} attempts."
            )
        return generated

    def _generate_one(self, rng: random.Random, world: int, level: int) -> GeneratedLevel:
        settings = self.settings
        sections = rng.randint(settings.min_sections, settings.max_sections)
        config = LevelConfig.draw(rng, settings, world, level)
        grid = build_grid(settings.section_size, sections)

        self._build_sections(grid, config, rng)

        spawner = SpawnLocator(grid)
        spawn_found = spawner.generate(grid.cursor())

        solver = SolutionGenerator(grid)
        if spawner.spawn_cell is not None:
            solved = solver.solve(spawner.spawn_cell)
        else:
            logger.warning("Skipping solvability pass for %d-%d: no spawn", world, level)
            solved = False

        background = (rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255))
        return GeneratedLevel(
            world=world,
            level=level,
            grid=grid,
            spawn_found=spawn_found,
            solved=solved,
            unblocked=solver.unblocked_cells,
            background=background,
            spriteset=rng.randint(1, 4),
            music=rng.randint(2, 6),
        )

    def _build_sections(self, grid: Grid, config: LevelConfig, rng: random.Random) -> None:
        cursor = grid.cursor()
        for i in range(grid.section_count):
            last = i == grid.section_count - 1

            steps: List[Generator]
            if last and self.settings.castle_ends and config.is_castle:
                steps = [
                    LavaGenerator(config, rng),
                    CastleEndGenerator(config, rng),
                    DistortionGenerator(config, rng, cosmetic=True),
                ]
            elif last:
                steps = [
                    LevelEndGenerator(config, rng),
                    DistortionGenerator(config, rng, cosmetic=True),
                ]
            else:
                steps = [ChaosGenerator(config, rng)]
                if config.enemies:
                    steps.append(EnemyGenerator(config, rng))
                steps.append(DistortionGenerator(config, rng))

            for step in steps:
                step.generate(cursor)

            cursor.move(grid.section_size, 0)


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Randomly generate glitchy-looking Mari0 levels using a structure-based generation system."
    )
    p.add_argument("directory", type=str, help="Directory to write the level files to.")
    p.add_argument(
        "-s",
        "--seed",
        type=str,
        default=None,
        help='Random seed used to generate levels (default: "Cartridge Tilt").',
    )
    p.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help="Mari0 level format to write (default: 1.6).",
    )
    p.add_argument("--config", type=str, default=None, help="Optional JSON config file.")
    p.add_argument("--worlds", type=int, default=None, help="Number of worlds (1-8, default: 8).")
    p.add_argument("--levels", type=int, default=None, help="Levels per world (1-4, default: 4).")
    p.add_argument(
        "--preview",
        action="store_true",
        help="Also write a PNG preview next to each level.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Retry levels that could not be solved, and fail if they never are.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or every decision (-vv).",
    )
    return p.parse_args(argv)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)

    for name in ("worlds", "levels"):
        value = getattr(args, name)
        if value is not None and value <= 0:
            raise SystemExit(f"{name} must be > 0")

    raw = load_json_config(Path(args.config)) if args.config else {}
    settings = parse_generator_settings(
        raw,
        seed=args.seed,
        mode=args.mode,
        worlds=args.worlds,
        levels=args.levels,
        strict=args.strict,
    )

    generator = LevelGenerator(settings, Path(args.directory), preview=args.preview)
    try:
        generated = generator.generate()
    except LevelGenerationError as e:
        raise SystemExit(f"ERROR: {e}")

    unsolved = sum(1 for g in generated if not g.solved)
    summary = f"{len(generated)} levels generated in {args.directory}"
    if unsolved:
        summary += f" ({unsolved} unsolved)"
    print(summary)


if __name__ == "__main__":
    main()
