import json

import pytest

import generate_levels
from entities import SPAWN
from generate_levels import LevelGenerationError, LevelGenerator, main
from level_writer import serialize_level
from models import GeneratorSettings
from solver import SolutionGenerator


def _settings(**overrides):
    values = dict(worlds=1, levels=2, min_sections=2, max_sections=3, section_size=14)
    values.update(overrides)
    return GeneratorSettings(**values)


def test_generates_every_level(tmp_path):
    generated = LevelGenerator(_settings(), tmp_path).generate()

    assert [g.name for g in generated] == ["1-1", "1-2"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["1-1.txt", "1-2.txt"]
    for g in generated:
        cells = (tmp_path / f"{g.name}.txt").read_text(encoding="utf-8").split(";")[0]
        assert len(cells.split(",")) == g.grid.width * g.grid.height
        assert g.grid.section_count in (2, 3)


def test_levels_are_reproducible(tmp_path):
    first = LevelGenerator(_settings(seed="same"), tmp_path).generate_level(1, 1)
    second = LevelGenerator(_settings(seed="same"), tmp_path).generate_level(1, 1)
    assert serialize_level(first, "AE") == serialize_level(second, "AE")


def test_levels_do_not_share_a_stream(tmp_path):
    # a level is the same whether or not the levels before it were generated
    all_levels = LevelGenerator(_settings(seed="x"), tmp_path).generate()
    alone = LevelGenerator(_settings(seed="x"), tmp_path).generate_level(1, 2)
    assert serialize_level(all_levels[1], "SE") == serialize_level(alone, "SE")


def test_seed_changes_the_level(tmp_path):
    a = LevelGenerator(_settings(seed="a"), tmp_path).generate_level(1, 1)
    b = LevelGenerator(_settings(seed="b"), tmp_path).generate_level(1, 1)
    assert serialize_level(a, "AE") != serialize_level(b, "AE")


def test_generated_levels_have_spawn_and_finish(tmp_path):
    settings = _settings(worlds=8, levels=4, section_size=15)
    generator = LevelGenerator(settings, tmp_path)
    for world in (1, 4, 8):
        for level in (1, 4):
            generated = generator.generate_level(world, level)
            assert generated.spawn_found
            assert any(c.finish for c in generated.grid)
            assert 1 <= generated.spriteset <= 4
            assert 2 <= generated.music <= 6


def test_castle_ends(tmp_path):
    settings = _settings(levels=4, castle_ends=True, section_size=15)
    generated = LevelGenerator(settings, tmp_path).generate_level(1, 4)
    assert sum(1 for c in generated.grid if c.finish) == 1


def test_strict_mode_gives_up(tmp_path, monkeypatch):
    calls = []
    real_generate_one = LevelGenerator._generate_one

    def unsolvable(self, rng, world, level):
        calls.append((world, level))
        generated = real_generate_one(self, rng, world, level)
        generated.solved = False
        return generated

    monkeypatch.setattr(LevelGenerator, "_generate_one", unsolvable)

    with pytest.raises(LevelGenerationError):
        LevelGenerator(_settings(strict=True, max_attempts=3), tmp_path).generate_level(1, 1)
    assert calls == [(1, 1)] * 3


def test_soft_failures_still_produce_a_level(tmp_path, monkeypatch):
    monkeypatch.setattr(generate_levels.SolutionGenerator, "solve", lambda self, spawn: False)
    generated = LevelGenerator(_settings(), tmp_path).generate_level(1, 1)
    assert not generated.solved


def test_cli_writes_levels_and_previews(tmp_path, capsys):
    out = tmp_path / "levels"
    main([str(out), "--worlds", "1", "--levels", "1", "-s", "abc", "--mode", "AE", "--preview"])

    text = (out / "1-1.txt").read_text(encoding="utf-8")
    assert ";height=15;" in text
    assert (out / "1-1.png").stat().st_size > 0
    assert "1 levels generated" in capsys.readouterr().out


def test_cli_reads_config(tmp_path):
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps({"worlds": 1, "levels": 1, "mode": "SE", "sections": {"min": 2, "max": 2}}),
        encoding="utf-8",
    )
    main([str(tmp_path / "out"), "--config", str(config)])

    text = (tmp_path / "out" / "1-1.txt").read_text(encoding="utf-8")
    assert ";backgroundr=" in text
    assert len(text.split(";")[0].split(",")) == 15 * 15 * 2


@pytest.mark.parametrize("flag", ["--worlds", "--levels"])
def test_cli_rejects_non_positive_counts(tmp_path, flag):
    with pytest.raises(SystemExit):
        main([str(tmp_path), flag, "0"])


def test_cli_reports_strict_failures(tmp_path, monkeypatch):
    monkeypatch.setattr(generate_levels.SolutionGenerator, "solve", lambda self, spawn: False)
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path), "--worlds", "1", "--levels", "1", "--strict"])
    assert "1-1" in str(exc.value)


@pytest.mark.parametrize("world,level", [(4, 3), (6, 1), (7, 2)])
def test_solving_a_generated_level_again_digs_nothing(tmp_path, world, level):
    generated = LevelGenerator(GeneratorSettings(), tmp_path).generate_level(world, level)
    assert generated.solved
    spawn = next(c for c in generated.grid if c.entity == SPAWN)
    before = [(c.tile, c.palette) for c in generated.grid]

    solver = SolutionGenerator(generated.grid)
    assert solver.solve(spawn)
    assert solver.unblocked_cells == 0
    assert [(c.tile, c.palette) for c in generated.grid] == before
