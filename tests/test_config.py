import json

import pytest

from config_io import load_json_config
from config_parsing import parse_generator_settings
from models import GeneratorSettings


def test_defaults():
    assert parse_generator_settings({}) == GeneratorSettings()
    assert parse_generator_settings(None) == GeneratorSettings()


def test_values_are_clamped():
    settings = parse_generator_settings(
        {
            "section_size": 5,
            "worlds": 20,
            "levels": 0,
            "sections": {"min": 10, "max": 4},
            "max_attempts": -1,
            "preview": {"tile_size": 0},
        }
    )
    assert settings.section_size == 14
    assert settings.worlds == 8
    assert settings.levels == 1
    assert (settings.min_sections, settings.max_sections) == (10, 10)
    assert settings.max_attempts == 1
    assert settings.preview_tile_size == 1


def test_invalid_values_fall_back_to_defaults():
    settings = parse_generator_settings(
        {"worlds": "many", "enemies": "maybe", "mode": "2.0", "section_size": True}
    )
    assert settings.worlds == 8
    assert settings.enemies is True
    assert settings.mode == "1.6"
    assert settings.section_size == 15


def test_mode_is_case_insensitive():
    assert parse_generator_settings({"mode": "ae"}).mode == "AE"
    assert parse_generator_settings({"mode": "se"}).mode == "SE"


def test_overrides_win_unless_missing():
    settings = parse_generator_settings(
        {"seed": "from file", "worlds": 2, "strict": False},
        seed="from cli",
        worlds=None,
        strict=True,
    )
    assert settings.seed == "from cli"
    assert settings.worlds == 2
    assert settings.strict is True


def test_nested_settings():
    settings = parse_generator_settings(
        {"sections": {"min": 3, "max": 5}, "preview": {"tile_size": 4}, "castle_ends": "yes"}
    )
    assert (settings.min_sections, settings.max_sections) == (3, 5)
    assert settings.preview_tile_size == 4
    assert settings.castle_ends is True


def test_level_seed_is_per_level():
    settings = GeneratorSettings(seed="abc")
    assert settings.level_seed(2, 3) == "abc:2-3"
    assert settings.level_seed(2, 3) != settings.level_seed(3, 2)


def test_load_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{ worlds: 3 }", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        load_json_config(path)
    assert "not valid JSON" in str(exc.value)


def test_load_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        load_json_config(path)
    message = str(exc.value)
    assert "got list" in message
    assert "worlds" in message and "section_size" in message


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"worlds": 3}), encoding="utf-8")
    assert load_json_config(path) == {"worlds": 3}


def test_nested_keys_on_a_scalar_fall_back():
    settings = parse_generator_settings({"sections": 10, "preview": "big"})
    assert (settings.min_sections, settings.max_sections) == (8, 12)
    assert settings.preview_tile_size == 8
