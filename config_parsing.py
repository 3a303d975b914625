from __future__ import annotations

from typing import Any, Dict, Optional

from models import DEFAULT_SEED, MODES, GeneratorSettings
from utils import clamp_int, deep_get

# smallest section that fits the level end and the tallest hill
MIN_SECTION_SIZE = 14
MAX_WORLDS = 8
MAX_LEVELS = 4


def _as_int(raw: Any, default: int) -> int:
    if isinstance(raw, bool):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def _as_bool(raw: Any, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        val = raw.strip().lower()
        if val in ("true", "yes", "on", "1"):
            return True
        if val in ("false", "no", "off", "0"):
            return False
    return default


def _parse_mode(raw: Any) -> str:
    """Parse the Mari0 flavor (defaults to 1.6)."""
    if raw is None:
        return "1.6"
    val = str(raw).strip()
    for mode in MODES:
        if val.lower() == mode.lower():
            return mode
    return "1.6"


def parse_generator_settings(
    raw: Optional[Dict[str, Any]], **overrides: Any
) -> GeneratorSettings:
    """Parse generator settings from config data.

    Args:
        raw: Dict loaded from the JSON config (may be empty or None).
        overrides: Values from the command line; None means "not given".

    Returns:
        GeneratorSettings with defaults applied and values clamped.

    Example config:
      {
        "seed": "Cartridge Tilt", "mode": "AE",
        "worlds": 8, "levels": 4, "section_size": 15,
        "sections": { "min": 8, "max": 12 },
        "preview": { "tile_size": 8 }
      }
    """
    if not isinstance(raw, dict):
        raw = {}
    merged: Dict[str, Any] = dict(raw)
    merged.update({k: v for k, v in overrides.items() if v is not None})

    seed_raw = merged.get("seed", DEFAULT_SEED)
    seed = DEFAULT_SEED if seed_raw is None else str(seed_raw)

    section_size = max(MIN_SECTION_SIZE, _as_int(merged.get("section_size"), 15))
    worlds = clamp_int(_as_int(merged.get("worlds"), MAX_WORLDS), 1, MAX_WORLDS)
    levels = clamp_int(_as_int(merged.get("levels"), MAX_LEVELS), 1, MAX_LEVELS)

    # the level end needs a section of its own
    min_sections = max(2, _as_int(deep_get(merged, "sections.min", 8), 8))
    max_sections = max(min_sections, _as_int(deep_get(merged, "sections.max", 12), 12))

    return GeneratorSettings(
        seed=seed,
        mode=_parse_mode(merged.get("mode")),
        section_size=section_size,
        worlds=worlds,
        levels=levels,
        min_sections=min_sections,
        max_sections=max_sections,
        enemies=_as_bool(merged.get("enemies"), True),
        castle_ends=_as_bool(merged.get("castle_ends"), False),
        strict=_as_bool(merged.get("strict"), False),
        max_attempts=max(1, _as_int(merged.get("max_attempts"), 20)),
        preview_tile_size=max(1, _as_int(deep_get(merged, "preview.tile_size", 8), 8)),
    )
