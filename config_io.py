from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

# Top-level keys a generator config may set; everything else is ignored.
CONFIG_KEYS = (
    "seed",
    "mode",
    "worlds",
    "levels",
    "section_size",
    "sections",
    "enemies",
    "castle_ends",
    "strict",
    "max_attempts",
    "preview",
)


def load_json_config(path: Path) -> Dict[str, Any]:
    """Read a generator config file.

    The file holds one JSON object whose keys are those in CONFIG_KEYS, e.g.
    ``{"seed": "abc", "worlds": 2, "sections": {"min": 8, "max": 12}}``.
    Values are validated later by `config_parsing.parse_generator_settings`.

    Raises:
        FileNotFoundError: If the file does not exist.
        SystemExit: If the file is not valid JSON or does not hold an object.
    """
    if not path.exists():
        raise FileNotFoundError(f"Generator config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SystemExit(
            f"\nERROR: Your generator config is not valid JSON.\n"
            f"File: {path}\n"
            f"Line {e.lineno}, Col {e.colno}: {e.msg}\n"
        )
    if not isinstance(data, dict):
        raise SystemExit(
            f"\nERROR: Your generator config must be a JSON object with any of the keys "
            f"{', '.join(CONFIG_KEYS)}; got {type(data).__name__}.\n"
            f"File: {path}\n"
        )
    return data
