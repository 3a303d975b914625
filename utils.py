from __future__ import annotations

from typing import Any, Dict


def clamp_int(v: int, lo: int, hi: int) -> int:
    """Clamp a count such as worlds or levels into [lo, hi]."""
    return lo if v < lo else hi if v > hi else v


def ceil_div(a: int, b: int) -> int:
    # rounds up for positive b; half a section, the middle row of a level
    return -(-a // b)


def deep_get(config: Dict[str, Any], key: str, default: Any) -> Any:
    """Look up a nested config value such as "sections.min" or "preview.tile_size".

    Returns `default` when a segment is missing or its parent is not an object,
    so `{"sections": 10}` falls back the same way an absent key does.
    """
    node: Any = config
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node
