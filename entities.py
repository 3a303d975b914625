"""
entities.py

Entity ids understood by the level format, and the weighted tables used to
pick enemies for a section.
"""

from __future__ import annotations

from typing import List, Tuple

from utils import ceil_div

GOOMBA = 6
KOOPA = 7
SPAWN = 8
FLAG = 11
KOOPARED = 12
HAMMERBRO = 15
CHEEPRED = 16
CHEEPWHITE = 17
PLANT = 21
BULLETBILL = 33
KOOPAFLYING = 37
KOOPAREDFLYING = 38
SQUID = 39
UPFIRE = 40
BOWSER = 44
AXE = 45
BEETLE = 50
SPIKEY = 51

# (entity, weight) pairs
EntityTable = List[Tuple[int, int]]

UNDERGROUND_LEVEL = 2


def airborne_enemy_table(level: int, levels: int) -> EntityTable:
    """Enemies for a column with no floor to stand on."""
    if level == UNDERGROUND_LEVEL:
        return [(CHEEPRED, 2), (CHEEPWHITE, 2), (SQUID, 1)]
    if level == levels:
        return [(UPFIRE, 1)]
    return [(KOOPAREDFLYING, 1)]


def floor_enemy_table(world: int, worlds: int, floor_count: int) -> EntityTable:
    """Enemies for a column with `floor_count` standable cells.

    Hammer bros need a second platform to jump to; flying koopas need room
    to bounce around, so they only show up above a single floor.
    """
    table: EntityTable = [
        (GOOMBA, worlds - world),
        (KOOPA, ceil_div(worlds, 2)),
        (KOOPARED, ceil_div(worlds, 2)),
        (BEETLE, world),
        (SPIKEY, ceil_div(world, 2)),
    ]
    if floor_count > 1:
        table.append((HAMMERBRO, ceil_div(world, 2)))
    else:
        table.append((KOOPAFLYING, ceil_div(worlds, 2)))
    return table
