"""
randomness.py

Random number helpers used by the generators. Every function takes the
random stream explicitly; a level is generated from a single
`random.Random`, so a seed reproduces a level as long as the draw order is
unchanged.
"""

from __future__ import annotations

import random
from typing import Any, List, MutableSequence, Optional, Tuple


def coinflip(rng: random.Random, weight: float = 0.5) -> bool:
    """Return True with probability `weight`."""
    return rng.random() < weight


def diminishing_random(rng: random.Random, maximum: int) -> int:
    """Return a number in [1, maximum] that favors values well below maximum.

    Values under 1 are returned unchanged.
    """
    if maximum < 1:
        return maximum
    result = 1
    while rng.random() > result / maximum:
        result += 1
    return result


def skewed_random(rng: random.Random, a: int, b: int, c: Optional[int] = None) -> int:
    """Pick from a triangular distribution.

    Two arguments: a number in [1, a] skewed toward b.
    Three arguments: a number in [a, b] skewed toward c.

    Raises:
        ValueError: if the interval is empty or the skew lies outside it.
    """
    if c is None:
        lower, upper, skew = 1, a, b
    else:
        lower, upper, skew = a, b, c

    if lower > upper:
        raise ValueError(f"skewed_random(): interval [{lower}, {upper}] is empty")
    if not lower <= skew <= upper:
        raise ValueError(
            f"skewed_random(): skew {skew} is out of range [{lower}, {upper}]"
        )
    if lower == upper:
        return upper

    selector = WeightedSelector()
    peak = max(upper - skew, skew - lower)
    for distance in range(peak, 0, -1):
        weight = peak - distance + 1
        if skew + distance <= upper:
            selector.add(skew + distance, weight)
        if skew - distance >= lower:
            selector.add(skew - distance, weight)
    selector.add(skew, peak)

    return selector.select(rng)


def shuffle(rng: random.Random, items: MutableSequence[Any]) -> None:
    """Shuffle in place (Fisher-Yates, last index down to the second)."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


class WeightedSelector:
    """A pool of values drawn with probability proportional to their weight."""

    def __init__(self) -> None:
        self.entries: List[Tuple[Any, int]] = []
        self.total_weight = 0

    def __len__(self) -> int:
        return len(self.entries)

    def add(self, value: Any, weight: float = 1) -> None:
        # weights derived from world/level can reach zero; those never get picked
        weight = int(weight)
        if weight <= 0:
            return
        self.entries.append((value, weight))
        self.total_weight += weight

    def select(self, rng: random.Random) -> Any:
        if not self.entries:
            raise ValueError("WeightedSelector.select(): pool is empty")
        draw = rng.randint(1, self.total_weight)
        cumulative = 0
        for value, weight in self.entries:
            cumulative += weight
            if cumulative >= draw:
                return value
        # unreachable: cumulative ends at total_weight >= draw
        return self.entries[-1][0]
