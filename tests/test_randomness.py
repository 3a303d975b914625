import random
from collections import Counter

import pytest

from randomness import (
    WeightedSelector,
    coinflip,
    diminishing_random,
    shuffle,
    skewed_random,
)


def test_coinflip_extremes():
    rng = random.Random(1)
    assert not any(coinflip(rng, 0) for _ in range(100))
    assert all(coinflip(rng, 1) for _ in range(100))


def test_diminishing_random_bounds():
    rng = random.Random(2)
    assert diminishing_random(rng, 0) == 0
    assert diminishing_random(rng, -3) == -3
    assert diminishing_random(rng, 1) == 1
    draws = [diminishing_random(rng, 5) for _ in range(500)]
    assert min(draws) >= 1 and max(draws) <= 5
    # small values are the common case
    counts = Counter(draws)
    assert counts[1] + counts[2] > counts[4] + counts[5]


def test_skewed_random_degenerate_interval():
    assert skewed_random(random.Random(3), 5, 5, 5) == 5


def test_skewed_random_two_argument_form():
    rng = random.Random(4)
    draws = [skewed_random(rng, 6, 2) for _ in range(300)]
    assert min(draws) >= 1 and max(draws) <= 6


def test_skewed_random_favors_skew():
    rng = random.Random(5)
    counts = Counter(skewed_random(rng, 1, 5, 1) for _ in range(5000))
    assert set(counts) <= {1, 2, 3, 4, 5}
    assert counts[1] > counts[4] > 0
    assert counts[2] > counts[5] > 0


def test_skewed_random_stays_in_bounds():
    rng = random.Random(11)
    draws = Counter(skewed_random(rng, 1, 10, 5) for _ in range(3000))
    assert set(draws) <= set(range(1, 11))
    assert draws[5] > draws[1] and draws[5] > draws[10]


@pytest.mark.parametrize(
    "args,message",
    [((5, 3, 4), "empty"), ((1, 5, 9), "out of range"), ((3, 0), "out of range")],
)
def test_skewed_random_rejects_bad_arguments(args, message):
    with pytest.raises(ValueError, match=message):
        skewed_random(random.Random(6), *args)


def test_shuffle_is_a_permutation():
    items = list(range(20))
    shuffle(random.Random(7), items)
    assert sorted(items) == list(range(20))
    assert items != list(range(20))

    single = [1]
    shuffle(random.Random(7), single)
    assert single == [1]


def test_selector_tracks_total_and_skips_empty_weights():
    selector = WeightedSelector()
    selector.add("a", 2)
    selector.add("b", 0)
    selector.add("c", -1)
    selector.add("d", 2.9)
    assert len(selector) == 2
    assert selector.total_weight == 4


def test_selector_fairness():
    rng = random.Random(8)
    selector = WeightedSelector()
    selector.add("rare", 1)
    selector.add("common", 3)
    draws = Counter(selector.select(rng) for _ in range(8000))
    assert 0.70 < draws["common"] / 8000 < 0.80


def test_selector_single_entry():
    selector = WeightedSelector()
    selector.add(42, 5)
    rng = random.Random(9)
    assert {selector.select(rng) for _ in range(20)} == {42}


def test_empty_selector_raises():
    with pytest.raises(ValueError):
        WeightedSelector().select(random.Random(10))
