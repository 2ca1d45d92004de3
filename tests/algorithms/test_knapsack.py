import itertools
import random

import pytest

from graphopt.algorithms.knapsack import knapsack


def _brute_force(values, weights, capacity) -> float:
    best = 0.0
    n = len(values)
    for mask in itertools.product((0, 1), repeat=n):
        weight = sum(w for w, take in zip(weights, mask) if take)
        if weight <= capacity:
            best = max(best, sum(v for v, take in zip(values, mask) if take))
    return best


def test_textbook_instance():
    result = knapsack([60, 100, 120], [10, 20, 30], 50)

    assert result.selected == [1, 2]
    assert result.total_value == 220
    assert result.total_weight == 50


def test_nothing_fits():
    result = knapsack([5, 6], [10, 11], 9)
    assert result.selected == []
    assert result.total_value == 0


def test_zero_weight_items_are_always_taken():
    result = knapsack([3, 10, 4], [0, 5, 6], 5)
    assert result.selected == [0, 1]
    assert result.total_value == 13


def test_no_items():
    result = knapsack([], [], 10)
    assert result.selected == []
    assert result.total_weight == 0


@pytest.mark.parametrize("seed", range(10))
def test_matches_brute_force(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 10)
    values = [rng.randint(1, 40) for _ in range(n)]
    weights = [rng.randint(1, 25) for _ in range(n)]
    capacity = rng.randint(0, 60)

    result = knapsack(values, weights, capacity)
    assert result.total_value == _brute_force(values, weights, capacity)
    assert result.total_weight <= capacity
    assert result.selected == sorted(set(result.selected))


def test_float_inputs():
    result = knapsack([1.5, 2.25, 3.0], [0.5, 1.25, 2.0], 2.5)
    assert result.total_value == pytest.approx(4.5)
    assert result.selected == [0, 2]


def test_mismatched_lengths():
    with pytest.raises(ValueError, match="same length"):
        knapsack([1, 2], [1], 3)


@pytest.mark.parametrize(
    "values,weights,capacity",
    [([1], [1], -1), ([1], [-1], 3), ([-1], [1], 3)],
)
def test_negative_inputs(values, weights, capacity):
    with pytest.raises(ValueError, match="nonnegative"):
        knapsack(values, weights, capacity)
