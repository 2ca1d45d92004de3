"""0/1 knapsack by Horowitz-Sahni branch and bound.

The decision tree branches on one item per level: the include branch first,
then the exclude branch. An include branch is created only while the item
fits. A subtree is abandoned when its fractional (greedy relaxation) upper
bound cannot beat the best value found so far. Items are considered in
decreasing value density, which makes the relaxation bound tight early.

The tree is walked with an explicit stack; worst case remains O(2^n).
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from graphopt.algorithms.types import KnapsackResult
from graphopt.logging import get_logger

logger = get_logger(__name__)


def _upper_bound(
    order: Sequence[int],
    values: Sequence[float],
    weights: Sequence[float],
    depth: int,
    value: float,
    room: float,
) -> float:
    """Value reachable from ``depth`` if the next item could be split."""
    bound = value
    for idx in order[depth:]:
        if weights[idx] <= room:
            room -= weights[idx]
            bound += values[idx]
        else:
            if weights[idx] > 0:
                bound += values[idx] * room / weights[idx]
            break
    return bound


def knapsack(
    values: Sequence[float], weights: Sequence[float], capacity: float
) -> KnapsackResult:
    """Choose items maximizing total value within ``capacity``.

    Args:
        values: Item values.
        weights: Item weights, same length as ``values``.
        capacity: Maximum total weight.

    Returns:
        KnapsackResult with the selected item indexes in ascending order.

    Raises:
        ValueError: On mismatched lengths or negative inputs.
    """
    if len(values) != len(weights):
        raise ValueError("Values and weights must have the same length.")
    if capacity < 0 or any(w < 0 for w in weights) or any(v < 0 for v in values):
        raise ValueError("Values, weights and capacity must be nonnegative.")

    n = len(values)
    order = sorted(
        range(n),
        key=lambda i: (-(values[i] / weights[i]) if weights[i] > 0 else float("-inf"), i),
    )

    best_value = -1.0
    best_items: Tuple[int, ...] = ()
    # Frame: (depth, value, weight, chosen item indexes)
    stack: List[Tuple[int, float, float, Tuple[int, ...]]] = [(0, 0.0, 0.0, ())]
    explored = 0

    while stack:
        depth, value, weight, chosen = stack.pop()
        explored += 1
        if depth == n:
            if value > best_value:
                best_value = value
                best_items = chosen
            continue
        if _upper_bound(order, values, weights, depth, value, capacity - weight) <= best_value:
            continue

        idx = order[depth]
        # Exclude pushed first so include is expanded first
        stack.append((depth + 1, value, weight, chosen))
        if weight + weights[idx] <= capacity:
            stack.append((depth + 1, value + values[idx], weight + weights[idx], chosen + (idx,)))

    logger.debug("Knapsack explored %d nodes, best value %s", explored, best_value)
    selected = sorted(best_items)
    return KnapsackResult(
        selected=selected,
        total_value=float(sum(values[i] for i in selected)),
        total_weight=float(sum(weights[i] for i in selected)),
    )
