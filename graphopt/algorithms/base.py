from __future__ import annotations

from enum import IntEnum

from graphopt.graph.graph import VertexID, Weight

__all__ = ["EPSILON", "UNMATCHED", "TSPMethod", "VertexID", "Weight"]

#: Tolerance used when comparing float label sums against edge costs.
EPSILON = 1e-9

#: Sentinel for an unmatched vertex in mate maps.
UNMATCHED = None


class TSPMethod(IntEnum):
    """Strategies available for the traveling salesman problem."""

    #: Depth-first search with cost pruning; exact, exponential worst case.
    BRANCH_AND_BOUND = 1
    #: Preorder walk of a minimum spanning tree with shortcutting (2-approximation).
    MST_APPROXIMATION = 2
    #: Genetic search with tournament selection, PMX crossover and swap mutation.
    GENETIC = 3
