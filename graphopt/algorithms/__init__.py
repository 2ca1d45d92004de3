"""Combinatorial optimization algorithms on `graphopt.graph.Graph`.

Each algorithm validates its preconditions up front, works on private state
(a working copy of the graph where it needs to consume structure) and returns
a result container from `graphopt.algorithms.types`.
"""

from graphopt.algorithms.assignment import hungarian, validate_assignment
from graphopt.algorithms.base import TSPMethod
from graphopt.algorithms.coloring import color_graph
from graphopt.algorithms.euler import eulerian_circuit, has_eulerian_circuit
from graphopt.algorithms.knapsack import knapsack
from graphopt.algorithms.matching import maximum_matching
from graphopt.algorithms.tsp import (
    solve_tsp,
    tour_cost,
    tsp_branch_and_bound,
    tsp_genetic,
    tsp_mst_approximation,
    validate_tsp,
)

__all__ = [
    "TSPMethod",
    "color_graph",
    "eulerian_circuit",
    "has_eulerian_circuit",
    "hungarian",
    "knapsack",
    "maximum_matching",
    "solve_tsp",
    "tour_cost",
    "tsp_branch_and_bound",
    "tsp_genetic",
    "tsp_mst_approximation",
    "validate_assignment",
    "validate_tsp",
]
