"""graphopt: classic combinatorial optimization algorithms on graphs.

graphopt provides a weighted graph model with a logical directed/undirected
mode and algorithms that consume it: Eulerian circuits, maximum bipartite
matching, minimum-cost assignment, traveling salesman tours, vertex coloring,
plus a 0/1 knapsack solver.

Primary API:
    Graph - adjacency-list graph (a networkx.DiGraph subclass)
    eulerian_circuit(), maximum_matching(), hungarian()
    tsp_branch_and_bound(), tsp_mst_approximation(), tsp_genetic()
    color_graph(), knapsack()

Example:
    from graphopt import Graph, eulerian_circuit

    g = Graph(directed=False)
    g.add_edge(1, 2)
    g.add_edge(2, 3)
    g.add_edge(3, 1)
    eulerian_circuit(g)  # [1, 2, 3, 1]
"""

from __future__ import annotations

from graphopt import cli, logging
from graphopt._version import __version__
from graphopt.algorithms import (
    TSPMethod,
    color_graph,
    eulerian_circuit,
    has_eulerian_circuit,
    hungarian,
    knapsack,
    maximum_matching,
    solve_tsp,
    tour_cost,
    tsp_branch_and_bound,
    tsp_genetic,
    tsp_mst_approximation,
    validate_assignment,
    validate_tsp,
)
from graphopt.algorithms.types import (
    AssignmentResult,
    ColoringResult,
    KnapsackResult,
    MatchingResult,
    TourResult,
    Validation,
)
from graphopt.config import GeneticConfig
from graphopt.exceptions import (
    EdgeNotFoundError,
    GraphOptError,
    NoTourError,
    PreconditionError,
    UnsupportedOperationError,
)
from graphopt.graph.convert import from_networkx, to_networkx
from graphopt.graph.dot import to_dot, write_dot
from graphopt.graph.graph import Graph
from graphopt.graph.io import load_graph, parse_graph

__all__ = [
    # Version
    "__version__",
    # Model
    "Graph",
    # Algorithms
    "eulerian_circuit",
    "has_eulerian_circuit",
    "maximum_matching",
    "hungarian",
    "validate_assignment",
    "tsp_branch_and_bound",
    "tsp_mst_approximation",
    "tsp_genetic",
    "solve_tsp",
    "tour_cost",
    "validate_tsp",
    "color_graph",
    "knapsack",
    "TSPMethod",
    # Results
    "Validation",
    "MatchingResult",
    "AssignmentResult",
    "TourResult",
    "ColoringResult",
    "KnapsackResult",
    # Configuration
    "GeneticConfig",
    # Errors
    "GraphOptError",
    "PreconditionError",
    "NoTourError",
    "EdgeNotFoundError",
    "UnsupportedOperationError",
    # I/O
    "load_graph",
    "parse_graph",
    "to_dot",
    "write_dot",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
