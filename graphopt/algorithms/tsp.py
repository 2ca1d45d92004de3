"""Traveling salesman problem: exact search and two heuristics.

Three independent strategies share the same preconditions (at least three
vertices, connected, nonnegative weights) and the same result type:

* ``tsp_branch_and_bound``: depth-first search over partial paths from the
  start vertex, pruning any path whose accumulated cost already reaches the
  best complete tour. The pruning uses cost only (no admissible lower
  bound), so the worst case stays exponential. Strictly positive weights
  required.
* ``tsp_mst_approximation``: preorder walk of a minimum spanning tree with
  repeated vertices shortcut, closed back to the root. At most twice the
  optimum when weights satisfy the triangle inequality. Undirected graphs
  with strictly positive weights only.
* ``tsp_genetic``: elitist genetic search with tournament selection,
  partially-mapped crossover (PMX) and swap mutation.

Every returned tour starts at the lowest vertex id and repeats it at the end.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set

from graphopt.algorithms.base import TSPMethod, VertexID, Weight
from graphopt.algorithms.types import TourResult, Validation
from graphopt.config import GENETIC_CONFIG, GeneticConfig
from graphopt.exceptions import NoTourError, PreconditionError, UnsupportedOperationError
from graphopt.graph.graph import Graph
from graphopt.logging import get_logger

logger = get_logger(__name__)


def validate_tsp(graph: Graph, strictly_positive: bool = True) -> Validation:
    """Check the shared TSP preconditions and report the first violation."""
    if graph.vertex_count < 3:
        return Validation.failed("TSP requires at least 3 vertices.")
    # Isolated vertices count here; a tour must reach every vertex
    if not graph.is_connected() or any(graph.is_isolated(v) for v in graph.vertices()):
        return Validation.failed("TSP requires the graph to be connected.")
    if strictly_positive and not graph.all_edges_positive():
        return Validation.failed("TSP requires all edge weights to be positive.")
    if not graph.all_edges_nonnegative():
        return Validation.failed("TSP requires all edge weights to be nonnegative.")
    return Validation.passed()


def _require(check: Validation) -> None:
    if not check:
        raise PreconditionError(check.reason)


def tour_cost(graph: Graph, tour: Sequence[VertexID]) -> Weight:
    """Sum of edge weights along consecutive vertices of ``tour``.

    The sequence is used as given; pass a closed tour to include the edge
    back to the start.

    Raises:
        NoTourError: If two consecutive vertices are not joined by an edge.
    """
    total: Weight = 0
    for u, v in zip(tour, tour[1:]):
        if not graph.has_edge(u, v):
            raise NoTourError(f"Tour uses missing edge ({u}, {v}).")
        total += graph.get_edge_weight(u, v)
    return total


def _close(order: Sequence[VertexID], start: VertexID) -> List[VertexID]:
    """Rotate a vertex permutation to begin at ``start`` and close the cycle."""
    pivot = list(order).index(start)
    rotated = list(order[pivot:]) + list(order[:pivot])
    return rotated + [start]


#
# Exact search
#
@dataclass
class _SearchContext:
    """Best-known tour for one search invocation."""

    graph: Graph
    start: VertexID
    best_cost: Weight = math.inf
    best_path: Optional[List[VertexID]] = None
    expanded: int = 0
    path: List[VertexID] = field(default_factory=list)
    visited: Set[VertexID] = field(default_factory=set)


def _search(ctx: _SearchContext, cost: Weight) -> None:
    """Extend ``ctx.path`` in every feasible way, updating the best tour.

    Recursion depth is bounded by the number of vertices.
    """
    ctx.expanded += 1
    graph = ctx.graph
    last = ctx.path[-1]

    if len(ctx.visited) == graph.vertex_count:
        if graph.has_edge(last, ctx.start):
            total = cost + graph.get_edge_weight(last, ctx.start)
            if total < ctx.best_cost:
                ctx.best_cost = total
                ctx.best_path = ctx.path + [ctx.start]
                logger.debug("New best tour %s with cost %s", ctx.best_path, total)
        return

    for neighbor in graph.adjacent(last):
        if neighbor in ctx.visited:
            continue
        next_cost = cost + graph.get_edge_weight(last, neighbor)
        if next_cost >= ctx.best_cost:
            continue
        ctx.path.append(neighbor)
        ctx.visited.add(neighbor)
        _search(ctx, next_cost)
        ctx.visited.remove(neighbor)
        ctx.path.pop()


def tsp_branch_and_bound(graph: Graph) -> TourResult:
    """Find an optimal tour by depth-first search with cost pruning.

    Neighbours are explored in ascending id order and a tour replaces the
    current best only on strict improvement, so the first optimal tour found
    in that order is returned.

    Raises:
        PreconditionError: If the shared preconditions fail.
        NoTourError: If the graph has no Hamiltonian cycle.
    """
    _require(validate_tsp(graph, strictly_positive=True))

    start = graph.vertices()[0]
    ctx = _SearchContext(graph=graph, start=start, path=[start], visited={start})
    _search(ctx, 0)
    logger.debug("Branch and bound expanded %d states", ctx.expanded)

    if ctx.best_path is None:
        raise NoTourError("No Hamiltonian cycle exists in the graph.")
    return TourResult(
        tour=ctx.best_path, cost=ctx.best_cost, method=TSPMethod.BRANCH_AND_BOUND
    )


#
# MST approximation
#
def _preorder(tree: Dict[VertexID, List[VertexID]], root: VertexID) -> List[VertexID]:
    """Iterative preorder DFS of a tree, children in ascending order."""
    order: List[VertexID] = []
    seen: Set[VertexID] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        order.append(node)
        for child in sorted(tree[node], reverse=True):
            if child not in seen:
                stack.append(child)
    return order


def tsp_mst_approximation(graph: Graph) -> TourResult:
    """Build a tour from a preorder walk of the minimum spanning tree.

    Raises:
        UnsupportedOperationError: If the graph is directed.
        PreconditionError: If the shared preconditions fail.
        NoTourError: If a shortcut needs an edge the graph does not have.
    """
    if graph.directed:
        raise UnsupportedOperationError("MST approximation requires an undirected graph.")
    _require(validate_tsp(graph, strictly_positive=True))

    tree: Dict[VertexID, List[VertexID]] = {v: [] for v in graph.vertices()}
    for u, v, _ in graph.minimum_spanning_tree():
        tree[u].append(v)
        tree[v].append(u)

    start = graph.vertices()[0]
    walk = _preorder(tree, start)
    tour = walk + [start]
    cost = tour_cost(graph, tour)
    logger.debug("MST approximation tour %s with cost %s", tour, cost)
    return TourResult(tour=tour, cost=cost, method=TSPMethod.MST_APPROXIMATION)


#
# Genetic heuristic
#
def _cycle_cost(graph: Graph, order: Sequence[VertexID]) -> Weight:
    """Closed-cycle cost of a permutation; missing edges make it infinite."""
    total: Weight = 0
    for i, u in enumerate(order):
        v = order[(i + 1) % len(order)]
        if not graph.has_edge(u, v):
            return math.inf
        total += graph.get_edge_weight(u, v)
    return total


def _tournament(
    population: List[List[VertexID]],
    fitness: Callable[[List[VertexID]], Weight],
    k: int,
    rng: random.Random,
) -> List[VertexID]:
    """Sample ``k`` distinct individuals uniformly and return the cheapest."""
    return min(rng.sample(population, k), key=fitness)


def pmx_crossover(
    parent1: Sequence[VertexID], parent2: Sequence[VertexID], rng: random.Random
) -> List[VertexID]:
    """Partially-mapped crossover of two permutations.

    A random contiguous slice is copied from ``parent1``. Each gene of
    ``parent2`` inside that slice that is not yet placed is put at the slot
    found by following the ``parent1 -> parent2`` position mapping out of the
    slice. Remaining slots are filled from ``parent2`` position by position.
    """
    size = len(parent1)
    lo = rng.randrange(size)
    hi = rng.randrange(lo + 1, size + 1)

    child: List[Optional[VertexID]] = [None] * size
    child[lo:hi] = parent1[lo:hi]
    placed = set(parent1[lo:hi])
    position_in_p2 = {gene: i for i, gene in enumerate(parent2)}

    for i in range(lo, hi):
        gene = parent2[i]
        if gene in placed:
            continue
        pos = i
        while lo <= pos < hi:
            pos = position_in_p2[parent1[pos]]
        child[pos] = gene
        placed.add(gene)

    for i in range(size):
        if child[i] is None:
            child[i] = parent2[i]
    return child  # type: ignore[return-value]


def swap_mutation(tour: List[VertexID], rng: random.Random) -> None:
    """Swap two uniformly chosen positions in place."""
    i = rng.randrange(len(tour))
    j = rng.randrange(len(tour))
    tour[i], tour[j] = tour[j], tour[i]


def tsp_genetic(
    graph: Graph,
    config: Optional[GeneticConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> TourResult:
    """Approximate a tour with an elitist genetic algorithm.

    Each generation keeps its cheapest individual unchanged, then fills the
    rest of the next population with PMX children of tournament-selected
    parents; each child is mutated with ``config.mutation_rate``. The best
    individual seen over all generations is returned.

    Args:
        graph: Graph to tour; missing edges make a permutation infeasible.
        config: Genetic parameters (defaults to ``GENETIC_CONFIG``).
        seed: Seed for a private random generator.
        rng: Explicit generator; takes precedence over ``seed``.

    Raises:
        PreconditionError: If the shared preconditions fail.
        NoTourError: If no individual ever formed a closed tour.
    """
    _require(validate_tsp(graph, strictly_positive=False))
    cfg = config or GENETIC_CONFIG
    cfg.validate()
    rng = rng or random.Random(seed)

    cities = graph.vertices()
    cache: Dict[tuple, Weight] = {}

    def fitness(order: List[VertexID]) -> Weight:
        key = tuple(order)
        if key not in cache:
            cache[key] = _cycle_cost(graph, order)
        return cache[key]

    population = [rng.sample(cities, len(cities)) for _ in range(cfg.population_size)]
    best = list(min(population, key=fitness))
    best_cost = fitness(best)

    for generation in range(cfg.generations):
        elite = min(population, key=fitness)
        if fitness(elite) < best_cost:
            best, best_cost = list(elite), fitness(elite)

        next_population = [list(elite)]
        while len(next_population) < cfg.population_size:
            parent1 = _tournament(population, fitness, cfg.tournament_size, rng)
            parent2 = _tournament(population, fitness, cfg.tournament_size, rng)
            child = pmx_crossover(parent1, parent2, rng)
            if rng.random() < cfg.mutation_rate:
                swap_mutation(child, rng)
            next_population.append(child)
        population = next_population
        logger.debug("Generation %d: best cost %s", generation, best_cost)

    final = min(population, key=fitness)
    if fitness(final) < best_cost:
        best, best_cost = list(final), fitness(final)

    if math.isinf(best_cost):
        raise NoTourError("Genetic search found no closed tour along existing edges.")
    return TourResult(tour=_close(best, cities[0]), cost=best_cost, method=TSPMethod.GENETIC)


_SOLVERS = {
    TSPMethod.BRANCH_AND_BOUND: tsp_branch_and_bound,
    TSPMethod.MST_APPROXIMATION: tsp_mst_approximation,
    TSPMethod.GENETIC: tsp_genetic,
}


def solve_tsp(graph: Graph, method: TSPMethod = TSPMethod.BRANCH_AND_BOUND, **kwargs) -> TourResult:
    """Dispatch to the solver for ``method``; extra kwargs go to the genetic solver."""
    solver = _SOLVERS[TSPMethod(method)]
    if kwargs and method != TSPMethod.GENETIC:
        raise TypeError(f"{TSPMethod(method).name} takes no extra options: {sorted(kwargs)}.")
    return solver(graph, **kwargs)
