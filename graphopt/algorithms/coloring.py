"""Vertex coloring: exact for bipartite graphs, greedy otherwise.

Bipartite graphs get the 2-coloring of their bipartition. Other graphs are
colored round by round on a private working copy:

1. isolated vertices share color 0;
2. each round extracts an approximate maximum independent set from the
   still-uncolored vertices by repeatedly taking the candidate with the fewest
   neighbours among the remaining candidates (lowest id on ties) and
   excluding it and its neighbours;
3. the set receives the round's color, its vertices are disconnected from the
   working copy, and the next round uses the next color.

The greedy result is an upper bound on the chromatic number, not a minimum.
Edge direction is ignored.
"""

from __future__ import annotations

from typing import Dict, List, Set

from graphopt.algorithms.base import VertexID
from graphopt.algorithms.types import ColoringResult
from graphopt.graph.graph import Graph
from graphopt.logging import get_logger

logger = get_logger(__name__)


def _independent_set(working: Graph, candidates: Set[VertexID]) -> List[VertexID]:
    """Greedy min-degree independent set drawn from ``candidates``."""
    chosen: List[VertexID] = []
    remaining = set(candidates)
    while remaining:
        best = min(
            remaining,
            key=lambda v: (
                sum(1 for n in working.adjacent(v, ignore_direction=True) if n in remaining),
                v,
            ),
        )
        chosen.append(best)
        remaining.discard(best)
        remaining.difference_update(working.adjacent(best, ignore_direction=True))
    return sorted(chosen)


def color_graph(graph: Graph) -> ColoringResult:
    """Color ``graph`` so that adjacent vertices never share a color.

    Returns:
        ColoringResult with colors indexed from 0 and the number of distinct
        colors used. The caller's graph is not modified.
    """
    partition = graph.bipartition()
    if partition is not None:
        left = set(partition)
        colors = {v: 0 if v in left else 1 for v in graph.vertices()}
        return ColoringResult(colors=colors, num_colors=len(set(colors.values())))

    colors: Dict[VertexID, int] = {}
    unprocessed: Set[VertexID] = set()
    color = 0
    for v in graph.vertices():
        if graph.is_isolated(v):
            colors[v] = color
        else:
            unprocessed.add(v)
    if colors:
        color += 1

    working = graph.copy()
    while unprocessed:
        independent = _independent_set(working, unprocessed)
        logger.debug("Color %d assigned to %s", color, independent)
        for v in independent:
            colors[v] = color
            working.isolate(v)
        unprocessed.difference_update(independent)
        color += 1

    return ColoringResult(colors=colors, num_colors=color)
