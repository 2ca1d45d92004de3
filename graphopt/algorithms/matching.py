"""Maximum matching in bipartite graphs (Kuhn's augmenting-path method).

A matching is maximum exactly when no augmenting path exists relative to it
(Berge). The search repeats full passes over the left partition; each still
unmatched left vertex gets one depth-first attempt to find an augmenting path,
with a visited set scoped to that attempt. Passes continue until one produces
no augmentation. Complexity is O(V * E).

The depth-first search uses an explicit stack, so path length is not bounded
by the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Set

from graphopt.algorithms.base import UNMATCHED, VertexID
from graphopt.algorithms.types import MatchingResult
from graphopt.exceptions import PreconditionError
from graphopt.graph.graph import Graph
from graphopt.logging import get_logger

logger = get_logger(__name__)


def _seed_matching(
    graph: Graph, initial: Optional[Mapping[VertexID, VertexID]]
) -> Dict[VertexID, Optional[VertexID]]:
    """Build a symmetric mate map from an optional warm start.

    Raises:
        PreconditionError: If a seeded pair is not an edge or a vertex would
            be matched to two different partners.
    """
    match: Dict[VertexID, Optional[VertexID]] = {v: UNMATCHED for v in graph.vertices()}
    if not initial:
        return match

    for u, v in initial.items():
        if u not in match or v not in match:
            raise PreconditionError(
                f"Initial matching pair ({u}, {v}) references an unknown vertex."
            )
        if not (graph.has_edge(u, v) or graph.has_edge(v, u)):
            raise PreconditionError(f"Initial matching pair ({u}, {v}) is not an edge.")
        for a, b in ((u, v), (v, u)):
            if match[a] is not UNMATCHED and match[a] != b:
                raise PreconditionError(
                    f"Vertex {a} is matched to both {match[a]} and {b} in the initial matching."
                )
        match[u] = v
        match[v] = u
    return match


def _augment_from(
    graph: Graph, root: VertexID, match: Dict[VertexID, Optional[VertexID]]
) -> bool:
    """Search for an augmenting path from the free left vertex ``root``.

    Each stack frame is a left vertex with an iterator over its remaining
    neighbours. ``via[i]`` is the right vertex that led from frame ``i`` to
    frame ``i + 1`` (its current partner). When a free right vertex is found
    the path is flipped: every left vertex on the stack takes the right
    vertex it was expanded through.

    Returns:
        True if the matching grew by one edge.
    """
    visited: Set[VertexID] = {root}
    stack = [(root, iter(graph.adjacent(root, ignore_direction=True)))]
    via: List[VertexID] = []

    while stack:
        u, candidates = stack[-1]
        descended = False
        for v in candidates:
            partner = match[v]
            if partner is UNMATCHED:
                lefts = [frame[0] for frame in stack]
                for left, right in zip(lefts, via + [v]):
                    match[left] = right
                    match[right] = left
                logger.debug("Augmenting path of length %d from %s", 2 * len(lefts) - 1, root)
                return True
            if partner not in visited:
                visited.add(partner)
                via.append(v)
                stack.append((partner, iter(graph.adjacent(partner, ignore_direction=True))))
                descended = True
                break
        if not descended:
            stack.pop()
            if via:
                via.pop()
    return False


def maximum_matching(
    graph: Graph,
    left: Optional[Iterable[VertexID]] = None,
    initial: Optional[Mapping[VertexID, VertexID]] = None,
) -> MatchingResult:
    """Compute a maximum matching of a bipartite graph.

    Args:
        graph: Bipartite graph; edge direction is ignored.
        left: Vertices to grow augmenting paths from. Defaults to the color-0
            side of ``graph.bipartition()``.
        initial: Optional warm-start matching ``u -> v``. Vertices not
            mentioned start unmatched.

    Returns:
        MatchingResult with each pair reported once as ``(min, max)``.

    Raises:
        PreconditionError: If the graph is not bipartite, the left partition
            contains unknown or adjacent vertices, or the warm start is invalid.
    """
    partition = graph.bipartition()
    if partition is None:
        raise PreconditionError("Graph is not bipartite.")

    if left is None:
        left_vertices = partition
    else:
        left_vertices = sorted(set(left))
        unknown = [v for v in left_vertices if v not in graph]
        if unknown:
            raise PreconditionError(f"Left partition contains unknown vertices: {unknown}.")
        in_left = set(left_vertices)
        inside = [(u, v) for u, v, _ in graph.logical_edges() if u in in_left and v in in_left]
        if inside:
            raise PreconditionError(
                f"Left partition is not independent: edge {inside[0]} joins two left vertices."
            )

    match = _seed_matching(graph, initial)
    logger.debug(
        "Maximum matching: %d left vertices, %d seeded pairs",
        len(left_vertices),
        sum(1 for v in left_vertices if match[v] is not UNMATCHED),
    )

    passes = 0
    while True:
        passes += 1
        augmented = 0
        for u in left_vertices:
            if match[u] is UNMATCHED and _augment_from(graph, u, match):
                augmented += 1
        logger.debug("Pass %d: %d augmentations", passes, augmented)
        if not augmented:
            break

    pairs = sorted(
        (u, v) for u, v in match.items() if v is not UNMATCHED and u < v
    )
    return MatchingResult(pairs=pairs, left=list(left_vertices))
