"""Minimum-cost perfect matching by the Hungarian (Kuhn-Munkres) method.

The input is a directed complete bipartite graph whose edges run from the
left partition (workers) to the right partition (jobs); ``cost(x, y)`` is the
weight of edge x -> y.

Labels are kept on the profit ``p(x, y) = -cost(x, y)``:

* initialization: ``label[x] = max_y p(x, y)`` for left x, ``label[y] = 0``
  for right y;
* feasibility, held throughout: ``label[x] + label[y] >= p(x, y)``;
* an edge is tight when equality holds; only tight edges enter the
  alternating tree.

A perfect matching made of tight edges maximizes total profit, which is the
same as minimizing total cost.

For each free left vertex ``u`` an alternating tree (S on the left, T on the
right) is grown over tight edges. Each right vertex outside T keeps its
current slack ``min_{x in S} label[x] + label[y] - p(x, y)`` and the left
vertex that attains it. When no tight edge leaves the tree, the minimum
slack ``alpha`` is subtracted from S labels and added to T labels. Tree
edges stay tight and at least one new edge becomes tight. S, T and the
parent pointers persist across these updates until a free right vertex is
reached, and the path is then flipped back to ``u``. Total work is O(V^3).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from graphopt.algorithms.base import EPSILON, UNMATCHED, VertexID, Weight
from graphopt.algorithms.types import AssignmentResult, Validation
from graphopt.exceptions import PreconditionError
from graphopt.graph.graph import Graph
from graphopt.logging import get_logger

logger = get_logger(__name__)


def _sides(graph: Graph) -> Optional[Tuple[List[VertexID], List[VertexID]]]:
    """Return ``(left, right)`` with edges oriented left -> right, if possible.

    When no vertex is both a source and a target, edge tails form the left
    side and edge heads the right side, so every component is oriented on
    its own. Isolated vertices follow their ``bipartition()`` color.
    Otherwise the coloring decides, and the orientation check reports the
    offending edge.
    """
    color0 = graph.bipartition()
    if color0 is None:
        return None
    in_color0 = set(color0)
    sources = {u for u, _ in graph.edges()}
    targets = {v for _, v in graph.edges()}
    if not sources & targets:
        isolated = {v for v in graph.vertices() if graph.is_isolated(v)}
        left = sorted(sources | (isolated & in_color0))
        right = sorted(targets | (isolated - in_color0))
        return left, right

    left = color0
    right = [v for v in graph.vertices() if v not in in_color0]
    # Pick the side that carries the outgoing edges as "left"
    if any(u not in in_color0 for u, _ in graph.edges()):
        left, right = right, left
    return left, right


def validate_assignment(graph: Graph) -> Validation:
    """Check every precondition of ``hungarian`` and report the first violation."""
    if not graph.directed:
        return Validation.failed("Graph must be directed.")
    sides = _sides(graph)
    if sides is None:
        return Validation.failed("Graph is not bipartite.")
    left, right = sides
    if len(left) != len(right):
        return Validation.failed(
            f"Partitions must be of equal size (left={len(left)}, right={len(right)})."
        )
    in_left = set(left)
    for u, v in graph.edges():
        if u not in in_left or v in in_left:
            return Validation.failed(
                f"Edge ({u}, {v}) does not run from the left to the right partition."
            )
    if not graph.all_edges_nonnegative():
        return Validation.failed("All edge weights must be nonnegative.")
    for x in left:
        for y in right:
            if not graph.has_edge(x, y):
                return Validation.failed(
                    f"Graph must be complete bipartite: edge ({x}, {y}) is missing."
                )
    return Validation.passed()


class _HungarianContext:
    """Per-call state: labels and the mate map."""

    def __init__(self, graph: Graph, left: List[VertexID], right: List[VertexID]) -> None:
        self.graph = graph
        self.left = left
        self.right = right
        self.label: Dict[VertexID, Weight] = {}
        for x in left:
            self.label[x] = max(-graph.get_edge_weight(x, y) for y in graph.adjacent(x))
        for y in right:
            self.label[y] = 0
        self.match: Dict[VertexID, Optional[VertexID]] = {
            v: UNMATCHED for v in graph.vertices()
        }

    def slack(self, x: VertexID, y: VertexID) -> Weight:
        """Reduced profit; zero on tight edges, never negative."""
        return self.label[x] + self.label[y] + self.graph.get_edge_weight(x, y)

    def grow(self, root: VertexID) -> None:
        """Extend the matching by one edge covering the free left vertex ``root``."""
        S = {root}
        T: set = set()
        parent: Dict[VertexID, VertexID] = {}
        slack: Dict[VertexID, Tuple[Weight, VertexID]] = {
            y: (self.slack(root, y), root) for y in self.right
        }

        while True:
            alpha, y = min((slack[y][0], y) for y in self.right if y not in T)
            if alpha > EPSILON:
                logger.debug("Label update for root %s: alpha=%s", root, alpha)
                for x in S:
                    self.label[x] -= alpha
                for t in T:
                    self.label[t] += alpha
                for r in self.right:
                    if r not in T:
                        slack[r] = (slack[r][0] - alpha, slack[r][1])

            x = slack[y][1]
            T.add(y)
            parent[y] = x
            mate = self.match[y]
            if mate is UNMATCHED:
                self._augment(y, parent)
                return

            S.add(mate)
            for r in self.right:
                if r not in T:
                    s = self.slack(mate, r)
                    if s < slack[r][0]:
                        slack[r] = (s, mate)

    def _augment(self, y: VertexID, parent: Dict[VertexID, VertexID]) -> None:
        """Flip matched/unmatched edges along parent pointers from free ``y``."""
        while y is not UNMATCHED:
            x = parent[y]
            previous = self.match[x]
            self.match[x] = y
            self.match[y] = x
            y = previous


def hungarian(graph: Graph) -> AssignmentResult:
    """Solve the assignment problem on a directed complete bipartite graph.

    Args:
        graph: Directed graph, edges from left to right, equal partition
            sizes, nonnegative weights, every left-right pair present.

    Returns:
        AssignmentResult with the optimal assignment, final labels and cost.

    Raises:
        PreconditionError: Describing the first violated precondition.
    """
    check = validate_assignment(graph)
    if not check:
        raise PreconditionError(check.reason)

    left, right = _sides(graph)  # type: ignore[misc]
    ctx = _HungarianContext(graph, left, right)
    logger.debug("Hungarian method on %dx%d instance", len(left), len(right))

    for u in left:
        if ctx.match[u] is UNMATCHED:
            ctx.grow(u)

    assignment = {x: ctx.match[x] for x in left}
    total = sum(graph.get_edge_weight(x, y) for x, y in assignment.items())
    logger.debug("Assignment complete: total cost %s", total)
    return AssignmentResult(
        assignment=assignment,  # type: ignore[arg-type]
        labels=dict(ctx.label),
        total_cost=total,
    )
