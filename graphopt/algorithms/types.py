"""Result containers returned by the optimization algorithms.

All containers are frozen dataclasses; mappings are built once by the solver
and should be treated as read-only by callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from graphopt.algorithms.base import TSPMethod, VertexID, Weight


@dataclass(frozen=True)
class Validation:
    """Outcome of a precondition check.

    Truthy when the check passed. ``reason`` explains the first violated
    condition and is ``None`` on success.
    """

    ok: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def passed(cls) -> Validation:
        return cls(True)

    @classmethod
    def failed(cls, reason: str) -> Validation:
        return cls(False, reason)


@dataclass(frozen=True)
class MatchingResult:
    """Maximum matching in a bipartite graph.

    Attributes:
        pairs: Matched vertex pairs, each reported once as ``(min, max)`` and
            sorted ascending.
        left: Left partition the augmenting-path search started from.
    """

    pairs: List[Tuple[VertexID, VertexID]]
    left: List[VertexID] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.pairs)

    def as_dict(self) -> Dict[VertexID, VertexID]:
        """Symmetric mate map covering every matched vertex."""
        mates: Dict[VertexID, VertexID] = {}
        for u, v in self.pairs:
            mates[u] = v
            mates[v] = u
        return mates

    def mate(self, vertex: VertexID) -> Optional[VertexID]:
        return self.as_dict().get(vertex)


@dataclass(frozen=True)
class AssignmentResult:
    """Minimum-cost perfect matching produced by the Hungarian method.

    Attributes:
        assignment: Left vertex -> assigned right vertex.
        labels: Final vertex labels. They are feasible for the negated costs:
            ``labels[x] + labels[y] >= -cost(x, y)`` for every edge, with
            equality on every assigned pair.
        total_cost: Sum of the costs of the assigned pairs.
    """

    assignment: Dict[VertexID, VertexID]
    labels: Dict[VertexID, Weight]
    total_cost: Weight

    @property
    def pairs(self) -> List[Tuple[VertexID, VertexID]]:
        return sorted(self.assignment.items())

    @property
    def potentials(self) -> Dict[VertexID, Weight]:
        """Dual potentials of the min-cost problem.

        ``potentials[x] + potentials[y] <= cost(x, y)`` for every edge and the
        potentials sum to ``total_cost``.
        """
        return {v: -label for v, label in self.labels.items()}


@dataclass(frozen=True)
class TourResult:
    """Closed tour through every vertex.

    Attributes:
        tour: Vertex sequence starting and ending at the same vertex.
        cost: Sum of edge weights along the tour.
        method: Strategy that produced the tour.
    """

    tour: List[VertexID]
    cost: Weight
    method: TSPMethod

    @property
    def edges(self) -> List[Tuple[VertexID, VertexID]]:
        return list(zip(self.tour, self.tour[1:]))


@dataclass(frozen=True)
class ColoringResult:
    """Proper vertex coloring.

    Attributes:
        colors: Vertex -> color index (0-based).
        num_colors: Number of distinct colors used.
    """

    colors: Dict[VertexID, int]
    num_colors: int

    def classes(self) -> Dict[int, List[VertexID]]:
        """Group vertices by color, each group sorted ascending."""
        groups: Dict[int, List[VertexID]] = {}
        for vertex in sorted(self.colors):
            groups.setdefault(self.colors[vertex], []).append(vertex)
        return groups


@dataclass(frozen=True)
class KnapsackResult:
    """Optimal 0/1 knapsack selection.

    Attributes:
        selected: Indexes of the chosen items, ascending.
        total_value: Sum of the chosen values.
        total_weight: Sum of the chosen weights.
    """

    selected: List[int]
    total_value: float
    total_weight: float
