"""Weighted graph with a logical directed/undirected mode.

`Graph` extends `networkx.DiGraph`. Storage is always directed: an undirected
graph keeps every logical edge as two opposite directed edges with equal
weight. The ``directed`` flag decides whether ``add_edge`` mirrors and how
connectivity and degree queries read the adjacency.

Vertex iteration is pinned to ascending vertex id so that every algorithm
built on top breaks ties the same way on every run.
"""

from __future__ import annotations

from collections import deque
from pickle import dumps, loads
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple, Union

import networkx as nx

from graphopt.exceptions import (
    EdgeNotFoundError,
    PreconditionError,
    UnsupportedOperationError,
)

#: Vertex identifier. Vertices are integers; any mutually orderable hashable works.
VertexID = int

#: Edge weight (integer or real).
Weight = Union[int, float]

#: Logical edge as ``(from, to, weight)``.
EdgeTuple = Tuple[VertexID, VertexID, Weight]


class _DisjointSet:
    """Union-find over vertex ids with path compression and union by size."""

    def __init__(self, items: Iterable[VertexID]) -> None:
        self._parent: Dict[VertexID, VertexID] = {item: item for item in items}
        self._size: Dict[VertexID, int] = {item: 1 for item in self._parent}

    def find(self, item: VertexID) -> VertexID:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: VertexID, b: VertexID) -> bool:
        """Merge the sets of ``a`` and ``b``; return False if already merged."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        return True


class Graph(nx.DiGraph):
    """Adjacency-list graph with integer vertices and weighted edges.

    This class enforces:
      - Vertices are created implicitly when an edge references them.
      - Undirected graphs mirror every edge: (u, v, w) exists iff (v, u, w) does.
      - No self-loops and no parallel edges (raises ValueError).
      - ``copy()`` returns an independent structural snapshot (pickle-based),
        so algorithms can consume a private working copy.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, directed: bool = False, **attr: Any) -> None:
        """Initialize an empty graph.

        Args:
            directed: Logical direction flag. When False, every edge added
                through ``add_edge`` is stored in both directions.
            **attr: Graph attributes forwarded to the DiGraph constructor.
        """
        super().__init__(**attr)
        self.graph.setdefault("directed", bool(directed))

    @property
    def directed(self) -> bool:
        """True if the graph is semantically directed."""
        return bool(self.graph.get("directed", False))

    def copy(self, as_view: bool = False) -> Graph:  # type: ignore[override]
        """Return a structural snapshot of this graph.

        Args:
            as_view: If True, return a read-only NetworkX view instead of a copy.

        Returns:
            Graph: Independent deep copy (vertices, edges, weights, mode).
        """
        if as_view:
            return super().copy(as_view=True)  # type: ignore[return-value]
        return loads(dumps(self))

    #
    # Construction
    #
    def add_vertex(self, vertex: VertexID) -> None:
        """Add an isolated vertex; existing vertices are left untouched."""
        if vertex not in self._node:
            self.add_node(vertex)

    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_of_edge: VertexID,
        v_of_edge: VertexID,
        weight: Weight = 1,
        **attr: Any,
    ) -> None:
        """Add an edge, creating missing vertices and mirroring if undirected.

        Args:
            u_of_edge: Source vertex.
            v_of_edge: Target vertex.
            weight: Edge weight, integer or real (default 1).
            **attr: Extra edge attributes, copied to the mirrored edge.

        Raises:
            ValueError: On a self-loop or if the edge already exists.
            TypeError: If the weight is not a number.
        """
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise TypeError(f"Edge weight must be int or float, got {weight!r}.")
        if u_of_edge == v_of_edge:
            raise ValueError(f"Self-loop on vertex {u_of_edge!r} is not supported.")
        if self.has_edge(u_of_edge, v_of_edge):
            raise ValueError(f"Edge ({u_of_edge!r}, {v_of_edge!r}) already exists.")

        super().add_edge(u_of_edge, v_of_edge, weight=weight, **attr)
        if not self.directed:
            super().add_edge(v_of_edge, u_of_edge, weight=weight, **attr)

    def add_edges_from(self, ebunch_to_add: Iterable[Tuple[Any, ...]], **attr: Any) -> None:
        """Add every edge in ``ebunch_to_add`` through ``add_edge``.

        Entries may be ``(u, v)``, ``(u, v, weight)`` or ``(u, v, attr_dict)``.
        """
        for entry in ebunch_to_add:
            if len(entry) == 2:
                u, v = entry
                data: Dict[str, Any] = {}
            elif len(entry) == 3:
                u, v, extra = entry
                data = dict(extra) if isinstance(extra, dict) else {"weight": extra}
            else:
                raise ValueError(f"Edge tuple {entry!r} must be a 2-tuple or 3-tuple.")
            data.update(attr)
            self.add_edge(u, v, **data)

    def remove_edge(self, u: VertexID, v: VertexID) -> None:
        """Remove an edge (and its mirror when undirected).

        Raises:
            EdgeNotFoundError: If the edge does not exist.
        """
        if not self.has_edge(u, v):
            raise EdgeNotFoundError(u, v)
        super().remove_edge(u, v)
        if not self.directed and self.has_edge(v, u):
            super().remove_edge(v, u)

    def isolate(self, vertex: VertexID) -> None:
        """Remove every edge incident to ``vertex`` in both directions."""
        for neighbor in list(self._succ[vertex]):
            super().remove_edge(vertex, neighbor)
        for neighbor in list(self._pred[vertex]):
            super().remove_edge(neighbor, vertex)

    #
    # Queries
    #
    @property
    def vertex_count(self) -> int:
        return len(self._node)

    @property
    def edge_count(self) -> int:
        """Number of logical edges; undirected edges count once."""
        stored = self.number_of_edges()
        return stored if self.directed else stored // 2

    def vertices(self) -> List[VertexID]:
        """Return vertex ids in ascending order."""
        return sorted(self._node)

    def adjacent(self, vertex: VertexID, ignore_direction: bool = False) -> List[VertexID]:
        """Return neighbours of ``vertex`` in ascending order.

        Args:
            vertex: Vertex to inspect.
            ignore_direction: If True, include predecessors as well as
                successors (identical for undirected graphs).
        """
        if ignore_direction:
            return sorted(set(self._succ[vertex]) | set(self._pred[vertex]))
        return sorted(self._succ[vertex])

    def logical_edges(self) -> List[EdgeTuple]:
        """Return logical edges sorted by endpoints.

        Undirected edges are reported once as ``(u, v, w)`` with ``u < v``.
        """
        edges: List[EdgeTuple] = []
        for u in self.vertices():
            for v in self.adjacent(u):
                if self.directed or u < v:
                    edges.append((u, v, self._succ[u][v]["weight"]))
        return edges

    def get_edge_weight(self, u: VertexID, v: VertexID) -> Weight:
        """Return the weight of the directed edge u -> v.

        Raises:
            EdgeNotFoundError: If no such edge exists.
        """
        try:
            return self._succ[u][v]["weight"]
        except KeyError:
            raise EdgeNotFoundError(u, v) from None

    def degree_of(self, vertex: VertexID) -> int:
        """Number of logical edges incident to ``vertex``.

        For undirected graphs this is the usual degree; for directed graphs it
        is in-degree plus out-degree.
        """
        out_deg = len(self._succ[vertex])
        if not self.directed:
            return out_deg
        return out_deg + len(self._pred[vertex])

    def is_isolated(self, vertex: VertexID) -> bool:
        return not self._succ[vertex] and not self._pred[vertex]

    def all_edges_positive(self) -> bool:
        return all(d["weight"] > 0 for _, _, d in self.edges(data=True))

    def all_edges_nonnegative(self) -> bool:
        return all(d["weight"] >= 0 for _, _, d in self.edges(data=True))

    def _reach(
        self, start: VertexID, neighbors: Callable[[VertexID], Iterable[VertexID]]
    ) -> Set[VertexID]:
        """Iterative DFS returning every vertex reachable from ``start``."""
        seen = {start}
        stack = [start]
        while stack:
            node = stack.pop()
            for nxt in neighbors(node):
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        return seen

    def _non_isolated(self) -> List[VertexID]:
        return [v for v in self.vertices() if not self.is_isolated(v)]

    def is_connected(self) -> bool:
        """True if every vertex with an edge is reachable from every other.

        Isolated vertices are ignored and a graph without edges is connected.
        Directed graphs are checked for weak connectivity.
        """
        active = self._non_isolated()
        if not active:
            return True
        reached = self._reach(
            active[0], lambda node: self.adjacent(node, ignore_direction=True)
        )
        return all(v in reached for v in active)

    def is_strongly_connected(self) -> bool:
        """True if every non-isolated vertex reaches, and is reached from, all others.

        Runs one DFS along edges and one along reversed edges from the same
        start vertex.

        Raises:
            UnsupportedOperationError: If the graph is undirected.
        """
        if not self.directed:
            raise UnsupportedOperationError(
                "Strong connectivity is defined for directed graphs only."
            )
        active = self._non_isolated()
        if not active:
            return True
        start = active[0]
        forward = self._reach(start, lambda node: self._succ[node])
        backward = self._reach(start, lambda node: self._pred[node])
        return all(v in forward and v in backward for v in active)

    def all_vertices_have_even_degree(self) -> bool:
        """True if every vertex has even degree.

        Raises:
            UnsupportedOperationError: If the graph is directed.
        """
        if self.directed:
            raise UnsupportedOperationError(
                "Even-degree check applies to undirected graphs only."
            )
        return all(len(self._succ[v]) % 2 == 0 for v in self._node)

    def all_vertices_balanced_directed(self) -> bool:
        """True if in-degree equals out-degree for every vertex."""
        return all(len(self._succ[v]) == len(self._pred[v]) for v in self._node)

    def bipartition(self) -> Optional[List[VertexID]]:
        """Two-color the graph by BFS, ignoring edge direction.

        A BFS starts from every still-uncolored vertex in ascending order and
        gives it color 0.

        Returns:
            Sorted list of color-0 vertices, or None as soon as an edge joins
            two vertices of the same color.
        """
        color: Dict[VertexID, int] = {}
        for root in self.vertices():
            if root in color:
                continue
            color[root] = 0
            queue = deque([root])
            while queue:
                node = queue.popleft()
                for neighbor in self.adjacent(node, ignore_direction=True):
                    if neighbor not in color:
                        color[neighbor] = 1 - color[node]
                        queue.append(neighbor)
                    elif color[neighbor] == color[node]:
                        return None
        return [v for v in self.vertices() if color[v] == 0]

    def is_bipartite(self) -> bool:
        return self.bipartition() is not None

    def minimum_spanning_tree(self) -> List[EdgeTuple]:
        """Kruskal's algorithm over the logical edges.

        Edges are sorted by weight with a stable sort over ``(u, v)``-ordered
        input, so equal weights resolve to the lexicographically smallest
        endpoint pair first. Stops after ``|V| - 1`` accepted edges; for a
        disconnected graph the result is a spanning forest.

        Returns:
            Accepted edges as ``(u, v, weight)`` with ``u < v``, in acceptance order.

        Raises:
            UnsupportedOperationError: If the graph is directed.
            PreconditionError: If any edge weight is negative.
        """
        if self.directed:
            raise UnsupportedOperationError(
                "Minimum spanning tree requires an undirected graph."
            )
        if not self.all_edges_nonnegative():
            raise PreconditionError("Minimum spanning tree requires nonnegative weights.")

        candidates = sorted(self.logical_edges(), key=lambda edge: edge[2])
        components = _DisjointSet(self._node)
        target = max(self.vertex_count - 1, 0)
        tree: List[EdgeTuple] = []
        for u, v, weight in candidates:
            if len(tree) == target:
                break
            if components.union(u, v):
                tree.append((u, v, weight))
        return tree

    def __repr__(self) -> str:
        mode = "directed" if self.directed else "undirected"
        return f"<Graph {mode} vertices={self.vertex_count} edges={self.edge_count}>"
