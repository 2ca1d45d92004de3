"""Eulerian circuits via Hierholzer's algorithm.

Preconditions:
  - undirected: connected (isolated vertices ignored) and every degree even;
  - directed: strongly connected (isolated vertices ignored) and in-degree
    equal to out-degree everywhere.

Construction works on a private adjacency copy with an explicit stack: look
at the top vertex; if it still has an unused outgoing edge, consume the edge
(and its mirror for undirected graphs) and push the neighbour; otherwise pop
the vertex onto the output. The pop sequence is the circuit walked backwards;
it is reversed before returning so directed circuits follow edge direction.
"""

from __future__ import annotations

from typing import Dict, List

from graphopt.algorithms.base import VertexID
from graphopt.algorithms.types import Validation
from graphopt.exceptions import PreconditionError
from graphopt.graph.graph import Graph
from graphopt.logging import get_logger

logger = get_logger(__name__)


def has_eulerian_circuit(graph: Graph) -> Validation:
    """Check whether ``graph`` has an Eulerian circuit.

    Returns:
        Validation; on failure ``reason`` names the violated condition.
    """
    if graph.directed:
        if not graph.is_strongly_connected():
            return Validation.failed(
                "The graph is not strongly connected: some vertices with edges "
                "cannot reach each other."
            )
        if not graph.all_vertices_balanced_directed():
            return Validation.failed(
                "In-degree differs from out-degree for at least one vertex."
            )
        return Validation.passed()

    if not graph.is_connected():
        return Validation.failed(
            "The graph is not connected: not all vertices with edges are reachable."
        )
    if not graph.all_vertices_have_even_degree():
        return Validation.failed("Not all vertices have even degree.")
    return Validation.passed()


def eulerian_circuit(graph: Graph) -> List[VertexID]:
    """Return a closed walk that uses every edge of ``graph`` exactly once.

    The walk starts and ends at the lowest-id vertex with an outgoing edge and
    always leaves a vertex through its lowest-id unused edge. A graph without
    edges yields ``[v]`` for its lowest vertex (``[]`` if it has no vertices).
    The caller's graph is not modified.

    Raises:
        PreconditionError: If the graph has no Eulerian circuit; the message
            carries the reason.
    """
    check = has_eulerian_circuit(graph)
    if not check:
        raise PreconditionError(f"No Eulerian circuit exists: {check.reason}")

    vertices = graph.vertices()
    if not vertices:
        return []

    # Reversed so that pop() yields the lowest-id unused neighbour
    unused: Dict[VertexID, List[VertexID]] = {
        v: graph.adjacent(v)[::-1] for v in vertices
    }
    start = next((v for v in vertices if unused[v]), vertices[0])

    stack = [start]
    popped: List[VertexID] = []
    while stack:
        current = stack[-1]
        if unused[current]:
            neighbor = unused[current].pop()
            if not graph.directed:
                unused[neighbor].remove(current)
            stack.append(neighbor)
        else:
            popped.append(stack.pop())

    popped.reverse()
    logger.debug("Eulerian circuit over %d edges from %s", len(popped) - 1, start)
    return popped
