"""Text edge-list format for graphs.

Format::

    #DIGRAPH
    false
    #EDGES
    1 2 3
    2 3

``#DIGRAPH`` is followed by ``true`` or ``false`` on the next line. Every
non-blank line after ``#EDGES`` is ``from to [weight]``; the weight defaults
to 1 and lines with fewer than two fields are skipped. Headers are matched
case-insensitively.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from graphopt.graph.graph import Graph, VertexID, Weight
from graphopt.logging import get_logger

logger = get_logger(__name__)

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def _parse_number(token: str) -> Weight:
    try:
        return int(token)
    except ValueError:
        return float(token)


def _parse_bool(token: str) -> bool:
    lowered = token.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Expected true/false after #DIGRAPH, got {token!r}.")


def _edge_lines(lines: List[str]) -> Tuple[bool, List[Tuple[VertexID, VertexID, Weight]]]:
    directed: Optional[bool] = None
    edges: List[Tuple[VertexID, VertexID, Weight]] = []
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        upper = line.upper()
        if upper.startswith("#DIGRAPH"):
            if i + 1 >= len(lines):
                raise ValueError("#DIGRAPH header must be followed by true or false.")
            i += 1
            directed = _parse_bool(lines[i])
        elif upper.startswith("#EDGES"):
            for raw in lines[i + 1 :]:
                parts = raw.split()
                if len(parts) < 2:
                    continue
                weight = _parse_number(parts[2]) if len(parts) >= 3 else 1
                edges.append((int(parts[0]), int(parts[1]), weight))
            break
        i += 1

    if directed is None:
        raise ValueError("Graph text is missing the #DIGRAPH section.")
    return directed, edges


def parse_graph(lines: Iterable[str]) -> Graph:
    """Build a Graph from lines of the edge-list format.

    Raises:
        ValueError: If the ``#DIGRAPH`` section is missing or malformed.
    """
    directed, edges = _edge_lines(list(lines))
    graph = Graph(directed=directed)
    for u, v, weight in edges:
        graph.add_edge(u, v, weight)
    return graph


def load_graph(path: Union[str, Path]) -> Graph:
    """Read a graph file in the edge-list format."""
    text = Path(path).read_text(encoding="utf-8")
    graph = parse_graph(text.splitlines())
    logger.debug("Loaded %r from %s", graph, path)
    return graph


def load_graph_with_matching(
    path: Union[str, Path],
) -> Tuple[Graph, Dict[VertexID, VertexID]]:
    """Read a graph and derive a warm-start matching from its weights.

    An edge with weight greater than 1 joins the initial matching when
    neither endpoint is matched yet, scanning edges in file order.

    Returns:
        ``(graph, matching)`` where ``matching`` is symmetric.
    """
    directed, edges = _edge_lines(Path(path).read_text(encoding="utf-8").splitlines())
    graph = Graph(directed=directed)
    matching: Dict[VertexID, VertexID] = {}
    for u, v, weight in edges:
        graph.add_edge(u, v, weight)
        if weight > 1 and u not in matching and v not in matching:
            matching[u] = v
            matching[v] = u
    return graph, matching


def format_graph(graph: Graph) -> str:
    """Render ``graph`` in the edge-list format (logical edges once)."""
    lines = ["#DIGRAPH", "true" if graph.directed else "false", "#EDGES"]
    lines.extend(f"{u} {v} {w}" for u, v, w in graph.logical_edges())
    return "\n".join(lines) + "\n"
