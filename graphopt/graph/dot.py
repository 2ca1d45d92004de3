"""Graphviz DOT export with optional highlighting of algorithm results."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from graphopt.graph.graph import Graph, VertexID
from graphopt.logging import get_logger

logger = get_logger(__name__)

#: Fill colors cycled through by color index.
PALETTE = (
    "lightblue",
    "lightcoral",
    "palegreen",
    "khaki",
    "plum",
    "lightsalmon",
    "lightcyan",
    "wheat",
)


def _key(graph: Graph, u: VertexID, v: VertexID) -> Tuple[VertexID, VertexID]:
    if graph.directed:
        return (u, v)
    return (u, v) if u < v else (v, u)


def to_dot(
    graph: Graph,
    matching: Optional[Iterable[Tuple[VertexID, VertexID]]] = None,
    cycle: Optional[Sequence[VertexID]] = None,
    coloring: Optional[Mapping[VertexID, int]] = None,
    name: str = "G",
) -> str:
    """Render ``graph`` as DOT text.

    Args:
        graph: Graph to render; undirected edges are written once.
        matching: Pairs to draw red and thick.
        cycle: Closed vertex sequence; its edges are drawn blue and labelled
            with their position in the sequence.
        coloring: Vertex -> color index, drawn as node fill colors.
        name: Graph name in the DOT header.

    Returns:
        DOT source text.
    """
    kind = "digraph" if graph.directed else "graph"
    conn = "->" if graph.directed else "--"
    lines: List[str] = [f"{kind} {name} {{"]

    for v in graph.vertices():
        if coloring is not None and v in coloring:
            fill = PALETTE[coloring[v] % len(PALETTE)]
            lines.append(f'    {v} [style=filled, fillcolor={fill}, xlabel="{coloring[v]}"];')
        else:
            lines.append(f"    {v};")

    matched: Set[Tuple[VertexID, VertexID]] = set()
    for u, v in matching or ():
        matched.add(_key(graph, u, v))
        if graph.directed:
            matched.add((v, u))

    written: Set[Tuple[VertexID, VertexID]] = set()
    if cycle:
        for i, (u, v) in enumerate(zip(cycle, cycle[1:])):
            key = _key(graph, u, v)
            if key in written:
                continue
            written.add(key)
            lines.append(f'    {u} {conn} {v} [label="{i}", color=blue, penwidth=2.0];')

    for u, v, weight in graph.logical_edges():
        key = _key(graph, u, v)
        if key in written:
            continue
        written.add(key)
        attrs = f'label="{weight}"'
        if key in matched:
            attrs += ", color=red, penwidth=2.0"
        lines.append(f"    {u} {conn} {v} [{attrs}];")

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(graph: Graph, path: Union[str, Path], **kwargs) -> Path:
    """Write ``to_dot(graph, **kwargs)`` to ``path`` and return the resolved path."""
    target = Path(path)
    target.write_text(to_dot(graph, **kwargs), encoding="utf-8")
    logger.info("DOT file written to: %s", target.resolve())
    return target.resolve()


def color_legend(colors: Mapping[VertexID, int]) -> Dict[int, str]:
    """Map each used color index to its palette fill color."""
    return {c: PALETTE[c % len(PALETTE)] for c in sorted(set(colors.values()))}
