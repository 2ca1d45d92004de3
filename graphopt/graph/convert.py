"""Conversion between `Graph` and plain NetworkX graphs.

`to_networkx` produces an ``nx.Graph`` for undirected graphs (one edge per
logical edge) and an ``nx.DiGraph`` for directed ones, carrying the
``weight`` attribute. `from_networkx` goes the other way and takes the mode
from ``G.is_directed()``.
"""

from __future__ import annotations

from typing import Union

import networkx as nx

from graphopt.graph.graph import Graph

NxGraph = Union[nx.Graph, nx.DiGraph]


def to_networkx(graph: Graph) -> NxGraph:
    """Convert a Graph into an independent NetworkX graph.

    Args:
        graph: Source graph.

    Returns:
        ``nx.DiGraph`` if ``graph.directed`` else ``nx.Graph``; isolated
        vertices are preserved.
    """
    nx_graph: NxGraph = nx.DiGraph() if graph.directed else nx.Graph()
    nx_graph.add_nodes_from(graph.vertices())
    for u, v, weight in graph.logical_edges():
        nx_graph.add_edge(u, v, weight=weight)
    return nx_graph


def from_networkx(nx_graph: NxGraph, weight: str = "weight", default_weight: int = 1) -> Graph:
    """Build a Graph from a NetworkX Graph or DiGraph.

    Args:
        nx_graph: Simple NetworkX graph; multigraphs are rejected.
        weight: Edge attribute holding the weight.
        default_weight: Weight for edges without that attribute.

    Raises:
        TypeError: If ``nx_graph`` is not a simple NetworkX graph.
        ValueError: On self-loops.
    """
    if isinstance(nx_graph, Graph):
        return nx_graph.copy()
    if not isinstance(nx_graph, nx.Graph) or nx_graph.is_multigraph():
        raise TypeError(
            f"Expected a NetworkX Graph or DiGraph, got {type(nx_graph).__name__}."
        )
    graph = Graph(directed=nx_graph.is_directed())
    for node in nx_graph.nodes:
        graph.add_vertex(node)
    for u, v, data in nx_graph.edges(data=True):
        graph.add_edge(u, v, data.get(weight, default_weight))
    return graph
