"""Graph model and helpers.

This package provides the `Graph` type and helper modules for the text
edge-list format (`io`), DOT export (`dot`) and NetworkX conversion
(`convert`).
"""

from graphopt.graph.graph import EdgeTuple, Graph, VertexID, Weight

__all__ = ["EdgeTuple", "Graph", "VertexID", "Weight"]
