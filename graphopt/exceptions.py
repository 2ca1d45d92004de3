"""Exception types raised by graphopt.

Each type also derives from the built-in exception a caller would expect
(``ValueError``, ``KeyError``, ``TypeError``), so ``except ValueError`` keeps
working for structural problems.
"""

from __future__ import annotations


class GraphOptError(Exception):
    """Base class for all graphopt errors."""


class PreconditionError(GraphOptError, ValueError):
    """The graph does not have the structure an algorithm requires.

    Raised before any search state is created: not bipartite, not connected,
    wrong partition sizes, missing or negative weights, too few vertices.
    """


class NoTourError(PreconditionError):
    """No closed tour through every vertex exists along the graph's edges."""


class EdgeNotFoundError(GraphOptError, KeyError):
    """A directed edge that does not exist was looked up."""

    def __init__(self, u: object, v: object) -> None:
        super().__init__(u, v)
        self.u = u
        self.v = v

    def __str__(self) -> str:
        return f"No edge from {self.u!r} to {self.v!r}."


class UnsupportedOperationError(GraphOptError, TypeError):
    """Operation called in the wrong directed/undirected mode."""
