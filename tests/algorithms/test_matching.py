import random

import networkx as nx
import pytest
from networkx.algorithms import bipartite

from graphopt.algorithms.matching import maximum_matching
from graphopt.exceptions import PreconditionError
from graphopt.graph.convert import to_networkx
from graphopt.graph.graph import Graph


def _random_bipartite(seed: int, left_size: int, right_size: int, p: float) -> Graph:
    rng = random.Random(seed)
    g = Graph(directed=False)
    for u in range(left_size):
        g.add_vertex(u)
    for v in range(left_size, left_size + right_size):
        g.add_vertex(v)
        for u in range(left_size):
            if rng.random() < p:
                g.add_edge(u, v)
    return g


def _is_matching(graph: Graph, pairs) -> bool:
    seen = set()
    for u, v in pairs:
        if u in seen or v in seen:
            return False
        if not (graph.has_edge(u, v) or graph.has_edge(v, u)):
            return False
        seen.update((u, v))
    return True


def test_small_bipartite_matching(small_bipartite):
    result = maximum_matching(small_bipartite)

    assert result.left == [1, 2]
    assert result.pairs == [(1, 4), (2, 3)]
    assert result.size == 2
    assert result.as_dict() == {1: 4, 4: 1, 2: 3, 3: 2}
    assert result.mate(3) == 2


def test_matching_from_explicit_left_partition(small_bipartite):
    result = maximum_matching(small_bipartite, left=[4, 3])

    assert result.left == [3, 4]
    assert result.pairs == [(1, 4), (2, 3)]


def test_warm_start_is_repaired(small_bipartite):
    # 1-3 blocks 2; the augmenting path 2-3-1-4 must replace it
    result = maximum_matching(small_bipartite, initial={1: 3})
    assert result.pairs == [(1, 4), (2, 3)]


def test_warm_start_already_maximum(small_bipartite):
    result = maximum_matching(small_bipartite, initial={4: 1, 2: 3})
    assert result.pairs == [(1, 4), (2, 3)]


def test_warm_start_rejects_non_edge(small_bipartite):
    with pytest.raises(PreconditionError, match="not an edge"):
        maximum_matching(small_bipartite, initial={2: 4})


def test_warm_start_rejects_conflict(small_bipartite):
    with pytest.raises(PreconditionError, match="matched to both"):
        maximum_matching(small_bipartite, initial={1: 3, 2: 3})


def test_warm_start_rejects_unknown_vertex(small_bipartite):
    with pytest.raises(PreconditionError, match="unknown vertex"):
        maximum_matching(small_bipartite, initial={1: 99})


def test_rejects_non_bipartite(triangle):
    with pytest.raises(PreconditionError, match="not bipartite"):
        maximum_matching(triangle)
    # Precondition errors are ValueErrors
    with pytest.raises(ValueError):
        maximum_matching(triangle)


def test_rejects_unknown_left_vertex(small_bipartite):
    with pytest.raises(PreconditionError, match="unknown vertices"):
        maximum_matching(small_bipartite, left=[1, 42])


def test_rejects_left_partition_with_internal_edge(small_bipartite):
    # 1 and 3 are adjacent, so they cannot share a side
    with pytest.raises(PreconditionError, match="not independent"):
        maximum_matching(small_bipartite, left=[1, 3])


def test_graph_without_edges():
    g = Graph()
    g.add_vertex(1)
    g.add_vertex(2)
    result = maximum_matching(g)
    assert result.pairs == []
    assert result.size == 0


def test_directed_edges_are_matched_regardless_of_direction():
    g = Graph(directed=True)
    g.add_edges_from([(3, 1), (2, 4), (4, 1)])
    result = maximum_matching(g)
    assert result.size == 2
    assert _is_matching(g, result.pairs)


def test_perfect_matching_on_square(square):
    result = maximum_matching(square)
    assert result.size == 2
    assert _is_matching(square, result.pairs)


def test_long_augmenting_path():
    # Path 0-1-2-...-199 seeded with the odd edges; only one long augmenting
    # path through every vertex can reach the perfect matching.
    n = 200
    g = Graph()
    g.add_edges_from((i, i + 1) for i in range(n - 1))
    initial = {i: i + 1 for i in range(1, n - 2, 2)}

    result = maximum_matching(g, initial=initial)
    assert result.size == n // 2
    assert result.pairs == [(i, i + 1) for i in range(0, n, 2)]


@pytest.mark.parametrize("seed", range(8))
def test_matching_size_agrees_with_networkx(seed):
    g = _random_bipartite(seed, left_size=7, right_size=6, p=0.35)
    result = maximum_matching(g, left=range(7))

    expected = bipartite.maximum_matching(to_networkx(g), top_nodes=range(7))
    assert result.size == len(expected) // 2
    assert _is_matching(g, result.pairs)
    assert all(u < v for u, v in result.pairs)


def test_matching_size_agrees_with_networkx_on_default_partition():
    g = _random_bipartite(123, left_size=10, right_size=10, p=0.2)
    result = maximum_matching(g)

    expected = nx.max_weight_matching(to_networkx(g), maxcardinality=True, weight=None)
    assert result.size == len(expected)
