from collections import Counter

import networkx as nx
import pytest

from graphopt.algorithms.euler import eulerian_circuit, has_eulerian_circuit
from graphopt.exceptions import PreconditionError
from graphopt.graph.convert import from_networkx, to_networkx
from graphopt.graph.graph import Graph


def _assert_uses_every_edge_once(graph: Graph, circuit) -> None:
    assert circuit[0] == circuit[-1]
    assert len(circuit) == graph.edge_count + 1
    walked = list(zip(circuit, circuit[1:]))
    for u, v in walked:
        assert graph.has_edge(u, v)
    if graph.directed:
        used = Counter(walked)
        expected = Counter((u, v) for u, v, _ in graph.logical_edges())
    else:
        used = Counter(frozenset(edge) for edge in walked)
        expected = Counter(frozenset((u, v)) for u, v, _ in graph.logical_edges())
    assert used == expected


def test_triangle_circuit(triangle):
    assert eulerian_circuit(triangle) == [1, 2, 3, 1]


def test_directed_triangle_follows_edge_direction(directed_triangle):
    assert eulerian_circuit(directed_triangle) == [1, 2, 3, 1]


def test_bowtie_circuit(bowtie):
    circuit = eulerian_circuit(bowtie)
    assert circuit == [1, 2, 3, 4, 5, 3, 1]
    _assert_uses_every_edge_once(bowtie, circuit)


def test_circuit_does_not_modify_graph(bowtie):
    before = bowtie.logical_edges()
    eulerian_circuit(bowtie)
    assert bowtie.logical_edges() == before


def test_isolated_vertices_are_ignored(triangle):
    triangle.add_vertex(0)
    circuit = eulerian_circuit(triangle)
    assert circuit == [1, 2, 3, 1]


def test_graph_without_edges():
    g = Graph()
    g.add_vertex(4)
    g.add_vertex(2)
    assert eulerian_circuit(g) == [2]
    assert eulerian_circuit(Graph()) == []


def test_odd_degree_is_rejected(k4):
    check = has_eulerian_circuit(k4)
    assert not check
    assert check.reason == "Not all vertices have even degree."
    with pytest.raises(PreconditionError, match="even degree"):
        eulerian_circuit(k4)


def test_disconnected_is_rejected(triangle):
    triangle.add_edges_from([(7, 8), (8, 9), (9, 7)])
    check = has_eulerian_circuit(triangle)
    assert not check
    assert "not connected" in check.reason
    with pytest.raises(PreconditionError, match="No Eulerian circuit exists"):
        eulerian_circuit(triangle)


def test_directed_unbalanced_is_rejected(directed_triangle):
    directed_triangle.add_edge(1, 3)
    directed_triangle.add_edge(3, 2)
    check = has_eulerian_circuit(directed_triangle)
    assert not check
    assert "In-degree differs" in check.reason


def test_directed_not_strongly_connected_is_rejected():
    g = Graph(directed=True)
    g.add_edges_from([(1, 2), (2, 1), (2, 3)])
    check = has_eulerian_circuit(g)
    assert not check
    assert "strongly connected" in check.reason


def test_directed_two_loops_through_hub():
    g = Graph(directed=True)
    g.add_edges_from([(1, 2), (2, 1), (1, 3), (3, 4), (4, 1)])
    circuit = eulerian_circuit(g)
    assert circuit == [1, 2, 1, 3, 4, 1]
    _assert_uses_every_edge_once(g, circuit)


@pytest.mark.parametrize("n", [3, 5, 7])
def test_complete_graphs_with_odd_order(n):
    g = from_networkx(nx.complete_graph(range(1, n + 1)))
    assert has_eulerian_circuit(g)
    circuit = eulerian_circuit(g)
    _assert_uses_every_edge_once(g, circuit)
    assert circuit[0] == 1


def test_agrees_with_networkx_on_grid():
    # 4x4 torus: every vertex has degree 4
    torus = nx.convert_node_labels_to_integers(nx.grid_2d_graph(4, 4, periodic=True))
    g = from_networkx(torus)
    assert nx.is_eulerian(to_networkx(g))
    assert has_eulerian_circuit(g)
    _assert_uses_every_edge_once(g, eulerian_circuit(g))


def test_long_circuit_runs_without_recursion():
    n = 5000
    g = Graph()
    g.add_edges_from((i, i + 1) for i in range(n - 1))
    g.add_edge(n - 1, 0)
    circuit = eulerian_circuit(g)
    assert circuit == list(range(n)) + [0]
