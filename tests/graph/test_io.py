from pathlib import Path

import pytest

from graphopt.graph.graph import Graph
from graphopt.graph.io import (
    format_graph,
    load_graph,
    load_graph_with_matching,
    parse_graph,
)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def test_parse_graph_undirected_with_default_weights():
    g = parse_graph(["#DIGRAPH", "false", "#EDGES", "1 2", "2 3 4", ""])

    assert g.directed is False
    assert g.logical_edges() == [(1, 2, 1), (2, 3, 4)]


def test_parse_graph_directed_with_float_weight():
    g = parse_graph(["#digraph", "TRUE", "#edges", "3 1 2.5"])

    assert g.directed is True
    assert g.get_edge_weight(3, 1) == 2.5
    assert not g.has_edge(1, 3)


def test_parse_graph_skips_short_lines():
    g = parse_graph(["#DIGRAPH", "false", "#EDGES", "1 2", "7", "   "])
    assert g.vertices() == [1, 2]


def test_parse_graph_without_digraph_section():
    with pytest.raises(ValueError, match="#DIGRAPH"):
        parse_graph(["#EDGES", "1 2"])


def test_parse_graph_with_bad_direction_flag():
    with pytest.raises(ValueError, match="true/false"):
        parse_graph(["#DIGRAPH", "maybe", "#EDGES", "1 2"])


def test_parse_graph_rejects_duplicate_edges():
    with pytest.raises(ValueError, match="already exists"):
        parse_graph(["#DIGRAPH", "false", "#EDGES", "1 2", "2 1"])


def test_load_graph_from_file():
    g = load_graph(DATA_DIR / "bowtie.txt")
    assert g.vertex_count == 5
    assert g.edge_count == 6
    assert g.adjacent(3) == [1, 2, 4, 5]


def test_load_graph_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_graph(tmp_path / "absent.txt")


def test_load_graph_with_matching_seeds_heavy_edges():
    g, matching = load_graph_with_matching(DATA_DIR / "bipartite_warm.txt")

    assert g.edge_count == 3
    assert matching == {1: 3, 3: 1}


def test_load_graph_with_matching_skips_conflicting_edges(tmp_path):
    path = tmp_path / "g.txt"
    path.write_text("#DIGRAPH\nfalse\n#EDGES\n1 2 5\n2 3 5\n3 4 5\n")

    _, matching = load_graph_with_matching(path)
    assert matching == {1: 2, 2: 1, 3: 4, 4: 3}


def test_format_graph_round_trip(tmp_path):
    g = Graph(directed=True)
    g.add_edges_from([(2, 1, 3), (1, 3, 0.5)])
    text = format_graph(g)

    assert text.splitlines()[:3] == ["#DIGRAPH", "true", "#EDGES"]
    path = tmp_path / "out.txt"
    path.write_text(text)
    loaded = load_graph(path)
    assert loaded.directed is True
    assert loaded.logical_edges() == g.logical_edges()
