import random

import pytest

from spellgraph.graph.base import OrderedPair, pairs
from spellgraph.graph.digraph import Graph
from spellgraph.graph.path import Path


def test_graph_init_and_nodes():
    g = Graph([("A", "B", 1), ("B", "C", 2)])
    assert g.nodes == {"A", "B", "C"}
    assert len(g) == 3
    assert list(g) == ["A", "B", "C"]


def test_create_node_is_idempotent():
    g = Graph()
    assert g.create_node("A") == "A"
    g.insert_edge("A", "B", 3)
    g.create_node("A")
    assert g.edge_value("A", "B") == 3
    assert len(g) == 2


def test_insert_edge_replaces_weight_and_keeps_position():
    g = Graph()
    g.insert_edge("A", "B", 1)
    g.insert_edge("A", "C", 1)
    g.insert_edge("A", "B", 5)
    assert g.edge_value("A", "B") == 5
    assert g.neighbors("A") == ["B", "C"]


def test_insert_zero_weight_removes_edge():
    g = Graph([("A", "B", 4)])
    g.insert_edge("A", "B", 0)
    assert not g.has_edge("A", "B")
    assert g.edge_value("A", "B") is None
    # Nodes survive edge removal
    assert g.nodes == {"A", "B"}


def test_insert_zero_weight_on_absent_edge_creates_nodes_only():
    g = Graph()
    g.insert_edge("X", "Y", 0)
    assert g.nodes == {"X", "Y"}
    assert list(g.edges()) == []


def test_zero_weight_is_never_stored():
    rng = random.Random(7)
    g = Graph()
    for _ in range(500):
        src, dst = rng.randrange(6), rng.randrange(6)
        g.insert_edge(src, dst, rng.choice([0, 0, 1, 2, 3]))
    assert all(weight != 0 for _, _, weight in g.edges())


def test_remove_edge_absent_is_noop():
    g = Graph([("A", "B", 1)])
    g.remove_edge("B", "A")
    g.remove_edge("Z", "Q")
    assert g.edge_value("A", "B") == 1


def test_remove_node_drops_incident_edges():
    g = Graph([("A", "B", 1), ("B", "C", 1), ("C", "A", 1)])
    g.remove_node("B")
    assert g.nodes == {"A", "C"}
    assert list(g.edges()) == [("C", "A", 1)]
    g.remove_node("missing")


def test_edge_queries():
    g = Graph([("A", "B", 1), ("B", "C", 2), ("C", "A", 3)])
    assert g.edges_from("B") == [("B", "C", 2)]
    assert g.edges_from("missing") == []
    assert g.edges_containing("A") == {OrderedPair("A", "B"), OrderedPair("C", "A")}
    assert g.get_adj_out() == {"A": {"B": 1}, "B": {"C": 2}, "C": {"A": 3}}


def test_contains():
    g = Graph([("A", "B", 1)])
    assert "A" in g
    assert g.contains("B")
    assert "C" not in g


def test_insert_path():
    g = Graph()
    g.insert_path(Path(("A", "B", "C")), 2)
    assert list(g.edges()) == [("A", "B", 2), ("B", "C", 2)]


def test_make_path():
    g = Graph([("A", "B", 1), ("B", "C", 1)])
    path = g.make_path(["A", "B", "C"])
    assert path.nodes == ("A", "B", "C")
    with pytest.raises(ValueError, match="No edge"):
        g.make_path(["A", "C"])


def test_shortest_path_prefers_first_inserted_neighbor():
    # A -> B -> D and A -> C -> D are equally short
    g = Graph([("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "D", 1)])
    assert g.shortest_path("A", "D").nodes == ("A", "B", "D")

    g2 = Graph([("A", "C", 1), ("A", "B", 1), ("B", "D", 1), ("C", "D", 1)])
    assert g2.shortest_path("A", "D").nodes == ("A", "C", "D")


def test_shortest_path_unreachable_or_missing():
    g = Graph([("A", "B", 1)])
    g.create_node("C")
    assert g.shortest_path("A", "C") is None
    assert g.shortest_path("B", "A") is None
    assert g.shortest_path("A", "missing") is None
    assert g.shortest_path("missing", "A") is None


def test_shortest_path_to_self():
    g = Graph([("A", "B", 1)])
    path = g.shortest_path("A", "A")
    assert path.nodes == ("A",)
    assert len(path) == 0


def test_breadth_first_search_order():
    g = Graph([("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "E", 1), ("D", "A", 1)])
    assert g.breadth_first_search("A") == ["A", "B", "C", "D", "E"]
    assert g.breadth_first_search("A", "C") == ["A", "B", "C"]
    assert g.breadth_first_search("E") == ["E"]


def test_map_nodes_and_reversed():
    g = Graph([(1, 2, 5), (2, 3, 7)])
    mapped = g.map_nodes(lambda n: n * 10)
    assert list(mapped.edges()) == [(10, 20, 5), (20, 30, 7)]

    flipped = g.reversed()
    assert flipped.edge_value(2, 1) == 5
    assert flipped.edge_value(3, 2) == 7
    assert not flipped.has_edge(1, 2)


def test_undirected_inserts_reverse_edges():
    g = Graph([("A", "B", 2)])
    both = g.undirected()
    assert both.edge_value("A", "B") == 2
    assert both.edge_value("B", "A") == 2
    # Original untouched
    assert not g.has_edge("B", "A")


def test_copy_is_independent():
    g = Graph([("A", "B", 1)])
    c = g.copy()
    assert c == g
    c.insert_edge("B", "C", 4)
    assert c != g
    assert not g.has_edge("B", "C")


def test_str():
    g = Graph([("A", "B", 1), ("A", "C", 1)])
    g.create_node("D")
    assert str(g) == "A -> [B,C]\nB -> []\nC -> []\nD -> []"


def test_path_value_type():
    path = Path(("A", "B", "C"))
    assert path.source == "A"
    assert path.destination == "C"
    assert len(path) == 2
    assert path.edges == [OrderedPair("A", "B"), OrderedPair("B", "C")]
    assert list(path) == ["A", "B", "C"]
    assert str(path) == "A -> B -> C"
    with pytest.raises(ValueError):
        Path(())


def test_pairs():
    assert pairs([1, 2, 3]) == [(1, 2), (2, 3)]
    assert pairs([1]) == []
    assert pairs([]) == []
