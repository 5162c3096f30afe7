from spellgraph.algorithms.bfs import breadth_first_search, shortest_path
from spellgraph.graph.digraph import Graph
from spellgraph.graph.unweighted import UnweightedGraph


def test_bfs_visits_each_node_once():
    g = Graph([("A", "B", 1), ("B", "A", 1), ("B", "C", 1), ("C", "A", 1)])
    assert breadth_first_search(g, "A") == ["A", "B", "C"]


def test_bfs_stops_at_destination():
    g = Graph([("A", "B", 1), ("A", "C", 1), ("C", "D", 1)])
    assert breadth_first_search(g, "A", "B") == ["A", "B"]
    assert breadth_first_search(g, "A", "A") == ["A"]


def test_bfs_unreachable_destination_visits_component():
    g = Graph([("A", "B", 1), ("C", "D", 1)])
    assert breadth_first_search(g, "A", "D") == ["A", "B"]


def test_shortest_path_fewest_edges_not_lowest_weight():
    g = Graph([("A", "B", 1), ("B", "C", 1), ("C", "D", 1), ("A", "D", 100)])
    assert shortest_path(g, "A", "D").nodes == ("A", "D")


def test_shortest_path_on_unweighted_graph():
    g = UnweightedGraph(edges=[(0, 1), (1, 2), (2, 3), (0, 2)])
    path = shortest_path(g, 0, 3)
    assert path.nodes == (0, 2, 3)
    assert len(path) == 2


def test_shortest_path_first_discovery_wins():
    # Both X and Y reach T; X is discovered first from S.
    g = Graph(
        [
            ("S", "X", 1),
            ("S", "Y", 1),
            ("Y", "T", 1),
            ("X", "T", 1),
        ]
    )
    assert shortest_path(g, "S", "T").nodes == ("S", "X", "T")


def test_shortest_path_missing_nodes():
    g = Graph([("A", "B", 1)])
    assert shortest_path(g, "A", "Z") is None
    assert shortest_path(g, "Z", "Z") is None
