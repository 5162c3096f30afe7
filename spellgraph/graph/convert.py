"""Graph conversion utilities between spellgraph graphs and NetworkX graphs.

Edge weights are stored under a single edge attribute (``capacity`` by
default, matching what `networkx.maximum_flow` expects). Flow networks
remember their terminals in the NetworkX graph attributes so that they can
be restored.
"""

from typing import Optional, Union

import networkx as nx

from spellgraph.flow.network import FlowNetwork
from spellgraph.graph.base import NodeID
from spellgraph.graph.digraph import Graph


def to_digraph(graph: Graph, weight_attr: str = "capacity") -> nx.DiGraph:
    """Convert a Graph (or FlowNetwork) to a NetworkX DiGraph.

    Args:
        graph: The graph to convert.
        weight_attr: Name of the edge attribute receiving the weight.

    Returns:
        A NetworkX DiGraph with the same nodes and weighted edges. For flow
        networks, ``nx_graph.graph`` holds ``source`` and ``sink``.
    """
    nx_graph = nx.DiGraph()
    nx_graph.add_nodes_from(graph)
    for src_node, dst_node, weight in graph.edges():
        nx_graph.add_edge(src_node, dst_node, **{weight_attr: weight})
    if isinstance(graph, FlowNetwork):
        nx_graph.graph["source"] = graph.source
        nx_graph.graph["sink"] = graph.sink
    return nx_graph


def from_digraph(
    nx_graph: nx.DiGraph,
    weight_attr: str = "capacity",
    source: Optional[NodeID] = None,
    sink: Optional[NodeID] = None,
) -> Union[Graph, FlowNetwork]:
    """Convert a NetworkX DiGraph to a Graph, or a FlowNetwork when terminals are known.

    Terminals are taken from the arguments, falling back to the ``source`` and
    ``sink`` graph attributes written by `to_digraph`. Edges without the
    weight attribute get weight 1; edges with weight zero are dropped.

    Args:
        nx_graph: The NetworkX graph to convert.
        weight_attr: Name of the edge attribute holding the weight.
        source: Source node for a flow network.
        sink: Sink node for a flow network.

    Returns:
        A FlowNetwork if both terminals are known, otherwise a Graph.
    """
    source = nx_graph.graph.get("source") if source is None else source
    sink = nx_graph.graph.get("sink") if sink is None else sink

    graph: Graph
    if source is not None and sink is not None:
        graph = FlowNetwork(source, sink)
    else:
        graph = Graph()
    for node in nx_graph.nodes:
        graph.create_node(node)
    for src_node, dst_node, data in nx_graph.edges(data=True):
        graph.insert_edge(src_node, dst_node, data.get(weight_attr, 1))
    return graph
