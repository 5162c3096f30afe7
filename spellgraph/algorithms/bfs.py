from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from spellgraph.graph.base import GraphProtocol, NodeID
from spellgraph.graph.path import Path


def breadth_first_search(
    graph: GraphProtocol,
    source: NodeID,
    destination: Optional[NodeID] = None,
) -> List[NodeID]:
    """
    Breadth-first search.

    Nodes are returned in discovery order, each exactly once, starting with
    ``source``. Neighbors are expanded in the order ``graph.neighbors``
    yields them. If ``destination`` is given, the search stops as soon as it
    is discovered.
    """
    visited = [source]
    seen = {source}
    if source == destination:
        return visited
    queue = deque([source])
    while queue:
        node = queue.popleft()
        for neighbor in graph.neighbors(node):
            if neighbor in seen:
                continue
            seen.add(neighbor)
            visited.append(neighbor)
            if neighbor == destination:
                return visited
            queue.append(neighbor)
    return visited


def shortest_path(
    graph: GraphProtocol, source: NodeID, destination: NodeID
) -> Optional[Path]:
    """Return the path with the fewest edges from ``source`` to ``destination``.

    Among equally short paths the first one reached by the BFS frontier wins:
    each node keeps the predecessor that discovered it first, and neighbors
    are expanded in ``graph.neighbors`` order. Max-flow augmentation relies on
    this tie-break, so it is part of the contract.

    Returns:
        The path, or None when ``destination`` is unreachable or either node
        is missing from the graph.
    """
    if not graph.contains(source) or not graph.contains(destination):
        return None
    if source == destination:
        return Path((source,))

    # Each discovered node maps to the node it was discovered from.
    pred: Dict[NodeID, Optional[NodeID]] = {source: None}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        for neighbor in graph.neighbors(node):
            if neighbor in pred:
                continue
            pred[neighbor] = node
            if neighbor == destination:
                return _backtrace(pred, source, destination)
            queue.append(neighbor)
    return None


def _backtrace(
    pred: Dict[NodeID, Optional[NodeID]], source: NodeID, destination: NodeID
) -> Path:
    nodes = [destination]
    current = destination
    while current != source:
        current = pred[current]
        nodes.append(current)
    return Path(tuple(reversed(nodes)))
