from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Set, Tuple, Union, overload

from spellgraph.algorithms.types import FlowSummary
from spellgraph.graph.base import NodeID, Weight
from spellgraph.logging import get_logger

if TYPE_CHECKING:
    from spellgraph.flow.network import FlowNetwork

logger = get_logger(__name__)


@overload
def calc_max_flow(
    network: FlowNetwork,
    *,
    return_summary: Literal[False] = False,
    copy_graph: bool = True,
) -> Weight: ...


@overload
def calc_max_flow(
    network: FlowNetwork,
    *,
    return_summary: Literal[True],
    copy_graph: bool = True,
) -> Tuple[Weight, FlowSummary]: ...


def calc_max_flow(
    network: FlowNetwork,
    *,
    return_summary: bool = False,
    copy_graph: bool = True,
) -> Union[Weight, Tuple[Weight, FlowSummary]]:
    """Compute the maximum flow from ``network.source`` to ``network.sink``.

    Repeatedly finds the augmenting path with the fewest edges (BFS over the
    edges currently present) and pushes its bottleneck weight through it,
    until the sink is no longer reachable. This is the only termination
    condition; with finite non-negative capacities it is always reached.

    Args:
        network: The flow network. Edge weights are capacities.
        return_summary: If True, also return a FlowSummary with per-edge flow,
            the residual network and the minimum cut.
        copy_graph: If True, augment a copy so ``network`` stays unmodified.
            If False, ``network`` itself becomes the residual network.

    Returns:
        The total flow, or ``(total_flow, summary)`` if ``return_summary``.

    Examples:
        >>> net = FlowNetwork("s", "t")
        >>> net.insert_edge("s", "a", 10)
        >>> net.insert_edge("a", "t", 5)
        >>> calc_max_flow(net)
        5
    """
    residual = network.copy() if copy_graph else network
    original = network.copy() if not copy_graph else network
    augmentations = _augment(residual)
    total_flow = _flow_out_of_source(original, residual)
    logger.debug(
        "Max flow %s after %d augmenting paths (%d nodes)",
        total_flow,
        augmentations,
        len(original),
    )
    if not return_summary:
        return total_flow
    return total_flow, _build_flow_summary(
        total_flow, original, residual, augmentations
    )


def maximum_flow_and_residual_network(
    network: FlowNetwork,
) -> Tuple[Weight, FlowNetwork]:
    """Return the maximum flow and the residual network; ``network`` is untouched."""
    residual = network.copy()
    _augment(residual)
    return _flow_out_of_source(network, residual), residual


def minimum_cut(network: FlowNetwork) -> Tuple[Set[NodeID], Set[NodeID]]:
    """Partition the nodes into the source and sink sides of a minimum cut.

    The source side is everything reachable from the source in the converged
    residual network; the sink side is the complement. A node whose incident
    capacity is saturated in every direction is therefore on the sink side.
    """
    _, residual = maximum_flow_and_residual_network(network)
    return _partition(residual)


def _augment(residual: FlowNetwork) -> int:
    count = 0
    path = residual.augmenting_path()
    while path is not None:
        pushed = residual.push_flow(path)
        count += 1
        logger.debug("Augmenting path %d: %s (pushed %s)", count, path, pushed)
        path = residual.augmenting_path()
    return count


def _flow_out_of_source(original: FlowNetwork, residual: FlowNetwork) -> Weight:
    # Source edges still present carried (original - residual); saturated ones
    # were removed and carried their whole capacity.
    flow: Weight = 0
    for _, dst_node, capacity in original.edges_from(original.source):
        remaining = residual.edge_value(original.source, dst_node)
        flow += capacity if remaining is None else capacity - remaining
    return flow


def _partition(residual: FlowNetwork) -> Tuple[Set[NodeID], Set[NodeID]]:
    source_side = set(residual.breadth_first_search(residual.source))
    sink_side = residual.nodes - source_side
    sink_side.add(residual.sink)
    return source_side, sink_side


def _build_flow_summary(
    total_flow: Weight,
    original: FlowNetwork,
    residual: FlowNetwork,
    augmentations: int,
) -> FlowSummary:
    """Build a FlowSummary from the original network and its residual."""
    source_side, sink_side = _partition(residual)

    # Pushing x along u -> v takes x from w(u, v) and adds it to w(v, u), so
    # capacity - remaining is the net flow u -> v, negative when it runs v -> u.
    edge_flow = {}
    for src_node, dst_node, capacity in original.edges():
        remaining = residual.edge_value(src_node, dst_node) or 0
        edge_flow[(src_node, dst_node)] = max(capacity - remaining, 0)

    min_cut = [
        (src_node, dst_node)
        for src_node, dst_node, _ in original.edges()
        if src_node in source_side and dst_node in sink_side
    ]
    cut_capacity = sum(original.edge_value(u, v) or 0 for u, v in min_cut)

    return FlowSummary(
        total_flow=total_flow,
        edge_flow=edge_flow,
        residual=residual,
        source_side=frozenset(source_side),
        sink_side=frozenset(sink_side),
        min_cut=min_cut,
        cut_capacity=cut_capacity,
        augmentations=augmentations,
    )
