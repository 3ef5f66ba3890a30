import logging

from ..utils.graph import build_dependency_graph, topological_order, unordered_nodes
from .cycles import find_cycles

logger = logging.getLogger(__name__)


class CriticalPathResult:
    """
    Critical path plus what the calculation had to leave out.

    Attributes:
        path: Node ids of the longest chain, in order
        length_days: Summed duration of the nodes before the path's end
        excluded_node_ids: Nodes never ordered because of a cycle
        cycles: Cycles reported by the cycle detector
    """

    def __init__(self, path, length_days, excluded_node_ids=None, cycles=None):
        self.path = path
        self.length_days = length_days
        self.excluded_node_ids = excluded_node_ids or []
        self.cycles = cycles or []

    @property
    def is_degenerate(self):
        """True when cycles kept part of the graph out of the calculation."""
        return bool(self.excluded_node_ids)

    def __repr__(self):
        return f"CriticalPathResult(path={self.path}, length_days={self.length_days})"


def _longest_path(graph):
    G = build_dependency_graph(graph)
    order = topological_order(G)

    distances = {node_id: 0 for node_id in G.nodes()}
    predecessors = {node_id: None for node_id in G.nodes()}

    for current in order:
        node = graph.nodes[current]
        # undated nodes are ordered but never extend a path
        if not node.has_dates:
            continue

        new_distance = distances[current] + node.effective_duration
        for _, neighbor in G.out_edges(current):
            if new_distance > distances[neighbor]:
                distances[neighbor] = new_distance
                predecessors[neighbor] = current

    max_distance = 0
    end_node = None
    for node_id in order:
        if distances[node_id] > max_distance:
            max_distance = distances[node_id]
            end_node = node_id

    path = []
    current = end_node
    while current is not None:
        path.insert(0, current)
        current = predecessors[current]

    return path, max_distance, unordered_nodes(G, order)


def critical_path(graph):
    """
    Find the longest duration-weighted chain of dependent nodes.

    Nodes are relaxed in Kahn order; each dated node adds its duration to
    the distance of its successors. The path ends at the first node, in
    processing order, with the greatest distance.

    Args:
        graph: ScheduleGraph

    Returns:
        list: Node ids along the critical path, or an empty list when no
        dated node feeds another
    """
    path, _, _ = _longest_path(graph)
    return path


def analyze_critical_path(graph):
    """
    Critical path with cycle handling made explicit.

    Cycle members cannot be ordered and so never take part in the path;
    this reports them instead of dropping them silently.
    """
    cycles = find_cycles(graph.edges)
    path, length, excluded = _longest_path(graph)

    if excluded:
        logger.warning(
            "Critical path excludes %d node(s) on or behind a cycle: %s",
            len(excluded),
            ", ".join(map(str, excluded)),
        )

    return CriticalPathResult(path, length, excluded, cycles)
