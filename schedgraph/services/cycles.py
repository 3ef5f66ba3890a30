import logging

from ..utils.graph import build_edge_graph

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


def find_cycles(edges):
    """
    Report every directed cycle reachable by depth-first search.

    Roots are the ids referenced by ``edges`` in first-reference order;
    isolated nodes never appear. Each cycle lists its nodes in traversal
    order, starting at the node that closed it. The same cycle may be
    reported more than once if several roots reach it.

    Args:
        edges: Iterable of Dependency objects

    Returns:
        list: One list of node ids per cycle found
    """
    G = build_edge_graph(edges)
    cycles = []
    visited = set()

    for root in G.nodes():
        if root in visited:
            continue

        visited.add(root)
        path = [root]
        on_path = {root}
        stack = [iter(G.successors(root))]

        while stack:
            neighbor = next(stack[-1], _EXHAUSTED)

            if neighbor is _EXHAUSTED:
                stack.pop()
                on_path.discard(path.pop())
                continue

            if neighbor in on_path:
                cycle = path[path.index(neighbor):]
                logger.debug("Cycle found: %s", " -> ".join(map(str, cycle)))
                cycles.append(cycle)
            elif neighbor not in visited:
                visited.add(neighbor)
                on_path.add(neighbor)
                path.append(neighbor)
                stack.append(iter(G.successors(neighbor)))

    return cycles


def has_cycle(edges):
    return bool(find_cycles(edges))
