from collections import deque

import networkx as nx


def build_dependency_graph(graph):
    """Build a directed multigraph representing the schedule's dependencies"""
    return graph.to_networkx()


def build_edge_graph(edges):
    """
    Build a directed graph from an edge list alone.

    Vertices are every id referenced by an edge, in first-reference order
    (source before target); parallel edges collapse into one arc.
    """
    G = nx.DiGraph()
    for edge in edges:
        G.add_edge(edge.source, edge.target)
    return G


def topological_order(G):
    """
    Kahn's algorithm with a FIFO queue.

    Returns the processed vertices in order. Vertices on a cycle, or
    downstream of one, never reach in-degree zero and are left out.
    """
    in_degree = dict(G.in_degree())
    queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
    order = []

    while queue:
        current = queue.popleft()
        order.append(current)

        # one decrement per arc, so parallel arcs are counted correctly
        for _, neighbor in G.out_edges(current):
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    return order


def unordered_nodes(G, order):
    """Vertices of ``G`` that ``topological_order`` could not place."""
    placed = set(order)
    return [node_id for node_id in G.nodes() if node_id not in placed]
