import copy
from typing import Dict, List, Optional

import networkx as nx

from .edge import Dependency
from .node import ScheduleNode


class GraphError(Exception):
    """Exception raised for errors in the ScheduleGraph class."""

    pass


class ScheduleGraph:
    """
    The node set plus the edge set of a project schedule.

    Nodes are kept in an insertion-ordered dict keyed by id and edges in
    a list, so every traversal is deterministic. Edges may reference ids
    that are not (or no longer) in the node set; the services skip them.
    """

    def __init__(self, nodes=None, edges=None):
        self.nodes: Dict[str, ScheduleNode] = {}
        self.edges: List[Dependency] = []

        for node in nodes or []:
            self.add_node(node)
        for edge in edges or []:
            self.add_edge(edge)

    def add_node(self, node: ScheduleNode) -> "ScheduleGraph":
        """Add a node to the graph"""
        if not isinstance(node, ScheduleNode):
            raise GraphError(f"Expected a ScheduleNode, got {type(node).__name__}")
        if node.id in self.nodes:
            raise GraphError(f"Node {node.id} already exists in the graph")
        self.nodes[node.id] = node
        return self

    def add_edge(self, edge: Dependency) -> "ScheduleGraph":
        """Add a dependency to the graph"""
        if not isinstance(edge, Dependency):
            raise GraphError(f"Expected a Dependency, got {type(edge).__name__}")
        self.edges.append(edge)
        return self

    def get_node(self, node_id) -> Optional[ScheduleNode]:
        return self.nodes.get(node_id)

    def get_edge(self, edge_id) -> Optional[Dependency]:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def outgoing(self, node_id) -> List[Dependency]:
        """Edges whose predecessor is ``node_id`` (its dependents)."""
        return [edge for edge in self.edges if edge.source == node_id]

    def incoming(self, node_id) -> List[Dependency]:
        """Edges whose dependent is ``node_id`` (its dependencies)."""
        return [edge for edge in self.edges if edge.target == node_id]

    def find_edge(self, source, target) -> Optional[Dependency]:
        """
        Find the dependency between an ordered pair of nodes.

        When several edges join the same pair the last one added wins.
        """
        found = None
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                found = edge
        return found

    def connected_nodes(self, node_id) -> List[str]:
        """IDs of every node joined to ``node_id`` by an edge, either direction."""
        connected = []
        for edge in self.edges:
            if edge.source == node_id and edge.target not in connected:
                connected.append(edge.target)
            if edge.target == node_id and edge.source not in connected:
                connected.append(edge.source)
        return connected

    def nodes_of_kind(self, kind) -> List[ScheduleNode]:
        kind_value = getattr(kind, "value", kind)
        return [node for node in self.nodes.values() if node.kind.value == kind_value]

    def copy(self) -> "ScheduleGraph":
        """Deep snapshot; edits to the copy never reach this graph."""
        return ScheduleGraph(
            nodes=[copy.deepcopy(node) for node in self.nodes.values()],
            edges=[copy.deepcopy(edge) for edge in self.edges],
        )

    def to_networkx(self):
        """
        Build a directed multigraph of the schedule.

        Every node becomes a vertex carrying its ``node`` object; every edge
        whose endpoints both exist becomes an arc keyed by the edge id.
        """
        G = nx.MultiDiGraph()

        for node_id, node in self.nodes.items():
            G.add_node(node_id, node_type=node.kind.value, node=node)

        for edge in self.edges:
            if edge.source in self.nodes and edge.target in self.nodes:
                G.add_edge(edge.source, edge.target, key=edge.id, type=edge.type)

        return G

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, node_id):
        return node_id in self.nodes

    def __repr__(self):
        return f"ScheduleGraph(nodes={len(self.nodes)}, edges={len(self.edges)})"
