import logging

from ..domain.edge import DependencyType
from ..domain.node import NodeKind
from ..utils.dates import add_days
from ..utils.graph import build_dependency_graph, topological_order
from .conflicts import find_conflicts
from .constraints import DEFAULT_DURATION_DAYS
from .propagation import PropagationResult

logger = logging.getLogger(__name__)


def earliest_start(graph, node_id):
    """
    Latest "next available" date implied by a node's incoming edges.

    A finish_to_start predecessor frees the day after its due date; the
    other constraint types free the due date itself. Predecessors without
    a due date are ignored.

    Returns:
        date: The earliest permissible start, or None if no predecessor
        is dated
    """
    latest = None
    for edge in graph.incoming(node_id):
        predecessor = graph.get_node(edge.source)
        if predecessor is None or predecessor.due_date is None:
            continue

        if edge.dependency_type == DependencyType.FINISH_TO_START:
            candidate = add_days(predecessor.due_date, 1)
        else:
            candidate = predecessor.due_date

        if latest is None or candidate > latest:
            latest = candidate
    return latest


def auto_schedule(graph, default_duration_days=DEFAULT_DURATION_DAYS, policy=None):
    """
    Give dates to tasks that have no start date yet.

    Tasks are visited in dependency order, so a task scheduled here can
    in turn anchor its own dependents. Tasks that already have a start,
    have no incoming edges, or have no dated predecessor are left alone.

    Args:
        graph: ScheduleGraph; it is not modified
        default_duration_days: Duration for tasks that have none
        policy: WorkloadPolicy passed to the conflict detector

    Returns:
        PropagationResult
    """
    updated = graph.copy()
    order = topological_order(build_dependency_graph(updated))
    scheduled = 0

    for node_id in order:
        node = updated.nodes[node_id]
        if node.kind != NodeKind.TASK or node.start_date is not None:
            continue

        start_date = earliest_start(updated, node_id)
        if start_date is None:
            continue

        duration = node.duration_days
        if duration is None:
            duration = default_duration_days

        node.clear_dates()
        node.set_dates(start_date, add_days(start_date, duration))
        scheduled += 1
        logger.debug("Scheduled %s from %s for %d day(s)", node_id, start_date, duration)

    logger.info("Auto-scheduled %d task(s)", scheduled)
    conflicts = find_conflicts(updated.nodes, updated.edges, policy)
    return PropagationResult(updated, conflicts)
