import logging

from ..domain.node import NodeError
from ..utils.dates import add_days, as_date
from .conflicts import find_conflicts
from .constraints import DEFAULT_DURATION_DAYS, resolve

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class PropagationResult:
    """
    Outcome of a date cascade or an auto-schedule run.

    Attributes:
        graph: The updated ScheduleGraph snapshot
        conflicts: Conflicts detected on the snapshot
        aborted_cycles: Propagation paths that were cut because they
            re-entered a node already on the path; each ends with the
            re-entered node
    """

    def __init__(self, graph, conflicts=None, aborted_cycles=None):
        self.graph = graph
        self.conflicts = conflicts or []
        self.aborted_cycles = aborted_cycles or []

    @property
    def nodes(self):
        return self.graph.nodes

    @property
    def aborted(self):
        return bool(self.aborted_cycles)

    def __repr__(self):
        return (
            f"PropagationResult(nodes={len(self.graph.nodes)}, "
            f"conflicts={len(self.conflicts)}, aborted={self.aborted})"
        )


def apply_edit(node, new_start=None, new_due=None):
    """
    Write a direct date edit onto a node.

    When only one date is supplied and it would cross the other, the other
    date moves with it so the node keeps its duration.

    Raises:
        NodeError: If the node carries no dates, a value is not a date, or
            both dates are supplied and due precedes start
    """
    if not node.is_schedulable:
        return node.set_dates(new_start, new_due)

    try:
        new_start = as_date(new_start)
        new_due = as_date(new_due)
    except TypeError as e:
        raise NodeError(f"Invalid date for node {node.id}: {e}")
    duration = node.effective_duration or 0

    if new_start is not None and new_due is None:
        if node.due_date is not None and new_start > node.due_date:
            new_due = add_days(new_start, duration)
    elif new_due is not None and new_start is None:
        if node.start_date is not None and new_due < node.start_date:
            new_start = add_days(new_due, -duration)

    if new_start is not None and new_due is not None:
        node.clear_dates()
    node.set_dates(new_start, new_due)
    return node


def propagate(
    graph,
    changed_node_id,
    new_start=None,
    new_due=None,
    default_duration_days=DEFAULT_DURATION_DAYS,
    policy=None,
):
    """
    Push a date change through every transitively dependent node.

    A node reachable along several paths takes the dates implied by the
    path that a depth-first cascade in edge order would visit last. That
    path is the one found first by a depth-first search taking outgoing
    edges last to first, so each node is resolved exactly once, from its
    already final predecessor, and the cost stays linear in the graph.
    The search uses an explicit stack; an edge leading back onto the
    active path is a cycle and is reported, not followed.

    Args:
        graph: ScheduleGraph; it is not modified
        changed_node_id: ID of the node whose dates were edited
        new_start: New start date for that node, if changed
        new_due: New due date for that node, if changed
        default_duration_days: Duration for dependents that have none
        policy: WorkloadPolicy passed to the conflict detector

    Returns:
        PropagationResult

    Raises:
        NodeError: If the edit cannot be applied to the changed node (see
            ``apply_edit``)
    """
    updated = graph.copy()
    changed = updated.get_node(changed_node_id)
    if changed is None:
        logger.debug("Node %s not found, nothing to propagate", changed_node_id)
        return PropagationResult(updated)

    if new_start is not None or new_due is not None:
        apply_edit(changed, new_start, new_due)

    outgoing = {}
    for edge in updated.edges:
        outgoing.setdefault(edge.source, []).append(edge)

    aborted_cycles = []
    visited = {changed_node_id}
    path = [changed_node_id]
    on_path = {changed_node_id}
    stack = [reversed(outgoing.get(changed_node_id, []))]

    while stack:
        edge = next(stack[-1], _EXHAUSTED)
        if edge is _EXHAUSTED:
            stack.pop()
            on_path.discard(path.pop())
            continue

        predecessor = updated.get_node(edge.source)
        dependent = updated.get_node(edge.target)
        if predecessor is None or dependent is None:
            continue

        if dependent.id in on_path:
            cycle = path[path.index(dependent.id):] + [dependent.id]
            logger.warning(
                "Propagation aborted through cycle: %s",
                " -> ".join(map(str, cycle)),
            )
            aborted_cycles.append(cycle)
            continue

        if dependent.id in visited:
            continue

        new_dates = resolve(predecessor, dependent, edge.type, default_duration_days)
        if new_dates is None:
            continue

        visited.add(dependent.id)
        # clear first so the new pair is validated as a whole
        dependent.clear_dates()
        dependent.set_dates(new_dates.start_date, new_dates.due_date)
        logger.debug(
            "%s %s -> %s: %s to %s",
            edge.type,
            predecessor.id,
            dependent.id,
            new_dates.start_date,
            new_dates.due_date,
        )

        path.append(dependent.id)
        on_path.add(dependent.id)
        stack.append(reversed(outgoing.get(dependent.id, [])))

    conflicts = find_conflicts(updated.nodes, updated.edges, policy)
    return PropagationResult(updated, conflicts, aborted_cycles)
