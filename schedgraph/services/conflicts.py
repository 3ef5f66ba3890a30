import logging

from ..domain.conflict import Conflict
from ..domain.edge import DependencyType
from ..domain.node import NodeKind
from .cycles import find_cycles

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 8
WEEKLY_HOUR_LIMIT = 40


class WorkloadPolicy:
    """
    Working-time assumptions behind the over-allocation check.

    Args:
        hours_per_day: Hours booked per day of task duration
        weekly_hour_limit: Total hours above which a person is over-allocated
    """

    def __init__(self, hours_per_day=HOURS_PER_DAY, weekly_hour_limit=WEEKLY_HOUR_LIMIT):
        if not isinstance(hours_per_day, (int, float)) or hours_per_day <= 0:
            raise ValueError("Hours per day must be a positive number")
        if not isinstance(weekly_hour_limit, (int, float)) or weekly_hour_limit < 0:
            raise ValueError("Weekly hour limit must be a non-negative number")
        self.hours_per_day = hours_per_day
        self.weekly_hour_limit = weekly_hour_limit

    def task_hours(self, task):
        # tasks with no known or a zero duration are booked as a single day
        duration = task.effective_duration or 1
        return duration * self.hours_per_day

    def __repr__(self):
        return (
            f"WorkloadPolicy(hours_per_day={self.hours_per_day}, "
            f"weekly_hour_limit={self.weekly_hour_limit})"
        )


class Workload:
    """Booked hours for one person."""

    def __init__(self, person_id, total_hours, task_ids, is_over_allocated):
        self.person_id = person_id
        self.total_hours = total_hours
        self.task_ids = task_ids
        self.is_over_allocated = is_over_allocated

    def to_dict(self):
        return {
            "totalHours": self.total_hours,
            "tasks": list(self.task_ids),
            "isOverAllocated": self.is_over_allocated,
        }

    def __repr__(self):
        return (
            f"Workload({self.person_id!r}, total_hours={self.total_hours}, "
            f"over_allocated={self.is_over_allocated})"
        )


def _index_nodes(nodes):
    if isinstance(nodes, dict):
        return dict(nodes)
    return {node.id: node for node in nodes}


def _tasks(node_index):
    return [node for node in node_index.values() if node.kind == NodeKind.TASK]


def edge_violation(source, target, edge):
    """
    Check one edge against its endpoints' current dates.

    Returns:
        str: A message describing the violation, or None when the edge
        holds or a date it needs is missing
    """
    constraint = edge.dependency_type

    if constraint == DependencyType.FINISH_TO_START:
        if source.due_date and target.start_date and source.due_date > target.start_date:
            return f"{target.title} starts before {source.title} finishes"
    elif constraint == DependencyType.START_TO_START:
        if source.start_date and target.start_date and source.start_date > target.start_date:
            return f"{target.title} starts before {source.title} starts"
    elif constraint == DependencyType.FINISH_TO_FINISH:
        if source.due_date and target.due_date and source.due_date > target.due_date:
            return f"{target.title} finishes before {source.title} finishes"
    return None


def find_circular_conflicts(edges):
    conflicts = []
    for index, cycle in enumerate(find_cycles(edges)):
        conflicts.append(
            Conflict(
                id=f"circular-{index}",
                kind="circular_dependency",
                severity="error",
                message=f"Circular dependency detected: {' → '.join(map(str, cycle))}",
                node_ids=cycle,
            )
        )
    return conflicts


def find_date_conflicts(node_index, edges):
    """
    Re-check every edge and flag the ones whose dates no longer hold.

    Sets ``is_blocked``/``blocked_by`` on every edge evaluated, clearing
    them on edges that hold, so repeated calls agree.
    """
    conflicts = []

    for edge in edges:
        edge.is_blocked = False
        edge.blocked_by = None

        source = node_index.get(edge.source)
        target = node_index.get(edge.target)
        if source is None or target is None:
            continue

        message = edge_violation(source, target, edge)
        if message is None:
            continue

        edge.is_blocked = True
        edge.blocked_by = edge.source
        conflicts.append(
            Conflict(
                id=f"date-conflict-{edge.id}",
                kind="date_conflict",
                severity="error",
                message=message,
                node_ids=[edge.source, edge.target],
                edge_id=edge.id,
            )
        )

    return conflicts


def collect_workloads(node_index, policy):
    """Map each assignee id to (task ids, total hours) in first-seen order."""
    workloads = {}
    for task in _tasks(node_index):
        hours = policy.task_hours(task)
        for person_id in task.assignees:
            task_ids, total = workloads.get(person_id, ([], 0))
            task_ids.append(task.id)
            workloads[person_id] = (task_ids, total + hours)
    return workloads


def find_over_allocations(node_index, policy):
    conflicts = []

    for person_id, (task_ids, total_hours) in collect_workloads(node_index, policy).items():
        if total_hours <= policy.weekly_hour_limit:
            continue

        person = node_index.get(person_id)
        name = person.title if person is not None else "Person"
        conflicts.append(
            Conflict(
                id=f"overallocated-{person_id}",
                kind="over_allocation",
                severity="warning",
                message=f"{name} is over-allocated with {total_hours} hours",
                node_ids=[person_id] + task_ids,
            )
        )

    return conflicts


def find_deliverable_conflicts(node_index):
    conflicts = []
    tasks = _tasks(node_index)

    for node in node_index.values():
        if node.kind != NodeKind.DELIVERABLE or node.due_date is None:
            continue

        late_tasks = [
            task
            for task in tasks
            if task.parent_id == node.id
            and not task.is_done
            and task.due_date is not None
            and task.due_date > node.due_date
        ]
        if not late_tasks:
            continue

        conflicts.append(
            Conflict(
                id=f"deliverable-conflict-{node.id}",
                kind="deliverable_conflict",
                severity="warning",
                message=(
                    f"{node.title} is due before {len(late_tasks)} "
                    "child task(s) are complete"
                ),
                node_ids=[node.id] + [task.id for task in late_tasks],
            )
        )

    return conflicts


def find_conflicts(nodes, edges, policy=None):
    """
    Detect every scheduling conflict in the current graph state.

    Runs four independent checks and concatenates their results in this
    order: circular dependencies, date conflicts, over-allocated people,
    deliverable conflicts.

    Args:
        nodes: Mapping of id to node, or an iterable of nodes
        edges: Iterable of Dependency objects; ``is_blocked`` is rewritten
        policy: WorkloadPolicy for the over-allocation check

    Returns:
        list: Conflict objects
    """
    policy = policy or WorkloadPolicy()
    node_index = _index_nodes(nodes)
    edges = list(edges)

    conflicts = []
    conflicts.extend(find_circular_conflicts(edges))
    conflicts.extend(find_date_conflicts(node_index, edges))
    conflicts.extend(find_over_allocations(node_index, policy))
    conflicts.extend(find_deliverable_conflicts(node_index))

    logger.debug(
        "Found %d conflict(s) across %d node(s) and %d edge(s)",
        len(conflicts),
        len(node_index),
        len(edges),
    )
    return conflicts


def person_workload(person_id, graph, policy=None):
    """
    Total the hours booked to one person across their assigned tasks.

    Hours follow the same rule as the over-allocation check, so the two
    always agree: every assigned task counts, dated or not, at its
    duration (``due - start``, not the inclusive ``due - start + 1``) times
    ``hours_per_day``. An older per-person view counted only fully dated
    tasks and used inclusive days; that rule is not reproduced here.

    Args:
        person_id: ID of the person node
        graph: ScheduleGraph
        policy: WorkloadPolicy

    Returns:
        Workload: Hours, contributing task ids and the over-allocation flag
    """
    policy = policy or WorkloadPolicy()
    task_ids = []
    total_hours = 0

    for task in _tasks(graph.nodes):
        if person_id in task.assignees:
            task_ids.append(task.id)
            total_hours += policy.task_hours(task)

    return Workload(
        person_id,
        total_hours,
        task_ids,
        total_hours > policy.weekly_hour_limit,
    )
