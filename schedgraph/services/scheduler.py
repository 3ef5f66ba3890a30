import logging

from ..domain.node import NodeKind
from ..utils.dates import DateRange
from .auto_schedule import auto_schedule
from .conflicts import (
    HOURS_PER_DAY,
    WEEKLY_HOUR_LIMIT,
    WorkloadPolicy,
    find_conflicts,
    person_workload,
)
from .constraints import DEFAULT_DURATION_DAYS
from .critical_path import analyze_critical_path, critical_path
from .cycles import find_cycles
from .propagation import propagate

logger = logging.getLogger(__name__)


def schedule_span(graph, node_ids=None):
    """
    Earliest start and latest due date over a group of nodes.

    A node with only one date contributes it as both its start and its
    end. People and unknown ids are ignored.

    Args:
        graph: ScheduleGraph
        node_ids: IDs to cover; all nodes when omitted

    Returns:
        DateRange, or None when none of the nodes is dated
    """
    if node_ids is None:
        node_ids = list(graph.nodes)

    start_date = None
    end_date = None
    for node_id in node_ids:
        node = graph.get_node(node_id)
        if node is None or not node.is_schedulable:
            continue

        possible_start = node.start_date or node.due_date
        possible_end = node.due_date or node.start_date
        if possible_start is not None and (start_date is None or possible_start < start_date):
            start_date = possible_start
        if possible_end is not None and (end_date is None or possible_end > end_date):
            end_date = possible_end

    if start_date is None:
        return None
    return DateRange(start_date, end_date)


class ScheduleEngine:
    """
    Configured entry point to the scheduling services.

    The engine keeps no graph of its own: every call takes a ScheduleGraph
    and returns fresh results, so one engine can serve any number of
    projects.
    """

    def __init__(
        self,
        hours_per_day=HOURS_PER_DAY,
        weekly_hour_limit=WEEKLY_HOUR_LIMIT,
        default_duration_days=DEFAULT_DURATION_DAYS,
    ):
        if (
            isinstance(default_duration_days, bool)
            or not isinstance(default_duration_days, int)
            or default_duration_days < 0
        ):
            raise ValueError("Default duration must be a non-negative whole number of days")

        self.policy = WorkloadPolicy(hours_per_day, weekly_hour_limit)
        self.default_duration_days = default_duration_days

    def propagate(self, graph, node_id, new_start=None, new_due=None):
        """Cascade a date edit on ``node_id`` through its dependents"""
        return propagate(
            graph,
            node_id,
            new_start,
            new_due,
            default_duration_days=self.default_duration_days,
            policy=self.policy,
        )

    def find_conflicts(self, graph):
        return find_conflicts(graph.nodes, graph.edges, self.policy)

    def find_cycles(self, graph):
        return find_cycles(graph.edges)

    def critical_path(self, graph):
        return critical_path(graph)

    def analyze_critical_path(self, graph):
        return analyze_critical_path(graph)

    def auto_schedule(self, graph):
        """Schedule every undated task that has a dated predecessor"""
        return auto_schedule(
            graph,
            default_duration_days=self.default_duration_days,
            policy=self.policy,
        )

    def person_workload(self, person_id, graph):
        return person_workload(person_id, graph, self.policy)

    def schedule_span(self, graph, node_ids=None):
        return schedule_span(graph, node_ids)

    def generate_report(self, graph):
        """
        Build a plain-text summary of the schedule.

        Lists every dated node, the critical path, each person's workload
        and the current conflicts.

        Args:
            graph: ScheduleGraph

        Returns:
            str: The report text
        """
        lines = ["Schedule Report", "==============="]

        span = schedule_span(graph)
        if span is not None:
            lines.append(
                f"Span: {span.start_date} to {span.due_date} ({span.duration_days} days)"
            )
        lines.append("")

        lines.append("Items:")
        for node in graph.nodes.values():
            if not node.is_schedulable:
                continue
            start = node.start_date.isoformat() if node.start_date else "-"
            due = node.due_date.isoformat() if node.due_date else "-"
            lines.append(f"  {node.id:<12} {node.kind.value:<12} {start:<10} {due:<10} {node.title}")
        lines.append("")

        result = analyze_critical_path(graph)
        if result.path:
            lines.append(f"Critical path ({result.length_days} days):")
            lines.append("  " + " -> ".join(str(node_id) for node_id in result.path))
        else:
            lines.append("Critical path: none")
        if result.is_degenerate:
            lines.append(
                "  (excluded, on or behind a cycle: "
                + ", ".join(map(str, result.excluded_node_ids))
                + ")"
            )
        lines.append("")

        people = graph.nodes_of_kind(NodeKind.PERSON)
        if people:
            lines.append("Workload:")
            for person in people:
                workload = person_workload(person.id, graph, self.policy)
                flag = " OVER-ALLOCATED" if workload.is_over_allocated else ""
                lines.append(
                    f"  {person.title:<24} {workload.total_hours:>6}h "
                    f"in {len(workload.task_ids)} task(s){flag}"
                )
            lines.append("")

        conflicts = find_conflicts(graph.nodes, graph.edges, self.policy)
        errors = sum(1 for conflict in conflicts if conflict.is_error)
        lines.append(f"Conflicts: {len(conflicts)} ({errors} error(s))")
        for conflict in conflicts:
            lines.append(f"  [{conflict.severity}] {conflict.kind}: {conflict.message}")

        return "\n".join(lines)
