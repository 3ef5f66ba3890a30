"""
Schedule Graph Engine
=====================

Dependency-driven scheduling for project graphs of tasks, milestones,
deliverables and people.

Available modules:
- domain: Nodes, dependencies, the schedule graph and conflict records
- services.constraints: Dates implied by a single dependency
- services.cycles: Circular dependency detection
- services.conflicts: Date, workload and deliverable conflict detection
- services.propagation: Cascading date changes through dependents
- services.critical_path: Longest duration-weighted chain
- services.auto_schedule: Dating unscheduled tasks from their predecessors
- services.scheduler: Configured engine facade and text report
"""

from schedgraph.domain.node import (
    DeliverableNode,
    MilestoneNode,
    NodeError,
    PersonNode,
    TaskNode,
    create_node,
)
from schedgraph.domain.edge import Dependency, DependencyType, EdgeError
from schedgraph.domain.graph import GraphError, ScheduleGraph
from schedgraph.domain.conflict import Conflict
from schedgraph.services.constraints import resolve
from schedgraph.services.cycles import find_cycles
from schedgraph.services.conflicts import WorkloadPolicy, find_conflicts, person_workload
from schedgraph.services.propagation import PropagationResult, propagate
from schedgraph.services.critical_path import analyze_critical_path, critical_path
from schedgraph.services.auto_schedule import auto_schedule
from schedgraph.services.scheduler import ScheduleEngine, schedule_span

__all__ = [
    "TaskNode",
    "MilestoneNode",
    "DeliverableNode",
    "PersonNode",
    "create_node",
    "NodeError",
    "Dependency",
    "DependencyType",
    "EdgeError",
    "ScheduleGraph",
    "GraphError",
    "Conflict",
    "resolve",
    "find_cycles",
    "find_conflicts",
    "person_workload",
    "WorkloadPolicy",
    "propagate",
    "PropagationResult",
    "critical_path",
    "analyze_critical_path",
    "auto_schedule",
    "schedule_span",
    "ScheduleEngine",
]
