from datetime import date, timedelta

from schedgraph.domain.edge import Dependency
from schedgraph.domain.graph import ScheduleGraph
from schedgraph.domain.node import DeliverableNode, MilestoneNode, PersonNode, TaskNode
from schedgraph.services.scheduler import ScheduleEngine

PROJECT_START = date(2025, 4, 1)


def day(offset):
    return PROJECT_START + timedelta(days=offset)


def create_sample_project():
    """Residential subdivision design schedule (Oak Ridge)."""
    graph = ScheduleGraph()

    # People
    graph.add_node(PersonNode("pm", "Project Manager", initials="PM"))
    graph.add_node(PersonNode("civil", "Civil Engineer", initials="CE"))
    graph.add_node(PersonNode("storm", "Stormwater Engineer", initials="SW"))
    graph.add_node(PersonNode("survey", "Surveyor", initials="SV"))

    # Milestones
    graph.add_node(MilestoneNode("m30", "30% Design", due_date=day(30), tags=["Milestone"]))
    graph.add_node(MilestoneNode("m60", "60% Design", due_date=day(60), tags=["Milestone"]))
    graph.add_node(MilestoneNode("m90", "90% Design", due_date=day(90), tags=["Milestone"]))
    graph.add_node(MilestoneNode("permit", "Permit Issued", due_date=day(120), tags=["Milestone"]))

    # Deliverables
    graph.add_node(
        DeliverableNode(
            "site-plan", "Site Plan", start_date=day(25), due_date=day(26),
            discipline="Civil", submittal_number="C-100",
        )
    )
    graph.add_node(
        DeliverableNode(
            "utility-plan", "Utility Plan", start_date=day(55), due_date=day(56),
            discipline="Civil", submittal_number="C-300",
        )
    )
    graph.add_node(
        DeliverableNode(
            "storm-report", "Stormwater Report", start_date=day(85), due_date=day(86),
            discipline="Stormwater", review_days=10,
        )
    )

    # Tasks
    graph.add_node(
        TaskNode(
            "topo", "Topo Survey", start_date=day(5), due_date=day(15),
            status="in_progress", priority="high", percent_complete=30,
            assignees=["survey"], parent_id="site-plan", tags=["Survey"],
        )
    )
    graph.add_node(
        TaskNode(
            "geotech", "Geotech Report", start_date=day(10), due_date=day(24),
            assignees=["civil"], parent_id="site-plan", tags=["Geotech"],
        )
    )
    graph.add_node(
        TaskNode(
            "utility-coord", "Utility Coordination", start_date=day(20), due_date=day(40),
            priority="high", assignees=["civil"], parent_id="utility-plan",
            tags=["Utility"],
        )
    )
    graph.add_node(
        TaskNode(
            "storm-model", "Stormwater Modeling", start_date=day(30), due_date=day(60),
            assignees=["storm"], parent_id="storm-report", tags=["Modeling"],
        )
    )
    graph.add_node(
        TaskNode(
            "plan-set", "Plan Set (60%)", start_date=day(50), due_date=day(70),
            priority="high", assignees=["civil", "pm"], tags=["Plan Set"],
        )
    )
    graph.add_node(
        TaskNode(
            "agency-review", "Agency Review", duration_days=20, priority="high",
            assignees=["pm"], tags=["Review", "Permit"],
        )
    )
    graph.add_node(
        TaskNode(
            "permit-submittal", "Permit Submittal", duration_days=3,
            assignees=["pm"], tags=["Permit"],
        )
    )

    # Dependencies
    graph.add_edge(Dependency("e1", "topo", "site-plan"))
    graph.add_edge(Dependency("e2", "geotech", "site-plan"))
    graph.add_edge(Dependency("e3", "site-plan", "m30"))
    graph.add_edge(Dependency("e4", "utility-coord", "utility-plan"))
    graph.add_edge(Dependency("e5", "utility-plan", "m60"))
    graph.add_edge(Dependency("e6", "storm-model", "storm-report"))
    graph.add_edge(Dependency("e7", "storm-report", "m90"))
    graph.add_edge(Dependency("e8", "plan-set", "agency-review"))
    graph.add_edge(Dependency("e9", "m90", "agency-review", type="start_to_start"))
    graph.add_edge(Dependency("e10", "agency-review", "permit-submittal"))
    graph.add_edge(Dependency("e11", "permit-submittal", "permit", type="finish_to_finish"))

    return graph


def run_sample_project(slip_days=7, engine=None):
    """
    Auto-schedule the sample project, slip the topo survey and report.

    Returns:
        str: The schedule report before and after the slip
    """
    engine = engine or ScheduleEngine()
    graph = create_sample_project()

    scheduled = engine.auto_schedule(graph).graph
    topo = scheduled.get_node("topo")
    slipped = engine.propagate(
        scheduled, "topo", new_due=topo.due_date + timedelta(days=slip_days)
    )

    sections = [
        engine.generate_report(scheduled),
        "",
        f"After the Topo Survey slips {slip_days} day(s):",
        "",
        engine.generate_report(slipped.graph),
    ]
    return "\n".join(sections)
