import unittest
from datetime import date, timedelta

from schedgraph.domain.edge import Dependency
from schedgraph.domain.graph import ScheduleGraph
from schedgraph.domain.node import MilestoneNode, TaskNode
from schedgraph.services.auto_schedule import auto_schedule, earliest_start

DAY_0 = date(2025, 4, 1)


def day(offset):
    return DAY_0 + timedelta(days=offset)


class AutoScheduleTestCase(unittest.TestCase):
    """Test cases for scheduling undated tasks."""

    def setUp(self):
        self.graph = ScheduleGraph(
            nodes=[
                TaskNode("A", "Mobilise", start_date=day(0), due_date=day(4)),
                TaskNode("B", "Earthworks", duration_days=3),
                TaskNode("C", "Setting out"),
                TaskNode("D", "Drainage"),
                TaskNode("loose", "Unlinked", duration_days=2),
                MilestoneNode("M", "Handover"),
            ],
            edges=[
                Dependency("e1", "A", "B"),
                Dependency("e2", "A", "C", type="start_to_start"),
                Dependency("e3", "B", "D"),
                Dependency("e4", "D", "M"),
            ],
        )

    def test_schedules_in_dependency_order(self):
        result = auto_schedule(self.graph)
        nodes = result.nodes

        self.assertEqual((nodes["B"].start_date, nodes["B"].due_date), (day(5), day(8)))
        # non finish-to-start edges imply the predecessor's due date
        self.assertEqual((nodes["C"].start_date, nodes["C"].due_date), (day(4), day(9)))
        # D is anchored by B, which was only just scheduled
        self.assertEqual((nodes["D"].start_date, nodes["D"].due_date), (day(9), day(14)))

    def test_leaves_unanchored_nodes(self):
        result = auto_schedule(self.graph)
        self.assertIsNone(result.nodes["loose"].start_date)
        self.assertIsNone(result.nodes["M"].start_date)
        self.assertEqual(result.nodes["A"].start_date, day(0))

    def test_latest_predecessor_wins(self):
        self.graph.add_node(TaskNode("Z", "Late supplier", start_date=day(0), due_date=day(12)))
        self.graph.add_edge(Dependency("e5", "Z", "B"))
        self.assertEqual(earliest_start(self.graph, "B"), day(13))

        result = auto_schedule(self.graph)
        self.assertEqual(result.nodes["B"].start_date, day(13))

    def test_default_duration(self):
        result = auto_schedule(self.graph, default_duration_days=1)
        self.assertEqual(result.nodes["C"].due_date, day(5))

    def test_stable(self):
        first = auto_schedule(self.graph)
        second = auto_schedule(first.graph)
        for node_id in ("B", "C", "D"):
            self.assertEqual(first.nodes[node_id].start_date, second.nodes[node_id].start_date)
            self.assertEqual(first.nodes[node_id].due_date, second.nodes[node_id].due_date)

    def test_input_graph_untouched(self):
        auto_schedule(self.graph)
        self.assertIsNone(self.graph.get_node("B").start_date)

    def test_conflicts_reported(self):
        self.graph.add_node(TaskNode("E", "Surfacing", start_date=day(1), due_date=day(2)))
        self.graph.add_edge(Dependency("e6", "D", "E"))
        result = auto_schedule(self.graph)
        self.assertEqual([c.edge_id for c in result.conflicts], ["e6"])


if __name__ == "__main__":
    unittest.main()
