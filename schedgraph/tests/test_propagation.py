import unittest
from datetime import date, timedelta

from schedgraph.domain.edge import Dependency
from schedgraph.domain.graph import ScheduleGraph
from schedgraph.domain.node import MilestoneNode, NodeError, PersonNode, TaskNode
from schedgraph.services.propagation import propagate

DAY_0 = date(2025, 4, 1)


def day(offset):
    return DAY_0 + timedelta(days=offset)


class PropagationTestCase(unittest.TestCase):
    """Test cases for cascading date changes."""

    def setUp(self):
        # A -> B -> C, each two days long
        self.graph = ScheduleGraph(
            nodes=[
                TaskNode("A", "Clearing", start_date=day(2), due_date=day(4)),
                TaskNode("B", "Grading", start_date=day(5), due_date=day(7)),
                TaskNode("C", "Paving", start_date=day(8), due_date=day(10)),
            ],
            edges=[Dependency("e1", "A", "B"), Dependency("e2", "B", "C")],
        )

    def test_cascade(self):
        """Moving A's due date moves every dependent in one call."""
        result = propagate(self.graph, "A", new_due=day(10))

        self.assertEqual(result.nodes["A"].start_date, day(2))
        self.assertEqual(result.nodes["A"].due_date, day(10))
        self.assertEqual(result.nodes["B"].start_date, day(11))
        self.assertEqual(result.nodes["B"].due_date, day(13))
        self.assertEqual(result.nodes["C"].start_date, day(14))
        self.assertEqual(result.nodes["C"].due_date, day(16))
        self.assertEqual(result.conflicts, [])
        self.assertFalse(result.aborted)

    def test_input_graph_untouched(self):
        propagate(self.graph, "A", new_due=day(10))
        self.assertEqual(self.graph.get_node("A").due_date, day(4))
        self.assertEqual(self.graph.get_node("B").start_date, day(5))

    def test_both_dates_applied(self):
        result = propagate(self.graph, "A", new_start=day(1), new_due=day(3))
        self.assertEqual(result.nodes["A"].start_date, day(1))
        self.assertEqual(result.nodes["A"].due_date, day(3))
        self.assertEqual(result.nodes["B"].start_date, day(4))

    def test_start_moved_past_due(self):
        """A start-only edit past the due date carries the due date along."""
        result = propagate(self.graph, "A", new_start=day(5))

        self.assertEqual(result.nodes["A"].start_date, day(5))
        self.assertEqual(result.nodes["A"].due_date, day(7))
        self.assertEqual(result.nodes["B"].start_date, day(8))
        self.assertEqual(result.nodes["B"].due_date, day(10))
        self.assertEqual(result.nodes["C"].start_date, day(11))
        self.assertEqual(result.nodes["C"].due_date, day(13))
        self.assertEqual(result.conflicts, [])

    def test_due_moved_before_start(self):
        """A due-only edit before the start date pulls the start back."""
        result = propagate(self.graph, "A", new_due=day(1))

        self.assertEqual(result.nodes["A"].start_date, day(-1))
        self.assertEqual(result.nodes["A"].due_date, day(1))
        self.assertEqual(result.nodes["A"].effective_duration, 2)
        self.assertEqual(result.nodes["B"].start_date, day(2))

    def test_invalid_edit(self):
        with self.assertRaises(NodeError):
            propagate(self.graph, "A", new_start=day(5), new_due=day(3))
        with self.assertRaises(NodeError):
            propagate(self.graph, "A", new_start="2025-04-05")

    def test_unknown_node(self):
        result = propagate(self.graph, "missing", new_due=day(10))
        self.assertEqual(result.conflicts, [])
        self.assertEqual(result.nodes["B"].start_date, day(5))

    def test_partially_dated_dependent(self):
        graph = ScheduleGraph(
            nodes=[
                TaskNode("A", "A", start_date=day(0), due_date=day(2)),
                TaskNode("B", "B", start_date=day(3)),
                TaskNode("C", "C", start_date=day(9), due_date=day(10)),
            ],
            edges=[Dependency("e1", "A", "B", type="start_to_start"), Dependency("e2", "B", "C")],
        )
        result = propagate(graph, "A", new_start=day(1))
        # B takes its default duration and becomes fully dated
        self.assertEqual(result.nodes["B"].start_date, day(1))
        self.assertEqual(result.nodes["B"].due_date, day(6))
        self.assertEqual(result.nodes["C"].start_date, day(7))

    def test_last_visit_wins(self):
        """A node reached by two branches keeps the later branch's dates."""
        graph = ScheduleGraph(
            nodes=[
                TaskNode("A", "A", start_date=day(0), due_date=day(2)),
                TaskNode("B", "B", duration_days=1),
                TaskNode("C", "C", duration_days=5),
                TaskNode("D", "D", start_date=day(20), due_date=day(22)),
            ],
            edges=[
                Dependency("e1", "A", "B"),
                Dependency("e2", "A", "C"),
                Dependency("e3", "B", "D"),
                Dependency("e4", "C", "D"),
            ],
        )
        result = propagate(graph, "A")
        self.assertEqual(result.nodes["B"].due_date, day(4))
        self.assertEqual(result.nodes["C"].due_date, day(8))
        self.assertEqual(result.nodes["D"].start_date, day(9))
        self.assertEqual(result.nodes["D"].due_date, day(11))

    def test_non_task_dependents(self):
        graph = ScheduleGraph(
            nodes=[
                TaskNode("A", "A", start_date=day(0), due_date=day(2)),
                MilestoneNode("M", "Milestone", due_date=day(30)),
                PersonNode("P", "Person"),
            ],
            edges=[
                Dependency("e1", "A", "M", type="finish_to_finish"),
                Dependency("e2", "A", "P"),
            ],
        )
        result = propagate(graph, "A", new_due=day(6), default_duration_days=0)
        self.assertEqual(result.nodes["M"].start_date, day(6))
        self.assertEqual(result.nodes["M"].due_date, day(6))
        self.assertIsNone(result.nodes["P"].start_date)

    def test_cycle_terminates(self):
        """A cycle is reported instead of being followed forever."""
        self.graph.add_edge(Dependency("e3", "C", "A"))

        result = propagate(self.graph, "A", new_due=day(10))

        self.assertTrue(result.aborted)
        self.assertEqual(result.aborted_cycles, [["A", "B", "C", "A"]])
        self.assertEqual(result.nodes["A"].due_date, day(10))
        self.assertEqual(result.nodes["C"].start_date, day(14))

        kinds = [c.kind for c in result.conflicts]
        self.assertIn("circular_dependency", kinds)

    def test_long_chain(self):
        """Long chains do not hit the recursion limit."""
        graph = ScheduleGraph()
        graph.add_node(TaskNode("n0", "n0", start_date=day(0), due_date=day(1)))
        for i in range(1, 3000):
            graph.add_node(TaskNode(f"n{i}", f"n{i}", duration_days=0))
            graph.add_edge(Dependency(f"e{i}", f"n{i - 1}", f"n{i}"))

        result = propagate(graph, "n0")
        self.assertEqual(result.nodes["n2999"].start_date, day(3000))

    def test_diamond_ladder(self):
        """Stacked diamonds resolve each node once instead of once per path."""
        graph = ScheduleGraph()
        graph.add_node(TaskNode("root", "root", start_date=day(0), due_date=day(1)))
        previous = ["root"]
        for layer in range(1, 31):
            current = [f"L{layer}a", f"L{layer}b"]
            for node_id in current:
                graph.add_node(TaskNode(node_id, node_id, duration_days=1))
                for source in previous:
                    graph.add_edge(Dependency(f"{source}-{node_id}", source, node_id))
            previous = current

        # 2**30 distinct paths reach the last layer
        result = propagate(graph, "root", new_due=day(2))

        self.assertFalse(result.aborted)
        for layer in (1, 15, 30):
            for node_id in (f"L{layer}a", f"L{layer}b"):
                self.assertEqual(result.nodes[node_id].start_date, day(2 * layer + 1))
                self.assertEqual(result.nodes[node_id].due_date, day(2 * layer + 2))
        self.assertEqual(result.conflicts, [])


if __name__ == "__main__":
    unittest.main()
