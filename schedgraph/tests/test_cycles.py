import unittest

from schedgraph.domain.edge import Dependency
from schedgraph.services.cycles import find_cycles, has_cycle


def edges_from(pairs):
    return [Dependency(f"e{i}", source, target) for i, (source, target) in enumerate(pairs)]


class FindCyclesTestCase(unittest.TestCase):
    """Test cases for cycle detection."""

    def test_three_node_cycle(self):
        cycles = find_cycles(edges_from([("A", "B"), ("B", "C"), ("C", "A")]))
        self.assertEqual(len(cycles), 1)
        self.assertEqual(set(cycles[0]), {"A", "B", "C"})
        self.assertEqual(cycles[0], ["A", "B", "C"])

    def test_acyclic(self):
        edges = edges_from([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])
        self.assertEqual(find_cycles(edges), [])
        self.assertFalse(has_cycle(edges))

    def test_cycle_reached_from_tail(self):
        """The cycle starts at the node that closed it, not at the root."""
        cycles = find_cycles(edges_from([("S", "A"), ("A", "B"), ("B", "A")]))
        self.assertEqual(cycles, [["A", "B"]])

    def test_two_separate_cycles(self):
        cycles = find_cycles(
            edges_from([("A", "B"), ("B", "A"), ("C", "D"), ("D", "E"), ("E", "C")])
        )
        self.assertEqual(cycles, [["A", "B"], ["C", "D", "E"]])

    def test_parallel_edges(self):
        cycles = find_cycles(edges_from([("A", "B"), ("A", "B"), ("B", "A")]))
        self.assertEqual(cycles, [["A", "B"]])

    def test_empty(self):
        self.assertEqual(find_cycles([]), [])

    def test_long_chain(self):
        """Deep chains do not hit the recursion limit."""
        pairs = [(f"n{i}", f"n{i + 1}") for i in range(5000)]
        pairs.append(("n5000", "n0"))
        cycles = find_cycles(edges_from(pairs))
        self.assertEqual(len(cycles), 1)
        self.assertEqual(len(cycles[0]), 5001)


if __name__ == "__main__":
    unittest.main()
