"""
Integration tests: the engine against an exhaustive enumeration.

The reference enumerates, level by level, every value an expression of
exactly k terms can produce (keeping only in-band intermediate values, as
the engine does). The smallest k whose level contains the goal is the true
minimum, which the engine must reproduce.
"""

import unittest

from min_expression.domain import NumericDomain
from min_expression.operators import parse_operators
from min_expression.render import evaluate_postfix
from min_expression.solver import Solver, find_expression


def enumerate_levels(seeds, limit, max_terms, operators="+-*/"):
    """levels[k] = set of values reachable with exactly k terms, |v| < limit."""
    domain = NumericDomain.INTEGER
    kinds = parse_operators(operators)
    levels = {1: set(seeds)}
    for k in range(2, max_terms + 1):
        found = set()
        for i in range(1, k):
            for a in levels[i]:
                for b in levels[k - i]:
                    for kind in kinds:
                        value = domain.apply(kind, a, b)
                        if value is not None and abs(value) < limit:
                            found.add(value)
        levels[k] = found
    return levels


def minimal_terms(levels, goal):
    for k in sorted(levels):
        if goal in levels[k]:
            return k
    return None


class TestAgainstEnumeration(unittest.TestCase):
    """Term counts match the exhaustive minimum."""

    def check(self, seeds, limit, max_terms, operators="+-*/"):
        levels = enumerate_levels(seeds, limit, max_terms, operators)
        solver = Solver(max_magnitude=limit, operators=operators)
        checked = 0
        for goal in range(-limit + 1, limit):
            expected = minimal_terms(levels, goal)
            result = solver.solve(seeds, goal)
            if expected is None:
                # Not reachable within max_terms: the engine must need more.
                if result.succeeded:
                    self.assertGreater(result.term_count, max_terms, f"goal {goal}")
                continue
            checked += 1
            self.assertTrue(result.succeeded, f"goal {goal}")
            self.assertEqual(result.term_count, expected, f"goal {goal}")
            self.assertEqual(evaluate_postfix(result.postfix), goal)
        self.assertGreater(checked, 0)

    def test_two_and_three(self):
        self.check([2, 3], limit=40, max_terms=5)

    def test_single_seed(self):
        self.check([5], limit=30, max_terms=5)

    def test_restricted_operators(self):
        self.check([3, 7], limit=30, max_terms=4, operators="+*")


class TestEndToEnd(unittest.TestCase):
    """Full runs with the documented example inputs."""

    def test_unreachable_goal(self):
        result = find_expression(3, [2], operators="*/")
        self.assertFalse(result.succeeded)
        self.assertEqual(result.reason, "unreachable")

    def test_four_terms(self):
        # (7+3)*(7+3); nothing with three terms reaches 100.
        result = find_expression(100, [3, 7], max_magnitude=500)
        self.assertTrue(result.succeeded)
        self.assertEqual(result.term_count, 4)
        self.assertEqual(evaluate_postfix(result.postfix), 100)
        literals = [t for t in result.postfix if t not in "+-*/"]
        self.assertEqual(len(literals), 4)
        self.assertTrue(set(literals) <= {"3", "7"})

    def test_2018_from_42_and_777(self):
        result = find_expression(2018, [42, 777], max_magnitude=1_000_000)
        self.assertTrue(result.succeeded)
        self.assertEqual(result.term_count, 9)
        self.assertEqual(evaluate_postfix(result.postfix), 2018)


if __name__ == "__main__":
    unittest.main()
