"""Tests for the Solver facade and find_expression."""

import io
import unittest
from contextlib import redirect_stdout

from min_expression.domain import NumericDomain
from min_expression.errors import ConfigurationError
from min_expression.render import evaluate_postfix
from min_expression.search import SearchStatus
from min_expression.solver import Solver, find_expression


class TestSolverConfiguration(unittest.TestCase):

    def test_defaults(self):
        solver = Solver()
        self.assertIs(solver.domain, NumericDomain.INTEGER)
        self.assertEqual(solver.band.minimum, 0)
        self.assertEqual(solver.band.maximum, 1_000_000)

    def test_real_defaults(self):
        solver = Solver(domain="real")
        self.assertIs(solver.domain, NumericDomain.REAL)
        self.assertEqual(solver.band.minimum, 1e-6)

    def test_magnitude_overrides(self):
        solver = Solver(max_magnitude=500, min_magnitude=2)
        self.assertEqual(solver.band.minimum, 2)
        self.assertEqual(solver.band.maximum, 500)

    def test_unknown_domain(self):
        with self.assertRaises(ConfigurationError):
            Solver(domain="complex")

    def test_empty_band(self):
        with self.assertRaises(ConfigurationError):
            Solver(max_magnitude=5, min_magnitude=5)

    def test_bad_seeds(self):
        with self.assertRaises(ConfigurationError):
            Solver().solve([], 10)
        with self.assertRaises(ConfigurationError):
            Solver().solve([1.5], 10)

    def test_goal_outside_band_is_not_an_error(self):
        result = Solver(max_magnitude=100).solve([3], 500)
        self.assertIs(result.status, SearchStatus.FAILED)
        self.assertEqual(result.reason, "unreachable")
        result = Solver(max_magnitude=100).solve([500, 3], 500)
        self.assertTrue(result.succeeded)
        self.assertEqual(result.term_count, 1)


class TestSolve(unittest.TestCase):

    def test_integer_solution(self):
        result = Solver(max_magnitude=500).solve([3, 7], 21)
        self.assertTrue(result.succeeded)
        self.assertEqual(result.term_count, 2)
        self.assertEqual(evaluate_postfix(result.postfix), 21)

    def test_restricted_operators(self):
        # Without multiplication 21 needs 3+3+3+3+3+3+3 or 7+7+7.
        result = Solver(max_magnitude=500, operators="+-").solve([3, 7], 21)
        self.assertEqual(result.term_count, 3)
        self.assertEqual(evaluate_postfix(result.postfix), 21)

    def test_real_division(self):
        solver = Solver(domain="real", max_magnitude=100)
        result = solver.solve([3, 4], 0.75)
        self.assertTrue(result.succeeded)
        self.assertEqual(result.term_count, 2)
        self.assertEqual(result.expression, "(3/4)")
        value = evaluate_postfix(result.postfix, NumericDomain.REAL)
        self.assertAlmostEqual(value, 0.75)

    def test_integer_division_must_be_exact(self):
        result = Solver(max_magnitude=100).solve([3, 4], 0)
        # 0 comes from 3-3, never from 3/4.
        self.assertEqual(result.term_count, 2)
        self.assertEqual(evaluate_postfix(result.postfix), 0)

    def test_callback_and_stop(self):
        seen = []

        def callback(step, node, state):
            seen.append(step)

        result = Solver(max_magnitude=10_000).solve(
            [7], 1000, callback=callback, should_stop=lambda: len(seen) >= 5
        )
        self.assertIs(result.status, SearchStatus.STOPPED)
        self.assertEqual(result.reason, "stopped")
        self.assertEqual(seen, [1, 2, 3, 4, 5])

    def test_verbose_prints_witness(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            Solver(max_magnitude=500).solve([3, 7], 21, verbose=True)
        output = buffer.getvalue()
        self.assertIn("One way (2 terms)", output)
        self.assertIn("you need only 2 terms", output)


class TestFindExpression(unittest.TestCase):

    def test_shortcut(self):
        result = find_expression(10, [3, 7])
        self.assertTrue(result.succeeded)
        self.assertEqual(result.term_count, 2)
        self.assertIn(result.expression, ("(3+7)", "(7+3)"))

    def test_options_forwarded(self):
        result = find_expression(3, [2], operators="*/")
        self.assertFalse(result.succeeded)
        self.assertEqual(result.reason, "unreachable")

    def test_quiet_by_default(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            find_expression(10, [3, 7])
        self.assertEqual(buffer.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
