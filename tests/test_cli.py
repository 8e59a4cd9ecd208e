"""Tests for the command-line entry point."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from min_expression.__main__ import main


def run_cli(*argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(list(argv))
    return code, out.getvalue(), err.getvalue()


class TestCommandLine(unittest.TestCase):

    def test_success(self):
        code, out, _ = run_cli("7", "-s", "3", "4", "-q")
        self.assertEqual(code, 0)
        self.assertIn("7 = (", out)
        self.assertIn("(2 terms)", out)

    def test_verbose_progress(self):
        code, out, _ = run_cli("7", "-s", "3", "4")
        self.assertEqual(code, 0)
        self.assertIn("One way (2 terms)", out)

    def test_unreachable_exit_code(self):
        code, out, _ = run_cli("3", "-s", "2", "--operators", "*/", "-q")
        self.assertEqual(code, 1)
        self.assertIn("No expression found: unreachable", out)

    def test_configuration_error_exit_code(self):
        code, _, err = run_cli("7", "-s", "3.5", "-q")
        self.assertEqual(code, 2)
        self.assertIn("error:", err)

    def test_goal_outside_band(self):
        code, out, _ = run_cli("500", "-s", "3", "--max-magnitude", "100", "-q")
        self.assertEqual(code, 1)
        self.assertIn("No expression found: unreachable", out)

    def test_real_mode_with_postfix(self):
        code, out, _ = run_cli("0.75", "-s", "3", "4", "--real", "--postfix", "-q")
        self.assertEqual(code, 0)
        self.assertIn("0.75 = (3/4)", out)
        self.assertIn("3 4 /", out)


if __name__ == "__main__":
    unittest.main()
