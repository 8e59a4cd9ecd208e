"""
Command-line entry point.

    python -m min_expression 2017
    python -m min_expression 2018 -s 42 777 --max-magnitude 1000000
    python -m min_expression 0.75 -s 3 4 --real

Exit codes: 0 found, 1 unreachable (or stopped), 2 bad configuration.
"""

from __future__ import annotations

import argparse
import sys

from min_expression.domain import NumericDomain
from min_expression.errors import ConfigurationError
from min_expression.solver import Solver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="min_expression",
        description="Find the expression over the seeds that builds GOAL "
                    "with the fewest terms.",
    )
    parser.add_argument("goal", type=str, help="Value to build.")
    parser.add_argument("-s", "--seeds", type=str, nargs="+", default=["69", "420"],
                        help="Leaf values, each usable any number of times "
                             "(default: 69 420).")
    parser.add_argument("--real", action="store_true",
                        help="Search over floats instead of integers.")
    parser.add_argument("--max-magnitude", type=float, default=None,
                        help="Ignore values with |v| >= this (default 1e6).")
    parser.add_argument("--min-magnitude", type=float, default=None,
                        help="Ignore values with |v| < this "
                             "(default 0, or 1e-6 with --real).")
    parser.add_argument("--epsilon", type=float, default=1e-9,
                        help="Goal tolerance with --real (default 1e-9).")
    parser.add_argument("--operators", type=str, default="+-*/",
                        help="Enabled operators (default '+-*/').")
    parser.add_argument("--postfix", action="store_true",
                        help="Also print the expression in RPN.")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only print the result line.")
    return parser


def _number(domain: NumericDomain, text: str):
    try:
        return domain.parse(text)
    except ValueError as exc:
        raise ConfigurationError(f"not a number: {text!r}") from exc


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    domain = NumericDomain.REAL if args.real else NumericDomain.INTEGER

    def magnitude(value):
        if value is None or domain is NumericDomain.REAL:
            return value
        return int(value)

    try:
        solver = Solver(
            domain=domain,
            max_magnitude=magnitude(args.max_magnitude),
            min_magnitude=magnitude(args.min_magnitude),
            epsilon=args.epsilon,
            operators=args.operators,
        )
        goal = _number(domain, args.goal)
        seeds = [_number(domain, s) for s in args.seeds]
        result = solver.solve(seeds, goal, verbose=not args.quiet)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if not result.succeeded:
        print(f"No expression found: {result.reason}")
        return 1

    print(f"{result.goal} = {result.expression}  ({result.term_count} terms)")
    if args.postfix:
        print(" ".join(result.postfix))
    return 0


if __name__ == "__main__":
    sys.exit(main())
