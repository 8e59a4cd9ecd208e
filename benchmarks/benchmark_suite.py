"""
Benchmark suite for min_expression.

Runs the search on a set of goals of increasing difficulty, measuring:
- Minimal term count and the discovered expression
- Search effort (settled nodes, frontier size, stale records)
- Wall-clock time

Goals get harder as the minimal term count grows: the number of values
settled before the search can prove minimality grows roughly geometrically
with it.
"""

import time
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from min_expression import Solver
from min_expression.render import evaluate_postfix


@dataclass
class BenchmarkProblem:
    """A benchmark problem: build `goal` from `seeds`."""
    name: str
    seeds: Sequence[float]
    goal: float
    max_magnitude: int = 10_000
    domain: str = "integer"
    operators: str = "+-*/"
    expected_terms: Optional[int] = None
    difficulty: str = "easy"  # easy, medium, hard


# ---------------------------------------------------------------------------
# Benchmark problems, ordered by difficulty
# ---------------------------------------------------------------------------

BENCHMARKS = [
    # --- Easy: a handful of terms ---
    BenchmarkProblem("sum", [3, 4], 7, expected_terms=2),
    BenchmarkProblem("square_of_sum", [3, 7], 100, max_magnitude=500,
                     expected_terms=4),
    BenchmarkProblem("fraction", [3, 4], 0.75, max_magnitude=100,
                     domain="real", expected_terms=2),

    # --- Medium: larger goals, wider bands ---
    BenchmarkProblem("year_small_band", [42, 777], 2018, max_magnitude=20_000,
                     difficulty="medium"),
    BenchmarkProblem("single_seed", [7], 1000, max_magnitude=20_000,
                     difficulty="medium"),
    BenchmarkProblem("mul_div_only", [2], 3, max_magnitude=1_000_000,
                     operators="*/", difficulty="medium"),

    # --- Hard: the wide-band searches ---
    BenchmarkProblem("year_2017", [69, 420], 2017, max_magnitude=1_260_000,
                     difficulty="hard"),
    BenchmarkProblem("year_2018", [42, 777], 2018, max_magnitude=1_000_000,
                     expected_terms=9, difficulty="hard"),
]


def run_benchmark(problem: BenchmarkProblem, verbose: bool = False) -> dict:
    """Run a single benchmark problem."""
    solver = Solver(
        domain=problem.domain,
        max_magnitude=problem.max_magnitude,
        operators=problem.operators,
    )

    t0 = time.time()
    result = solver.solve(problem.seeds, problem.goal, verbose=verbose)
    elapsed = time.time() - t0

    stale = [level.stale_count for level in result.history.levels]
    verified = (
        result.succeeded
        and np.isclose(evaluate_postfix(result.postfix, solver.domain), problem.goal)
    )

    return {
        "name": problem.name,
        "difficulty": problem.difficulty,
        "status": result.status.value,
        "expression": result.expression,
        "terms": result.term_count,
        "expected_terms": problem.expected_terms,
        "verified": bool(verified),
        "closed": result.closed_count,
        "open": result.open_count,
        "max_stale": int(np.max(stale)) if stale else 0,
        "pruned": result.history.pruned,
        "time_sec": elapsed,
    }


def run_all_benchmarks(difficulties=("easy", "medium"), verbose: bool = True):
    """Run the selected benchmark problems and print a summary table."""
    print("=" * 90)
    print("  min_expression — Benchmark Suite")
    print("=" * 90)
    print()

    results = []
    for problem in BENCHMARKS:
        if problem.difficulty not in difficulties:
            continue
        if verbose:
            print(f"  [{problem.difficulty:6s}] {problem.name:16s} "
                  f"goal={problem.goal}  seeds={list(problem.seeds)}")
        r = run_benchmark(problem)
        results.append(r)
        if verbose:
            ok = r["expected_terms"] is None or r["terms"] == r["expected_terms"]
            status = "✓" if ok else "✗"
            print(f"           {status} {r['status']:9s} terms={r['terms']}  "
                  f"closed={r['closed']:7d}  stale={r['max_stale']:6d}  "
                  f"time={r['time_sec']:.1f}s  → {r['expression']}")
            print()

    solved = sum(1 for r in results if r["status"] == "succeeded")
    print("=" * 90)
    print(f"  Solved: {solved}/{len(results)}")
    if results:
        times = [r["time_sec"] for r in results]
        print(f"  Median time: {np.median(times):.2f}s   Total: {np.sum(times):.1f}s")
    print("=" * 90)

    return results


if __name__ == "__main__":
    run_all_benchmarks()
