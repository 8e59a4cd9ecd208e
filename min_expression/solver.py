"""
Solver — the high-level entry point for minimal expression search.

It wraps configuration and the search engine behind a single solve() call.

Usage:
    solver = Solver(max_magnitude=1_000_000)
    result = solver.solve([42, 777], 2018)
    print(result.expression, result.term_count)
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Union

from min_expression.config import SearchConfig
from min_expression.domain import MagnitudeBand, Number, NumericDomain
from min_expression.operators import ARITHMETIC_OPERATORS
from min_expression.search import SearchEngine, SearchResult


class Solver:
    """
    High-level API for finding minimal expressions.

    Parameters
    ----------
    domain : NumericDomain or str
        "integer" (exact division only) or "real". Default integer.
    max_magnitude : Number, optional
        Values with |v| >= max_magnitude are ignored. Default: the domain's
        default band (1e6 for both domains).
    min_magnitude : Number, optional
        Values with |v| < min_magnitude are ignored. Default 0 for integers,
        1e-6 for reals.
    epsilon : float
        Goal tolerance in real mode. Default 1e-9.
    operators : str or sequence
        Enabled operators, e.g. "+-*/" or "*/". Default all four.
    initial_term_bound : int, optional
        Starting upper bound on the goal's term count.
    """

    def __init__(
        self,
        domain: Union[NumericDomain, str] = NumericDomain.INTEGER,
        max_magnitude: Optional[Number] = None,
        min_magnitude: Optional[Number] = None,
        epsilon: float = 1e-9,
        operators: Union[str, Sequence] = ARITHMETIC_OPERATORS,
        initial_term_bound: Optional[int] = None,
    ):
        self.domain = NumericDomain.from_name(domain)
        default = self.domain.default_band()
        self.band = MagnitudeBand(
            default.minimum if min_magnitude is None else min_magnitude,
            default.maximum if max_magnitude is None else max_magnitude,
        )
        self.epsilon = epsilon
        self.operators = operators
        self.initial_term_bound = initial_term_bound

    def make_config(self, seeds: Sequence[Number], goal: Number,
                    verbose: bool = False,
                    callback: Optional[Callable] = None) -> SearchConfig:
        return SearchConfig(
            seeds=seeds,
            goal=goal,
            domain=self.domain,
            band=self.band,
            epsilon=self.epsilon,
            operators=self.operators,
            initial_term_bound=self.initial_term_bound,
            verbose=verbose,
            callback=callback,
        )

    def solve(
        self,
        seeds: Sequence[Number],
        goal: Number,
        verbose: bool = False,
        callback: Optional[Callable] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> SearchResult:
        """
        Find the cheapest expression for `goal` over `seeds`.

        Parameters
        ----------
        seeds : sequence of numbers
            Leaf values; each may be used any number of times.
        goal : number
            Value to build.
        verbose : bool
            Print progress during search. Default False.
        callback : Callable, optional
            Called after every settled node with (step, node, state).
        should_stop : Callable, optional
            Cooperative cancellation check between pops.

        Returns
        -------
        SearchResult
            The expression and its term count, or the failure reason.

        Raises
        ------
        ConfigurationError
            If the seeds or goal are unusable.
        """
        config = self.make_config(seeds, goal, verbose=verbose, callback=callback)
        engine = SearchEngine(config)
        return engine.run(should_stop=should_stop)


def find_expression(goal: Number, seeds: Sequence[Number],
                    **options) -> SearchResult:
    """One-call shortcut: ``find_expression(2018, [42, 777])``."""
    verbose = options.pop("verbose", False)
    return Solver(**options).solve(seeds, goal, verbose=verbose)
