"""Search configuration, validated before the search starts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union

from min_expression.domain import MagnitudeBand, Number, NumericDomain
from min_expression.errors import ConfigurationError
from min_expression.operators import ARITHMETIC_OPERATORS, parse_operators


@dataclass
class SearchConfig:
    """Configuration for one SearchEngine run."""
    seeds: Sequence[Number]                       # Leaf values, at least one
    goal: Number                                  # Value to build
    domain: Union[NumericDomain, str] = NumericDomain.INTEGER
    band: Optional[MagnitudeBand] = None          # None: the domain's default band
    epsilon: float = 1e-9                         # Goal tolerance (REAL only)
    operators: Union[str, Sequence] = ARITHMETIC_OPERATORS
    initial_term_bound: Optional[int] = None      # None: the domain's loose default
    verbose: bool = False                         # Print progress
    progress_every: int = 100                     # First "Expanding" line
    callback: Optional[Callable] = field(default=None, repr=False)

    def __post_init__(self):
        self.domain = NumericDomain.from_name(self.domain)

        if self.seeds is None or len(self.seeds) == 0:
            raise ConfigurationError("at least one seed value is required")
        self.seeds = tuple(self.domain.coerce(s) for s in self.seeds)
        self.goal = self.domain.coerce(self.goal)

        if self.band is None:
            self.band = self.domain.default_band()
        self.band = self.band.bounded_by(self.domain.limit)

        if self.epsilon < 0:
            raise ConfigurationError("epsilon must be non-negative")

        self.operators = parse_operators(self.operators)

        if self.initial_term_bound is None:
            self.initial_term_bound = self.domain.default_term_bound(self.goal)
        if self.initial_term_bound < 1:
            raise ConfigurationError("initial_term_bound must be at least 1")

        if self.progress_every < 1:
            raise ConfigurationError("progress_every must be at least 1")
