"""
min_expression: minimal arithmetic expressions by best-first search.

Finds, for a goal value and a few seed values, an expression over
{+, -, *, /} that evaluates exactly to the goal with the fewest leaf
terms, by uniform-cost search over the values reachable from the seeds.
"""

from min_expression.errors import ConfigurationError, SearchInvariantError
from min_expression.operators import OperatorKind, OPERATOR_REGISTRY, OPERATOR_SYMBOLS
from min_expression.domain import MagnitudeBand, NumericDomain
from min_expression.expression import ExpressionNode, make_leaf, make_combination
from min_expression.store import ClosedStore, Frontier
from min_expression.generator import CandidateGenerator
from min_expression.render import ExpressionRenderer, evaluate_postfix
from min_expression.config import SearchConfig
from min_expression.search import SearchEngine, SearchResult, SearchStatus
from min_expression.solver import Solver, find_expression

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "SearchInvariantError",
    "OperatorKind",
    "OPERATOR_REGISTRY",
    "OPERATOR_SYMBOLS",
    "MagnitudeBand",
    "NumericDomain",
    "ExpressionNode",
    "make_leaf",
    "make_combination",
    "ClosedStore",
    "Frontier",
    "CandidateGenerator",
    "ExpressionRenderer",
    "evaluate_postfix",
    "SearchConfig",
    "SearchEngine",
    "SearchResult",
    "SearchStatus",
    "Solver",
    "find_expression",
]
