"""
Candidate generation — every way of combining two settled expressions.

These are the "moves" of the search: given two settled nodes a and b, each
enabled operator yields a candidate node whose cost is the sum of both
operands' term counts. Non-commutative operators are applied both ways
round when the operands differ; commutative ones only once.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from min_expression.domain import NumericDomain
from min_expression.errors import SearchInvariantError
from min_expression.expression import ExpressionNode, make_combination
from min_expression.operators import ARITHMETIC_OPERATORS, OperatorKind

# Emission order for one operand ordering.
_FORWARD_ORDER = (OperatorKind.DIV, OperatorKind.SUB, OperatorKind.MUL, OperatorKind.ADD)
_SWAPPED_ORDER = (OperatorKind.DIV, OperatorKind.SUB)


class CandidateGenerator:
    """
    Produces combination candidates for pairs of settled nodes.

    Parameters
    ----------
    domain : NumericDomain
        Decides when division is valid and how it is computed.
    operators : iterable of OperatorKind, optional
        Enabled operators. Default: all four.
    """

    def __init__(self, domain: NumericDomain,
                 operators: Optional[Iterable[OperatorKind]] = None):
        self.domain = domain
        enabled = set(ARITHMETIC_OPERATORS if operators is None else operators)
        self._forward = tuple(k for k in _FORWARD_ORDER if k in enabled)
        self._swapped = tuple(k for k in _SWAPPED_ORDER if k in enabled)

    @property
    def operators(self) -> tuple[OperatorKind, ...]:
        return tuple(k for k in ARITHMETIC_OPERATORS if k in self._forward)

    def generate(self, a: ExpressionNode,
                 b: ExpressionNode) -> Iterator[ExpressionNode]:
        """
        Yield all candidates built from `a` and `b`.

        Candidates are yielded one at a time so each can be filtered before
        the next is computed.
        """
        if a.term_count + b.term_count < 2:
            raise SearchInvariantError(
                f"combining {a.value} and {b.value} gives a cost below 2"
            )

        yield from self._combine(a, b, self._forward)
        if a.value != b.value:
            yield from self._combine(b, a, self._swapped)

    def _combine(self, left: ExpressionNode, right: ExpressionNode,
                 kinds: tuple) -> Iterator[ExpressionNode]:
        apply = self.domain.apply
        for kind in kinds:
            value = apply(kind, left.value, right.value)
            if value is None:
                continue
            yield make_combination(kind, value, left, right)
