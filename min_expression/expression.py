"""
Expression nodes — one candidate expression per reachable value.

Nodes do not point at their children. A node records the *values* of its
two operands, and those values are looked up in the search stores when the
expression is rendered. Many expressions share the same sub-values, so the
stores form a value-keyed DAG arena rather than a tree:

    2018 = (a - b)        node(2018): left=a, right=b, SUB, terms=9
              |   |
              v   v
         node(a)  node(b)  ... each resolved by value

The cost of a node is its term count: the number of leaf literals in the
expression. Leaves cost 1, a combination costs the sum of its operands.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from min_expression.domain import Number
from min_expression.errors import SearchInvariantError
from min_expression.operators import OperatorKind


@dataclass(frozen=True, slots=True)
class ExpressionNode:
    """A single node of the value-keyed expression arena."""

    value: Number
    left_value: Number
    right_value: Number
    term_count: int
    kind: OperatorKind = OperatorKind.NONE

    def __post_init__(self):
        if self.term_count < 1:
            raise SearchInvariantError(
                f"term count must be positive, got {self.term_count} for {self.value}"
            )
        if self.kind is OperatorKind.NONE and self.term_count != 1:
            raise SearchInvariantError(
                f"leaf {self.value} must cost 1 term, got {self.term_count}"
            )
        if self.kind is not OperatorKind.NONE and self.term_count < 2:
            raise SearchInvariantError(
                f"combination {self.value} must cost at least 2 terms"
            )

    @property
    def is_leaf(self) -> bool:
        return self.kind is OperatorKind.NONE

    def with_value(self, value: Number) -> ExpressionNode:
        """Same derivation, stored under a different key (goal snapping)."""
        if self.is_leaf:
            return make_leaf(value)
        return dataclasses.replace(self, value=value)

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"Node({self.value}, leaf)"
        return (f"Node({self.value} = {self.left_value} {self.kind.value} "
                f"{self.right_value}, terms={self.term_count})")


# ---------------------------------------------------------------------------
# Factory functions
# ---------------------------------------------------------------------------

def make_leaf(value: Number) -> ExpressionNode:
    """Create a leaf (seed literal) node of cost 1."""
    return ExpressionNode(value, value, value, 1, OperatorKind.NONE)


def make_combination(kind: OperatorKind, value: Number,
                     left: ExpressionNode,
                     right: ExpressionNode) -> ExpressionNode:
    """Create the node for `left <kind> right == value`."""
    if kind is OperatorKind.NONE:
        raise SearchInvariantError(f"combination {value} needs an operator")
    return ExpressionNode(
        value,
        left.value,
        right.value,
        left.term_count + right.term_count,
        kind,
    )
