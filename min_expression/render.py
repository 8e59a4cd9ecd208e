"""
Rendering expressions out of the value-keyed arena.

The renderer follows operand values through a lookup function (normally
SearchState.lookup_best_known, which checks the closed store first and the
frontier second). Infix and postfix (RPN) output are two views of the same
node structure; both contain exactly `term_count` literals.

Rendering recurses once per operator, so depth is bounded by the term
count. That is tens of levels for realistic goals; extremely large term
counts would need an explicit stack.
"""

from __future__ import annotations

from typing import Callable, List

from min_expression.domain import Number, NumericDomain
from min_expression.expression import ExpressionNode
from min_expression.operators import OPERATOR_SYMBOLS, SYMBOL_TO_KIND

Lookup = Callable[[Number], ExpressionNode]


class ExpressionRenderer:
    """Reconstructs expressions from a value -> node lookup."""

    def __init__(self, lookup: Lookup,
                 domain: NumericDomain = NumericDomain.INTEGER):
        self.lookup = lookup
        self.domain = domain

    def infix(self, value: Number) -> str:
        """Fully parenthesized infix form, e.g. ``((42*42)+777)``."""
        node = self.lookup(value)
        if node.is_leaf:
            return self.domain.format(node.value)
        left = self.infix(node.left_value)
        right = self.infix(node.right_value)
        return f"({left}{OPERATOR_SYMBOLS[node.kind]}{right})"

    def postfix(self, value: Number) -> List[str]:
        """Postfix (RPN) token list, e.g. ``['42', '42', '*', '777', '+']``."""
        tokens: List[str] = []
        self._emit_postfix(value, tokens)
        return tokens

    def _emit_postfix(self, value: Number, tokens: List[str]) -> None:
        node = self.lookup(value)
        if node.is_leaf:
            tokens.append(self.domain.format(node.value))
            return
        self._emit_postfix(node.left_value, tokens)
        self._emit_postfix(node.right_value, tokens)
        tokens.append(OPERATOR_SYMBOLS[node.kind])

    def term_count(self, value: Number) -> int:
        """Number of leaves reached from `value`, counted through the arena."""
        node = self.lookup(value)
        if node.is_leaf:
            return 1
        return self.term_count(node.left_value) + self.term_count(node.right_value)

    def evaluate(self, value: Number) -> Number:
        """Recompute the expression for `value` from its leaves."""
        node = self.lookup(value)
        if node.is_leaf:
            return node.value
        result = self.domain.apply(
            node.kind,
            self.evaluate(node.left_value),
            self.evaluate(node.right_value),
        )
        if result is None:
            raise ValueError(f"invalid division while evaluating {value}")
        return result


def evaluate_postfix(tokens: List[str],
                     domain: NumericDomain = NumericDomain.INTEGER) -> Number:
    """
    Evaluate an RPN token list in the given domain.

    Raises ValueError on malformed input or a division the domain rejects.
    """
    stack: List[Number] = []
    for token in tokens:
        kind = SYMBOL_TO_KIND.get(token)
        if kind is None:
            stack.append(domain.parse(token))
            continue
        if len(stack) < 2:
            raise ValueError(f"operator {token!r} needs two operands")
        right = stack.pop()
        left = stack.pop()
        result = domain.apply(kind, left, right)
        if result is None:
            raise ValueError(f"invalid division {left} / {right}")
        stack.append(result)

    if len(stack) != 1:
        raise ValueError(f"malformed expression: {len(stack)} values left on stack")
    return stack[0]
