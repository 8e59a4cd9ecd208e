"""
Arithmetic operators — the vocabulary candidate expressions are built from.

Each operator has:
- A semantic kind (ADD, SUB, MUL, DIV; NONE marks a leaf)
- A callable computing the raw result on two operands
- A flag telling whether operand order matters

The textual symbol of an operator is presentation, not semantics, so it
lives in a separate lookup table (OPERATOR_SYMBOLS) used only by the
renderer. Division validity depends on the numeric domain and is decided by
NumericDomain.apply, not here.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from min_expression.errors import ConfigurationError


class OperatorKind(Enum):
    """Semantic kind of an expression node."""
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    NONE = "none"  # leaf


@dataclass(frozen=True, slots=True)
class Operator:
    """A binary arithmetic operation."""

    kind: OperatorKind
    func: Callable
    commutative: bool

    def __call__(self, a, b):
        return self.func(a, b)

    def __repr__(self) -> str:
        return f"Operator({self.kind.value})"


# ---------------------------------------------------------------------------
# Operator registry
# ---------------------------------------------------------------------------

_ADD = Operator(OperatorKind.ADD, operator.add, True)
_SUB = Operator(OperatorKind.SUB, operator.sub, False)
_MUL = Operator(OperatorKind.MUL, operator.mul, True)
# True division; integer mode substitutes an exact floor division.
_DIV = Operator(OperatorKind.DIV, operator.truediv, False)

OPERATOR_REGISTRY: dict[OperatorKind, Operator] = {
    OperatorKind.ADD: _ADD,
    OperatorKind.SUB: _SUB,
    OperatorKind.MUL: _MUL,
    OperatorKind.DIV: _DIV,
}

ARITHMETIC_OPERATORS: tuple[OperatorKind, ...] = tuple(OPERATOR_REGISTRY)

# Presentation only
OPERATOR_SYMBOLS: dict[OperatorKind, str] = {
    OperatorKind.ADD: "+",
    OperatorKind.SUB: "-",
    OperatorKind.MUL: "*",
    OperatorKind.DIV: "/",
}

SYMBOL_TO_KIND: dict[str, OperatorKind] = {
    symbol: kind for kind, symbol in OPERATOR_SYMBOLS.items()
}


def parse_operators(spec: str | Iterable) -> tuple[OperatorKind, ...]:
    """
    Normalize an operator selection to a tuple of kinds in canonical order.

    Accepts a symbol string such as "+-*/" or "*/", or an iterable of
    OperatorKind values and/or symbols. Duplicates are collapsed.
    """
    if isinstance(spec, str):
        items: Iterable = [ch for ch in spec if not ch.isspace()]
    else:
        items = spec

    selected = set()
    for item in items:
        if isinstance(item, OperatorKind):
            kind = item
        elif item in SYMBOL_TO_KIND:
            kind = SYMBOL_TO_KIND[item]
        else:
            raise ConfigurationError(f"unknown operator: {item!r}")
        if kind is OperatorKind.NONE:
            raise ConfigurationError("NONE is a leaf marker, not an operator")
        selected.add(kind)

    if not selected:
        raise ConfigurationError("at least one operator must be enabled")
    return tuple(k for k in ARITHMETIC_OPERATORS if k in selected)
