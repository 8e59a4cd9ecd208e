"""
Numeric domains — the fixed, machine-sized arithmetic the search runs in.

INTEGER mode works over int64-range integers: division is only valid when
exact. REAL mode works over float64 values: division is valid whenever the
divisor is non-zero, and the goal is matched within a tolerance.

The MagnitudeBand bounds the absolute value of everything the search keeps,
which is what bounds memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import numpy as np

from min_expression.errors import ConfigurationError
from min_expression.operators import OPERATOR_REGISTRY, OperatorKind

Number = Union[int, float]

_INT64 = np.iinfo(np.int64)
_FLOAT64 = np.finfo(np.float64)

REAL_TERM_BOUND = 64


class NumericDomain(Enum):
    """Which arithmetic the search is carried out in."""
    INTEGER = "integer"
    REAL = "real"

    @property
    def limit(self) -> Number:
        """Largest magnitude representable in this domain."""
        if self is NumericDomain.INTEGER:
            return int(_INT64.max)
        return float(_FLOAT64.max)

    def default_band(self) -> MagnitudeBand:
        if self is NumericDomain.INTEGER:
            return MagnitudeBand(0, 1_000_000)
        return MagnitudeBand(1e-6, 1e6)

    def default_term_bound(self, goal: Number) -> int:
        """
        Loose starting bound on the goal's term count.

        Integers use |goal| + 10. Real goals can be tiny yet need many terms
        (1/1024 from 2 takes 12), so REAL never goes below REAL_TERM_BOUND.
        """
        bound = int(abs(goal)) + 10
        if self is NumericDomain.REAL:
            return max(bound, REAL_TERM_BOUND)
        return bound

    def coerce(self, value) -> Number:
        """Convert a user-supplied number into this domain, or raise."""
        if isinstance(value, (bool, np.bool_)):
            raise ConfigurationError(f"not a number: {value!r}")

        if self is NumericDomain.INTEGER:
            if isinstance(value, (int, np.integer)):
                result = int(value)
            elif isinstance(value, (float, np.floating)):
                if not np.isfinite(value):
                    raise ConfigurationError(f"value must be finite, got {value!r}")
                if not float(value).is_integer():
                    raise ConfigurationError(
                        f"integer mode needs integral values, got {value!r}"
                    )
                result = int(value)
            else:
                raise ConfigurationError(f"not a number: {value!r}")
            if not _INT64.min <= result <= _INT64.max:
                raise ConfigurationError(f"{result} does not fit in int64")
            return result

        try:
            result = float(np.float64(value))
        except (TypeError, ValueError, OverflowError) as exc:
            raise ConfigurationError(f"not a number: {value!r}") from exc
        if not np.isfinite(result):
            raise ConfigurationError(f"value must be finite, got {value!r}")
        return result

    def apply(self, kind: OperatorKind, a: Number, b: Number) -> Optional[Number]:
        """
        Result of `a <kind> b`, or None if the operation is not valid here.

        Division by zero is never valid. Integer division is only valid when
        it is exact.
        """
        if kind is OperatorKind.DIV:
            if b == 0:
                return None
            if self is NumericDomain.INTEGER:
                if a % b != 0:
                    return None
                return a // b
            return a / b
        return OPERATOR_REGISTRY[kind](a, b)

    def matches(self, value: Number, goal: Number, epsilon: float = 0.0) -> bool:
        """Whether `value` counts as reaching `goal`."""
        if self is NumericDomain.INTEGER:
            return value == goal
        return abs(value - goal) <= epsilon

    def format(self, value: Number) -> str:
        """Literal text for a value."""
        if self is NumericDomain.INTEGER:
            return str(int(value))
        v = float(value)
        if v.is_integer() and abs(v) < 1e15:
            return str(int(v))
        return repr(v)

    def parse(self, token: str) -> Number:
        """Inverse of format()."""
        if self is NumericDomain.INTEGER:
            return int(token)
        return float(token)

    @classmethod
    def from_name(cls, name: Union[str, NumericDomain]) -> NumericDomain:
        if isinstance(name, NumericDomain):
            return name
        try:
            return cls(str(name).lower())
        except ValueError as exc:
            raise ConfigurationError(f"unknown numeric domain: {name!r}") from exc


@dataclass(frozen=True)
class MagnitudeBand:
    """
    Band of relevant absolute values: minimum <= |v| < maximum.

    A maximum of None means unbounded; SearchConfig replaces it with the
    domain's machine limit. NaN never lies inside a band.
    """
    minimum: Number = 0
    maximum: Optional[Number] = None

    def __post_init__(self):
        if self.minimum < 0:
            raise ConfigurationError("band minimum must be non-negative")
        if self.maximum is not None and self.maximum <= self.minimum:
            raise ConfigurationError(
                f"empty magnitude band [{self.minimum}, {self.maximum})"
            )

    def contains(self, value: Number) -> bool:
        magnitude = abs(value)
        if self.maximum is None:
            return magnitude >= self.minimum
        return self.minimum <= magnitude < self.maximum

    def bounded_by(self, limit: Number) -> MagnitudeBand:
        """Copy of this band whose maximum does not exceed `limit`."""
        if self.maximum is not None and self.maximum <= limit:
            return self
        return MagnitudeBand(self.minimum, limit)
