"""Numeric bounds and literal value ranges."""

import math
from typing import List, Tuple

INT_BITS = 64
INT_MIN = -(2 ** (INT_BITS - 1))
INT_MAX = 2 ** (INT_BITS - 1) - 1


def in_int_range(value: int) -> bool:
    """Return True when `value` fits the VM's signed integer type."""
    return INT_MIN <= value <= INT_MAX


def checked(value: int) -> int:
    """Return `value` or raise OverflowError if it leaves the integer range."""
    if not in_int_range(value):
        raise OverflowError(value)
    return value


def trunc_div(x: int, y: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(x) // abs(y)
    return quotient if (x < 0) == (y < 0) else -quotient


def trunc_rem(x: int, y: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return x - y * trunc_div(x, y)


class ValueEnumerations:
    """Defaults for randomly generated literals."""

    INT_LITERAL_RANGE: Tuple[int, int] = (-10, 10)
    FLOAT_LITERAL_RANGE: Tuple[float, float] = (-10.0, 10.0)

    FLOAT_CONSTANTS: List[float] = [0.0, 1.0, -1.0, 0.5, 2.0, math.pi, math.e]


__all__ = [
    "INT_BITS",
    "INT_MIN",
    "INT_MAX",
    "in_int_range",
    "checked",
    "trunc_div",
    "trunc_rem",
    "ValueEnumerations",
]
