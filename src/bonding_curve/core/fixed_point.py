"""
Fixed-point primitives: 18-decimal unsigned arithmetic on plain ints.

- Non-negative domain: every input and output is an int >= 0 scaled by UNIT.
- Rounding semantics: everything truncates (floor) unless the name says `_up`.
- Power: pow(x, y) = exp2(log2(x) * y) with log2 defined only for x >= UNIT.
  Bases below one are rejected rather than evaluated; callers that need them
  (the curve) rewrite the expression in reciprocal form.

Truncation rules, by operation:
  mul, div, mul_div, floor_div ... floor
  mul_div_up, ceil_div ........... ceiling
  sqrt ........................... floor of isqrt(x * UNIT)
  log2 ........................... truncated binary expansion (bit-by-bit squaring)
  exp2 ........................... truncated Taylor series of e^(f ln2) at 36 digits
  pow ............................ truncation of exp2(mul(log2(x), y))
"""

from __future__ import annotations

import math

from .constants import (
    UNIT,
    HALF_UNIT,
    EXP_SCALE,
    LN2_EXP_SCALE,
    EXP2_MAX_INPUT,
)
from .exc import AmountDomainError

# Debug printing control
DEBUG_FIXED_POINT = False

def _dbg(msg: str) -> None:
    if DEBUG_FIXED_POINT:
        print(msg)


def _check(*values: int) -> None:
    for v in values:
        if not isinstance(v, int) or isinstance(v, bool):
            raise AmountDomainError(f"fixed-point operands must be int, got {type(v).__name__}")
        if v < 0:
            raise AmountDomainError(f"fixed-point operands must be >= 0, got {v}")


# ----------------------------
# Integer rounding helpers (centralised)
# ----------------------------

def ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


def floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("floor_div expects a>=0 and b>0")
    return a // b


# ----------------------------
# Multiplication / division
# ----------------------------

def mul(x: int, y: int) -> int:
    """x * y in wad, rounded down."""
    _check(x, y)
    return x * y // UNIT


def div(x: int, y: int) -> int:
    """x / y in wad, rounded down."""
    _check(x, y)
    if y == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    return x * UNIT // y


def mul_div(x: int, y: int, d: int) -> int:
    """floor(x * y / d) on raw ints (no implicit UNIT)."""
    _check(x, y, d)
    if d == 0:
        raise ZeroDivisionError("mul_div by zero")
    return x * y // d


def mul_div_up(x: int, y: int, d: int) -> int:
    """ceil(x * y / d) on raw ints (no implicit UNIT)."""
    _check(x, y, d)
    if d == 0:
        raise ZeroDivisionError("mul_div_up by zero")
    return ceil_div(x * y, d)


# ----------------------------
# Roots, logarithms, exponentials
# ----------------------------

def sqrt(x: int) -> int:
    """Square root of a wad, rounded down."""
    _check(x)
    if x == 0:
        return 0
    return math.isqrt(x * UNIT)


def log2(x: int) -> int:
    """Binary logarithm of a wad x >= UNIT, truncated.

    The integer part comes from the bit length of x/UNIT; the fractional part
    is produced one binary digit at a time by repeated squaring of the
    normalised mantissa in [1, 2).
    """
    _check(x)
    if x < UNIT:
        raise AmountDomainError(f"log2 is defined only for x >= UNIT, got {x}")

    n = (x // UNIT).bit_length() - 1
    result = n * UNIT
    y = x >> n
    if y == UNIT:
        return result

    delta = HALF_UNIT
    while delta > 0:
        y = y * y // UNIT
        if y >= 2 * UNIT:
            result += delta
            y >>= 1
        delta >>= 1
    _dbg(f"log2: x={x} -> {result}")
    return result


def exp2(x: int) -> int:
    """2^x for a wad exponent x < 192, truncated."""
    _check(x)
    if x >= EXP2_MAX_INPUT:
        raise AmountDomainError(f"exp2 input too large: {x} >= {EXP2_MAX_INPUT}")

    n, frac = divmod(x, UNIT)
    # 2^frac = e^(frac * ln2), z < ln2 < 1 so the series converges quickly
    z = frac * LN2_EXP_SCALE // UNIT
    term = EXP_SCALE
    total = EXP_SCALE
    k = 1
    while term > 0:
        term = term * z // (EXP_SCALE * k)
        total += term
        k += 1
    result = (total << n) // (EXP_SCALE // UNIT)
    _dbg(f"exp2: x={x} -> {result} ({k} terms)")
    return result


def pow(x: int, y: int) -> int:
    """x^y for wad base x >= UNIT (or x == 0) and wad exponent y.

    Raises AmountDomainError for 0 < x < UNIT: the base-below-one case must be
    rewritten by the caller as 1 / (1/x)^y.
    """
    _check(x, y)
    if x == 0:
        return 0 if y > 0 else UNIT
    if y == 0 or x == UNIT:
        return UNIT
    if x < UNIT:
        raise AmountDomainError(
            f"pow base below one is not supported (x={x}); use the reciprocal form"
        )
    return exp2(mul(log2(x), y))


__all__ = [
    "ceil_div",
    "floor_div",
    "mul",
    "div",
    "mul_div",
    "mul_div_up",
    "sqrt",
    "log2",
    "exp2",
    "pow",
]
