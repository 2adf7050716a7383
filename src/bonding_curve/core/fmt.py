"""
Formatting helpers and Decimal bridges (non-core arithmetic).

Core arithmetic uses plain ints at wad scale. Decimal here is only for
formatting and convenience at I/O boundaries (e.g., tests, logs, display).
"""

from decimal import Decimal, getcontext, ROUND_DOWN, ROUND_UP

from .exc import AmountDomainError
from .constants import UNIT, WAD_QUANTUM


# ---------------------------------------------------------------------------
# Global Decimal precision (formatting only)
# ---------------------------------------------------------------------------

#: Default precision for Decimal-based formatting. A full-range wad needs
#: ~60 significant digits; this does not affect core arithmetic.
DEFAULT_DECIMAL_PRECISION: int = 60
getcontext().prec = DEFAULT_DECIMAL_PRECISION


def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')        -> '1.000000000000000000E+0'
      Decimal('123456')   -> '1.234560000000000000E+5'
    """
    return format(x, f".{places}E")


# ---------------------------------------------------------------------------
# Wad <-> Decimal bridges (I/O only)
# ---------------------------------------------------------------------------

def wad_to_decimal(w: int) -> Decimal:
    """Return Decimal whole-token value of a wad amount (I/O/display only)."""
    if not isinstance(w, int) or isinstance(w, bool):
        raise AmountDomainError("wad_to_decimal: amount must be int")
    if w < 0:
        raise AmountDomainError("wad_to_decimal: amount must be >= 0")
    return Decimal(w) * WAD_QUANTUM


def _check_decimal(x: Decimal, name: str) -> None:
    if x.is_nan() or x.is_infinite():
        raise AmountDomainError(f"{name}: invalid Decimal")
    if x < 0:
        raise AmountDomainError(f"{name}: negative not allowed")


def wad_from_decimal_out(x: Decimal) -> int:
    """OUT-path: floor a Decimal to whole wad units (won't give more OUT)."""
    _check_decimal(x, "wad_from_decimal_out")
    return int((x * UNIT).to_integral_value(rounding=ROUND_DOWN))


def wad_from_decimal_in(x: Decimal) -> int:
    """IN-path: ceil a Decimal to whole wad units (won't pay less IN)."""
    _check_decimal(x, "wad_from_decimal_in")
    return int((x * UNIT).to_integral_value(rounding=ROUND_UP))


def wad(x) -> int:
    """Convenience: exact wad from an int/str/Decimal whole-token literal.

    Rejects values that do not sit on the wad grid.
    """
    d = x if isinstance(x, Decimal) else Decimal(str(x))
    down = wad_from_decimal_out(d)
    if down != wad_from_decimal_in(d):
        raise AmountDomainError(f"wad(): {x} is finer than 1e-18")
    return down


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "WAD_QUANTUM",
    "fmt_dec",
    "wad_to_decimal",
    "wad_from_decimal_out",
    "wad_from_decimal_in",
    "wad",
]
