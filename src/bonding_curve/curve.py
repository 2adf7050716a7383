"""
Bonding curve a * y^1.7 = x: **pure curve math only**.

price(x)            = (x / a)^(10/17)
area(x)             = (17/27) * x^(27/17) / a^(10/17)  = (17/27) * x * price(x)
supply_from_area(s) = (s / K)^(17/27)                 = a * (27 s / 17 a)^(17/27)

Every evaluation is a closed-form O(1) fixed-point computation; nothing
iterates towards a root. The fixed-point power only accepts bases >= 1, so
whenever the natural base drops below one the reciprocal form is used:
    (p / q)^e  ->  1 / (q / p)^e
"""
from __future__ import annotations

from .core.constants import (
    UNIT,
    PRICE_EXPONENT,
    SUPPLY_EXPONENT,
    AREA_NUMERATOR,
    AREA_DENOMINATOR,
)
from .core.exc import AmountDomainError, ConfigurationError
from .core import fixed_point as fp

# --- Debug utilities (toggleable) ---
DEBUG_CURVE = False

def _dbg(msg: str) -> None:
    if DEBUG_CURVE:
        print(f"[CURVE] {msg}")


def _ratio_pow(num: int, den: int, exponent: int) -> int:
    """(num / den)^exponent in wad, keeping the power's base >= UNIT.

    num and den are raw ints in the same scale; both must be > 0.
    """
    if num >= den:
        return fp.pow(fp.mul_div(num, UNIT, den), exponent)
    inv = fp.pow(fp.mul_div(den, UNIT, num), exponent)
    return fp.mul_div(UNIT, UNIT, inv)


def _require_amount(x: int, name: str) -> None:
    if not isinstance(x, int) or isinstance(x, bool):
        raise AmountDomainError(f"{name} must be an int wad amount")
    if x < 0:
        raise AmountDomainError(f"{name} must be >= 0, got {x}")


class BondingCurve:
    """Curve a * y^1.7 = x with a single immutable steepness parameter.

    `curve_parameter` is A in wad (a = A / 1e18 in real units). All methods
    take and return wad-scaled ints and round down.
    """

    __slots__ = ("_a",)

    def __init__(self, curve_parameter: int) -> None:
        if not isinstance(curve_parameter, int) or isinstance(curve_parameter, bool):
            raise ConfigurationError("curve_parameter must be an int wad")
        if curve_parameter <= 0:
            raise ConfigurationError(f"curve_parameter must be > 0, got {curve_parameter}")
        self._a = curve_parameter

    @property
    def curve_parameter(self) -> int:
        return self._a

    def __repr__(self) -> str:
        return f"BondingCurve(curve_parameter={self._a})"

    def price_at_supply(self, x: int) -> int:
        """Marginal price (reserve per synthetic, wad) at cumulative supply x."""
        _require_amount(x, "supply")
        if x == 0:
            return 0
        # x < a takes the reciprocal branch inside _ratio_pow
        p = _ratio_pow(x, self._a, PRICE_EXPONENT)
        _dbg(f"price_at_supply({x}) = {p}")
        return p

    def area_of(self, x: int) -> int:
        """Reserve needed to mint x from empty supply (integral of price on [0, x])."""
        _require_amount(x, "supply")
        if x == 0:
            return 0
        p = self.price_at_supply(x)
        return fp.mul_div(x, p * AREA_NUMERATOR, AREA_DENOMINATOR * UNIT)

    def supply_from_area(self, s: int) -> int:
        """Inverse of area_of: cumulative supply whose area equals s."""
        _require_amount(s, "area")
        if s == 0:
            return 0
        # (27 s / 17 a)^(17/27), reciprocal form when 27 s < 17 a
        r = _ratio_pow(AREA_DENOMINATOR * s, AREA_NUMERATOR * self._a, SUPPLY_EXPONENT)
        x = fp.mul(self._a, r)
        _dbg(f"supply_from_area({s}) = {x}")
        return x

    def cost_between(self, lo: int, hi: int) -> int:
        """Reserve between two supplies on the same axis: area(hi) - area(lo)."""
        if hi < lo:
            raise AmountDomainError(f"cost_between expects lo <= hi, got lo={lo}, hi={hi}")
        return self.area_of(hi) - self.area_of(lo)


__all__ = ["BondingCurve"]
