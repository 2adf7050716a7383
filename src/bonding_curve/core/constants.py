"""
Bonding Curve Core Constants (integer domain)
=============================================

Only integer fixed-point constants live here. Decimal quanta used for
display/IO conversion are grouped at the bottom and consumed by `fmt.py`.
"""

# NOTE: every amount in the engine is a non-negative int scaled by UNIT ("wad").

from decimal import Decimal

# ---------------------------------------------------------------------------
# Fixed-point scale
# ---------------------------------------------------------------------------

#: Number of fractional decimal digits carried by every amount.
WAD_DECIMALS: int = 18
UNIT: int = 10 ** WAD_DECIMALS
HALF_UNIT: int = UNIT // 2

#: Internal scale for exp2 series evaluation (36 fractional digits).
EXP_SCALE: int = 10 ** 36

#: ln(2) at EXP_SCALE, truncated.
LN2_EXP_SCALE: int = 693147180559945309417232121458176568

#: exp2 input bound (exclusive): results must stay within 192 integer bits.
EXP2_MAX_INPUT: int = 192 * UNIT


# ---------------------------------------------------------------------------
# Curve exponents (a * y^1.7 = x)
# ---------------------------------------------------------------------------

#: price(x) = (x / a)^(10/17)
PRICE_EXPONENT: int = (10 * UNIT) // 17

#: supply_from_area(s) = a * (27 s / 17 a)^(17/27)
SUPPLY_EXPONENT: int = (17 * UNIT) // 27

#: area(x) = (17/27) * x * price(x)
AREA_NUMERATOR: int = 17
AREA_DENOMINATOR: int = 27


# ---------------------------------------------------------------------------
# Collaborator requirements
# ---------------------------------------------------------------------------

#: The reserve asset must carry exactly this many fractional digits.
REQUIRED_RESERVE_DECIMALS: int = 18

#: Canonical null account; never a valid trade counterparty or fee recipient.
ZERO_ADDRESS: str = "0x" + "0" * 40


# ---------------------------------------------------------------------------
# Decimal quanta for display/IO quantisation (formatting helpers)
# ---------------------------------------------------------------------------

# Smallest representable step of a wad amount (1e-18 whole tokens).
WAD_QUANTUM: Decimal = Decimal("1e-18")


__all__ = [
    "WAD_DECIMALS",
    "UNIT",
    "HALF_UNIT",
    "EXP_SCALE",
    "LN2_EXP_SCALE",
    "EXP2_MAX_INPUT",
    "PRICE_EXPONENT",
    "SUPPLY_EXPONENT",
    "AREA_NUMERATOR",
    "AREA_DENOMINATOR",
    "REQUIRED_RESERVE_DECIMALS",
    "ZERO_ADDRESS",
    "WAD_QUANTUM",
]
