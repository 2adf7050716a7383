"""
Core datatypes shared by the ledger, executor and research helpers.

These datatypes are intentionally minimal and immutable so that quote and
execute paths can be compared by plain dataclass equality.

Notes:
- All amounts are wad-scaled ints (see constants.UNIT).
- A quote and the matching execute return the same type; for an unchanged
  ledger snapshot they compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Ledger snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of the dual-axis accumulators.

    Fields:
    - s1 / x1: reserve paid in and supply minted on the buy axis.
    - s2 / x2: reserve paid out and supply burned on the sell axis.
    - bootstrapped: one-time seeding flag.
    """

    s1: int
    s2: int
    x1: int
    x2: int
    bootstrapped: bool = False

    @property
    def internal_supply(self) -> int:
        return self.x1 - self.x2

    @property
    def internal_reserve(self) -> int:
        return self.s1 - self.s2


# ---------------------------------------------------------------------------
# Trade results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BuyResult:
    """Amounts realised (or quoted) by a buy.

    - reserve_in: reserve asset taken from the buyer (added to s1).
    - gross_out: synthetic supply advanced on the buy axis (added to x1).
    - fee: part of gross_out routed to the fee recipient.
    - net_out: part of gross_out delivered to the buyer (gross_out - fee).
    """

    reserve_in: int
    gross_out: int
    fee: int
    net_out: int


@dataclass(frozen=True)
class SellResult:
    """Amounts realised (or quoted) by a sell.

    - gross_in: synthetic taken from the seller.
    - fee: part of gross_in routed whole to the fee recipient.
    - burn: part of gross_in removed from supply (added to x2).
    - reserve_out: reserve asset paid to the seller (added to s2).
    """

    gross_in: int
    fee: int
    burn: int
    reserve_out: int


__all__ = [
    "LedgerSnapshot",
    "BuyResult",
    "SellResult",
]
