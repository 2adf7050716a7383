"""
Dual-axis ledger: independent monotonic buy (x1/s1) and sell (x2/s2) positions.

Buys and sells each advance their own curve position. A sell is priced
against x2's own history, never against the shared buy position, so a
buy-then-sell pair cannot walk back down the segment it just paid for.

Invariants (checked before every mutation):
- all four accumulators only ever increase;
- x1 >= x2 (internal supply never negative);
- s1 >= s2 (book reserve never negative).
"""

from __future__ import annotations

from dataclasses import dataclass

from .core.datatypes import LedgerSnapshot
from .core.exc import AmountDomainError, AlreadyBootstrappedError, InvariantViolation
from .curve import BondingCurve


def _require_delta(v: int, name: str) -> None:
    if not isinstance(v, int) or isinstance(v, bool):
        raise AmountDomainError(f"{name} must be int")
    if v < 0:
        raise AmountDomainError(f"{name} must be >= 0, got {v}")


@dataclass
class Ledger:
    """Mutable accumulators; written only by the trade executor."""

    s1: int = 0
    s2: int = 0
    x1: int = 0
    x2: int = 0
    bootstrapped: bool = False

    # ------------- views -------------

    @property
    def internal_supply(self) -> int:
        """x1 - x2: supply outstanding according to the ledger."""
        return self.x1 - self.x2

    @property
    def internal_reserve(self) -> int:
        """s1 - s2: running bookkeeping of reserve in minus reserve out."""
        return self.s1 - self.s2

    def modeled_reserve(self, curve: BondingCurve) -> int:
        """area(x1) - area(x2): curve-exact bound on redeemable reserve."""
        hi = curve.area_of(self.x1)
        lo = curve.area_of(self.x2)
        if hi < lo:
            raise InvariantViolation(f"modeled reserve underflow: area(x1)={hi} < area(x2)={lo}")
        return hi - lo

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            s1=self.s1, s2=self.s2, x1=self.x1, x2=self.x2,
            bootstrapped=self.bootstrapped,
        )

    # ------------- mutations -------------

    def record_buy(self, reserve_in: int, minted: int) -> None:
        _require_delta(reserve_in, "reserve_in")
        _require_delta(minted, "minted")
        self.s1 += reserve_in
        self.x1 += minted

    def record_sell(self, reserve_out: int, burned: int) -> None:
        _require_delta(reserve_out, "reserve_out")
        _require_delta(burned, "burned")
        if self.x2 + burned > self.x1:
            raise InvariantViolation(
                f"sell would break x1 >= x2 (x1={self.x1}, x2={self.x2}, burn={burned})"
            )
        if self.s2 + reserve_out > self.s1:
            raise InvariantViolation(
                f"sell would break s1 >= s2 (s1={self.s1}, s2={self.s2}, out={reserve_out})"
            )
        self.s2 += reserve_out
        self.x2 += burned

    def mark_bootstrapped(self) -> None:
        if self.bootstrapped:
            raise AlreadyBootstrappedError("ledger already bootstrapped")
        self.bootstrapped = True


__all__ = ["Ledger"]
