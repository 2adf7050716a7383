"""
Linear fee schedules with floor/ceiling rounding that round-trips exactly.

Forward (gross known):   fee = floor(gross * rate / base); net = gross - fee
Inverse (net wanted):    gross = ceil(net * base / (base - rate)); recompute fee/net;
                         if net still falls short, gross += 1 and recompute once more.

The same schedule type serves both sides:
- buy:  gross = supply advanced on the buy axis, net = delivered to the buyer.
- sell: gross = synthetic delivered by the seller, net = burned from supply.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .core.constants import ZERO_ADDRESS
from .core.exc import AmountDomainError, ConfigurationError
from .core.fixed_point import ceil_div


@dataclass(frozen=True)
class FeeSchedule:
    """Rational fee rate `rate / base` with 0 <= rate < base."""

    rate: int
    base: int

    def __post_init__(self):
        for name, v in (("rate", self.rate), ("base", self.base)):
            if not isinstance(v, int) or isinstance(v, bool):
                raise ConfigurationError(f"fee {name} must be int")
        if self.base <= 0:
            raise ConfigurationError(f"fee base must be > 0, got {self.base}")
        if self.rate < 0 or self.rate >= self.base:
            raise ConfigurationError(
                f"fee rate must satisfy 0 <= rate < base (rate={self.rate}, base={self.base})"
            )

    @staticmethod
    def free() -> "FeeSchedule":
        return FeeSchedule(0, 1)

    def is_free(self) -> bool:
        return self.rate == 0

    def fee_on(self, gross: int) -> int:
        """floor(gross * rate / base)."""
        if gross < 0:
            raise AmountDomainError(f"gross must be >= 0, got {gross}")
        return gross * self.rate // self.base

    def split(self, gross: int) -> Tuple[int, int]:
        """Return (fee, net) for a gross amount; fee + net == gross exactly."""
        fee = self.fee_on(gross)
        return fee, gross - fee

    def gross_for_net(self, net: int) -> Tuple[int, int, int]:
        """Smallest-rounding gross whose net covers `net`.

        Returns (gross, fee, net_realised) with net_realised >= net.
        """
        if net < 0:
            raise AmountDomainError(f"net must be >= 0, got {net}")
        if net == 0:
            return 0, 0, 0
        gross = ceil_div(net * self.base, self.base - self.rate)
        fee, got = self.split(gross)
        if got < net:
            gross += 1
            fee, got = self.split(gross)
        return gross, fee, got


@dataclass
class FeeConfig:
    """Mutable fee configuration held by reference by the engine.

    Setters validate eagerly: invalid values are rejected here, at
    configuration time, never in the middle of a trade.
    """

    buy: FeeSchedule
    sell: FeeSchedule
    recipient: str

    def __post_init__(self):
        _require_recipient(self.recipient)

    def set_buy(self, rate: int, base: int) -> FeeSchedule:
        self.buy = FeeSchedule(rate, base)
        return self.buy

    def set_sell(self, rate: int, base: int) -> FeeSchedule:
        self.sell = FeeSchedule(rate, base)
        return self.sell

    def set_recipient(self, recipient: str) -> None:
        _require_recipient(recipient)
        self.recipient = recipient


def _require_recipient(recipient) -> None:
    if not isinstance(recipient, str) or not recipient or recipient == ZERO_ADDRESS:
        raise ConfigurationError(f"fee recipient must be a non-zero address, got {recipient!r}")


__all__ = ["FeeSchedule", "FeeConfig"]
