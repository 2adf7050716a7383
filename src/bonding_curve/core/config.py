"""
Centralised engine configuration (for reproducible deployments and studies).
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import UNIT, REQUIRED_RESERVE_DECIMALS

# Placeholder fee account used when no recipient is configured
DEFAULT_FEE_RECIPIENT = "fee-recipient"


@dataclass(frozen=True)
class EngineConfig:
    """Construction-time knobs for a bonding-curve engine.

    Keeping them in one value makes simulations reproducible without changing
    code across modules. Fee fields seed the mutable FeeConfig; after
    construction fees change only through the admin setters.

    - `curve_parameter` → A (wad). Larger A flattens the curve: price(x) = (x/A)^(10/17).
    - `buy_fee_rate` / `buy_fee_base` → buy fee = floor(gross * rate / base).
    - `sell_fee_rate` / `sell_fee_base` → sell fee = floor(gross_in * rate / base).
    - `fee_recipient` → account receiving fees (must be non-zero when any rate > 0).
      Defaults to the placeholder DEFAULT_FEE_RECIPIENT; set a real account
      before charging a fee.
    - `required_reserve_decimals` → decimals the reserve token must report.

    Typical studies: A in 1e18 … 1e24; rate/base of 0/100 … 10/100.
    """
    curve_parameter: int = UNIT
    buy_fee_rate: int = 0
    buy_fee_base: int = 100
    sell_fee_rate: int = 0
    sell_fee_base: int = 100
    fee_recipient: str = DEFAULT_FEE_RECIPIENT
    required_reserve_decimals: int = REQUIRED_RESERVE_DECIMALS

    def fee_config(self):
        """Build the mutable FeeConfig seeded from this configuration."""
        from ..fees import FeeConfig, FeeSchedule
        return FeeConfig(
            buy=FeeSchedule(self.buy_fee_rate, self.buy_fee_base),
            sell=FeeSchedule(self.sell_fee_rate, self.sell_fee_base),
            recipient=self.fee_recipient,
        )


# Module-level default configuration
DEFAULT_ENGINE_CFG = EngineConfig()

__all__ = ["EngineConfig", "DEFAULT_ENGINE_CFG", "DEFAULT_FEE_RECIPIENT"]
