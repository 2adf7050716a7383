"""
Top-level API for bonding_curve (integer-domain).

This module exposes the stable interface of the issuance/redemption engine:
  - BondingCurve: closed-form price / area / inverse-area on a * y^1.7 = x
  - BondingCurveEngine: six atomic trades, quotes, bootstrap, admin, skim
  - Ledger, FeeSchedule / FeeConfig: dual-axis accounting and fee rules

All amounts are wad-scaled ints (18 decimals). Decimal appears only in the
I/O helpers under `bonding_curve.core`.

Research helpers (random-trade simulation, pandas export) live under the
`bonding_curve.research` subpackage and are **not** part of the stable API.
"""

from __future__ import annotations

from .curve import BondingCurve
from .ledger import Ledger
from .fees import FeeSchedule, FeeConfig
from .executor import BondingCurveEngine, DEFAULT_ENGINE_ADDRESS
from .access import AccessControl
from .events import Bought, Sold, FeeConfigUpdated, ExcessSkimmed, EventLog, EventSink
from .tokens import InMemoryToken, ReserveToken, SyntheticToken
from .reconcile import compute_excess, skim_excess
from .settlement import SettlementSandbox

from .core import (
    UNIT,
    EngineConfig,
    DEFAULT_ENGINE_CFG,
    LedgerSnapshot,
    BuyResult,
    SellResult,
    wad,
)

__all__ = [
    # engine building blocks
    "BondingCurve",
    "Ledger",
    "FeeSchedule",
    "FeeConfig",
    "BondingCurveEngine",
    "DEFAULT_ENGINE_ADDRESS",
    "AccessControl",
    "SettlementSandbox",
    "compute_excess",
    "skim_excess",
    # events
    "Bought",
    "Sold",
    "FeeConfigUpdated",
    "ExcessSkimmed",
    "EventLog",
    "EventSink",
    # collaborators
    "InMemoryToken",
    "ReserveToken",
    "SyntheticToken",
    # core data types
    "UNIT",
    "EngineConfig",
    "DEFAULT_ENGINE_CFG",
    "LedgerSnapshot",
    "BuyResult",
    "SellResult",
    "wad",
]

# NOTE:
# Research utilities are intentionally *not* imported at the top-level.
# Use: `from bonding_curve import research`.
