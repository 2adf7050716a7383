"""
Research utilities (non-stable API).

Seeded random-trade simulation plus tabular export for post-hoc analysis of
ledger drift and price paths. Not part of the production-facing surface.
"""
from __future__ import annotations

from .simulation import (
    ACTIONS,
    SimulationRow,
    simulate_random_trades,
    rows_to_frame,
    rows_to_csv,
    summarize_run,
)

__all__ = [
    "ACTIONS",
    "SimulationRow",
    "simulate_random_trades",
    "rows_to_frame",
    "rows_to_csv",
    "summarize_run",
]
