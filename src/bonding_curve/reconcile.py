"""
Reconciliation: sweep reserve held above the book reserve.

Donations sent straight to the engine, or rounding dust, leave the real
reserve balance above s1 - s2. The sweep moves exactly that surplus out and
never touches the ledger accumulators.
"""

from __future__ import annotations

from .core.exc import InvalidAddressError, NoExcessError
from .events import ExcessSkimmed
from .settlement import SettlementSandbox
from .core.constants import ZERO_ADDRESS


def compute_excess(real_reserve: int, internal_reserve: int) -> int:
    """real - internal; zero or negative means nothing to sweep."""
    return real_reserve - internal_reserve


def skim_excess(engine, caller: str, recipient: str) -> int:
    """Transfer the engine's reserve surplus to `recipient` (admin only).

    Returns the amount transferred. Raises NoExcessError when the real
    balance does not exceed the book reserve.
    """
    engine.access.require_admin(caller, "skim excess reserve")
    if not isinstance(recipient, str) or not recipient or recipient == ZERO_ADDRESS:
        raise InvalidAddressError(f"recipient must be a non-zero address, got {recipient!r}")

    real = engine.real_reserve
    book = engine.internal_reserve
    excess = compute_excess(real, book)
    if excess <= 0:
        raise NoExcessError(real, book)

    sandbox = SettlementSandbox()
    sandbox.stage_transfer(engine.reserve, engine.address, recipient, excess)
    sandbox.apply()

    engine.events.emit(ExcessSkimmed(recipient=recipient, amount=excess))
    return excess


__all__ = ["compute_excess", "skim_excess"]
