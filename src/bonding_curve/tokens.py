"""
Token collaborators: capability protocols plus an in-memory fungible token.

The engine never implements token semantics itself; it talks to two
collaborators through the protocols below. Actor arguments (`sender`,
`spender`) are explicit because there is no implicit caller here.

- ReserveToken: transfer / transfer_from / balance_of (+ allowance, decimals).
- SyntheticToken: transfer / transfer_from / burn_from (+ balance_of, allowance).
  Minting is realised by transferring out of a float the engine pre-holds.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

from .core.constants import WAD_DECIMALS
from .core.exc import ConfigurationError, TransferFailedError


@runtime_checkable
class ReserveToken(Protocol):
    decimals: int

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool: ...

    def balance_of(self, account: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...


@runtime_checkable
class SyntheticToken(Protocol):
    decimals: int

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool: ...

    def burn_from(self, spender: str, owner: str, amount: int) -> bool: ...

    def balance_of(self, account: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...


class InMemoryToken:
    """Standard fungible token kept in dicts.

    Failures (insufficient balance/allowance, negative amounts) raise
    TransferFailedError and leave balances untouched. An owner spending its
    own balance through transfer_from/burn_from needs no allowance.
    """

    def __init__(self, symbol: str, decimals: int = WAD_DECIMALS) -> None:
        self.symbol = symbol
        self.decimals = decimals
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0

    def __repr__(self) -> str:
        return f"InMemoryToken({self.symbol!r}, supply={self._total_supply})"

    # ------------- views -------------

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    # ------------- supply management (issuer side, not part of the engine protocols) -------------

    def mint(self, account: str, amount: int) -> None:
        self._check_amount(amount)
        self._balances[account] = self.balance_of(account) + amount
        self._total_supply += amount

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        self._check_amount(amount)
        self._allowances[(owner, spender)] = amount
        return True

    # ------------- protocol surface -------------

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        self._check_amount(amount)
        self._debit(sender, amount)
        self._balances[recipient] = self.balance_of(recipient) + amount
        return True

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool:
        self._check_amount(amount)
        self._spend_allowance(owner, spender, amount, check_only=True)
        self._debit(owner, amount)
        self._spend_allowance(owner, spender, amount)
        self._balances[recipient] = self.balance_of(recipient) + amount
        return True

    def burn_from(self, spender: str, owner: str, amount: int) -> bool:
        self._check_amount(amount)
        self._spend_allowance(owner, spender, amount, check_only=True)
        self._debit(owner, amount)
        self._spend_allowance(owner, spender, amount)
        self._total_supply -= amount
        return True

    # ------------- internals -------------

    def _check_amount(self, amount: int) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            raise TransferFailedError(f"{self.symbol}: invalid amount {amount!r}")

    def _debit(self, account: str, amount: int) -> None:
        bal = self.balance_of(account)
        if bal < amount:
            raise TransferFailedError(
                f"{self.symbol}: insufficient balance for {account!r} ({bal} < {amount})"
            )
        self._balances[account] = bal - amount

    def _spend_allowance(self, owner: str, spender: str, amount: int, *, check_only: bool = False) -> None:
        if owner == spender:
            return
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise TransferFailedError(
                f"{self.symbol}: insufficient allowance {owner!r}->{spender!r} ({allowed} < {amount})"
            )
        if not check_only:
            self._allowances[(owner, spender)] = allowed - amount


def require_decimals(token, expected: int) -> None:
    """Reject a collaborator whose fractional digits differ from `expected`."""
    got: Optional[int] = getattr(token, "decimals", None)
    if callable(got):
        got = got()
    if got != expected:
        raise ConfigurationError(f"token decimals must be {expected}, got {got!r}")


__all__ = [
    "ReserveToken",
    "SyntheticToken",
    "InMemoryToken",
    "require_decimals",
]
