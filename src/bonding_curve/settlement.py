"""
Staged token settlement with all-or-nothing application.

A trade's token movements ("legs") are staged first, preflighted against the
collaborators' current balances and allowances, and only then applied in
order. If a collaborator still rejects a leg mid-way, every leg already
applied is reversed (newest first) and TransferFailedError is raised, so the
caller sees either every movement or none of them.

Reversal restores balances only; an allowance consumed by a reversed
transfer_from stays consumed.

Burns cannot be reversed, so a burn must be the last leg staged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .core.exc import TransferFailedError

# --- Debug utilities (toggleable) ---
DEBUG_SETTLEMENT = False

def _dbg(msg: str) -> None:
    if DEBUG_SETTLEMENT:
        print(f"[SETTLE] {msg}")


@dataclass(frozen=True)
class Leg:
    """One token movement.

    kind: "transfer" (owner sends), "transfer_from" (spender moves owner's
    funds to recipient) or "burn" (spender burns owner's funds).
    """
    token: object
    kind: str
    owner: str
    recipient: Optional[str]
    amount: int
    spender: Optional[str] = None

    def describe(self) -> str:
        sym = getattr(self.token, "symbol", type(self.token).__name__)
        if self.kind == "burn":
            return f"{sym} burn {self.amount} from {self.owner}"
        return f"{sym} {self.kind} {self.amount} {self.owner} -> {self.recipient}"


class SettlementSandbox:
    """Collect legs for one trade, then apply them atomically."""

    staged: List[Leg]

    def __init__(self) -> None:
        self.staged = []
        self._sealed = False

    def __len__(self) -> int:
        return len(self.staged)

    # ------------- staging -------------

    def _stage(self, leg: Leg) -> None:
        if self._sealed:
            raise TransferFailedError("cannot stage a leg after a burn")
        if leg.amount == 0:
            _dbg(f"skip zero leg: {leg.describe()}")
            return
        self.staged.append(leg)
        if leg.kind == "burn":
            self._sealed = True

    def stage_transfer(self, token, sender: str, recipient: str, amount: int) -> None:
        self._stage(Leg(token, "transfer", sender, recipient, amount))

    def stage_transfer_from(self, token, spender: str, owner: str, recipient: str, amount: int) -> None:
        self._stage(Leg(token, "transfer_from", owner, recipient, amount, spender=spender))

    def stage_burn(self, token, spender: str, owner: str, amount: int) -> None:
        self._stage(Leg(token, "burn", owner, None, amount, spender=spender))

    # ------------- preflight -------------

    def preflight(self) -> None:
        """Walk the staged legs against running balances/allowances.

        Credits from earlier legs count towards later debits (the engine can
        forward a fee out of synthetic it has just received).
        """
        balances: Dict[Tuple[int, str], int] = {}
        allowances: Dict[Tuple[int, str, str], int] = {}

        for leg in self.staged:
            tid = id(leg.token)
            key = (tid, leg.owner)
            if key not in balances:
                balances[key] = leg.token.balance_of(leg.owner)
            if balances[key] < leg.amount:
                raise TransferFailedError(
                    f"preflight: insufficient balance for {leg.describe()} (have {balances[key]})"
                )
            if leg.spender is not None and leg.spender != leg.owner:
                akey = (tid, leg.owner, leg.spender)
                if akey not in allowances:
                    allowances[akey] = leg.token.allowance(leg.owner, leg.spender)
                if allowances[akey] < leg.amount:
                    raise TransferFailedError(
                        f"preflight: insufficient allowance for {leg.describe()} (have {allowances[akey]})"
                    )
                allowances[akey] -= leg.amount
            balances[key] -= leg.amount
            if leg.recipient is not None:
                rkey = (tid, leg.recipient)
                if rkey not in balances:
                    balances[rkey] = leg.token.balance_of(leg.recipient)
                balances[rkey] += leg.amount

    # ------------- application -------------

    @staticmethod
    def _execute(leg: Leg) -> None:
        if leg.kind == "transfer":
            ok = leg.token.transfer(leg.owner, leg.recipient, leg.amount)
        elif leg.kind == "transfer_from":
            ok = leg.token.transfer_from(leg.spender, leg.owner, leg.recipient, leg.amount)
        elif leg.kind == "burn":
            ok = leg.token.burn_from(leg.spender, leg.owner, leg.amount)
        else:
            raise TransferFailedError(f"unknown leg kind {leg.kind!r}")
        if ok is False:
            raise TransferFailedError(f"collaborator rejected {leg.describe()}")

    @staticmethod
    def _reverse(leg: Leg) -> None:
        # burns are always last, so an applied burn is never reversed
        ok = leg.token.transfer(leg.recipient, leg.owner, leg.amount)
        if ok is False:
            raise TransferFailedError(f"collaborator rejected reversal of {leg.describe()}")

    def _compensate(self, applied: List[Leg]) -> Optional[Exception]:
        """Reverse applied legs newest first; return the first reversal error."""
        first: Optional[Exception] = None
        for leg in reversed(applied):
            _dbg(f"reverse: {leg.describe()}")
            try:
                self._reverse(leg)
            except Exception as exc:
                _dbg(f"reverse failed: {leg.describe()}: {exc!r}")
                if first is None:
                    first = exc
        return first

    def apply(self) -> None:
        """Preflight, then apply every staged leg or none of them.

        Any exception a collaborator raises mid-way counts as a failed leg.
        """
        self.preflight()
        applied: List[Leg] = []
        try:
            for leg in self.staged:
                _dbg(f"apply: {leg.describe()}")
                self._execute(leg)
                applied.append(leg)
        except Exception as exc:
            reverse_err = self._compensate(applied)
            if reverse_err is not None:
                raise TransferFailedError(
                    f"settlement rollback incomplete: {exc}; reversal failed: {reverse_err}"
                ) from exc
            raise TransferFailedError(f"settlement rolled back: {exc}") from exc
        finally:
            self.staged.clear()
            self._sealed = False


__all__ = ["Leg", "SettlementSandbox"]
