from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..core.exc import (
    AmountDomainError,
    InsufficientCapacityError,
    SlippageExceededError,
    TransferFailedError,
)
from ..core.constants import UNIT
from ..core.fmt import wad_to_decimal

# Exceptions that count as a rejected (not failed) trade in a random run
REJECTIONS = (
    AmountDomainError,
    InsufficientCapacityError,
    SlippageExceededError,
    TransferFailedError,
)

ACTIONS = (
    "buy_with_reserve",
    "buy_exact_net",
    "buy_exact_gross",
    "sell_for_reserve",
    "sell_for_exact_reserve",
    "sell_exact_burn",
)

AMOUNT_COLUMNS = (
    "x1", "x2", "s1", "s2",
    "internal_supply", "internal_reserve", "modeled_reserve", "real_reserve",
    "buy_price", "sell_price",
)


@dataclass(frozen=True)
class SimulationRow:
    """Ledger state after one step of a random run (wad ints)."""
    step: int
    account: str
    action: str
    accepted: bool
    x1: int
    x2: int
    s1: int
    s2: int
    internal_supply: int
    internal_reserve: int
    modeled_reserve: int
    real_reserve: int
    buy_price: int
    sell_price: int


def _pick(rng: random.Random, upper: int) -> int:
    return rng.randint(1, max(1, upper))


def _attempt(engine, rng: random.Random, account: str, action: str) -> None:
    reserve_bal = engine.reserve.balance_of(account)
    synth_bal = engine.synthetic.balance_of(account)

    if action == "buy_with_reserve":
        engine.buy_with_reserve(account, _pick(rng, reserve_bal // 4))
    elif action == "buy_exact_net":
        engine.buy_exact_net(account, _pick(rng, engine.internal_supply // 10 + 10 * UNIT), reserve_bal)
    elif action == "buy_exact_gross":
        engine.buy_exact_gross(account, _pick(rng, engine.internal_supply // 10 + 10 * UNIT), reserve_bal)
    elif action == "sell_for_reserve":
        engine.sell_for_reserve(account, _pick(rng, synth_bal // 2))
    elif action == "sell_for_exact_reserve":
        engine.sell_for_exact_reserve(account, _pick(rng, engine.internal_reserve // 10), synth_bal)
    elif action == "sell_exact_burn":
        engine.sell_exact_burn(account, _pick(rng, synth_bal // 3), 0)
    else:
        raise ValueError(f"unknown action {action!r}")


def _row(engine, step: int, account: str, action: str, accepted: bool) -> SimulationRow:
    snap = engine.snapshot()
    return SimulationRow(
        step=step,
        account=account,
        action=action,
        accepted=accepted,
        x1=snap.x1,
        x2=snap.x2,
        s1=snap.s1,
        s2=snap.s2,
        internal_supply=snap.internal_supply,
        internal_reserve=snap.internal_reserve,
        modeled_reserve=engine.modeled_reserve,
        real_reserve=engine.real_reserve,
        buy_price=engine.current_buy_price,
        sell_price=engine.current_sell_price,
    )


def simulate_random_trades(
    engine,
    accounts: Sequence[str],
    steps: int,
    seed: int = 0,
    *,
    actions: Sequence[str] = ACTIONS,
) -> List[SimulationRow]:
    """Drive `engine` with a seeded random mix of trade shapes.

    Accounts must already hold reserve and have approved the engine on both
    tokens. Rejected trades are recorded with accepted=False and leave the
    ledger unchanged; anything else propagates.
    """
    if not accounts:
        raise ValueError("simulate_random_trades needs at least one account")
    rng = random.Random(seed)
    rows: List[SimulationRow] = []
    for step in range(steps):
        account = rng.choice(list(accounts))
        action = rng.choice(list(actions))
        try:
            _attempt(engine, rng, account, action)
            accepted = True
        except REJECTIONS:
            accepted = False
        rows.append(_row(engine, step, account, action, accepted))
    return rows


def rows_to_frame(rows: Sequence[SimulationRow]) -> pd.DataFrame:
    """Tabulate rows; amount columns keep exact Python ints (object dtype)."""
    columns = list(SimulationRow.__dataclass_fields__)
    df = pd.DataFrame([asdict(r) for r in rows], columns=columns)
    return df.astype({c: object for c in AMOUNT_COLUMNS})


def rows_to_csv(rows: Sequence[SimulationRow], path: Optional[str] = None) -> str:
    """Render rows as CSV (header included); also written to `path` if given."""
    text = rows_to_frame(rows).to_csv(index=False)
    if path is not None:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
    return text


def summarize_run(frame: pd.DataFrame) -> Dict[str, object]:
    """Headline figures for a simulated run.

    Keys: steps, accepted, rejected, x1, x2, s1, s2, max_internal_supply,
    reserve_drift (real - internal, wad) and the final buy/sell prices as
    Decimal.
    """
    if frame.empty:
        return {"steps": 0, "accepted": 0, "rejected": 0}
    last = frame.iloc[-1]
    accepted = int(frame["accepted"].sum())
    return {
        "steps": int(len(frame)),
        "accepted": accepted,
        "rejected": int(len(frame)) - accepted,
        "x1": int(last["x1"]),
        "x2": int(last["x2"]),
        "s1": int(last["s1"]),
        "s2": int(last["s2"]),
        "max_internal_supply": int(max(frame["internal_supply"])),
        "reserve_drift": int(last["real_reserve"]) - int(last["internal_reserve"]),
        "final_buy_price": wad_to_decimal(int(last["buy_price"])),
        "final_sell_price": wad_to_decimal(int(last["sell_price"])),
        "by_action": frame.groupby("action")["accepted"].sum().astype(int).to_dict(),
    }


__all__ = [
    "ACTIONS",
    "SimulationRow",
    "simulate_random_trades",
    "rows_to_frame",
    "rows_to_csv",
    "summarize_run",
]
