from __future__ import annotations

from typing import Callable, Iterable, Optional, Tuple

import pytest

# Import project primitives
from bonding_curve import (
    AccessControl,
    BondingCurveEngine,
    EngineConfig,
    EventLog,
    InMemoryToken,
    UNIT,
)


ADMIN = "admin"
FEE_RECIPIENT = "treasury"
ALICE = "alice"
BOB = "bob"

# Synthetic float pre-held by the engine; buys are paid out of it
SYNTHETIC_FLOAT = 10 ** 12 * UNIT
# Reserve each funded account starts with
STARTING_RESERVE = 1_000_000 * UNIT
UNLIMITED = 10 ** 40


# -----------------------------
# Test helpers (pure functions)
# -----------------------------


def fund_account(engine: BondingCurveEngine, account: str, reserve_amount: int = STARTING_RESERVE) -> None:
    """Mint reserve to `account` and approve the engine on both tokens."""
    engine.reserve.mint(account, reserve_amount)
    engine.reserve.approve(account, engine.address, UNLIMITED)
    engine.synthetic.approve(account, engine.address, UNLIMITED)


def make_engine(
    *,
    curve_parameter: int = UNIT,
    buy_fee: Tuple[int, int] = (0, 100),
    sell_fee: Tuple[int, int] = (0, 100),
    accounts: Iterable[str] = (ALICE, BOB),
    synthetic_float: int = SYNTHETIC_FLOAT,
    reserve: Optional[InMemoryToken] = None,
) -> BondingCurveEngine:
    cfg = EngineConfig(
        curve_parameter=curve_parameter,
        buy_fee_rate=buy_fee[0],
        buy_fee_base=buy_fee[1],
        sell_fee_rate=sell_fee[0],
        sell_fee_base=sell_fee[1],
        fee_recipient=FEE_RECIPIENT,
    )
    engine = BondingCurveEngine.from_config(
        cfg,
        reserve if reserve is not None else InMemoryToken("USDT"),
        InMemoryToken("SYN"),
        access=AccessControl.with_admins([ADMIN]),
        events=EventLog(),
    )
    engine.synthetic.mint(engine.address, synthetic_float)
    for acct in accounts:
        fund_account(engine, acct)
    return engine


def ledger_tuple(engine: BondingCurveEngine) -> Tuple[int, int, int, int]:
    led = engine.ledger
    return (led.s1, led.s2, led.x1, led.x2)


def balances(engine: BondingCurveEngine, *accounts: str) -> Tuple[int, ...]:
    out = []
    for a in accounts:
        out.append(engine.reserve.balance_of(a))
        out.append(engine.synthetic.balance_of(a))
    return tuple(out)


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def engine_factory() -> Callable[..., BondingCurveEngine]:
    return make_engine


@pytest.fixture()
def engine() -> BondingCurveEngine:
    """Fee-free engine on A = 1 with alice and bob funded and approved."""
    return make_engine()


@pytest.fixture()
def fee_engine() -> BondingCurveEngine:
    """Engine with a 3% buy fee and a 5% sell fee."""
    return make_engine(buy_fee=(3, 100), sell_fee=(5, 100))


@pytest.fixture()
def seeded_engine(fee_engine) -> BondingCurveEngine:
    """fee_engine after alice bought 500 tokens gross, so sells have capacity."""
    fee_engine.buy_exact_gross(ALICE, 500 * UNIT, UNLIMITED)
    return fee_engine
