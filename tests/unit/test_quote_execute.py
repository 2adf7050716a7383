"""Every quote must equal what the matching execute realises from the same ledger."""

import pytest

from bonding_curve.core.constants import UNIT

from conftest import ALICE, BOB, UNLIMITED


BUY_CASES = [
    ("buy_with_reserve", (1000 * UNIT,), ()),
    ("buy_with_reserve", (3 * UNIT + 17,), ()),
    ("buy_exact_net", (100 * UNIT,), (UNLIMITED,)),
    ("buy_exact_net", (UNIT // 3,), (UNLIMITED,)),
    ("buy_exact_gross", (42 * UNIT,), (UNLIMITED,)),
    ("buy_exact_gross", (7 * UNIT + 1,), (UNLIMITED,)),
]

SELL_CASES = [
    ("sell_for_reserve", (100 * UNIT,), ()),
    ("sell_for_reserve", (UNIT + 99,), ()),
    ("sell_for_exact_reserve", (25 * UNIT,), (UNLIMITED,)),
    ("sell_for_exact_reserve", (UNIT // 7,), (UNLIMITED,)),
    ("sell_exact_burn", (60 * UNIT,), (0,)),
    ("sell_exact_burn", (UNIT // 3,), (0,)),
]


@pytest.mark.parametrize("name,args,bounds", BUY_CASES)
@pytest.mark.parametrize("warm", [False, True])
def test_buy_quote_equals_execute(engine_factory, name, args, bounds, warm):
    eng = engine_factory(buy_fee=(3, 100), sell_fee=(5, 100))
    if warm:
        eng.buy_exact_gross(BOB, 500 * UNIT, UNLIMITED)
    quote = getattr(eng, f"quote_{name}")(*args)
    snap = eng.snapshot()
    realised = getattr(eng, name)(ALICE, *args, *bounds)
    print(f"[{name}] warm={warm} quote={quote}")
    assert realised == quote
    assert eng.ledger.s1 == snap.s1 + quote.reserve_in
    assert eng.ledger.x1 == snap.x1 + quote.gross_out


@pytest.mark.parametrize("name,args,bounds", SELL_CASES)
def test_sell_quote_equals_execute(seeded_engine, name, args, bounds):
    eng = seeded_engine
    # move x2 off zero first so the sell axis has its own history
    eng.sell_for_reserve(ALICE, 30 * UNIT)
    quote = getattr(eng, f"quote_{name}")(*args)
    snap = eng.snapshot()
    realised = getattr(eng, name)(ALICE, *args, *bounds)
    print(f"[{name}] quote={quote}")
    assert realised == quote
    assert eng.ledger.s2 == snap.s2 + quote.reserve_out
    assert eng.ledger.x2 == snap.x2 + quote.burn


def test_quotes_do_not_mutate(seeded_engine):
    eng = seeded_engine
    snap = eng.snapshot()
    n_events = len(eng.events)
    eng.quote_buy_with_reserve(UNIT)
    eng.quote_buy_exact_net(UNIT)
    eng.quote_buy_exact_gross(UNIT)
    eng.quote_sell_for_reserve(UNIT)
    eng.quote_sell_for_exact_reserve(UNIT)
    eng.quote_sell_exact_burn(UNIT)
    assert eng.snapshot() == snap
    assert len(eng.events) == n_events


def test_interleaved_trade_moves_the_quote(seeded_engine):
    """A quote is only valid for the snapshot it was taken on."""
    eng = seeded_engine
    quote = eng.quote_buy_with_reserve(100 * UNIT)
    eng.buy_with_reserve(ALICE, 100 * UNIT)
    assert eng.quote_buy_with_reserve(100 * UNIT).gross_out < quote.gross_out
