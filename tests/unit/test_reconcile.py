import pytest

from bonding_curve import ExcessSkimmed, compute_excess
from bonding_curve.core.constants import UNIT, ZERO_ADDRESS
from bonding_curve.core.exc import InvalidAddressError, NoExcessError, UnauthorizedError

from conftest import ADMIN, ALICE, BOB, UNLIMITED, ledger_tuple


def test_compute_excess():
    assert compute_excess(10, 7) == 3
    assert compute_excess(7, 7) == 0
    assert compute_excess(5, 7) == -2


def test_skim_after_donation_moves_exactly_the_excess(seeded_engine):
    eng = seeded_engine
    eng.sell_for_reserve(ALICE, 50 * UNIT)
    # donation straight to the engine, bypassing the ledger
    eng.reserve.transfer(BOB, eng.address, 7 * UNIT + 3)
    ledger_before = ledger_tuple(eng)
    expected = eng.real_reserve - eng.internal_reserve

    got = eng.skim_excess(ADMIN, "dao")

    print(f"[skim] expected={expected} got={got}")
    assert got == expected == 7 * UNIT + 3
    assert eng.reserve.balance_of("dao") == got
    assert ledger_tuple(eng) == ledger_before
    assert eng.real_reserve == eng.internal_reserve
    assert eng.events.of_type(ExcessSkimmed) == [ExcessSkimmed("dao", got)]


def test_skim_without_excess_reverts(seeded_engine):
    with pytest.raises(NoExcessError) as ei:
        seeded_engine.skim_excess(ADMIN, "dao")
    assert ei.value.real_reserve == ei.value.internal_reserve
    assert seeded_engine.reserve.balance_of("dao") == 0


def test_skim_requires_admin(seeded_engine):
    seeded_engine.reserve.mint(seeded_engine.address, UNIT)
    with pytest.raises(UnauthorizedError):
        seeded_engine.skim_excess(ALICE, ALICE)
    assert seeded_engine.real_reserve - seeded_engine.internal_reserve == UNIT


@pytest.mark.parametrize("recipient", ["", ZERO_ADDRESS])
def test_skim_rejects_bad_recipient(seeded_engine, recipient):
    seeded_engine.reserve.mint(seeded_engine.address, UNIT)
    with pytest.raises(InvalidAddressError):
        seeded_engine.skim_excess(ADMIN, recipient)


def test_trades_still_work_after_skim(seeded_engine):
    eng = seeded_engine
    eng.reserve.mint(eng.address, UNIT)
    eng.skim_excess(ADMIN, "dao")
    eng.buy_exact_gross(BOB, 10 * UNIT, UNLIMITED)
    eng.sell_for_reserve(ALICE, 10 * UNIT)
    assert eng.real_reserve == eng.internal_reserve
