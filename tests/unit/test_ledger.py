import pytest

from bonding_curve.curve import BondingCurve
from bonding_curve.ledger import Ledger
from bonding_curve.core.constants import UNIT
from bonding_curve.core.datatypes import LedgerSnapshot
from bonding_curve.core.exc import AlreadyBootstrappedError, AmountDomainError, InvariantViolation


def test_fresh_ledger_is_zero():
    led = Ledger()
    assert (led.s1, led.s2, led.x1, led.x2) == (0, 0, 0, 0)
    assert led.internal_supply == 0
    assert led.internal_reserve == 0
    assert led.modeled_reserve(BondingCurve(UNIT)) == 0
    assert not led.bootstrapped


def test_buy_and_sell_advance_their_own_axes():
    led = Ledger()
    led.record_buy(100, 40)
    led.record_sell(30, 10)
    assert (led.s1, led.s2, led.x1, led.x2) == (100, 30, 40, 10)
    assert led.internal_supply == 30
    assert led.internal_reserve == 70


def test_sell_beyond_supply_rejected_without_mutation():
    led = Ledger(s1=100, x1=40)
    with pytest.raises(InvariantViolation):
        led.record_sell(10, 41)
    assert (led.s2, led.x2) == (0, 0)


def test_sell_beyond_reserve_rejected_without_mutation():
    led = Ledger(s1=100, x1=40)
    with pytest.raises(InvariantViolation):
        led.record_sell(101, 1)
    assert (led.s2, led.x2) == (0, 0)


@pytest.mark.parametrize("args", [(-1, 0), (0, -1), (1.0, 1), (1, True)])
def test_bad_deltas_rejected(args):
    with pytest.raises(AmountDomainError):
        Ledger().record_buy(*args)


def test_modeled_reserve_is_area_difference():
    c = BondingCurve(UNIT)
    led = Ledger(s1=10 ** 30, x1=50 * UNIT, s2=0, x2=20 * UNIT)
    assert led.modeled_reserve(c) == c.area_of(50 * UNIT) - c.area_of(20 * UNIT)


def test_snapshot_is_frozen_copy():
    led = Ledger()
    led.record_buy(5, 3)
    snap = led.snapshot()
    assert snap == LedgerSnapshot(s1=5, s2=0, x1=3, x2=0, bootstrapped=False)
    led.record_buy(1, 1)
    assert snap.x1 == 3
    assert snap.internal_supply == 3
    assert snap.internal_reserve == 5


def test_bootstrap_flag_is_one_shot():
    led = Ledger()
    led.mark_bootstrapped()
    assert led.bootstrapped
    with pytest.raises(AlreadyBootstrappedError):
        led.mark_bootstrapped()
