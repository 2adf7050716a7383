"""Random valid buy/sell sequences never break the ledger invariants."""

import random

import pytest

from bonding_curve.core.constants import UNIT
from bonding_curve.core.exc import (
    AmountDomainError,
    InsufficientCapacityError,
    SlippageExceededError,
    TransferFailedError,
)

from conftest import ALICE, BOB, SYNTHETIC_FLOAT, UNLIMITED, ledger_tuple


REJECTED = (AmountDomainError, InsufficientCapacityError, SlippageExceededError, TransferFailedError)


def _random_step(eng, rng):
    acct = rng.choice([ALICE, BOB])
    held = eng.synthetic.balance_of(acct)
    kind = rng.randrange(6)
    if kind == 0:
        eng.buy_with_reserve(acct, rng.randint(1, 2000 * UNIT))
    elif kind == 1:
        eng.buy_exact_net(acct, rng.randint(1, 200 * UNIT), UNLIMITED)
    elif kind == 2:
        eng.buy_exact_gross(acct, rng.randint(1, 200 * UNIT), UNLIMITED)
    elif kind == 3:
        eng.sell_for_reserve(acct, rng.randint(1, max(1, held)))
    elif kind == 4:
        eng.sell_for_exact_reserve(acct, rng.randint(1, max(1, eng.internal_reserve)), UNLIMITED)
    else:
        eng.sell_exact_burn(acct, rng.randint(1, max(1, held)), 0)


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
@pytest.mark.parametrize("fees", [((0, 100), (0, 100)), ((3, 100), (5, 100))])
def test_random_sequences_keep_invariants(engine_factory, seed, fees):
    eng = engine_factory(buy_fee=fees[0], sell_fee=fees[1])
    rng = random.Random(seed)
    prev = ledger_tuple(eng)
    accepted = 0

    for _ in range(80):
        try:
            _random_step(eng, rng)
            accepted += 1
        except REJECTED:
            # a rejected trade changes nothing
            assert ledger_tuple(eng) == prev
        s1, s2, x1, x2 = cur = ledger_tuple(eng)

        assert x1 >= x2
        assert s1 >= s2
        assert all(c >= p for c, p in zip(cur, prev)), "accumulators only increase"
        # every reserve movement goes through the ledger
        assert eng.real_reserve == eng.internal_reserve
        # minting comes out of the float, burning removes exactly x2
        assert eng.synthetic.total_supply == SYNTHETIC_FLOAT - x2
        prev = cur

    print(f"[fuzz] seed={seed} fees={fees} accepted={accepted} ledger={prev}")
    assert accepted > 0
