"""
Trade executor: six atomic trade shapes over the curve, ledger and fee config.

Every trade runs in three phases:
  1) plan   - pure: read the ledger, evaluate the curve, apply fees and
              capacity guards. Quotes stop here and return the plan.
  2) settle - check the caller's slippage bound, stage the token legs in a
              SettlementSandbox and apply them all-or-nothing.
  3) commit - write the ledger and emit a domain event.

Nothing is written before phase 3, and phase 3 only runs after every leg
succeeded, so any raised exception means no state changed.

Buy shapes (advance x1/s1):
  buy_with_reserve   reserve in known   -> dX = supply_from_area(area(x1)+in) - x1
  buy_exact_net      net out known      -> gross = ceil-to-exact-net, in = area(x1+gross) - area(x1)
  buy_exact_gross    gross out known    -> in = area(x1+gross) - area(x1)

Sell shapes (advance x2/s2):
  sell_for_reserve        gross in known   -> burn = gross - fee, out = area(x2+burn) - area(x2)
  sell_for_exact_reserve  reserve out known-> burn = supply_from_area(area(x2)+out) - x2
  sell_exact_burn         burn known       -> gross = ceil-to-exact-burn, out = area(x2+burn) - area(x2)
"""

from __future__ import annotations

from typing import Optional

from . import reconcile
from .access import AccessControl
from .core.config import EngineConfig
from .core.constants import REQUIRED_RESERVE_DECIMALS, ZERO_ADDRESS
from .core.datatypes import BuyResult, LedgerSnapshot, SellResult
from .core.exc import (
    AlreadyBootstrappedError,
    AmountDomainError,
    InsufficientCapacityError,
    InvalidAddressError,
    SlippageExceededError,
)
from .curve import BondingCurve
from .events import Bought, EventLog, EventSink, FeeConfigUpdated, Sold
from .fees import FeeConfig, FeeSchedule
from .ledger import Ledger
from .settlement import SettlementSandbox
from .tokens import require_decimals

# --- Debug utilities (toggleable) ---
DEBUG_ENGINE = False

def _dbg(msg: str) -> None:
    if DEBUG_ENGINE:
        print(f"[ENGINE] {msg}")


DEFAULT_ENGINE_ADDRESS = "bonding-curve-engine"


def _require_positive(v: int, name: str) -> None:
    if not isinstance(v, int) or isinstance(v, bool):
        raise AmountDomainError(f"{name} must be an int wad amount")
    if v <= 0:
        raise AmountDomainError(f"{name} must be > 0, got {v}")


def _require_bound(v: int, name: str) -> None:
    if not isinstance(v, int) or isinstance(v, bool) or v < 0:
        raise AmountDomainError(f"{name} must be an int >= 0, got {v!r}")


def _require_address(addr, name: str) -> None:
    if not isinstance(addr, str) or not addr or addr == ZERO_ADDRESS:
        raise InvalidAddressError(f"{name} must be a non-zero address, got {addr!r}")


class BondingCurveEngine:
    """Primary market minting and redeeming a synthetic asset against a reserve.

    The engine owns the Ledger (sole writer) and holds the FeeConfig by
    reference. Token collaborators are called with the engine's own
    `address` as the acting account; minting is realised by transferring
    out of a synthetic float the engine already holds.
    """

    def __init__(
        self,
        curve: BondingCurve,
        reserve,
        synthetic,
        *,
        fees: Optional[FeeConfig] = None,
        access: Optional[AccessControl] = None,
        events: Optional[EventSink] = None,
        address: str = DEFAULT_ENGINE_ADDRESS,
        required_reserve_decimals: int = REQUIRED_RESERVE_DECIMALS,
    ) -> None:
        """Without `fees`, both sides start fee-free and fees are routed to
        the placeholder DEFAULT_FEE_RECIPIENT until `set_fee_recipient` names
        a real account.
        """
        require_decimals(reserve, required_reserve_decimals)
        _require_address(address, "engine address")
        self.curve = curve
        self.reserve = reserve
        self.synthetic = synthetic
        self.fees = fees if fees is not None else EngineConfig().fee_config()
        self.access = access if access is not None else AccessControl()
        self.events = events if events is not None else EventLog()
        self.address = address
        self.ledger = Ledger()

    @classmethod
    def from_config(
        cls,
        cfg: EngineConfig,
        reserve,
        synthetic,
        *,
        access: Optional[AccessControl] = None,
        events: Optional[EventSink] = None,
        address: str = DEFAULT_ENGINE_ADDRESS,
    ) -> "BondingCurveEngine":
        return cls(
            BondingCurve(cfg.curve_parameter),
            reserve,
            synthetic,
            fees=cfg.fee_config(),
            access=access,
            events=events,
            address=address,
            required_reserve_decimals=cfg.required_reserve_decimals,
        )

    def __repr__(self) -> str:
        led = self.ledger
        return (
            f"BondingCurveEngine(A={self.curve.curve_parameter}, x1={led.x1}, x2={led.x2}, "
            f"s1={led.s1}, s2={led.s2})"
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def internal_supply(self) -> int:
        return self.ledger.internal_supply

    @property
    def internal_reserve(self) -> int:
        return self.ledger.internal_reserve

    @property
    def modeled_reserve(self) -> int:
        return self.ledger.modeled_reserve(self.curve)

    @property
    def real_reserve(self) -> int:
        """Reserve token balance actually held by the engine."""
        return self.reserve.balance_of(self.address)

    @property
    def current_buy_price(self) -> int:
        return self.curve.price_at_supply(self.ledger.x1)

    @property
    def current_sell_price(self) -> int:
        return self.curve.price_at_supply(self.ledger.x2)

    def snapshot(self) -> LedgerSnapshot:
        return self.ledger.snapshot()

    # ------------------------------------------------------------------
    # Planning (pure)
    # ------------------------------------------------------------------

    def _minted_for_reserve(self, reserve_in: int) -> int:
        x1 = self.ledger.x1
        target = self.curve.supply_from_area(self.curve.area_of(x1) + reserve_in)
        if target <= x1:
            raise AmountDomainError(f"reserve_in={reserve_in} too small to mint at x1={x1}")
        return target - x1

    def _priced_reserve_in(self, gross: int) -> int:
        x1 = self.ledger.x1
        reserve_in = self.curve.cost_between(x1, x1 + gross)
        if reserve_in == 0:
            raise AmountDomainError(f"gross={gross} too small to price at x1={x1}")
        return reserve_in

    def _plan_buy_with_reserve(self, reserve_in: int) -> BuyResult:
        _require_positive(reserve_in, "reserve_in")
        gross = self._minted_for_reserve(reserve_in)
        fee, net = self.fees.buy.split(gross)
        return BuyResult(reserve_in=reserve_in, gross_out=gross, fee=fee, net_out=net)

    def _plan_buy_exact_net(self, net_out: int) -> BuyResult:
        _require_positive(net_out, "net_out")
        gross, fee, net = self.fees.buy.gross_for_net(net_out)
        reserve_in = self._priced_reserve_in(gross)
        return BuyResult(reserve_in=reserve_in, gross_out=gross, fee=fee, net_out=net)

    def _plan_buy_exact_gross(self, gross_out: int) -> BuyResult:
        _require_positive(gross_out, "gross_out")
        reserve_in = self._priced_reserve_in(gross_out)
        fee, net = self.fees.buy.split(gross_out)
        return BuyResult(reserve_in=reserve_in, gross_out=gross_out, fee=fee, net_out=net)

    def _check_burn(self, burn: int) -> None:
        available = self.ledger.internal_supply
        if burn > available:
            raise InsufficientCapacityError(burn, available, what="internal_supply")

    def _check_payout(self, reserve_out: int) -> None:
        # book reserve must cover the payout for the ledger write to stay valid
        available = self.ledger.internal_reserve
        if reserve_out > available:
            raise InsufficientCapacityError(reserve_out, available, what="internal_reserve")

    def _plan_sell_for_reserve(self, gross_in: int) -> SellResult:
        _require_positive(gross_in, "gross_in")
        fee, burn = self.fees.sell.split(gross_in)
        self._check_burn(burn)
        x2 = self.ledger.x2
        reserve_out = self.curve.cost_between(x2, x2 + burn)
        self._check_payout(reserve_out)
        return SellResult(gross_in=gross_in, fee=fee, burn=burn, reserve_out=reserve_out)

    def _plan_sell_for_exact_reserve(self, reserve_out: int) -> SellResult:
        _require_positive(reserve_out, "reserve_out")
        modeled = self.ledger.modeled_reserve(self.curve)
        if reserve_out > modeled:
            raise InsufficientCapacityError(reserve_out, modeled, what="modeled_reserve")
        x2 = self.ledger.x2
        burn = self.curve.supply_from_area(self.curve.area_of(x2) + reserve_out) - x2
        if burn <= 0:
            raise AmountDomainError(f"reserve_out={reserve_out} too small to burn at x2={x2}")
        self._check_burn(burn)
        self._check_payout(reserve_out)
        gross, _, _ = self.fees.sell.gross_for_net(burn)
        return SellResult(gross_in=gross, fee=gross - burn, burn=burn, reserve_out=reserve_out)

    def _plan_sell_exact_burn(self, burn: int) -> SellResult:
        _require_positive(burn, "burn")
        self._check_burn(burn)
        gross, _, _ = self.fees.sell.gross_for_net(burn)
        x2 = self.ledger.x2
        reserve_out = self.curve.cost_between(x2, x2 + burn)
        self._check_payout(reserve_out)
        return SellResult(gross_in=gross, fee=gross - burn, burn=burn, reserve_out=reserve_out)

    # ------------------------------------------------------------------
    # Quotes (pure; identical to what the matching execute would realise)
    # ------------------------------------------------------------------

    def quote_buy_with_reserve(self, reserve_in: int) -> BuyResult:
        return self._plan_buy_with_reserve(reserve_in)

    def quote_buy_exact_net(self, net_out: int) -> BuyResult:
        return self._plan_buy_exact_net(net_out)

    def quote_buy_exact_gross(self, gross_out: int) -> BuyResult:
        return self._plan_buy_exact_gross(gross_out)

    def quote_sell_for_reserve(self, gross_in: int) -> SellResult:
        return self._plan_sell_for_reserve(gross_in)

    def quote_sell_for_exact_reserve(self, reserve_out: int) -> SellResult:
        return self._plan_sell_for_exact_reserve(reserve_out)

    def quote_sell_exact_burn(self, burn: int) -> SellResult:
        return self._plan_sell_exact_burn(burn)

    # ------------------------------------------------------------------
    # Settlement + commit
    # ------------------------------------------------------------------

    def _settle_buy(self, account: str, res: BuyResult, *, bootstrap: bool = False) -> BuyResult:
        sandbox = SettlementSandbox()
        sandbox.stage_transfer_from(self.reserve, self.address, account, self.address, res.reserve_in)
        sandbox.stage_transfer(self.synthetic, self.address, account, res.net_out)
        sandbox.stage_transfer(self.synthetic, self.address, self.fees.recipient, res.fee)
        sandbox.apply()

        self.ledger.record_buy(res.reserve_in, res.gross_out)
        self.events.emit(Bought(
            account=account,
            reserve_in=res.reserve_in,
            gross_out=res.gross_out,
            fee=res.fee,
            net_out=res.net_out,
            bootstrap=bootstrap,
        ))
        _dbg(f"buy {account}: {res} -> x1={self.ledger.x1} s1={self.ledger.s1}")
        return res

    def _settle_sell(self, account: str, res: SellResult) -> SellResult:
        sandbox = SettlementSandbox()
        sandbox.stage_transfer_from(self.synthetic, self.address, account, self.address, res.gross_in)
        sandbox.stage_transfer(self.synthetic, self.address, self.fees.recipient, res.fee)
        sandbox.stage_transfer(self.reserve, self.address, account, res.reserve_out)
        sandbox.stage_burn(self.synthetic, self.address, self.address, res.burn)
        sandbox.apply()

        self.ledger.record_sell(res.reserve_out, res.burn)
        self.events.emit(Sold(
            account=account,
            gross_in=res.gross_in,
            fee=res.fee,
            burn=res.burn,
            reserve_out=res.reserve_out,
        ))
        _dbg(f"sell {account}: {res} -> x2={self.ledger.x2} s2={self.ledger.s2}")
        return res

    # ------------------------------------------------------------------
    # Buys
    # ------------------------------------------------------------------

    def buy_with_reserve(self, account: str, reserve_in: int, min_net_out: int = 0) -> BuyResult:
        """Spend exactly `reserve_in`; receive at least `min_net_out` synthetic."""
        _require_address(account, "account")
        _require_bound(min_net_out, "min_net_out")
        res = self._plan_buy_with_reserve(reserve_in)
        if res.net_out < min_net_out:
            raise SlippageExceededError(res.net_out, min_net_out, what="net_out")
        return self._settle_buy(account, res)

    def buy_exact_net(self, account: str, net_out: int, max_reserve_in: int) -> BuyResult:
        """Receive at least `net_out` after fees; pay at most `max_reserve_in`."""
        _require_address(account, "account")
        _require_bound(max_reserve_in, "max_reserve_in")
        res = self._plan_buy_exact_net(net_out)
        if res.reserve_in > max_reserve_in:
            raise SlippageExceededError(res.reserve_in, max_reserve_in, what="reserve_in")
        return self._settle_buy(account, res)

    def buy_exact_gross(self, account: str, gross_out: int, max_reserve_in: int) -> BuyResult:
        _require_address(account, "account")
        _require_bound(max_reserve_in, "max_reserve_in")
        res = self._plan_buy_exact_gross(gross_out)
        if res.reserve_in > max_reserve_in:
            raise SlippageExceededError(res.reserve_in, max_reserve_in, what="reserve_in")
        return self._settle_buy(account, res)

    def bootstrap(self, caller: str, account: str, reserve_in: int) -> BuyResult:
        """One-time fee-free seed of the buy axis; admin only.

        Regular trades may run first, so the seed starts from the current
        x1, which need not be zero.
        """
        self.access.require_admin(caller, "bootstrap the curve")
        _require_address(account, "account")
        _require_positive(reserve_in, "reserve_in")
        if self.ledger.bootstrapped:
            raise AlreadyBootstrappedError("curve already bootstrapped")
        gross = self._minted_for_reserve(reserve_in)
        res = BuyResult(reserve_in=reserve_in, gross_out=gross, fee=0, net_out=gross)

        sandbox = SettlementSandbox()
        sandbox.stage_transfer_from(self.reserve, self.address, account, self.address, reserve_in)
        sandbox.stage_transfer(self.synthetic, self.address, account, gross)
        sandbox.apply()

        self.ledger.mark_bootstrapped()
        self.ledger.record_buy(reserve_in, gross)
        self.events.emit(Bought(
            account=account, reserve_in=reserve_in, gross_out=gross,
            fee=0, net_out=gross, bootstrap=True,
        ))
        _dbg(f"bootstrap {account}: {res}")
        return res

    # ------------------------------------------------------------------
    # Sells
    # ------------------------------------------------------------------

    def sell_for_reserve(self, account: str, gross_in: int, min_reserve_out: int = 0) -> SellResult:
        """Deliver exactly `gross_in` synthetic; receive at least `min_reserve_out`."""
        _require_address(account, "account")
        _require_bound(min_reserve_out, "min_reserve_out")
        res = self._plan_sell_for_reserve(gross_in)
        if res.reserve_out < min_reserve_out:
            raise SlippageExceededError(res.reserve_out, min_reserve_out, what="reserve_out")
        return self._settle_sell(account, res)

    def sell_for_exact_reserve(self, account: str, reserve_out: int, max_gross_in: int) -> SellResult:
        """Receive exactly `reserve_out`; deliver at most `max_gross_in` synthetic."""
        _require_address(account, "account")
        _require_bound(max_gross_in, "max_gross_in")
        res = self._plan_sell_for_exact_reserve(reserve_out)
        if res.gross_in > max_gross_in:
            raise SlippageExceededError(res.gross_in, max_gross_in, what="gross_in")
        return self._settle_sell(account, res)

    def sell_exact_burn(self, account: str, burn: int, min_reserve_out: int) -> SellResult:
        _require_address(account, "account")
        _require_bound(min_reserve_out, "min_reserve_out")
        res = self._plan_sell_exact_burn(burn)
        if res.reserve_out < min_reserve_out:
            raise SlippageExceededError(res.reserve_out, min_reserve_out, what="reserve_out")
        return self._settle_sell(account, res)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def set_buy_fee(self, caller: str, rate: int, base: int) -> FeeSchedule:
        self.access.require_admin(caller, "set the buy fee")
        sched = self.fees.set_buy(rate, base)
        self.events.emit(FeeConfigUpdated("buy", sched.rate, sched.base, self.fees.recipient))
        return sched

    def set_sell_fee(self, caller: str, rate: int, base: int) -> FeeSchedule:
        self.access.require_admin(caller, "set the sell fee")
        sched = self.fees.set_sell(rate, base)
        self.events.emit(FeeConfigUpdated("sell", sched.rate, sched.base, self.fees.recipient))
        return sched

    def set_fee_recipient(self, caller: str, recipient: str) -> None:
        self.access.require_admin(caller, "set the fee recipient")
        self.fees.set_recipient(recipient)
        self.events.emit(FeeConfigUpdated("recipient", 0, 0, recipient))

    def skim_excess(self, caller: str, recipient: str) -> int:
        """Sweep reserve held above the book reserve to `recipient`."""
        return reconcile.skim_excess(self, caller, recipient)


__all__ = ["BondingCurveEngine", "DEFAULT_ENGINE_ADDRESS"]
