"""In-memory trading ledger: cash, holdings and order history."""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union

from tradesim.core.timezone import now_utc, to_utc
from tradesim.core.exceptions import (
    ValidationError,
    InvalidQuantityError,
    InsufficientCashError,
    InsufficientHoldingError,
)
from tradesim.domain.models import (
    Holding,
    LedgerSnapshot,
    Order,
    OrderSide,
    QuoteCurrency,
)
from tradesim.domain.views import HistoryExport, Valuation

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

_ZERO = Decimal("0")


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce a numeric input to Decimal; None when it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def _to_millis(timestamp: datetime) -> datetime:
    """Drop sub-millisecond precision; saved order times are epoch milliseconds."""
    return timestamp.replace(microsecond=timestamp.microsecond // 1000 * 1000)


class Ledger:
    """
    Single-user simulated trading ledger.

    Every trade either applies in full (cash, holding and history) or is
    rejected with a TradeError and no side effect. Holdings never keep a
    zero quantity, and history is newest first.
    """

    def __init__(
        self,
        starting_cash: Number = Decimal("10000"),
        currency: QuoteCurrency = QuoteCurrency.USD,
        default_currency: Optional[QuoteCurrency] = None,
    ):
        starting = _to_decimal(starting_cash)
        if starting is None or not starting.is_finite() or starting < 0:
            raise ValidationError(f"Starting cash must be a finite amount >= 0: {starting_cash}")
        self._starting_cash = starting
        self._default_currency = QuoteCurrency(default_currency or currency)
        self._cash = starting
        self._holdings: dict[str, Holding] = {}
        self._history: list[Order] = []
        self._last_prices: dict[str, Decimal] = {}
        self._currency = QuoteCurrency(currency)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: LedgerSnapshot,
        starting_cash: Number = Decimal("10000"),
        default_currency: Optional[QuoteCurrency] = None,
    ) -> "Ledger":
        """Rebuild a ledger from a persisted snapshot."""
        ledger = cls(
            starting_cash=starting_cash,
            currency=snapshot.currency,
            default_currency=default_currency,
        )
        ledger._cash = snapshot.cash
        ledger._holdings = {
            asset_id: replace(holding)
            for asset_id, holding in snapshot.holdings.items()
            if holding.quantity > 0
        }
        ledger._history = list(snapshot.history)
        ledger._last_prices = dict(snapshot.last_prices)
        return ledger

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def cash(self) -> Decimal:
        return self._cash

    @property
    def starting_cash(self) -> Decimal:
        return self._starting_cash

    @property
    def currency(self) -> QuoteCurrency:
        return self._currency

    @property
    def holdings(self) -> dict[str, Holding]:
        """Copy of the open holdings keyed by asset id."""
        return {asset_id: replace(h) for asset_id, h in self._holdings.items()}

    @property
    def history(self) -> list[Order]:
        """Copy of the order history, most recent first."""
        return list(self._history)

    @property
    def last_prices(self) -> dict[str, Decimal]:
        return dict(self._last_prices)

    def holding(self, asset_id: str) -> Optional[Holding]:
        """Return a copy of the holding for an asset, or None."""
        holding = self._holdings.get(asset_id)
        return replace(holding) if holding else None

    def snapshot(self) -> LedgerSnapshot:
        """Capture the full state for persistence."""
        return LedgerSnapshot(
            cash=self._cash,
            holdings=self.holdings,
            history=self.history,
            last_prices=self.last_prices,
            currency=self._currency,
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def apply_trade(
        self,
        asset_id: str,
        symbol: str,
        name: str,
        side: Union[OrderSide, str],
        quantity: Number,
        unit_price: Number,
        timestamp: Optional[datetime] = None,
    ) -> Order:
        """
        Apply a simulated market order at unit_price.

        BUY debits quantity * unit_price and folds it into the average price.
        SELL credits quantity * unit_price; the average price is left alone
        and the holding is dropped once its quantity reaches zero.

        Raises:
            InvalidQuantityError: quantity is not a finite number > 0
            ValidationError: unit_price is not a finite number >= 0, or bad side
            InsufficientCashError: BUY costs more than the available cash
            InsufficientHoldingError: SELL of more units than held
        """
        qty = _to_decimal(quantity)
        if qty is None or not qty.is_finite() or qty <= 0:
            raise InvalidQuantityError(str(quantity))

        price = _to_decimal(unit_price)
        if price is None or not price.is_finite() or price < 0:
            raise ValidationError(f"Invalid unit price: {unit_price} (must be a finite number >= 0)")

        try:
            side = OrderSide(side.upper() if isinstance(side, str) else side)
        except ValueError:
            raise ValidationError(f"Invalid order side: {side}")

        timestamp = _to_millis(to_utc(timestamp) if timestamp else now_utc())

        if side == OrderSide.BUY:
            holding = self._holdings.get(asset_id)
            try:
                cost = qty * price
                if cost > self._cash:
                    raise InsufficientCashError(str(cost), str(self._cash))
                new_qty = (holding.quantity if holding else _ZERO) + qty
                new_avg = ((holding.cost_basis if holding else _ZERO) + cost) / new_qty
            except ArithmeticError:
                # Amounts beyond the decimal context cannot be afforded
                raise InsufficientCashError(f"{qty} x {price}", str(self._cash))

            if holding is None:
                holding = Holding(symbol=symbol, name=name, quantity=_ZERO, average_price=_ZERO)
                self._holdings[asset_id] = holding
            holding.quantity = new_qty
            holding.average_price = new_avg
            self._cash -= cost
        else:
            holding = self._holdings.get(asset_id)
            available = holding.quantity if holding else _ZERO
            if holding is None or available < qty:
                raise InsufficientHoldingError(symbol, str(qty), str(available))

            try:
                cost = qty * price
                new_cash = self._cash + cost
            except ArithmeticError:
                raise InvalidQuantityError(str(quantity))

            holding.quantity -= qty
            self._cash = new_cash
            if holding.quantity == 0:
                del self._holdings[asset_id]

        order = Order(
            timestamp=timestamp,
            side=side,
            asset_id=asset_id,
            symbol=symbol,
            quantity=qty,
            unit_price=price,
            total_cost=cost,
        )
        self._history.insert(0, order)
        logger.info("%s %s %s @ %s (cost %s)", side.value, qty, symbol.upper(), price, cost)
        return order

    def reset(self, preserve_currency: bool = True) -> None:
        """Restore starting cash and clear holdings, history and prices."""
        self._cash = self._starting_cash
        self._holdings = {}
        self._history = []
        self._last_prices = {}
        if not preserve_currency:
            self._currency = self._default_currency

    def update_prices(self, prices: Mapping[str, Number]) -> None:
        """Merge freshly observed prices into the last-known price cache."""
        for asset_id, value in prices.items():
            price = _to_decimal(value)
            if price is None or not price.is_finite() or price < 0:
                logger.warning("Ignoring invalid price for %s: %r", asset_id, value)
                continue
            self._last_prices[asset_id] = price

    def set_currency(self, currency: Union[QuoteCurrency, str]) -> None:
        """Switch the active quote currency. Holdings are not converted."""
        try:
            self._currency = QuoteCurrency(currency)
        except ValueError:
            raise ValidationError(f"Unsupported currency: {currency}")

    # -------------------------------------------------------------------------
    # Pure derivations
    # -------------------------------------------------------------------------

    def valuate(self, prices: Optional[Mapping[str, Decimal]] = None) -> Valuation:
        """
        Value the open holdings at the given prices.

        Uses last_prices when no map is supplied. A held asset without a
        price is valued at zero.
        """
        price_map = self._last_prices if prices is None else prices
        per_asset: dict[str, Decimal] = {}
        for asset_id, holding in self._holdings.items():
            price = _to_decimal(price_map.get(asset_id, _ZERO))
            if price is None or not price.is_finite():
                price = _ZERO
            per_asset[asset_id] = holding.quantity * price
        return Valuation(
            holdings_value=sum(per_asset.values(), _ZERO),
            per_asset_value=per_asset,
        )

    def export_history(self) -> HistoryExport:
        """Flat history records (most recent first) for CSV export."""
        return HistoryExport(self._history)
