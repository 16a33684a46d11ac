"""View models for valuation, portfolio and history export outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterator, NamedTuple, Sequence

from tradesim.core.timezone import to_iso_utc
from tradesim.domain.models import Order, QuoteCurrency


@dataclass
class Valuation:
    """Market value of the open holdings at a given price map."""

    holdings_value: Decimal = field(default_factory=lambda: Decimal("0"))
    per_asset_value: dict[str, Decimal] = field(default_factory=dict)


class HistoryRow(NamedTuple):
    """Flat export record of one order."""

    ts: str
    type: str
    symbol: str
    qty: Decimal
    price: Decimal
    cost: Decimal


class HistoryExport:
    """
    Restartable, lazily evaluated sequence of HistoryRow.

    Holds the orders captured at export time; each iteration walks them
    again in stored order (most recent first).
    """

    def __init__(self, orders: Sequence[Order]):
        self._orders = tuple(orders)

    def __iter__(self) -> Iterator[HistoryRow]:
        for order in self._orders:
            yield HistoryRow(
                ts=to_iso_utc(order.timestamp),
                type=order.side.value,
                symbol=order.symbol,
                qty=order.quantity,
                price=order.unit_price,
                cost=order.total_cost,
            )

    def __len__(self) -> int:
        return len(self._orders)


@dataclass
class HoldingView:
    """A holding enriched with the latest known price."""

    asset_id: str
    symbol: str
    name: str
    quantity: Decimal
    average_price: Decimal
    last_price: Decimal
    market_value: Decimal


@dataclass
class PortfolioView:
    """Cash, holdings and totals for display."""

    currency: QuoteCurrency
    cash: Decimal
    holdings_value: Decimal
    total_value: Decimal
    holdings: list[HoldingView] = field(default_factory=list)
