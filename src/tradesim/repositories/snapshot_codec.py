"""JSON encoding of ledger snapshots.

The document keeps the browser-era key names so an exported blob reads
the same::

    {"cash": "9400", "currency": "usd",
     "holdings": {"bitcoin": {"symbol": "btc", "name": "Bitcoin", "qty": "4", "avgPrice": "150"}},
     "history": [{"ts": 1718461800000, "type": "BUY", "id": "bitcoin", "symbol": "btc",
                  "qty": "2", "price": "200", "cost": "400"}],
     "lastPrices": {"bitcoin": "210"}}

Amounts are written as strings and read back from either strings or JSON
numbers; ``ts`` is epoch milliseconds (an ISO string is accepted too).
"""

from datetime import datetime
from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from tradesim.core.exceptions import PersistenceCorruptError
from tradesim.core.timezone import from_epoch_millis, parse_datetime_utc, to_epoch_millis
from tradesim.domain.models import Holding, LedgerSnapshot, Order, OrderSide, QuoteCurrency


class HoldingDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    symbol: str
    name: str
    qty: Decimal = Field(ge=0, allow_inf_nan=False)
    avgPrice: Decimal = Field(ge=0, allow_inf_nan=False)


class OrderDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ts: Union[int, float, str]
    type: OrderSide
    id: str
    symbol: str
    qty: Decimal = Field(gt=0, allow_inf_nan=False)
    price: Decimal = Field(ge=0, allow_inf_nan=False)
    cost: Decimal = Field(ge=0, allow_inf_nan=False)


class SnapshotDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cash: Decimal = Field(ge=0, allow_inf_nan=False)
    holdings: dict[str, HoldingDocument] = Field(default_factory=dict)
    history: list[OrderDocument] = Field(default_factory=list)
    lastPrices: dict[str, Decimal] = Field(default_factory=dict)
    currency: QuoteCurrency = QuoteCurrency.USD


def _parse_ts(value: Union[int, float, str]) -> datetime:
    if isinstance(value, str):
        return parse_datetime_utc(value)
    return from_epoch_millis(value)


def dump_snapshot(snapshot: LedgerSnapshot) -> str:
    """Serialize a snapshot to JSON text."""
    document = SnapshotDocument(
        cash=snapshot.cash,
        holdings={
            asset_id: HoldingDocument(
                symbol=h.symbol,
                name=h.name,
                qty=h.quantity,
                avgPrice=h.average_price,
            )
            for asset_id, h in snapshot.holdings.items()
        },
        history=[
            OrderDocument(
                ts=to_epoch_millis(o.timestamp),
                type=o.side,
                id=o.asset_id,
                symbol=o.symbol,
                qty=o.quantity,
                price=o.unit_price,
                cost=o.total_cost,
            )
            for o in snapshot.history
        ],
        lastPrices=dict(snapshot.last_prices),
        currency=snapshot.currency,
    )
    return document.model_dump_json()


def parse_snapshot(text: Union[str, bytes]) -> LedgerSnapshot:
    """
    Decode JSON text into a snapshot.

    Raises PersistenceCorruptError when the text is not valid JSON or does
    not match the document shape.
    """
    try:
        document = SnapshotDocument.model_validate_json(text)
        history = [
            Order(
                timestamp=_parse_ts(o.ts),
                side=o.type,
                asset_id=o.id,
                symbol=o.symbol,
                quantity=o.qty,
                unit_price=o.price,
                total_cost=o.cost,
            )
            for o in document.history
        ]
    except PydanticValidationError as exc:
        raise PersistenceCorruptError(
            f"Malformed ledger snapshot ({exc.error_count()} error(s))"
        ) from exc
    except (ValueError, OverflowError, OSError) as exc:
        raise PersistenceCorruptError(f"Malformed order timestamp in ledger snapshot: {exc}") from exc

    return LedgerSnapshot(
        cash=document.cash,
        holdings={
            asset_id: Holding(
                symbol=h.symbol,
                name=h.name,
                quantity=h.qty,
                average_price=h.avgPrice,
            )
            for asset_id, h in document.holdings.items()
            if h.qty > 0
        },
        history=history,
        last_prices=dict(document.lastPrices),
        currency=document.currency,
    )
