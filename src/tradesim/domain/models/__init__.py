"""Domain models."""

from tradesim.domain.models.enums import OrderSide, QuoteCurrency
from tradesim.domain.models.holding import Holding
from tradesim.domain.models.order import Order
from tradesim.domain.models.snapshot import LedgerSnapshot

__all__ = [
    "OrderSide",
    "QuoteCurrency",
    "Holding",
    "Order",
    "LedgerSnapshot",
]
