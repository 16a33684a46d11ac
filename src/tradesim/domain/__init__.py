"""Domain layer - pure business models with no external dependencies."""

from tradesim.domain.models import (
    OrderSide,
    QuoteCurrency,
    Holding,
    Order,
    LedgerSnapshot,
)

__all__ = [
    "OrderSide",
    "QuoteCurrency",
    "Holding",
    "Order",
    "LedgerSnapshot",
]
