"""Holding domain model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Holding:
    """
    Open position in one asset.

    average_price is the cost-weighted average unit price of the open
    quantity; it only moves on a BUY.
    """

    symbol: str
    name: str
    quantity: Decimal
    average_price: Decimal

    @property
    def cost_basis(self) -> Decimal:
        """Total amount paid for the open quantity."""
        return self.quantity * self.average_price
