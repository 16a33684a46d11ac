"""Order domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from tradesim.domain.models.enums import OrderSide


@dataclass(frozen=True)
class Order:
    """
    Executed simulated order (immutable history entry).

    total_cost is quantity * unit_price at the time of the trade and is
    never recomputed.
    """

    timestamp: datetime
    side: OrderSide
    asset_id: str
    symbol: str
    quantity: Decimal
    unit_price: Decimal
    total_cost: Decimal

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", OrderSide(self.side))
