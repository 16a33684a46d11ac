"""View models for price feed data."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class AssetQuote:
    """One row of the ranked market listing."""

    id: str
    symbol: str
    name: str
    current_price: Decimal
    change_24h_percent: Decimal
    market_cap: Decimal
    image: Optional[str] = None


@dataclass(frozen=True)
class ChartPoint:
    """Single (timestamp, price) sample of a historical chart."""

    timestamp: datetime
    price: Decimal
