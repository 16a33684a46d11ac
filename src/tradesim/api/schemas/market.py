"""Pydantic schemas for market endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from tradesim.domain.models import QuoteCurrency


class AssetQuoteResponse(BaseModel):
    """One row of the market table."""

    model_config = {"from_attributes": True}

    rank: int
    id: str
    symbol: str
    name: str
    current_price: Decimal
    change_24h_percent: Decimal
    market_cap: Decimal
    image: Optional[str] = None
    price_display: str
    market_cap_display: str


class MarketResponse(BaseModel):
    """Ranked listing in the active currency."""

    currency: QuoteCurrency
    as_of: Optional[datetime] = None
    assets: list[AssetQuoteResponse]


class ChartPointResponse(BaseModel):
    timestamp: datetime
    price: Decimal


class ChartResponse(BaseModel):
    """Historical price series for one asset."""

    asset_id: str
    currency: QuoteCurrency
    days: int
    points: list[ChartPointResponse]
