"""Pydantic schemas for trade and order endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tradesim.domain.models import OrderSide


class TradeRequest(BaseModel):
    """Request schema for placing a simulated market order."""

    asset_id: str = Field(..., min_length=1, max_length=100, description="Asset id, e.g. bitcoin")
    side: OrderSide = Field(..., description="BUY or SELL")
    # Range and finiteness checks happen in the ledger so they surface as INVALID_QUANTITY
    quantity: Decimal = Field(..., allow_inf_nan=True, description="Units to trade")

    @field_validator("side", mode="before")
    @classmethod
    def uppercase_side(cls, v):
        return v.upper() if isinstance(v, str) else v


class OrderResponse(BaseModel):
    """Response schema for a single executed order."""

    model_config = {"from_attributes": True}

    timestamp: datetime
    side: OrderSide
    asset_id: str
    symbol: str
    quantity: Decimal
    unit_price: Decimal
    total_cost: Decimal


class OrderListResponse(BaseModel):
    """Response schema for listing orders."""

    orders: list[OrderResponse]
    count: int


class EstimateResponse(BaseModel):
    """Cost preview shown before confirming a trade."""

    asset_id: str
    quantity: Decimal
    estimated_cost: Decimal
    estimated_cost_display: str


class ExportFileResponse(BaseModel):
    """Where the history CSV was written."""

    path: str
    count: int
