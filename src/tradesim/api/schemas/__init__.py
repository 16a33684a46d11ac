"""Pydantic schemas for API request/response."""

from tradesim.api.schemas.market import (
    AssetQuoteResponse,
    MarketResponse,
    ChartPointResponse,
    ChartResponse,
)
from tradesim.api.schemas.order import (
    TradeRequest,
    OrderResponse,
    OrderListResponse,
    EstimateResponse,
    ExportFileResponse,
)
from tradesim.api.schemas.portfolio import (
    HoldingResponse,
    PortfolioResponse,
    ResetRequest,
    CurrencyRequest,
)

__all__ = [
    "AssetQuoteResponse",
    "MarketResponse",
    "ChartPointResponse",
    "ChartResponse",
    "TradeRequest",
    "OrderResponse",
    "OrderListResponse",
    "EstimateResponse",
    "ExportFileResponse",
    "HoldingResponse",
    "PortfolioResponse",
    "ResetRequest",
    "CurrencyRequest",
]
