"""Pydantic schemas for portfolio and session endpoints."""

from decimal import Decimal

from pydantic import BaseModel, Field

from tradesim.domain.models import QuoteCurrency


class HoldingResponse(BaseModel):
    """A single open position valued at the last-known price."""

    asset_id: str
    symbol: str
    name: str
    quantity: Decimal
    average_price: Decimal
    last_price: Decimal
    market_value: Decimal
    market_value_display: str


class PortfolioResponse(BaseModel):
    """Wallet summary: cash, holdings and totals."""

    currency: QuoteCurrency
    cash: Decimal
    cash_display: str
    holdings_value: Decimal
    holdings_value_display: str
    total_value: Decimal
    holdings: list[HoldingResponse]


class ResetRequest(BaseModel):
    """Request schema for resetting the demo."""

    preserve_currency: bool = Field(default=True, description="Keep the selected currency")


class CurrencyRequest(BaseModel):
    """Request schema for switching the quote currency."""

    currency: QuoteCurrency
