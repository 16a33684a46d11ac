"""View models for market data and ledger outputs."""

from tradesim.domain.views.market import AssetQuote, ChartPoint
from tradesim.domain.views.portfolio import (
    Valuation,
    HistoryRow,
    HistoryExport,
    PortfolioView,
    HoldingView,
)

__all__ = [
    "AssetQuote",
    "ChartPoint",
    "Valuation",
    "HistoryRow",
    "HistoryExport",
    "PortfolioView",
    "HoldingView",
]
