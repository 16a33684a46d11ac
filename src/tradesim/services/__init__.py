"""Service layer - business logic."""

from tradesim.services.ledger import Ledger
from tradesim.services.market_data_service import MarketDataService
from tradesim.services.poller import PricePoller

__all__ = [
    "Ledger",
    "MarketDataService",
    "PricePoller",
]
