"""Price feed providers module."""

from tradesim.providers.price_feed_provider import PriceFeedProvider
from tradesim.providers.coingecko_provider import CoinGeckoProvider
from tradesim.providers.stub_provider import StubPriceFeedProvider

__all__ = [
    "PriceFeedProvider",
    "CoinGeckoProvider",
    "StubPriceFeedProvider",
]
