"""Market data service for listings and charts."""

import logging
from datetime import datetime
from typing import Optional

from tradesim.core.exceptions import FeedUnavailableError
from tradesim.core.timezone import now_utc
from tradesim.domain.models import QuoteCurrency
from tradesim.domain.views import AssetQuote, ChartPoint
from tradesim.providers.price_feed_provider import PriceFeedProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching market data (listings, charts).

    Wraps a provider with graceful degradation: a failed listing refresh is
    logged and skipped, and the last good listing per currency stays
    available.
    """

    def __init__(
        self,
        provider: PriceFeedProvider,
        limit: int = 20,
        chart_cache_ttl_seconds: int = 60,
        chart_cache_max_entries: int = 64,
    ):
        self._provider = provider
        self._limit = limit
        self._chart_ttl = chart_cache_ttl_seconds
        self._chart_max_entries = max(chart_cache_max_entries, 1)
        self._listings: dict[QuoteCurrency, list[AssetQuote]] = {}
        self._listing_times: dict[QuoteCurrency, datetime] = {}
        self._chart_cache: dict[tuple[str, QuoteCurrency, int], tuple[list[ChartPoint], datetime]] = {}

    def refresh(self, currency: QuoteCurrency) -> Optional[list[AssetQuote]]:
        """
        Fetch a fresh listing in currency.

        Returns the new listing, or None when the feed is unavailable (the
        previous listing is kept).
        """
        currency = QuoteCurrency(currency)
        try:
            assets = self._provider.fetch_top_assets(currency, self._limit)
        except FeedUnavailableError as exc:
            logger.warning("Market refresh skipped (%s): %s", currency.value, exc.message)
            return None

        self._listings[currency] = assets
        self._listing_times[currency] = now_utc()
        return list(assets)

    def latest(self, currency: QuoteCurrency) -> list[AssetQuote]:
        """Return the last good listing for currency (empty if never fetched)."""
        return list(self._listings.get(QuoteCurrency(currency), []))

    def last_refreshed(self, currency: QuoteCurrency) -> Optional[datetime]:
        """When the listing for currency was last fetched successfully."""
        return self._listing_times.get(QuoteCurrency(currency))

    def find_asset(self, asset_id: str, currency: QuoteCurrency) -> Optional[AssetQuote]:
        """Look up one asset in the last good listing."""
        for asset in self._listings.get(QuoteCurrency(currency), []):
            if asset.id == asset_id:
                return asset
        return None

    def get_chart(self, asset_id: str, currency: QuoteCurrency, days: int = 7) -> list[ChartPoint]:
        """
        Fetch a chart series with caching.

        Uses cached data if within TTL. Raises FeedUnavailableError when the
        provider fails and nothing is cached.
        """
        key = (asset_id, QuoteCurrency(currency), days)
        cached = self._chart_cache.get(key)
        if cached and (now_utc() - cached[1]).total_seconds() < self._chart_ttl:
            return list(cached[0])

        try:
            points = self._provider.fetch_chart(asset_id, key[1], days)
        except FeedUnavailableError:
            if cached:
                logger.warning("Chart refresh failed for %s; serving stale data", asset_id)
                return list(cached[0])
            raise

        self._store_chart(key, points)
        return list(points)

    def _store_chart(self, key: tuple[str, QuoteCurrency, int], points: list[ChartPoint]) -> None:
        """Cache a chart series, evicting the oldest entries beyond the size cap."""
        self._chart_cache.pop(key, None)
        self._chart_cache[key] = (points, now_utc())
        while len(self._chart_cache) > self._chart_max_entries:
            # Dicts keep insertion order, so the first key is the oldest fetch
            del self._chart_cache[next(iter(self._chart_cache))]
