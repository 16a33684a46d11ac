"""CoinGecko public API price feed (no API key)."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import requests

from tradesim.core.exceptions import FeedUnavailableError
from tradesim.core.timezone import from_epoch_millis
from tradesim.domain.models import QuoteCurrency
from tradesim.domain.views import AssetQuote, ChartPoint

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _parse_asset(row: Any) -> Optional[AssetQuote]:
    """Turn one /coins/markets row into an AssetQuote; None if unusable."""
    if not isinstance(row, dict):
        return None
    asset_id = row.get("id")
    symbol = row.get("symbol")
    price = _decimal_or_none(row.get("current_price"))
    if not asset_id or not symbol or price is None:
        return None
    return AssetQuote(
        id=str(asset_id),
        symbol=str(symbol),
        name=str(row.get("name") or symbol),
        current_price=price,
        # Null 24h change is displayed as 0.00%
        change_24h_percent=_decimal_or_none(row.get("price_change_percentage_24h")) or Decimal("0"),
        market_cap=_decimal_or_none(row.get("market_cap")) or Decimal("0"),
        image=row.get("image"),
    )


class CoinGeckoProvider:
    """
    Price feed backed by the CoinGecko REST API.

    Uses a shared requests.Session; every failure is raised as
    FeedUnavailableError so callers can skip the refresh cycle.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def fetch_top_assets(self, currency: QuoteCurrency, limit: int) -> list[AssetQuote]:
        """GET /coins/markets ordered by market cap, first page of limit rows."""
        payload = self._get(
            "/coins/markets",
            {
                "vs_currency": QuoteCurrency(currency).value,
                "order": "market_cap_desc",
                "per_page": limit,
                "page": 1,
                "sparkline": "false",
                "price_change_percentage": "24h",
            },
        )
        if not isinstance(payload, list):
            raise FeedUnavailableError(
                f"Unexpected /coins/markets payload type: {type(payload).__name__}"
            )

        assets = []
        for row in payload:
            asset = _parse_asset(row)
            if asset is None:
                logger.warning("Skipping malformed market row: %r", row)
                continue
            assets.append(asset)
        return assets[:limit]

    def fetch_chart(self, asset_id: str, currency: QuoteCurrency, days: int) -> list[ChartPoint]:
        """GET /coins/{id}/market_chart and return its price series."""
        payload = self._get(
            f"/coins/{asset_id}/market_chart",
            {"vs_currency": QuoteCurrency(currency).value, "days": days},
        )
        prices = payload.get("prices") if isinstance(payload, dict) else None
        if not isinstance(prices, list):
            raise FeedUnavailableError(f"Unexpected market_chart payload for {asset_id}")

        points = []
        for pair in prices:
            if not isinstance(pair, (list, tuple)) or len(pair) < 2:
                continue
            price = _decimal_or_none(pair[1])
            if price is None or not isinstance(pair[0], (int, float)):
                continue
            points.append(ChartPoint(timestamp=from_epoch_millis(pair[0]), price=price))
        return points

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        """
        Perform a GET request to base_url + path.

        Raises FeedUnavailableError on connection errors, timeouts,
        non-2xx responses and bodies that are not JSON.
        """
        url = f"{self._base_url}{path}"
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise FeedUnavailableError(f"Price feed request failed: {url}: {exc}") from exc
        except ValueError as exc:
            raise FeedUnavailableError(f"Price feed returned invalid JSON: {url}") from exc
