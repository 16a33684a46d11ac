"""
Unit tests for CoinGeckoProvider.

Tests cover:
- Request parameters for /coins/markets and market_chart
- Row parsing (null fields, malformed rows)
- Failure mapping to FeedUnavailableError
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from tradesim.core.exceptions import FeedUnavailableError
from tradesim.domain.models import QuoteCurrency
from tradesim.providers import CoinGeckoProvider

from tests.conftest import utc_datetime


def make_provider(payload=None, **response_overrides) -> tuple[CoinGeckoProvider, MagicMock]:
    """Provider backed by a mocked requests.Session returning payload."""
    response = MagicMock()
    response.json.return_value = payload
    for name, value in response_overrides.items():
        setattr(response, name, value)
    session = MagicMock()
    session.get.return_value = response
    provider = CoinGeckoProvider(
        base_url="https://api.example/v3/",
        timeout_seconds=3.0,
        session=session,
    )
    return provider, session


MARKET_ROWS = [
    {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "image": "https://img.example/btc.png",
        "current_price": 64250.5,
        "price_change_percentage_24h": 1.234,
        "market_cap": 1265000000000,
    },
    {
        "id": "ethereum",
        "symbol": "eth",
        "name": "Ethereum",
        "image": None,
        "current_price": 3150.4,
        "price_change_percentage_24h": None,
        "market_cap": None,
    },
]


# =============================================================================
# LISTING TESTS
# =============================================================================


class TestFetchTopAssets:
    """Tests for the market listing request."""

    def test_request_parameters(self):
        """
        GIVEN a provider
        WHEN I fetch the top 20 in INR
        THEN /coins/markets is called with market-cap ordering and a timeout
        """
        provider, session = make_provider([])

        provider.fetch_top_assets(QuoteCurrency.INR, 20)

        session.get.assert_called_once()
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.example/v3/coins/markets"
        assert kwargs["params"] == {
            "vs_currency": "inr",
            "order": "market_cap_desc",
            "per_page": 20,
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": "24h",
        }
        assert kwargs["timeout"] == 3.0

    def test_rows_are_parsed(self):
        """
        GIVEN two market rows
        WHEN I fetch the listing
        THEN prices are Decimals and null change/market cap become 0
        """
        provider, _ = make_provider(MARKET_ROWS)

        assets = provider.fetch_top_assets(QuoteCurrency.USD, 20)

        assert [a.id for a in assets] == ["bitcoin", "ethereum"]
        btc, eth = assets
        assert btc.current_price == Decimal("64250.5")
        assert btc.change_24h_percent == Decimal("1.234")
        assert btc.image == "https://img.example/btc.png"
        assert eth.change_24h_percent == Decimal("0")
        assert eth.market_cap == Decimal("0")
        assert eth.image is None

    def test_malformed_rows_are_skipped(self):
        """
        GIVEN rows missing an id or a price
        WHEN I fetch the listing
        THEN only the usable row is returned
        """
        rows = [
            {"symbol": "x", "current_price": 1},
            {"id": "nope", "symbol": "nope", "current_price": None},
            "garbage",
            MARKET_ROWS[0],
        ]
        provider, _ = make_provider(rows)

        assets = provider.fetch_top_assets(QuoteCurrency.USD, 20)

        assert [a.id for a in assets] == ["bitcoin"]

    def test_non_list_payload_raises(self):
        """
        GIVEN an error object instead of a list
        WHEN I fetch the listing
        THEN FeedUnavailableError is raised
        """
        provider, _ = make_provider({"status": {"error_code": 429}})

        with pytest.raises(FeedUnavailableError):
            provider.fetch_top_assets(QuoteCurrency.USD, 20)


# =============================================================================
# CHART TESTS
# =============================================================================


class TestFetchChart:
    """Tests for the market_chart request."""

    def test_chart_points_are_parsed(self):
        """
        GIVEN a market_chart payload
        WHEN I fetch a 7 day chart
        THEN (timestamp, price) pairs become ChartPoints
        """
        payload = {"prices": [[1718452800000, 64000.1], [1718456400000, 64100.2], ["bad"]]}
        provider, session = make_provider(payload)

        points = provider.fetch_chart("bitcoin", QuoteCurrency.USD, 7)

        args, kwargs = session.get.call_args
        assert args[0] == "https://api.example/v3/coins/bitcoin/market_chart"
        assert kwargs["params"] == {"vs_currency": "usd", "days": 7}
        assert len(points) == 2
        assert points[0].timestamp == utc_datetime(2024, 6, 15, 12, 0, 0)
        assert points[1].price == Decimal("64100.2")

    def test_missing_prices_raises(self):
        """
        GIVEN a payload without a prices list
        WHEN I fetch a chart
        THEN FeedUnavailableError is raised
        """
        provider, _ = make_provider({"error": "coin not found"})

        with pytest.raises(FeedUnavailableError):
            provider.fetch_chart("nope", QuoteCurrency.USD, 7)


# =============================================================================
# FAILURE MAPPING TESTS
# =============================================================================


class TestFailures:
    """Tests for transport and decoding failures."""

    def test_connection_error(self):
        """
        GIVEN the network is down
        WHEN I fetch the listing
        THEN FeedUnavailableError is raised
        """
        provider, session = make_provider([])
        session.get.side_effect = requests.ConnectionError("no route to host")

        with pytest.raises(FeedUnavailableError) as exc_info:
            provider.fetch_top_assets(QuoteCurrency.USD, 20)

        assert exc_info.value.code == "FEED_UNAVAILABLE"

    def test_http_error_status(self):
        """
        GIVEN the API answers 429
        WHEN I fetch the listing
        THEN FeedUnavailableError is raised
        """
        provider, _ = make_provider(
            [],
            raise_for_status=MagicMock(side_effect=requests.HTTPError("429 Too Many Requests")),
        )

        with pytest.raises(FeedUnavailableError):
            provider.fetch_top_assets(QuoteCurrency.USD, 20)

    def test_invalid_json(self):
        """
        GIVEN a body that is not JSON
        WHEN I fetch the listing
        THEN FeedUnavailableError is raised
        """
        provider, _ = make_provider(json=MagicMock(side_effect=ValueError("Expecting value")))

        with pytest.raises(FeedUnavailableError):
            provider.fetch_top_assets(QuoteCurrency.USD, 20)
