"""
Pytest configuration and fixtures for the trading demo tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and switchable price feed providers
- Ledger, store, market and session fixtures
- FastAPI test client
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker

from tradesim.config.settings import Settings, reset_settings
from tradesim.core.exceptions import FeedUnavailableError
from tradesim.core.timezone import UTC
from tradesim.domain.models import QuoteCurrency
from tradesim.domain.views import AssetQuote, ChartPoint
from tradesim.main import create_app
from tradesim.repositories import SnapshotStore
from tradesim.repositories.sqlalchemy import Base, SqlAlchemySnapshotRepository
# Import ORM models to register them with Base before creating tables
from tradesim.repositories.sqlalchemy import orm_models  # noqa: F401
from tradesim.services import Ledger, MarketDataService
from tradesim.session import TradingSession


STARTING_CASH = Decimal("10000")
STATE_KEY = "crypto_demo_state_v1"


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in UTC."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


# =============================================================================
# PRICE FEED FIXTURES
# =============================================================================


class DeterministicPriceFeed:
    """
    Deterministic price feed for testing.

    USD prices are round numbers; INR is USD x 80, EUR is USD x 0.5.
    """

    USD_LISTING = [
        ("bitcoin", "btc", "Bitcoin", Decimal("100"), Decimal("2.5"), Decimal("1000000")),
        ("ethereum", "eth", "Ethereum", Decimal("50"), Decimal("-1.25"), Decimal("500000")),
        ("dogecoin", "doge", "Dogecoin", Decimal("0.1"), Decimal("0"), Decimal("1000")),
    ]
    FX = {
        QuoteCurrency.USD: Decimal("1"),
        QuoteCurrency.INR: Decimal("80"),
        QuoteCurrency.EUR: Decimal("0.5"),
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or utc_datetime(2024, 6, 15, 16, 0, 0)
        self.listing_calls: list[QuoteCurrency] = []
        self.chart_calls: list[tuple[str, QuoteCurrency, int]] = []

    def fetch_top_assets(self, currency: QuoteCurrency, limit: int) -> list[AssetQuote]:
        self.listing_calls.append(QuoteCurrency(currency))
        fx = self.FX[QuoteCurrency(currency)]
        return [
            AssetQuote(
                id=asset_id,
                symbol=symbol,
                name=name,
                current_price=price * fx,
                change_24h_percent=change,
                market_cap=cap * fx,
                image=f"https://img.example/{asset_id}.png",
            )
            for asset_id, symbol, name, price, change, cap in self.USD_LISTING[:limit]
        ]

    def fetch_chart(self, asset_id: str, currency: QuoteCurrency, days: int) -> list[ChartPoint]:
        self.chart_calls.append((asset_id, QuoteCurrency(currency), days))
        return [
            ChartPoint(timestamp=self._as_of - timedelta(days=d), price=Decimal(100 + d))
            for d in range(days, -1, -1)
        ]


class FailingPriceFeed:
    """Price feed that always raises FeedUnavailableError."""

    def fetch_top_assets(self, currency: QuoteCurrency, limit: int) -> list[AssetQuote]:
        raise FeedUnavailableError("Network unavailable")

    def fetch_chart(self, asset_id: str, currency: QuoteCurrency, days: int) -> list[ChartPoint]:
        raise FeedUnavailableError("Network unavailable")


class SwitchablePriceFeed:
    """Delegates to a deterministic feed until switched offline."""

    def __init__(self):
        self.online = True
        self.prices: dict[str, Decimal] = {}
        self._inner = DeterministicPriceFeed()

    def fetch_top_assets(self, currency: QuoteCurrency, limit: int) -> list[AssetQuote]:
        if not self.online:
            raise FeedUnavailableError("Network unavailable")
        assets = self._inner.fetch_top_assets(currency, limit)
        for asset in assets:
            if asset.id in self.prices:
                asset.current_price = self.prices[asset.id]
        return assets

    def fetch_chart(self, asset_id: str, currency: QuoteCurrency, days: int) -> list[ChartPoint]:
        if not self.online:
            raise FeedUnavailableError("Network unavailable")
        return self._inner.fetch_chart(asset_id, currency, days)


@pytest.fixture
def deterministic_feed(fixed_now) -> DeterministicPriceFeed:
    """Provide deterministic price feed."""
    return DeterministicPriceFeed(as_of=fixed_now)


@pytest.fixture
def failing_feed() -> FailingPriceFeed:
    """Provide a price feed that always fails."""
    return FailingPriceFeed()


@pytest.fixture
def switchable_feed() -> SwitchablePriceFeed:
    """Provide a price feed that can be taken offline."""
    return SwitchablePriceFeed()


# =============================================================================
# SETTINGS / DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings for an in-memory, offline, non-polling app."""
    reset_settings()
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        database_url="sqlite://",
        price_feed="stub",
        poll_enabled=False,
        starting_cash=STARTING_CASH,
        state_key=STATE_KEY,
    )


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# =============================================================================
# REPOSITORY / SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def snapshot_repo(session_factory) -> SqlAlchemySnapshotRepository:
    """Provide test SnapshotRepository."""
    return SqlAlchemySnapshotRepository(session_factory)


@pytest.fixture
def snapshot_store(snapshot_repo) -> SnapshotStore:
    """Provide test SnapshotStore."""
    return SnapshotStore(
        repository=snapshot_repo,
        key=STATE_KEY,
        starting_cash=STARTING_CASH,
        default_currency=QuoteCurrency.USD,
    )


@pytest.fixture
def ledger() -> Ledger:
    """Fresh ledger with 10000 starting cash."""
    return Ledger(starting_cash=STARTING_CASH)


@pytest.fixture
def market_data_service(deterministic_feed) -> MarketDataService:
    """Provide MarketDataService with deterministic feed."""
    return MarketDataService(provider=deterministic_feed, limit=20, chart_cache_ttl_seconds=60)


@pytest.fixture
def trading_session(test_settings, snapshot_store, market_data_service) -> TradingSession:
    """Opened TradingSession with a loaded market listing."""
    session = TradingSession(
        settings=test_settings,
        store=snapshot_store,
        market=market_data_service,
    )
    session.open()
    session.refresh_market()
    return session


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, test_settings, deterministic_feed) -> TestClient:
    """Provide FastAPI test client with test database and deterministic feed."""
    app = create_app(
        settings=test_settings,
        provider=deterministic_feed,
        engine=test_engine,
    )
    with TestClient(app) as c:
        yield c


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def buy(ledger: Ledger, quantity, price, asset_id: str = "bitcoin", symbol: str = "btc", name: str = "Bitcoin"):
    """Helper to place a BUY on a ledger."""
    return ledger.apply_trade(asset_id, symbol, name, "BUY", quantity, price)


def sell(ledger: Ledger, quantity, price, asset_id: str = "bitcoin", symbol: str = "btc", name: str = "Bitcoin"):
    """Helper to place a SELL on a ledger."""
    return ledger.apply_trade(asset_id, symbol, name, "SELL", quantity, price)


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.00000001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - Decimal(str(expected)))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
