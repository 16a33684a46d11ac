"""Trading session: owns the ledger and wires it to the feed and the store.

One TradingSession exists per running application. The API layer and the
price poller both go through it, and it serializes every ledger access
with a re-entrant lock.
"""

import logging
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from sqlalchemy.orm import sessionmaker

from tradesim.config.settings import Settings
from tradesim.core.exceptions import InvalidQuantityError, NotFoundError, ValidationError
from tradesim.csv.exporter import EXPORT_FILENAME, export_history_csv, history_to_csv
from tradesim.domain.models import LedgerSnapshot, Order, OrderSide, QuoteCurrency
from tradesim.domain.views import AssetQuote, ChartPoint, HoldingView, PortfolioView
from tradesim.providers import CoinGeckoProvider, PriceFeedProvider, StubPriceFeedProvider
from tradesim.repositories import SnapshotStore
from tradesim.repositories.sqlalchemy import SqlAlchemySnapshotRepository
from tradesim.services.ledger import Ledger, Number
from tradesim.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)


def create_provider(settings: Settings) -> PriceFeedProvider:
    """Build the price feed selected in settings."""
    if settings.price_feed == "stub":
        return StubPriceFeedProvider()
    return CoinGeckoProvider(
        base_url=settings.coingecko_base_url,
        timeout_seconds=settings.request_timeout_seconds,
    )


class TradingSession:
    """
    Application controller for a single local user.

    Holds the Ledger, persists it after every mutation and keeps its
    last-known prices in step with the market listing.
    """

    def __init__(
        self,
        settings: Settings,
        store: SnapshotStore,
        market: MarketDataService,
    ):
        self._settings = settings
        self._store = store
        self._market = market
        self._lock = threading.RLock()
        self._ledger: Optional[Ledger] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def open(self) -> None:
        """Load the saved ledger (or the default state)."""
        with self._lock:
            snapshot = self._store.load()
            self._ledger = Ledger.from_snapshot(
                snapshot,
                starting_cash=self._settings.starting_cash,
                default_currency=self._settings.default_currency,
            )
            logger.info(
                "Session opened: cash=%s holdings=%d orders=%d currency=%s",
                self._ledger.cash,
                len(self._ledger.holdings),
                len(self._ledger.history),
                self._ledger.currency.value,
            )

    def close(self) -> None:
        """Persist the final state."""
        with self._lock:
            if self._ledger is not None:
                self._persist()
                logger.info("Session closed")

    @property
    def ledger(self) -> Ledger:
        if self._ledger is None:
            raise RuntimeError("TradingSession.open() has not been called")
        return self._ledger

    @property
    def currency(self) -> QuoteCurrency:
        return self.ledger.currency

    # -------------------------------------------------------------------------
    # Market data
    # -------------------------------------------------------------------------

    def refresh_market(self) -> Optional[list[AssetQuote]]:
        """
        Fetch the listing in the active currency and update last prices.

        Returns None when the feed is unavailable; prior prices are kept.
        """
        currency = self.currency
        assets = self._market.refresh(currency)
        if assets is None:
            return None

        with self._lock:
            if self.ledger.currency != currency:
                # Currency switched while the request was in flight
                logger.info("Dropping %s listing after currency change", currency.value)
                return None
            self.ledger.update_prices({a.id: a.current_price for a in assets})
        return assets

    def market(self) -> list[AssetQuote]:
        """Last good listing in the active currency."""
        return self._market.latest(self.currency)

    def market_refreshed_at(self) -> Optional[datetime]:
        """When the listing in the active currency was last fetched."""
        return self._market.last_refreshed(self.currency)

    def chart(self, asset_id: str, days: int = 7) -> list[ChartPoint]:
        """Historical price series for one asset in the active currency."""
        if days < 1:
            raise ValidationError(f"days must be >= 1: {days}")
        return self._market.get_chart(asset_id, self.currency, days)

    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------

    def place_trade(
        self,
        asset_id: str,
        side: Union[OrderSide, str],
        quantity: Number,
    ) -> Order:
        """Execute a simulated market order at the current price and persist."""
        with self._lock:
            symbol, name, price = self._resolve_asset(asset_id)
            before = self.ledger.snapshot()
            order = self.ledger.apply_trade(
                asset_id=asset_id,
                symbol=symbol,
                name=name,
                side=side,
                quantity=quantity,
                unit_price=price,
            )
            self._persist_or_rollback(before)
            return order

    def estimate(self, asset_id: str, quantity: Number) -> Decimal:
        """Cost of quantity units at the current price (no trade is made)."""
        with self._lock:
            _, _, price = self._resolve_asset(asset_id)
        try:
            qty = Decimal(str(quantity))
        except ArithmeticError:
            qty = Decimal("0")
        if not qty.is_finite():
            qty = Decimal("0")
        try:
            return qty * price
        except ArithmeticError:
            raise InvalidQuantityError(str(quantity))

    def reset(self, preserve_currency: bool = True) -> None:
        """Reset the ledger to its starting state, persist and reload prices."""
        with self._lock:
            before = self.ledger.snapshot()
            self.ledger.reset(preserve_currency=preserve_currency)
            self._persist_or_rollback(before)
            logger.info("Ledger reset (currency=%s)", self.ledger.currency.value)
        self.refresh_market()

    def change_currency(self, currency: Union[QuoteCurrency, str]) -> None:
        """Switch the quote currency, persist and reload prices."""
        with self._lock:
            before = self.ledger.snapshot()
            self.ledger.set_currency(currency)
            self._persist_or_rollback(before)
            logger.info("Quote currency changed to %s", self.ledger.currency.value)
        self.refresh_market()

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def portfolio(self) -> PortfolioView:
        """Cash, holdings at last-known prices and totals."""
        with self._lock:
            ledger = self.ledger
            prices = ledger.last_prices
            valuation = ledger.valuate(prices)
            holdings = [
                HoldingView(
                    asset_id=asset_id,
                    symbol=h.symbol,
                    name=h.name,
                    quantity=h.quantity,
                    average_price=h.average_price,
                    last_price=prices.get(asset_id, Decimal("0")),
                    market_value=valuation.per_asset_value[asset_id],
                )
                for asset_id, h in ledger.holdings.items()
            ]
            return PortfolioView(
                currency=ledger.currency,
                cash=ledger.cash,
                holdings_value=valuation.holdings_value,
                total_value=ledger.cash + valuation.holdings_value,
                holdings=holdings,
            )

    def history(self, limit: Optional[int] = None) -> list[Order]:
        """Most recent orders first."""
        if limit is None:
            limit = self._settings.history_display_limit
        with self._lock:
            return self.ledger.history[:limit]

    def export_csv(self) -> str:
        """Full order history as CSV text."""
        with self._lock:
            rows = self.ledger.export_history()
        return history_to_csv(rows)

    def save_csv(self, path: Optional[str] = None) -> Path:
        """Write the full history as CSV (default: the export directory)."""
        if path is None:
            path = str(self._settings.get_export_dir() / EXPORT_FILENAME)
        with self._lock:
            rows = self.ledger.export_history()
        written = export_history_csv(rows, path)
        logger.info("Exported %d orders to %s", len(rows), written)
        return written

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolve_asset(self, asset_id: str) -> tuple[str, str, Decimal]:
        """Symbol, name and trade price: last-known price first, then the listing."""
        ledger = self.ledger
        asset = self._market.find_asset(asset_id, ledger.currency)
        holding = ledger.holding(asset_id)
        if asset is None and holding is None:
            raise NotFoundError("Asset", asset_id)

        price = ledger.last_prices.get(asset_id)
        if not price and asset is not None:
            price = asset.current_price
        if price is None:
            raise NotFoundError("Price", asset_id)

        if asset is not None:
            return asset.symbol, asset.name, price
        return holding.symbol, holding.name, price

    def _persist(self) -> None:
        self._store.save(self.ledger.snapshot())

    def _persist_or_rollback(self, before: LedgerSnapshot) -> None:
        """Persist the ledger; on failure restore the state captured in before."""
        try:
            self._persist()
        except Exception:
            logger.exception("Saving ledger failed; rolling back the last change")
            self._ledger = Ledger.from_snapshot(
                before,
                starting_cash=self._settings.starting_cash,
                default_currency=self._settings.default_currency,
            )
            raise


def build_session(
    settings: Settings,
    session_factory: sessionmaker,
    provider: Optional[PriceFeedProvider] = None,
) -> TradingSession:
    """Compose a TradingSession from settings and a database session factory."""
    store = SnapshotStore(
        repository=SqlAlchemySnapshotRepository(session_factory),
        key=settings.state_key,
        starting_cash=settings.starting_cash,
        default_currency=settings.default_currency,
    )
    market = MarketDataService(
        provider=provider or create_provider(settings),
        limit=settings.coins_to_show,
        chart_cache_ttl_seconds=settings.chart_cache_ttl_seconds,
        chart_cache_max_entries=settings.chart_cache_max_entries,
    )
    return TradingSession(settings=settings, store=store, market=market)
