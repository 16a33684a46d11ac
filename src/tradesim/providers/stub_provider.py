"""Stub price feed provider for offline/testing use."""

import random
from datetime import timedelta
from decimal import Decimal

from tradesim.core.timezone import now_utc
from tradesim.domain.models import QuoteCurrency
from tradesim.domain.views import AssetQuote, ChartPoint


# Deterministic fake USD listing: id -> (symbol, name, price, 24h change %, market cap)
_STUB_ASSETS: list[tuple[str, str, str, Decimal, Decimal, Decimal]] = [
    ("bitcoin", "btc", "Bitcoin", Decimal("64250.00"), Decimal("1.85"), Decimal("1265000000000")),
    ("ethereum", "eth", "Ethereum", Decimal("3150.40"), Decimal("-0.72"), Decimal("378000000000")),
    ("tether", "usdt", "Tether", Decimal("1.00"), Decimal("0.01"), Decimal("110000000000")),
    ("binancecoin", "bnb", "BNB", Decimal("585.10"), Decimal("0.44"), Decimal("86000000000")),
    ("solana", "sol", "Solana", Decimal("145.75"), Decimal("3.12"), Decimal("67000000000")),
    ("ripple", "xrp", "XRP", Decimal("0.52"), Decimal("-1.05"), Decimal("29000000000")),
    ("dogecoin", "doge", "Dogecoin", Decimal("0.1234"), Decimal("2.40"), Decimal("17800000000")),
    ("cardano", "ada", "Cardano", Decimal("0.45"), Decimal("-0.15"), Decimal("16000000000")),
]

# Rough conversion factors from USD
_FX: dict[QuoteCurrency, Decimal] = {
    QuoteCurrency.USD: Decimal("1"),
    QuoteCurrency.INR: Decimal("83.25"),
    QuoteCurrency.EUR: Decimal("0.92"),
}


class StubPriceFeedProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Listing prices are fixed; chart series are a seeded random walk ending
    at the listing price.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed

    def fetch_top_assets(self, currency: QuoteCurrency, limit: int) -> list[AssetQuote]:
        """Return the stub listing converted to currency."""
        fx = _FX[QuoteCurrency(currency)]
        return [
            AssetQuote(
                id=asset_id,
                symbol=symbol,
                name=name,
                current_price=price * fx,
                change_24h_percent=change,
                market_cap=market_cap * fx,
                image=None,
            )
            for asset_id, symbol, name, price, change, market_cap in _STUB_ASSETS[:limit]
        ]

    def fetch_chart(self, asset_id: str, currency: QuoteCurrency, days: int) -> list[ChartPoint]:
        """Return one hourly point per hour over days, walking back from the listing price."""
        listing = {a.id: a for a in self.fetch_top_assets(currency, len(_STUB_ASSETS))}
        asset = listing.get(asset_id)
        if asset is None:
            return []

        rng = random.Random(f"{self._seed}:{asset_id}")
        end = now_utc().replace(minute=0, second=0, microsecond=0)
        price = asset.current_price
        points = []
        for hour in range(max(days, 1) * 24):
            points.append(ChartPoint(timestamp=end - timedelta(hours=hour), price=price))
            step = Decimal(str(round((rng.random() - 0.5) * 0.02, 6)))
            price = (price * (1 + step)).quantize(Decimal("0.00000001"))
        points.reverse()
        return points
