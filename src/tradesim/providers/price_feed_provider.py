"""Price feed provider protocol."""

from typing import Protocol

from tradesim.domain.models import QuoteCurrency
from tradesim.domain.views import AssetQuote, ChartPoint


class PriceFeedProvider(Protocol):
    """
    Protocol for price feed providers.

    Implementations are stateless request/response clients. Any network,
    timeout or payload problem must surface as FeedUnavailableError.
    """

    def fetch_top_assets(self, currency: QuoteCurrency, limit: int) -> list[AssetQuote]:
        """
        Fetch the top assets ranked by market cap, priced in currency.

        Returns at most limit AssetQuote rows in rank order.
        """
        ...

    def fetch_chart(self, asset_id: str, currency: QuoteCurrency, days: int) -> list[ChartPoint]:
        """Fetch the (timestamp, price) series of one asset over the last days."""
        ...
