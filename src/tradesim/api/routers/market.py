"""Market listing and chart endpoints."""

from fastapi import APIRouter, Depends, Query

from tradesim.api.deps import get_trading_session
from tradesim.api.schemas import (
    AssetQuoteResponse,
    MarketResponse,
    ChartPointResponse,
    ChartResponse,
)
from tradesim.core.formatting import format_money
from tradesim.session import TradingSession

router = APIRouter(prefix="/market", tags=["market"])


@router.get("", response_model=MarketResponse)
def get_market(
    refresh: bool = Query(False, description="Fetch a fresh listing before responding"),
    session: TradingSession = Depends(get_trading_session),
):
    """
    Return the ranked market listing in the active currency.

    The listing is refreshed by the background poller; refresh=true (or an
    empty cache) fetches it now. A failed fetch leaves the previous listing.
    """
    if refresh or not session.market():
        session.refresh_market()

    currency = session.currency
    assets = session.market()
    return MarketResponse(
        currency=currency,
        as_of=session.market_refreshed_at(),
        assets=[
            AssetQuoteResponse(
                rank=idx + 1,
                id=a.id,
                symbol=a.symbol,
                name=a.name,
                current_price=a.current_price,
                change_24h_percent=a.change_24h_percent,
                market_cap=a.market_cap,
                image=a.image,
                price_display=format_money(a.current_price, currency),
                market_cap_display=format_money(a.market_cap, currency),
            )
            for idx, a in enumerate(assets)
        ],
    )


@router.get("/{asset_id}/chart", response_model=ChartResponse)
def get_chart(
    asset_id: str,
    days: int = Query(7, ge=1, le=365),
    session: TradingSession = Depends(get_trading_session),
):
    """Return the (timestamp, price) series of one asset over the last days."""
    points = session.chart(asset_id, days)
    return ChartResponse(
        asset_id=asset_id,
        currency=session.currency,
        days=days,
        points=[ChartPointResponse(timestamp=p.timestamp, price=p.price) for p in points],
    )
