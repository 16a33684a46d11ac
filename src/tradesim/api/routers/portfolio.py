"""Portfolio summary endpoint."""

from fastapi import APIRouter, Depends

from tradesim.api.deps import get_trading_session
from tradesim.api.schemas import HoldingResponse, PortfolioResponse
from tradesim.core.formatting import format_money
from tradesim.domain.views import PortfolioView
from tradesim.session import TradingSession

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def portfolio_to_response(view: PortfolioView) -> PortfolioResponse:
    """Convert a PortfolioView into its API response."""
    currency = view.currency
    return PortfolioResponse(
        currency=currency,
        cash=view.cash,
        cash_display=format_money(view.cash, currency),
        holdings_value=view.holdings_value,
        holdings_value_display=format_money(view.holdings_value, currency),
        total_value=view.total_value,
        holdings=[
            HoldingResponse(
                asset_id=h.asset_id,
                symbol=h.symbol,
                name=h.name,
                quantity=h.quantity,
                average_price=h.average_price,
                last_price=h.last_price,
                market_value=h.market_value,
                market_value_display=format_money(h.market_value, currency),
            )
            for h in view.holdings
        ],
    )


@router.get("", response_model=PortfolioResponse)
def get_portfolio(session: TradingSession = Depends(get_trading_session)):
    """
    Return cash, open holdings valued at last-known prices, and totals.

    Holdings without a known price are valued at zero.
    """
    return portfolio_to_response(session.portfolio())
