"""Session endpoints: reset and quote currency."""

from typing import Optional

from fastapi import APIRouter, Depends

from tradesim.api.deps import get_trading_session
from tradesim.api.routers.portfolio import portfolio_to_response
from tradesim.api.schemas import CurrencyRequest, PortfolioResponse, ResetRequest
from tradesim.session import TradingSession

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/reset", response_model=PortfolioResponse)
def reset_session(
    data: Optional[ResetRequest] = None,
    session: TradingSession = Depends(get_trading_session),
):
    """Reset cash to the starting amount and clear holdings and history."""
    data = data or ResetRequest()
    session.reset(preserve_currency=data.preserve_currency)
    return portfolio_to_response(session.portfolio())


@router.put("/currency", response_model=PortfolioResponse)
def change_currency(
    data: CurrencyRequest,
    session: TradingSession = Depends(get_trading_session),
):
    """Switch the quote currency and reload prices in it."""
    session.change_currency(data.currency)
    return portfolio_to_response(session.portfolio())
