"""Trade endpoints (simulated market orders)."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from tradesim.api.deps import get_trading_session
from tradesim.api.schemas import EstimateResponse, OrderResponse, TradeRequest
from tradesim.core.formatting import format_money
from tradesim.session import TradingSession

router = APIRouter(prefix="/trades", tags=["trades"])


@router.post("", response_model=OrderResponse, status_code=201)
def place_trade(
    data: TradeRequest,
    session: TradingSession = Depends(get_trading_session),
):
    """
    Place a BUY or SELL at the current price.

    Rejections (INVALID_QUANTITY, INSUFFICIENT_CASH, INSUFFICIENT_HOLDING)
    return 400 and leave the ledger unchanged.
    """
    order = session.place_trade(data.asset_id, data.side, data.quantity)
    return OrderResponse.model_validate(order)


@router.get("/estimate", response_model=EstimateResponse)
def estimate_trade(
    asset_id: str = Query(..., min_length=1),
    quantity: Decimal = Query(Decimal("0")),
    session: TradingSession = Depends(get_trading_session),
):
    """Preview the cost of quantity units at the current price."""
    cost = session.estimate(asset_id, quantity)
    return EstimateResponse(
        asset_id=asset_id,
        quantity=quantity,
        estimated_cost=cost,
        estimated_cost_display=format_money(cost, session.currency),
    )
