"""Order history endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from tradesim.api.deps import get_trading_session
from tradesim.api.schemas import ExportFileResponse, OrderListResponse, OrderResponse
from tradesim.csv import EXPORT_FILENAME
from tradesim.session import TradingSession

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
def list_orders(
    limit: Optional[int] = Query(None, ge=1, le=10000),
    session: TradingSession = Depends(get_trading_session),
):
    """List orders, most recent first (default limit from settings)."""
    orders = session.history(limit)
    return OrderListResponse(
        orders=[OrderResponse.model_validate(o) for o in orders],
        count=len(orders),
    )


@router.get("/export")
def export_orders(session: TradingSession = Depends(get_trading_session)):
    """Download the full order history as CSV."""
    return Response(
        content=session.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/export/file", response_model=ExportFileResponse, status_code=201)
def export_orders_to_file(session: TradingSession = Depends(get_trading_session)):
    """Write the full order history as CSV under the data directory."""
    path = session.save_csv()
    return ExportFileResponse(path=str(path), count=len(session.ledger.history))
