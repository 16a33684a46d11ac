"""API routers."""

from tradesim.api.routers.market import router as market_router
from tradesim.api.routers.portfolio import router as portfolio_router
from tradesim.api.routers.orders import router as orders_router
from tradesim.api.routers.trades import router as trades_router
from tradesim.api.routers.session import router as session_router

__all__ = [
    "market_router",
    "portfolio_router",
    "orders_router",
    "trades_router",
    "session_router",
]
