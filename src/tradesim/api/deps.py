"""Dependency injection for FastAPI."""

from fastapi import Request

from tradesim.session import TradingSession


def get_trading_session(request: Request) -> TradingSession:
    """Provide the TradingSession created at startup."""
    return request.app.state.session
