"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import Engine

from tradesim.config.settings import Settings, get_settings
from tradesim.config.logging_config import setup_logging
from tradesim.repositories.sqlalchemy import create_db_engine, create_session_factory, init_db
from tradesim.api.routers import (
    market_router,
    portfolio_router,
    orders_router,
    trades_router,
    session_router,
)
from tradesim.core.exceptions import AppError, NotFoundError, FeedUnavailableError
from tradesim.providers import PriceFeedProvider
from tradesim.services.poller import PricePoller
from tradesim.session import build_session


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[PriceFeedProvider] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration (defaults to get_settings())
        provider: Price feed override (defaults to the one named in settings)
        engine: Database engine override; the app disposes only engines it created
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        setup_logging(settings)
        db_engine = engine or create_db_engine(settings.get_database_url())
        init_db(db_engine)

        session = build_session(settings, create_session_factory(db_engine), provider)
        session.open()
        app.state.session = session

        poller = PricePoller(session, interval_seconds=settings.poll_interval_seconds)
        app.state.poller = poller
        await poller.poll_once()
        if settings.poll_enabled:
            await poller.start()

        yield

        # Shutdown
        await poller.stop()
        session.close()
        if engine is None:
            db_engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Simulated crypto trading against live market prices",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Include routers
    app.include_router(market_router)
    app.include_router(portfolio_router)
    app.include_router(orders_router)
    app.include_router(trades_router)
    app.include_router(session_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        status_code = 400
        if isinstance(exc, NotFoundError):
            status_code = 404
        elif isinstance(exc, FeedUnavailableError):
            status_code = 503
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "message": exc.message},
        )

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()
