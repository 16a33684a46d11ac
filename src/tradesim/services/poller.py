"""Periodic market refresh running on the asyncio event loop."""

import asyncio
import contextlib
import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from tradesim.session import TradingSession

logger = logging.getLogger(__name__)


class PricePoller:
    """
    Refreshes the session's market listing every interval_seconds.

    The blocking feed request runs in a worker thread; only one request is
    outstanding at a time because each tick awaits the previous one.
    """

    def __init__(self, session: "TradingSession", interval_seconds: float = 30.0):
        self._session = session
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> bool:
        """Run one refresh. Returns True when fresh prices were applied."""
        self.ticks += 1
        try:
            assets = await asyncio.to_thread(self._session.refresh_market)
        except Exception:
            logger.exception("Price refresh failed")
            return False
        return assets is not None

    async def start(self) -> None:
        """Start the background refresh task."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run())
        logger.info("Price poller started (every %ss)", self._interval)

    async def stop(self, timeout: float = 5.0) -> None:
        """Stop the background task, cancelling it if it does not finish in time."""
        if self._task is None:
            return
        self._stop_event.set()
        try:
            await asyncio.wait_for(self._task, timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Price poller did not stop within %ss, cancelling", timeout)
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None
        logger.info("Price poller stopped")

    async def _run(self) -> None:
        # The first refresh is done by the caller at startup
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                await self.poll_once()
