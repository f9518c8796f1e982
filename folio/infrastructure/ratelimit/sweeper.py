"""
Periodic cleanup of expired rate limit entries.
"""

import asyncio
import time
from collections.abc import Callable

from folio.config import get_logger
from folio.core.interfaces.rate_limit import IRateLimitStore

logger = get_logger(__name__)


class RateLimitSweeper:
    """Background loop that sweeps a counter store at a fixed interval."""

    def __init__(
        self,
        store: IRateLimitStore,
        interval_seconds: float = 300.0,
        clock: Callable[[], float] | None = None,
    ):
        self._store = store
        self._interval = interval_seconds
        self._clock = clock or (lambda: time.time() * 1000)
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> int:
        """Remove expired entries now."""
        removed = self._store.sweep(self._clock())
        if removed:
            logger.debug("rate_limit_entries_swept", removed=removed, remaining=len(self._store))
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.sweep_once()

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="rate_limit_sweeper"
        )
        logger.info("rate_limit_sweeper_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("rate_limit_sweeper_stopped")
