"""
Best-effort search analytics.

Each search appends a history record and then refreshes the per-query
rollup. The write runs detached from the request; its failures are
logged and never reach the caller.
"""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from folio.config import get_logger
from folio.core.interfaces.storage import IAnalyticsStore
from folio.core.tasks import DetachedTaskGroup

logger = get_logger(__name__)


class AnalyticsRecorder:
    """Fire-and-forget writer for search history and rollups."""

    def __init__(
        self,
        store: IAnalyticsStore,
        tasks: DetachedTaskGroup,
        enabled: bool = True,
        clock: Callable[[], datetime] | None = None,
    ):
        self._store = store
        self._tasks = tasks
        self._enabled = enabled
        self._clock = clock or (lambda: datetime.now(UTC))

    def record(self, query: str, result_count: int) -> asyncio.Task[Any] | None:
        """Schedule persistence of one search without waiting for it."""
        if not self._enabled or not query:
            return None
        return self._tasks.spawn(
            self.persist(query, result_count),
            name="search_analytics",
        )

    async def persist(self, query: str, result_count: int) -> None:
        """Write the history record, then upsert the rollup."""
        try:
            await self._store.add_history(query, result_count)
            aggregate = await self._store.upsert_aggregate(query, result_count, self._clock())
            logger.debug(
                "search_analytics_recorded",
                query=query,
                search_count=aggregate.search_count,
                avg_results=aggregate.avg_results,
            )
        except Exception as e:
            logger.error(
                "search_analytics_failed",
                query=query,
                results=result_count,
                error=str(e),
            )
