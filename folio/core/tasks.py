"""
Detached background tasks.

Work that must not hold up a response is spawned here instead of being
awaited by the request. The group keeps strong references to running
tasks, logs their failures, and is drained on application shutdown.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

from folio.config import get_logger

logger = get_logger(__name__)


class DetachedTaskGroup:
    """Owner of fire-and-forget tasks."""

    def __init__(self, name: str = "detached"):
        self.name = name
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    def spawn(
        self,
        coro: Coroutine[Any, Any, Any],
        name: str | None = None,
    ) -> asyncio.Task[Any]:
        """Schedule a coroutine on the running loop without awaiting it."""
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.warning("detached_task_cancelled", group=self.name, task=task.get_name())
            return

        exc = task.exception()
        if exc is not None:
            logger.error(
                "detached_task_failed",
                group=self.name,
                task=task.get_name(),
                error=str(exc),
                exc_info=exc,
            )

    async def drain(self, timeout: float | None = None) -> int:
        """
        Wait for running tasks, cancelling whatever outlives the timeout.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Returns:
            Number of tasks that had to be cancelled
        """
        if not self._tasks:
            return 0

        logger.info("draining_detached_tasks", group=self.name, pending=len(self._tasks))

        _, still_running = await asyncio.wait(set(self._tasks), timeout=timeout)

        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
            logger.warning(
                "detached_tasks_abandoned",
                group=self.name,
                cancelled=len(still_running),
            )

        return len(still_running)
