"""
Background task registry.

Fire-and-forget dispatch that keeps strong references to running tasks
and logs failures instead of letting them disappear with the task.

Dependencies: asyncio, logging
System role: Explicit lifecycle for detached coroutines
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from hiring_ai.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Owns detached asyncio tasks until they finish."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task:
        """
        Schedule a coroutine without awaiting it.

        Args:
            coro: Coroutine to run
            name: Task name used in logs

        Returns:
            asyncio.Task: The task, for callers that do want to await it
        """
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_exception_with_context(
                logger,
                f"{__name__}:_on_done - Background task failed",
                exc,
                task_name=task.get_name(),
            )

    @property
    def active(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    async def wait(self, timeout: float | None = None) -> bool:
        """
        Wait for all tasks to finish.

        Returns:
            bool: True if every task finished within the timeout
        """
        if not self._tasks:
            return True
        _, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        return not pending

    async def cancel_all(self) -> None:
        """Cancel running tasks and wait for them to unwind."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
