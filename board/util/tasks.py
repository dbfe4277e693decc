"""Fire-and-forget background work.

Side effects such as push notifications must never fail or delay the
operation that triggered them. The dispatcher schedules them on the running
event loop, keeps a strong reference to each task until it finishes, and
sends every failure to an error sink instead of the caller.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, Callable

import logfire

ErrorSink = Callable[[str, BaseException], None]


def _log_task_failure(name: str, error: BaseException) -> None:
    logfire.error(
        "Background task failed",
        task=name,
        error=str(error),
        error_type=type(error).__name__,
    )


class BackgroundTaskDispatcher:
    """Schedules coroutines without awaiting them."""

    def __init__(self, error_sink: ErrorSink | None = None) -> None:
        self._tasks: set[asyncio.Task] = set()
        self._error_sink = error_sink or _log_task_failure

    @property
    def pending(self) -> int:
        """Number of tasks that have not finished yet."""
        return len(self._tasks)

    def dispatch(self, coro: Coroutine[Any, Any, Any], name: str = "task") -> asyncio.Task:
        """Schedule ``coro`` on the running loop and return immediately.

        Args:
            coro: Coroutine to run
            name: Label used when reporting failures

        Returns:
            The scheduled task
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return
        try:
            self._error_sink(task.get_name(), error)
        except Exception as sink_error:  # the sink must never take the loop down
            logfire.error("Background error sink failed", error=str(sink_error))

    async def drain(self) -> None:
        """Wait for every outstanding task (used at shutdown and in tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
