"""FIFO task queue that serializes work on one document.

Style and configuration loading may suspend, while edits and classification
results keep arriving. Every operation that touches a document's state is
therefore submitted here and runs only after everything submitted before it
has finished, suspension points included. That gives mutual exclusion over
the document's edit log, ranges and handles without locks.

Example:
    queue = SerialTaskQueue(name="file:///a.cpp")
    first = queue.submit(load_styles)        # async, may suspend
    second = queue.submit(apply_edit)        # waits for load_styles
    await second
    await queue.close()

Thread Safety:
    Bound to the running event loop. Not for use across threads.

"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tintrack.errors import QueueClosedError
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_STOP = object()


class SerialTaskQueue:
    """Runs submitted callables one at a time, in submission order.

    A single worker coroutine is started lazily on the first submit. A task
    that raises fails only its own future, and a task that raises
    CancelledError cancels only its own future; the worker moves on either
    way. A failure is logged here, so a caller that never awaits its future
    does not trigger asyncio's "exception was never retrieved" report.

    """

    __slots__ = ("name", "_queue", "_worker", "_closed")

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        """Number of tasks waiting to start."""
        return self._queue.qsize()

    def submit(self, fn: Callable[[], T | Awaitable[T]]) -> asyncio.Future[T]:
        """Enqueue ``fn`` behind every previously submitted task.

        ``fn`` may be a plain callable or return an awaitable; the result
        (awaited if needed) resolves the returned future.

        Raises:
            QueueClosedError: If the queue has been closed.

        """
        if self._closed:
            raise QueueClosedError(f"task queue {self.name!r} is closed")
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        self._queue.put_nowait((fn, future))
        if self._worker is None:
            self._worker = loop.create_task(self._run(), name=f"tintrack-queue:{self.name}")
        return future

    async def join(self) -> None:
        """Wait until every task submitted so far has finished."""
        await self._queue.join()

    async def close(self) -> None:
        """Finish pending tasks, then stop the worker. Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._worker is None:
            return
        self._queue.put_nowait(_STOP)
        await self._worker

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                if item is _STOP:
                    return
                fn, future = item
                if future.cancelled():
                    continue
                try:
                    result = fn()
                    if inspect.isawaitable(result):
                        result = await result
                except asyncio.CancelledError:
                    future.cancel()
                    # Only a cancel aimed at the worker itself stops the queue
                    worker = asyncio.current_task()
                    if worker is not None and worker.cancelling():
                        raise
                    logger.warning("task cancelled itself in queue %r", self.name)
                except Exception as exc:
                    logger.warning("task failed in queue %r", self.name, exc_info=True)
                    if not future.done():
                        future.set_exception(exc)
                        # Logged above; callers that await still get the exception
                        future.exception()
                else:
                    if not future.done():
                        future.set_result(result)
            finally:
                self._queue.task_done()


__all__ = ["SerialTaskQueue"]
