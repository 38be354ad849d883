"""Fire-and-forget execution of reminder side effects.

Store mutators finish their state change synchronously and hand the
notification work (cancel / schedule / persist) to an executor. Production
uses asyncio tasks on the running loop; tests use DeferredExecutor and drain
the queue explicitly so the resulting calls can be asserted on.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, List, Set

logger = logging.getLogger(__name__)


async def _guarded(coro: Awaitable, label: str) -> None:
    try:
        await coro
    except Exception as e:
        logger.error(f"Background task '{label}' failed: {e}", exc_info=True)


class BackgroundExecutor:
    """Runs submitted coroutines as tracked asyncio tasks."""

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()

    def submit(self, coro: Awaitable, label: str = "task") -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop (e.g. a script): run to completion instead of dropping it.
            asyncio.run(_guarded(coro, label))
            return

        task = loop.create_task(_guarded(coro, label))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every task submitted so far (used on shutdown)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class DeferredExecutor:
    """Queues coroutines until drain() is awaited, in submission order."""

    def __init__(self) -> None:
        self._queue: List[tuple] = []

    def submit(self, coro: Awaitable, label: str = "task") -> None:
        self._queue.append((coro, label))

    @property
    def pending(self) -> int:
        return len(self._queue)

    async def drain(self) -> None:
        # Tasks may submit more work; keep going until the queue is empty.
        while self._queue:
            coro, label = self._queue.pop(0)
            await _guarded(coro, label)

    def discard(self) -> None:
        """Drop queued work without running it."""
        for coro, _ in self._queue:
            close = getattr(coro, "close", None)
            if close:
                close()
        self._queue.clear()
