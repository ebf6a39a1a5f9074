from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Optional

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Tracks fire-and-forget coroutines so they can be awaited or cancelled."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._pending: set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], label: Optional[str] = None) -> Optional[asyncio.Task]:
        """Schedule ``coro`` on the running loop.

        Returns ``None`` (and closes the coroutine) when no loop is running;
        the caller's synchronous work has already happened at that point.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"{self.name}: no running event loop, dropping '{label or coro.__qualname__}'")
            coro.close()
            return None

        task = loop.create_task(coro, name=label)
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"{self.name}: background task '{task.get_name()}' failed: {exc!r}")

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def wait_idle(self) -> None:
        """Wait until every tracked task (including ones spawned meanwhile) is done."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def cancel_all(self) -> None:
        tasks = list(self._pending)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
