"""Batching – FlushScheduler.

A single self-rescheduling asyncio task that flushes a batch once it has
waited ``timeout`` seconds.  It sleeps the full timeout every cycle and is
never woken early; size-triggered and manual flushes happen elsewhere and
share the queue's guard.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from mp_eventstore.batching.queue import BatchQueue
from mp_eventstore.observability.logging import get_logger

_log = get_logger(__name__)


class FlushScheduler:
    """Background time trigger for a :class:`BatchQueue`.

    Parameters
    ----------
    queue:
        The queue to watch.
    flush:
        Coroutine function performing the flush (including reporting).
    timeout:
        Seconds between checks, and the age a batch must reach.
    is_enabled:
        Read at every wake-up; the task ends itself once it returns ``False``.

    Typical usage::

        scheduler = FlushScheduler(queue, logger.flush_batch, 5.0, lambda: True)
        scheduler.start()          # inside a running event loop
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        queue: BatchQueue[Any],
        flush: Callable[[], Awaitable[Any]],
        timeout: float,
        is_enabled: Callable[[], bool],
    ) -> None:
        self._queue = queue
        self._flush = flush
        self._timeout = timeout
        self._is_enabled = is_enabled
        self._task: asyncio.Task[None] | None = None

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def is_running(self) -> bool:
        task = self._task
        if task is None or task.done():
            return False
        try:
            return task.get_loop() is asyncio.get_running_loop()
        except RuntimeError:
            return not task.get_loop().is_closed()

    def start(self) -> None:
        """Start the background task on the running loop (no-op if already running).

        A task left behind on a closed loop is replaced.

        Raises
        ------
        RuntimeError
            When called outside a running event loop.
        """
        if self.is_running:
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name="mp_eventstore.flush_scheduler")
        _log.debug("eventstore.scheduler_started", timeout=self._timeout)

    def cancel(self) -> None:
        """Request cancellation without waiting (usable from sync code)."""
        task, self._task = self._task, None
        if task is not None and not task.done() and not task.get_loop().is_closed():
            task.cancel()

    async def stop(self) -> None:
        """Cancel the background task and wait until it has finished."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        if task.get_loop() is not asyncio.get_running_loop():
            if not task.get_loop().is_closed():
                task.cancel()
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        _log.debug("eventstore.scheduler_stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._timeout)
            if not self._is_enabled():
                _log.debug("eventstore.scheduler_disabled")
                return
            if self._queue.is_due(self._timeout):
                try:
                    await self._flush()
                except Exception as exc:  # noqa: BLE001 – keep the trigger alive
                    _log.error("eventstore.scheduled_flush_failed", error=repr(exc))


__all__ = ["FlushScheduler"]
