"""Batching – BatchQueue.

An ordered, memory-only buffer of enriched events awaiting one atomic batch
write.  The snapshot-and-clear step and the in-progress guard share one
``threading.Lock`` so that flushes stay exclusive even when events are
delivered from the logger's own loop thread.
"""
from __future__ import annotations

import threading
import time
from typing import Awaitable, Callable, Generic, TypeVar

from mp_eventstore.kernel.errors import BatchFlushError
from mp_eventstore.observability.logging import get_logger

_log = get_logger(__name__)

T = TypeVar("T")


class BatchQueue(Generic[T]):
    """Ordered buffer with a single-flight flush.

    Parameters
    ----------
    max_size:
        Most items held at once.  Enqueueing beyond it drops the oldest
        item and logs ``eventstore.queue_overflow``.  ``None`` is unbounded.
    monotonic:
        Clock used for ``batch_start_time``.  Injectable for tests.
    """

    def __init__(
        self,
        max_size: int | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._max_size = max_size
        self._dropped = 0
        self._items: list[T] = []
        self._lock = threading.Lock()
        self._flushing = False
        self._batch_start_time: float | None = None
        self._monotonic = monotonic

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def is_flushing(self) -> bool:
        with self._lock:
            return self._flushing

    @property
    def max_size(self) -> int | None:
        return self._max_size

    @property
    def dropped(self) -> int:
        """Items discarded on overflow since construction."""
        with self._lock:
            return self._dropped

    @property
    def batch_start_time(self) -> float | None:
        """Monotonic time the current batch received its first event."""
        with self._lock:
            return self._batch_start_time

    def elapsed(self) -> float:
        """Seconds since the current batch started (``0.0`` when empty)."""
        with self._lock:
            if self._batch_start_time is None:
                return 0.0
            return self._monotonic() - self._batch_start_time

    def is_due(self, timeout: float) -> bool:
        """A non-empty, idle batch that has waited at least *timeout* seconds."""
        with self._lock:
            if not self._items or self._flushing or self._batch_start_time is None:
                return False
            return self._monotonic() - self._batch_start_time >= timeout

    def pending(self) -> list[T]:
        """Copy of the queued items, oldest first."""
        with self._lock:
            return list(self._items)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def enqueue(self, item: T) -> int:
        """Append *item* and return the new queue length.

        A full queue loses its oldest item first.
        """
        with self._lock:
            if not self._items:
                self._batch_start_time = self._monotonic()
            self._items.append(item)
            overflow = 0
            if self._max_size is not None and len(self._items) > self._max_size:
                overflow = len(self._items) - self._max_size
                del self._items[:overflow]
                self._dropped += overflow
            size = len(self._items)
        if overflow:
            _log.warning("eventstore.queue_overflow", dropped=overflow, max_size=self._max_size)
        return size

    def _take(self) -> list[T] | None:
        with self._lock:
            if self._flushing or not self._items:
                return None
            self._flushing = True
            batch = self._items
            self._items = []
            self._batch_start_time = None
            return batch

    def _release(self) -> None:
        with self._lock:
            self._flushing = False

    async def flush(self, write: Callable[[list[T]], Awaitable[object]]) -> int:
        """Snapshot the queue, clear it, and hand the snapshot to *write*.

        Returns the number of items written, or ``0`` when the queue was empty
        or another flush is in progress (in which case *write* is not called).
        Items enqueued while *write* runs start a fresh batch.

        Raises
        ------
        BatchFlushError
            When *write* fails.  The snapshot is dropped, not re-queued.
        """
        batch = self._take()
        if batch is None:
            return 0
        try:
            await write(batch)
        except Exception as exc:
            raise BatchFlushError(
                f"Batch of {len(batch)} events dropped after failed write",
                dropped=len(batch),
                cause=exc,
            ) from exc
        finally:
            self._release()
        return len(batch)


__all__ = ["BatchQueue"]
