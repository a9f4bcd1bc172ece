"""
Core EventLogger class.

Filters, enriches and delivers events to a local structured log and a
remote store, either one write per event or in size- and time-triggered
batches.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading
from collections.abc import Callable, Mapping
from typing import Any

from mp_eventstore.batching import BatchQueue, FlushScheduler
from mp_eventstore.config.settings import EventStoreConfig
from mp_eventstore.events import EnrichedEvent, EventEnricher, LogResult
from mp_eventstore.identity import ContextIdentityProvider, IdentityProvider
from mp_eventstore.kernel.errors import (
    BatchFlushError,
    RemoteUninitializedError,
    RemoteWriteError,
)
from mp_eventstore.kernel.levels import EventLevel, should_log
from mp_eventstore.observability.logging import get_logger
from mp_eventstore.resilience.retry import RetryExecutor
from mp_eventstore.sinks.local import LocalSink
from mp_eventstore.sinks.remote import RemoteSink, UninitializedRemoteSink

_log = get_logger(__name__)

#: Event name under which failed batch flushes are reported to ``on_error``.
BATCH_FLUSH_EVENT = "batch_flush"


class EventLogger:
    """
    Log events to a local structured log and a remote store.

    Local logging happens synchronously on every accepted call and is never
    undone.  Remote delivery is retried up to ``config.max_retries`` times;
    any failure is reported to ``config.on_error`` and returned as a failed
    :class:`LogResult`.  No exception escapes ``log``, ``log_sync`` or
    ``flush_batch``.

    In batch mode a flush against an uninitialized remote sink keeps the
    queue, and every later size trigger reports another ``batch_flush``
    failure.  The queue holds at most ``max(config.max_queue_size,
    config.batch_size)`` events; beyond that the oldest are dropped with an
    ``eventstore.queue_overflow`` warning.

    Args:
        config: Logger configuration. Defaults to ``EventStoreConfig()``.
        remote_sink: Remote store adapter. Defaults to ``UninitializedRemoteSink``,
            which reports every remote attempt as not initialized.
        identity: User lookup for enrichment. Defaults to ``ContextIdentityProvider``.
        local_sink: Local sink. Defaults to a ``LocalSink`` sharing *config* and *identity*.

    Example::

        from mp_eventstore import EventLevel, EventLogger, EventStoreConfig

        async with EventLogger(EventStoreConfig(enable_batch_mode=True), remote_sink=sink) as logger:
            result = await logger.log("login", EventLevel.INFO, {"method": "password"})
            if not result.success:
                print(result.error)
    """

    def __init__(
        self,
        config: EventStoreConfig | None = None,
        *,
        remote_sink: RemoteSink | None = None,
        identity: IdentityProvider | None = None,
        local_sink: LocalSink | None = None,
    ) -> None:
        self._config = config or EventStoreConfig()
        self._identity: IdentityProvider = identity or ContextIdentityProvider()
        self._remote: RemoteSink = remote_sink if remote_sink is not None else UninitializedRemoteSink()
        self._local = local_sink or LocalSink(self._config, self._identity)
        self._enricher = EventEnricher(self._identity)
        self._queue: BatchQueue[EnrichedEvent] = BatchQueue(
            max_size=max(self._config.max_queue_size, self._config.batch_size)
        )
        self._scheduler = FlushScheduler(
            self._queue,
            self.flush_batch,
            self._config.batch_timeout,
            is_enabled=lambda: self._config.enable_batch_mode and not self._closed,
        )
        self._pending: set[asyncio.Task[LogResult]] = set()
        self._threaded: set[concurrent.futures.Future[LogResult]] = set()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._loop_thread: threading.Thread | None = None
        self._loop_lock = threading.Lock()
        self._closed = False
        self._ensure_scheduler()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    @property
    def config(self) -> EventStoreConfig:
        """Return the active configuration."""
        return self._config

    @property
    def local_sink(self) -> LocalSink:
        return self._local

    @property
    def remote_sink(self) -> RemoteSink:
        return self._remote

    @property
    def queue(self) -> BatchQueue[EnrichedEvent]:
        """The batch queue (empty unless batch mode is on)."""
        return self._queue

    @property
    def scheduler(self) -> FlushScheduler:
        return self._scheduler

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    async def log(
        self,
        name: str,
        level: EventLevel | str,
        parameters: Mapping[str, Any] | None = None,
    ) -> LogResult:
        """
        Log an event and wait for remote delivery.

        In batch mode the event is queued; the call waits only when the
        queue reaches ``batch_size`` and the resulting flush runs inline.

        Args:
            name: Event name.
            level: Event severity, as a member or its name; events below
                ``config.minimum_level`` are skipped.
            parameters: Event payload. Never modified.

        Returns:
            ``LogResult.ok()`` on success or skip, ``LogResult.fail(message)`` otherwise.
        """
        self._ensure_scheduler()
        try:
            event = self._accept(name, level, parameters)
        except Exception as exc:
            return self._failed(name, exc)
        if event is None:
            return LogResult.ok()
        return await self._deliver(event)

    def log_sync(
        self,
        name: str,
        level: EventLevel | str,
        parameters: Mapping[str, Any] | None = None,
        on_complete: Callable[[LogResult], None] | None = None,
    ) -> asyncio.Future[LogResult] | concurrent.futures.Future[LogResult] | None:
        """
        Log an event without waiting for remote delivery.

        Filtering and local logging happen before this returns.  Remote
        delivery runs as a task on the running event loop or, when called
        outside one, on a background event loop thread owned by this
        logger.  The batch scheduler runs on that loop in the latter case.

        Args:
            name: Event name.
            level: Event severity.
            parameters: Event payload. Never modified.
            on_complete: Receives the eventual ``LogResult``.  Called
                immediately with success when the event is filtered out or
                remote logging is disabled.

        Returns:
            A future for the detached delivery, or ``None`` when nothing was
            launched.  Awaiting it is optional.
        """
        self._ensure_scheduler()
        try:
            event = self._accept(name, level, parameters)
        except Exception as exc:
            self._complete(on_complete, self._failed(name, exc))
            return None

        if event is None or not self._config.enable_remote_logging:
            self._complete(on_complete, LogResult.ok())
            return None

        future = self._launch(event)
        future.add_done_callback(lambda f: self._on_detached_done(f, name, on_complete))
        return future

    async def flush_batch(self) -> LogResult:
        """
        Write every queued event to the remote store in one batch.

        A no-op success when batch mode is off, the queue is empty, or a
        flush is already running.  On failure the batch is dropped and the
        error is reported under ``BATCH_FLUSH_EVENT``.
        """
        config = self._config
        if not config.enable_batch_mode or not len(self._queue) or self._queue.is_flushing:
            return LogResult.ok()

        retry = RetryExecutor.from_config(config, description=BATCH_FLUSH_EVENT)

        async def write(batch: list[EnrichedEvent]) -> None:
            records = [event.to_record() for event in batch]
            await retry.execute(lambda: self._remote.write_batch(config.collection_name, records))

        try:
            self._probe_remote()
            flushed = await self._queue.flush(write)
        except Exception as exc:
            message = self._describe_batch_failure(exc)
            self._report(BATCH_FLUSH_EVENT, message, exc)
            return LogResult.fail(message)

        if flushed:
            _log.info("eventstore.batch_flushed", count=flushed, collection=config.collection_name)
        return LogResult.ok()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the batch scheduler on the running event loop (batch mode only).

        A no-op once ``log_sync`` has moved the scheduler onto the owned loop.
        """
        if self._config.enable_batch_mode and not self._closed and self._loop is None:
            self._scheduler.start()

    async def aclose(self, flush: bool = True) -> None:
        """Stop the scheduler, wait for detached deliveries, and optionally flush.

        Events still queued when ``flush`` is false are discarded.
        """
        self._closed = True
        await asyncio.to_thread(self._stop_owned_loop)
        await self._scheduler.stop()
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
        if flush and self._config.enable_batch_mode and len(self._queue):
            result = await self.flush_batch()
            if not result.success:
                _log.warning("eventstore.final_flush_failed", error=result.error)

    def close(self) -> None:
        """Synchronous disposal without a final flush.

        Waits for deliveries still running on the owned loop, then stops it
        and cancels the scheduler.
        """
        self._closed = True
        self._stop_owned_loop()
        self._scheduler.cancel()

    async def __aenter__(self) -> EventLogger:
        self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _accept(
        self,
        name: str,
        level: EventLevel | str,
        parameters: Mapping[str, Any] | None,
    ) -> EnrichedEvent | None:
        """Filter, enrich and log locally.  ``None`` means filtered out."""
        config = self._config
        level = EventLevel.parse(level)
        if not should_log(level, config.minimum_level):
            return None
        event = self._enricher.enrich(name, level, parameters, config)
        if config.enable_local_logging:
            self._local.emit(name, level, parameters)
        return event

    async def _deliver(self, event: EnrichedEvent) -> LogResult:
        """Remote half of a call: enqueue or write directly."""
        config = self._config
        if not config.enable_remote_logging:
            return LogResult.ok()

        if config.enable_batch_mode:
            size = self._queue.enqueue(event)
            if size >= config.batch_size:
                return await self.flush_batch()
            return LogResult.ok()

        try:
            self._probe_remote()
            retry = RetryExecutor.from_config(config, description=event.name)
            record = event.to_record()
            await retry.execute(lambda: self._remote.write_one(config.collection_name, record))
        except Exception as exc:
            return self._failed(event.name, exc)
        return LogResult.ok()

    def _probe_remote(self) -> None:
        try:
            self._remote.probe()
        except RemoteUninitializedError:
            raise
        except Exception as exc:
            raise RemoteUninitializedError(
                f"Remote sink has not been initialized. "
                f"Initialize it before logging events. Error: {exc}",
                sink=type(self._remote).__name__,
                cause=exc,
            ) from exc

    # ------------------------------------------------------------------
    # Detached delivery
    # ------------------------------------------------------------------

    def _launch(
        self, event: EnrichedEvent
    ) -> asyncio.Future[LogResult] | concurrent.futures.Future[LogResult]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            future = asyncio.run_coroutine_threadsafe(self._deliver(event), self._owned_loop())
            self._threaded.add(future)
            future.add_done_callback(self._threaded.discard)
            return future

        task = loop.create_task(self._deliver(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _owned_loop(self) -> asyncio.AbstractEventLoop:
        """Event loop thread used by ``log_sync`` calls made outside any loop.

        Created on first use; the batch scheduler is started on it so the
        time trigger works for callers that never run an event loop.
        """
        with self._loop_lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=_run_loop, args=(loop,), name="mp_eventstore.loop", daemon=True
                )
                thread.start()
                self._loop, self._loop_thread = loop, thread
                loop.call_soon_threadsafe(self._ensure_scheduler)
            return self._loop

    def _stop_owned_loop(self) -> None:
        """Wait for deliveries on the owned loop, stop its scheduler, and join its thread."""
        with self._loop_lock:
            loop, thread = self._loop, self._loop_thread
            self._loop = self._loop_thread = None
        if loop is None or thread is None:
            return
        if threading.current_thread() is thread:
            loop.stop()
            return
        concurrent.futures.wait(self._threaded.copy())
        asyncio.run_coroutine_threadsafe(self._scheduler.stop(), loop).result()
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.close()
        _log.debug("eventstore.owned_loop_stopped")

    def _on_detached_done(
        self,
        future: asyncio.Future[LogResult] | concurrent.futures.Future[LogResult],
        name: str,
        on_complete: Callable[[LogResult], None] | None,
    ) -> None:
        if future.cancelled():
            result = LogResult.fail(f"Delivery of event '{name}' was cancelled")
        elif future.exception() is not None:
            result = self._failed(name, future.exception())  # type: ignore[arg-type]
        else:
            result = future.result()

        if on_complete is not None:
            self._complete(on_complete, result)
        elif not result.success:
            _log.warning("eventstore.log_sync_failed", event_name=name, error=result.error)

    @staticmethod
    def _complete(on_complete: Callable[[LogResult], None] | None, result: LogResult) -> None:
        if on_complete is None:
            return
        try:
            on_complete(result)
        except Exception as exc:  # noqa: BLE001 – callbacks must not break delivery
            _log.error("eventstore.on_complete_failed", error=repr(exc))

    def _ensure_scheduler(self) -> None:
        if not self._config.enable_batch_mode or self._closed or self._scheduler.is_running:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        # once an owned loop exists the scheduler lives there
        if self._loop is not None and loop is not self._loop:
            return
        self._scheduler.start()

    # ------------------------------------------------------------------
    # Error reporting
    # ------------------------------------------------------------------

    def _failed(self, name: str, exc: BaseException) -> LogResult:
        message = self._describe_failure(exc)
        self._report(name, message, exc)
        return LogResult.fail(message)

    @staticmethod
    def _describe_failure(exc: BaseException) -> str:
        if isinstance(exc, RemoteUninitializedError):
            return exc.message
        if isinstance(exc, RemoteWriteError):
            return f"Remote write error: {exc.code} - {exc.message}"
        return f"Unexpected error while logging event: {exc}"

    @staticmethod
    def _describe_batch_failure(exc: BaseException) -> str:
        if isinstance(exc, BatchFlushError) and exc.cause is not None:
            exc = exc.cause
        if isinstance(exc, RemoteUninitializedError):
            return exc.message
        if isinstance(exc, RemoteWriteError):
            return f"Remote batch write error: {exc.code} - {exc.message}"
        return f"Unexpected error while flushing batch: {exc}"

    def _report(self, name: str, message: str, exc: BaseException) -> None:
        _log.error("eventstore.remote_failed", event_name=name, error=message, exc_type=type(exc).__name__)
        on_error = self._config.on_error
        if on_error is None:
            return
        try:
            on_error(name, message)
        except Exception as cb_exc:  # noqa: BLE001 – never past the public boundary
            _log.error("eventstore.on_error_failed", event_name=name, error=repr(cb_exc))


def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
    asyncio.set_event_loop(loop)
    loop.run_forever()


__all__ = ["BATCH_FLUSH_EVENT", "EventLogger"]
