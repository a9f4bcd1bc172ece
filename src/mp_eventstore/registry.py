"""
Process-wide EventStore registry.

One construction point for the local sink and event logger, shared by the
whole process, with an explicit reset for test isolation.
"""

from __future__ import annotations

import threading
from typing import ClassVar

from mp_eventstore.config.settings import EventStoreConfig
from mp_eventstore.identity import ContextIdentityProvider, IdentityProvider
from mp_eventstore.logger import EventLogger
from mp_eventstore.sinks.local import LocalSink
from mp_eventstore.sinks.remote import RemoteSink

DEFAULT_COLLECTION_NAME = "logs"


class EventStore:
    """
    Owns one ``LocalSink`` and one ``EventLogger`` built from the same config.

    Construct directly when you want an isolated store, or use
    :meth:`get_instance` for the shared process-wide one.

    Example::

        store = EventStore.get_instance(collection_name="audit", remote_sink=sink)
        await store.event_logger.log("login", EventLevel.INFO)
    """

    _instance: ClassVar[EventStore | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        config: EventStoreConfig | None = None,
        *,
        remote_sink: RemoteSink | None = None,
        identity: IdentityProvider | None = None,
    ) -> None:
        self._config = config or EventStoreConfig()
        identity = identity or ContextIdentityProvider()
        self._local_sink = LocalSink(self._config, identity)
        self._event_logger = EventLogger(
            self._config,
            remote_sink=remote_sink,
            identity=identity,
            local_sink=self._local_sink,
        )

    @property
    def config(self) -> EventStoreConfig:
        return self._config

    @property
    def local_sink(self) -> LocalSink:
        return self._local_sink

    @property
    def event_logger(self) -> EventLogger:
        return self._event_logger

    @classmethod
    def get_instance(
        cls,
        config: EventStoreConfig | None = None,
        *,
        collection_name: str | None = None,
        remote_sink: RemoteSink | None = None,
        identity: IdentityProvider | None = None,
    ) -> EventStore:
        """Return the shared store, creating it on first call.

        Arguments are only used by the first call; later calls return the
        existing instance unchanged.  *config* takes precedence over
        *collection_name*.
        """
        with cls._lock:
            if cls._instance is None:
                if config is None:
                    config = EventStoreConfig(
                        collection_name=collection_name or DEFAULT_COLLECTION_NAME
                    )
                cls._instance = cls(config, remote_sink=remote_sink, identity=identity)
            return cls._instance

    @classmethod
    def has_instance(cls) -> bool:
        with cls._lock:
            return cls._instance is not None

    @classmethod
    def reset(cls) -> None:
        """Close and forget the shared instance.  Queued events are discarded."""
        with cls._lock:
            instance, cls._instance = cls._instance, None
        if instance is not None:
            instance.event_logger.close()

    @classmethod
    async def areset(cls) -> None:
        """Async variant of :meth:`reset`; waits for in-flight deliveries."""
        with cls._lock:
            instance, cls._instance = cls._instance, None
        if instance is not None:
            await instance.event_logger.aclose(flush=False)


__all__ = ["DEFAULT_COLLECTION_NAME", "EventStore"]
