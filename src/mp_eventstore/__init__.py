"""
mp_eventstore – structured event logging with local and remote sinks.

Import path convention::

    from mp_eventstore import EventLevel, EventLogger, EventStore, EventStoreConfig
    from mp_eventstore.sinks import LocalSink, RemoteSink
    from mp_eventstore.testing.fakes import InMemoryRemoteSink
"""

__version__ = "0.1.0"

from mp_eventstore.config.settings import EventStoreConfig
from mp_eventstore.events import SERVER_TIMESTAMP, EnrichedEvent, EventEnricher, LogResult
from mp_eventstore.kernel.errors import (
    BatchFlushError,
    EventStoreError,
    RemoteUninitializedError,
    RemoteWriteError,
)
from mp_eventstore.kernel.levels import EventLevel, should_log
from mp_eventstore.logger import BATCH_FLUSH_EVENT, EventLogger
from mp_eventstore.registry import EventStore

__all__ = [
    "BATCH_FLUSH_EVENT",
    "BatchFlushError",
    "EnrichedEvent",
    "EventEnricher",
    "EventLevel",
    "EventLogger",
    "EventStore",
    "EventStoreConfig",
    "EventStoreError",
    "LogResult",
    "RemoteUninitializedError",
    "RemoteWriteError",
    "SERVER_TIMESTAMP",
    "__version__",
    "should_log",
]
