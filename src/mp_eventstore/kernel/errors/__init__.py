"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── EventStoreError              (eventstore.py)
    │   ├── RemoteUninitializedError
    │   ├── RemoteWriteError
    │   └── BatchFlushError
    └── ConfigError                  (mp_eventstore.config.validation)
        └── InvalidSettingValueError
"""

from mp_eventstore.kernel.errors.base import BaseError
from mp_eventstore.kernel.errors.eventstore import (
    BatchFlushError,
    EventStoreError,
    RemoteUninitializedError,
    RemoteWriteError,
)

__all__ = [
    "BaseError",
    "BatchFlushError",
    "EventStoreError",
    "RemoteUninitializedError",
    "RemoteWriteError",
]
