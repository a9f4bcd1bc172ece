"""Events – EnrichedEvent, LogResult and the server timestamp sentinel."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from mp_eventstore.kernel.levels import EventLevel


class ServerTimestamp:
    """Placeholder for a timestamp the remote store assigns on write.

    Remote sinks replace every occurrence with their own clock so that events
    from many clients share one time base.
    """

    _instance: ServerTimestamp | None = None

    def __new__(cls) -> ServerTimestamp:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


@dataclasses.dataclass(frozen=True)
class EnrichedEvent:
    """An event ready for remote delivery.  ``record`` is read-only."""

    name: str
    level: EventLevel
    record: Mapping[str, Any]

    def to_record(self) -> dict[str, Any]:
        """Return a fresh mutable copy of the record for a sink to consume."""
        return dict(self.record)


@dataclasses.dataclass(frozen=True)
class LogResult:
    """Terminal outcome of a logging attempt."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> LogResult:
        return cls(success=True)

    @classmethod
    def fail(cls, message: str) -> LogResult:
        return cls(success=False, error=message)

    def __bool__(self) -> bool:
        return self.success

    def __str__(self) -> str:
        if self.success:
            return "LogResult(success=True)"
        return f"LogResult(success=False, error={self.error})"


__all__ = ["EnrichedEvent", "LogResult", "SERVER_TIMESTAMP", "ServerTimestamp"]
