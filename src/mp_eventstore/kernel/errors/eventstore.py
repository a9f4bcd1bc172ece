"""Event store errors: remote sink setup and delivery failures."""

from __future__ import annotations

from typing import Any

from mp_eventstore.kernel.errors.base import BaseError


class EventStoreError(BaseError):
    """Failure inside the event logging pipeline."""

    default_code = "eventstore_error"


class RemoteUninitializedError(EventStoreError):
    """The remote sink was used before it was set up.

    This is a setup defect, not a transient fault: it is reported but never
    retried.
    """

    default_code = "remote_uninitialized"

    def __init__(
        self,
        message: str | None = None,
        *,
        sink: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message
            or "Remote sink has not been initialized. "
            "Initialize it before logging events.",
            **kwargs,
        )
        self.sink = sink


class RemoteWriteError(EventStoreError):
    """A write to the remote sink failed (transient, retried)."""

    default_code = "remote_write_failed"

    def __init__(
        self,
        message: str,
        *,
        collection: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.collection = collection


class BatchFlushError(EventStoreError):
    """A batch could not be delivered; its events were dropped."""

    default_code = "batch_flush_failed"

    def __init__(
        self,
        message: str,
        *,
        dropped: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.dropped = dropped


__all__ = [
    "BatchFlushError",
    "EventStoreError",
    "RemoteUninitializedError",
    "RemoteWriteError",
]
