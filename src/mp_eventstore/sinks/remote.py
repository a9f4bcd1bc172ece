"""
Remote sink port.

The remote store (a document database, a log ingestion API, ...) lives
outside this package.  Adapters implement :class:`RemoteSink`; the logger
probes readiness before every write and wraps writes in retries.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from mp_eventstore.kernel.errors import RemoteUninitializedError


@runtime_checkable
class RemoteSink(Protocol):
    """
    Protocol for remote event stores.

    ``probe`` raises :class:`RemoteUninitializedError` when the store has not
    been set up.  Writes raise :class:`RemoteWriteError` on delivery failure;
    ``write_batch`` is all-or-nothing.  Records may contain
    :data:`~mp_eventstore.events.SERVER_TIMESTAMP`, which the store replaces
    with its own time.
    """

    def probe(self) -> None: ...

    async def write_one(self, collection: str, record: dict[str, Any]) -> None: ...

    async def write_batch(self, collection: str, records: Sequence[dict[str, Any]]) -> None: ...


class UninitializedRemoteSink:
    """Placeholder used until a real remote sink is supplied."""

    _MESSAGE = (
        "Remote sink has not been initialized. Pass remote_sink= to "
        "EventStore.get_instance() or EventLogger() before logging events."
    )

    def probe(self) -> None:
        raise RemoteUninitializedError(self._MESSAGE, sink=type(self).__name__)

    async def write_one(self, collection: str, record: dict[str, Any]) -> None:  # noqa: ARG002
        self.probe()

    async def write_batch(self, collection: str, records: Sequence[dict[str, Any]]) -> None:  # noqa: ARG002
        self.probe()


__all__ = ["RemoteSink", "UninitializedRemoteSink"]
