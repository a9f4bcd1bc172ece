"""Testing fakes – InMemoryRemoteSink."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mp_eventstore.events import SERVER_TIMESTAMP
from mp_eventstore.kernel.errors import RemoteUninitializedError, RemoteWriteError
from mp_eventstore.kernel.time import Clock, SystemClock, utc_timestamp


class InMemoryRemoteSink:
    """List-backed remote sink for tests.

    Parameters
    ----------
    ready:
        When false, ``probe`` and both writes raise
        :class:`RemoteUninitializedError`.
    fail_times:
        Number of write calls that fail with :class:`RemoteWriteError`
        before writes start succeeding.
    always_fail:
        Every write fails.
    clock:
        Replaces :data:`SERVER_TIMESTAMP` in stored records.
    """

    def __init__(
        self,
        ready: bool = True,
        fail_times: int = 0,
        always_fail: bool = False,
        clock: Clock | None = None,
    ) -> None:
        self.ready = ready
        self.fail_times = fail_times
        self.always_fail = always_fail
        self._clock = clock or SystemClock()
        self._collections: dict[str, list[dict[str, Any]]] = {}
        self.batches: list[list[dict[str, Any]]] = []
        self.write_one_calls = 0
        self.write_batch_calls = 0
        self.probe_calls = 0

    # ------------------------------------------------------------------
    # RemoteSink
    # ------------------------------------------------------------------

    def probe(self) -> None:
        self.probe_calls += 1
        if not self.ready:
            raise RemoteUninitializedError(sink=type(self).__name__)

    async def write_one(self, collection: str, record: dict[str, Any]) -> None:
        self.write_one_calls += 1
        self._check(collection)
        self._collections.setdefault(collection, []).append(self._store(record))

    async def write_batch(self, collection: str, records: Sequence[dict[str, Any]]) -> None:
        self.write_batch_calls += 1
        self._check(collection)
        # one commit time for the whole batch
        stamp = utc_timestamp(self._clock)
        stored = [self._store(r, stamp) for r in records]
        self._collections.setdefault(collection, []).extend(stored)
        self.batches.append(stored)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def records(self, collection: str = "logs") -> list[dict[str, Any]]:
        return list(self._collections.get(collection, []))

    def all_records(self) -> list[dict[str, Any]]:
        return [r for records in self._collections.values() for r in records]

    @property
    def write_calls(self) -> int:
        return self.write_one_calls + self.write_batch_calls

    # ------------------------------------------------------------------

    def _check(self, collection: str) -> None:
        if not self.ready:
            raise RemoteUninitializedError(sink=type(self).__name__)
        if self.always_fail:
            raise RemoteWriteError("unavailable", code="unavailable", collection=collection)
        if self.fail_times > 0:
            self.fail_times -= 1
            raise RemoteWriteError("unavailable", code="unavailable", collection=collection)

    def _store(self, record: dict[str, Any], stamp: str | None = None) -> dict[str, Any]:
        if stamp is None:
            stamp = utc_timestamp(self._clock)
        return {k: stamp if v is SERVER_TIMESTAMP else v for k, v in record.items()}


__all__ = ["InMemoryRemoteSink"]
