"""Unit tests for the RemoteSink port and its placeholder."""

from __future__ import annotations

import asyncio

import pytest

from mp_eventstore.kernel.errors import RemoteUninitializedError
from mp_eventstore.sinks import RemoteSink, UninitializedRemoteSink
from mp_eventstore.testing import InMemoryRemoteSink


class TestUninitializedRemoteSink:
    def test_probe_raises_actionable_error(self) -> None:
        with pytest.raises(RemoteUninitializedError, match="remote_sink=") as info:
            UninitializedRemoteSink().probe()
        assert info.value.sink == "UninitializedRemoteSink"

    def test_writes_raise(self) -> None:
        sink = UninitializedRemoteSink()
        with pytest.raises(RemoteUninitializedError):
            asyncio.run(sink.write_one("logs", {}))
        with pytest.raises(RemoteUninitializedError):
            asyncio.run(sink.write_batch("logs", [{}]))

    def test_satisfies_protocol(self) -> None:
        assert isinstance(UninitializedRemoteSink(), RemoteSink)
        assert isinstance(InMemoryRemoteSink(), RemoteSink)

    def test_plain_object_is_not_a_sink(self) -> None:
        assert not isinstance(object(), RemoteSink)
