"""Unit tests for LocalSink."""

from __future__ import annotations

from typing import Any

import pytest
import structlog

from mp_eventstore.config import EventStoreConfig
from mp_eventstore.kernel.levels import EventLevel
from mp_eventstore.sinks import LocalSink
from mp_eventstore.testing import FakeClock, StaticIdentityProvider


def _sink(**config: Any) -> LocalSink:
    return LocalSink(
        EventStoreConfig(**config),
        StaticIdentityProvider("u-1", "a@b.c"),
        clock=FakeClock(),
    )


class TestLocalRecord:
    def test_short_key_fields(self) -> None:
        with structlog.testing.capture_logs() as logs:
            record = _sink(collection_name="audit").emit("login", EventLevel.INFO, {"m": "pw"})
        assert record == {
            "@t": "2026-01-01T12:00:00Z",
            "@l": "info",
            "@c": "audit",
            "@n": "login",
            "@p": {"m": "pw"},
            "@u": "u-1",
            "@e": "a@b.c",
        }
        assert logs == [{"event": "eventstore.local", "log_level": "info", **record}]

    def test_global_parameters(self) -> None:
        record = _sink(global_parameters={"app": "shop"}).emit("x", EventLevel.INFO, None)
        assert record is not None
        assert record["@g"] == {"app": "shop"}
        assert record["@p"] == {}

    def test_parameters_are_pre_enrichment(self) -> None:
        record = _sink(global_parameters={"app": "shop"}).emit("x", EventLevel.INFO, {"k": 1})
        assert record is not None
        assert record["@p"] == {"k": 1}

    def test_no_user_info(self) -> None:
        record = _sink(include_user_info=False).emit("x", EventLevel.INFO, {})
        assert record is not None
        assert "@u" not in record
        assert "@e" not in record

    def test_user_id_override(self) -> None:
        record = _sink().emit("x", EventLevel.INFO, {}, user_id="override")
        assert record is not None
        assert record["@u"] == "override"
        assert record["@e"] == "a@b.c"

    def test_disabled(self) -> None:
        with structlog.testing.capture_logs() as logs:
            assert _sink(enable_local_logging=False).emit("x", EventLevel.INFO, {}) is None
        assert logs == []

    def test_parameters_copied(self) -> None:
        params = {"k": 1}
        record = _sink().emit("x", EventLevel.INFO, params)
        assert record is not None
        record["@p"]["k"] = 2
        assert params == {"k": 1}


class TestLocalLevels:
    @pytest.mark.parametrize(
        ("level", "method"),
        [
            (EventLevel.DEBUG, "debug"),
            (EventLevel.TRACE, "debug"),
            (EventLevel.INFO, "info"),
            (EventLevel.WARNING, "warning"),
            (EventLevel.ERROR, "error"),
        ],
    )
    def test_level_mapping(self, level: EventLevel, method: str) -> None:
        with structlog.testing.capture_logs() as logs:
            _sink().emit("x", level, {})
        assert logs[0]["log_level"] == method
        assert logs[0]["@l"] == level.value


class TestLocalFailure:
    def test_identity_failure_falls_back(self) -> None:
        class BrokenIdentity:
            def current_user_id(self) -> str:
                raise RuntimeError("boom")

            def current_user_email(self) -> str:
                return "null"

        sink = LocalSink(EventStoreConfig(), BrokenIdentity())
        with structlog.testing.capture_logs() as logs:
            assert sink.emit("login", EventLevel.INFO, {}) is None
        assert len(logs) == 1
        assert logs[0]["event"] == "eventstore.local_failed"
        assert logs[0]["event_name"] == "login"
        assert logs[0]["log_level"] == "error"

    def test_unconvertible_parameters_fall_back(self) -> None:
        with structlog.testing.capture_logs() as logs:
            assert _sink().emit("x", EventLevel.INFO, ["not", "a", "mapping"]) is None  # type: ignore[arg-type]
        assert logs[0]["event"] == "eventstore.local_failed"
