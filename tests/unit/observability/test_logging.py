"""Unit tests for observability logging."""

from __future__ import annotations

import io
import json
import logging
from typing import Any

import structlog

from mp_eventstore.config import EventStoreConfig
from mp_eventstore.identity import Identity, IdentityContext
from mp_eventstore.kernel.levels import EventLevel
from mp_eventstore.observability import JsonLoggerFactory, SensitiveFieldsFilter, get_logger
from mp_eventstore.observability.logging import DEFAULT_SENSITIVE_FIELDS, IdentityProcessor
from mp_eventstore.sinks import LocalSink
from mp_eventstore.testing import StaticIdentityProvider


def _configure_to_buffer(**kwargs: Any) -> io.StringIO:
    buffer = io.StringIO()
    JsonLoggerFactory.configure(handler=logging.StreamHandler(buffer), **kwargs)
    return buffer


def _lines(buffer: io.StringIO) -> list[dict[str, Any]]:
    return [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]


# ---------------------------------------------------------------------------
# SensitiveFieldsFilter
# ---------------------------------------------------------------------------


class TestSensitiveFieldsFilter:
    def test_redacts_known_sensitive_key(self) -> None:
        f = SensitiveFieldsFilter()
        result = f.redact({"password": "s3cr3t", "name": "alice"})
        assert result["password"] == SensitiveFieldsFilter.REDACTED
        assert result["name"] == "alice"

    def test_redacts_all_default_sensitive_fields(self) -> None:
        f = SensitiveFieldsFilter()
        result = f.redact({field: "value" for field in DEFAULT_SENSITIVE_FIELDS})
        assert set(result.values()) == {SensitiveFieldsFilter.REDACTED}

    def test_case_insensitive_key_matching(self) -> None:
        result = SensitiveFieldsFilter().redact({"PASSWORD": "p", "Token": "t", "normal": "ok"})
        assert result == {"PASSWORD": "[REDACTED]", "Token": "[REDACTED]", "normal": "ok"}

    def test_custom_sensitive_fields(self) -> None:
        f = SensitiveFieldsFilter(sensitive_fields=frozenset({"card_pin"}))
        result = f.redact({"card_pin": "1234", "password": "keep"})
        assert result["card_pin"] == SensitiveFieldsFilter.REDACTED
        assert result["password"] == "keep"

    def test_redacts_event_parameters_nested_under_short_key(self) -> None:
        record = {"event": "eventstore.local", "@p": {"user": "bob", "password": "hunter2"}}
        result = SensitiveFieldsFilter()(None, "info", record)
        assert result["@p"] == {"user": "bob", "password": "[REDACTED]"}

    def test_does_not_mutate_input(self) -> None:
        record = {"@p": {"token": "abc"}}
        SensitiveFieldsFilter().redact_deep(record)
        assert record == {"@p": {"token": "abc"}}


# ---------------------------------------------------------------------------
# IdentityProcessor
# ---------------------------------------------------------------------------


class TestIdentityProcessor:
    def test_injects_user_id(self) -> None:
        IdentityContext.set(Identity(user_id="u-1"))
        assert IdentityProcessor()(None, "info", {"event": "x"})["user_id"] == "u-1"

    def test_does_not_overwrite(self) -> None:
        IdentityContext.set(Identity(user_id="u-1"))
        result = IdentityProcessor()(None, "info", {"event": "x", "user_id": "explicit"})
        assert result["user_id"] == "explicit"

    def test_no_identity_passes_through(self) -> None:
        IdentityContext.clear()
        assert "user_id" not in IdentityProcessor()(None, "info", {"event": "x"})


# ---------------------------------------------------------------------------
# JsonLoggerFactory
# ---------------------------------------------------------------------------


class TestJsonLoggerFactory:
    def test_renders_json_lines(self) -> None:
        buffer = _configure_to_buffer(level=logging.INFO)
        structlog.get_logger("test.json").info("hello", answer=42)
        (line,) = _lines(buffer)
        assert line["event"] == "hello"
        assert line["answer"] == 42
        assert line["level"] == "info"
        assert line["logger"] == "test.json"
        assert "timestamp" in line

    def test_level_threshold(self) -> None:
        buffer = _configure_to_buffer(level=logging.WARNING)
        structlog.get_logger("test.json").info("dropped")
        structlog.get_logger("test.json").warning("kept")
        assert [line["event"] for line in _lines(buffer)] == ["kept"]

    def test_local_sink_parameters_are_redacted(self) -> None:
        buffer = _configure_to_buffer(
            level=logging.DEBUG, sensitive_fields=frozenset({"password"})
        )
        sink = LocalSink(EventStoreConfig(), StaticIdentityProvider("u-1", "a@b.c"))
        sink.emit("login", EventLevel.INFO, {"user": "bob", "password": "hunter2"})
        (line,) = _lines(buffer)
        assert line["event"] == "eventstore.local"
        assert line["@n"] == "login"
        assert line["@p"] == {"user": "bob", "password": "[REDACTED]"}
        assert line["@u"] == "u-1"

    def test_include_identity(self) -> None:
        buffer = _configure_to_buffer(level=logging.INFO, include_identity=True)
        IdentityContext.set(Identity(user_id="u-9"))
        structlog.get_logger("test.json").info("with_identity")
        assert _lines(buffer)[0]["user_id"] == "u-9"


# ---------------------------------------------------------------------------
# get_logger
# ---------------------------------------------------------------------------


class TestGetLogger:
    def test_returned_logger_has_info_method(self) -> None:
        assert callable(getattr(get_logger("test.module"), "info", None))

    def test_initial_values_are_bound(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger("test.module", service="events").info("bound")
        assert logs[0]["service"] == "events"
