"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract wall clock for deterministic testing."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)``."""
    return datetime.now(UTC)


def utc_timestamp(clock: Clock | None = None) -> str:
    """ISO-8601 UTC string with a ``Z`` suffix, e.g. ``2026-01-01T12:00:00Z``."""
    now = clock.now() if clock is not None else utc_now()
    return now.astimezone(UTC).isoformat().replace("+00:00", "Z")


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now", "utc_timestamp"]
