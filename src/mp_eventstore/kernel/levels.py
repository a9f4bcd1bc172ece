"""Kernel – event severity levels and the level filter."""
from __future__ import annotations

from enum import Enum


class EventLevel(str, Enum):
    """Severity of an event, ordered ``debug < trace < info < warning < error``."""

    DEBUG = "debug"
    TRACE = "trace"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, value: EventLevel | str) -> EventLevel:
        """Resolve a level from an enum member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(level.value for level in cls)
            raise ValueError(f"Unknown event level {value!r} (expected one of: {names})") from None


_RANKS: dict[EventLevel, int] = {level: index for index, level in enumerate(EventLevel)}


def should_log(level: EventLevel, minimum: EventLevel) -> bool:
    """Return ``True`` when *level* is at least as severe as *minimum*."""
    return level.rank >= minimum.rank


__all__ = ["EventLevel", "should_log"]
