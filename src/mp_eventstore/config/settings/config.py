"""Config settings – EventStoreConfig."""
from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from mp_eventstore.config.validation.errors import InvalidSettingValueError
from mp_eventstore.kernel.levels import EventLevel

ErrorCallback = Callable[[str, str], None]


@dataclasses.dataclass(frozen=True)
class EventStoreConfig:
    """Immutable configuration shared by the event logger and its sinks.

    Args:
        collection_name: Remote collection events are written to (default ``"logs"``).
        enable_remote_logging: Deliver events to the remote sink.
        enable_local_logging: Emit events to the local structured log.
        max_retries: Additional attempts after a failed remote write. ``0`` disables retries.
        retry_delay: Seconds to wait between attempts.
        on_error: Called with ``(event_name, message)`` whenever remote delivery fails.
        include_user_info: Add ``user_id`` / ``email`` from the identity provider.
        global_parameters: Fields added to every event; they win over caller keys.
        minimum_level: Events below this severity are silently skipped.
        enable_batch_mode: Queue events and write them in atomic batches.
        batch_size: Queue length that triggers an immediate flush.
        batch_timeout: Seconds a batch may wait before the scheduler flushes it.
        max_queue_size: Most events a batch queue holds; the oldest are dropped
            beyond it.  Never below ``batch_size``.
    """

    collection_name: str = "logs"
    enable_remote_logging: bool = True
    enable_local_logging: bool = True
    max_retries: int = 3
    retry_delay: float = 1.0
    on_error: ErrorCallback | None = None
    include_user_info: bool = True
    global_parameters: Mapping[str, Any] | None = None
    minimum_level: EventLevel = EventLevel.DEBUG
    enable_batch_mode: bool = False
    batch_size: int = 10
    batch_timeout: float = 5.0
    max_queue_size: int = 1000

    def __post_init__(self) -> None:
        if self.global_parameters is not None:
            object.__setattr__(
                self, "global_parameters", MappingProxyType(dict(self.global_parameters))
            )
        try:
            object.__setattr__(self, "minimum_level", EventLevel.parse(self.minimum_level))
        except ValueError as exc:
            raise InvalidSettingValueError("minimum_level", self.minimum_level, str(exc)) from exc
        self._validate()

    def _validate(self) -> None:
        if not self.collection_name:
            raise InvalidSettingValueError("collection_name", self.collection_name, "must not be empty")
        if self.max_retries < 0:
            raise InvalidSettingValueError("max_retries", self.max_retries, "must be >= 0")
        if self.retry_delay < 0:
            raise InvalidSettingValueError("retry_delay", self.retry_delay, "must be >= 0")
        if self.batch_size < 1:
            raise InvalidSettingValueError("batch_size", self.batch_size, "must be >= 1")
        if self.batch_timeout <= 0:
            raise InvalidSettingValueError("batch_timeout", self.batch_timeout, "must be > 0")
        if self.max_queue_size < 1:
            raise InvalidSettingValueError("max_queue_size", self.max_queue_size, "must be >= 1")

    def copy_with(
        self,
        *,
        collection_name: str | None = None,
        enable_remote_logging: bool | None = None,
        enable_local_logging: bool | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        on_error: ErrorCallback | None = None,
        clear_on_error: bool = False,
        include_user_info: bool | None = None,
        global_parameters: Mapping[str, Any] | None = None,
        clear_global_parameters: bool = False,
        minimum_level: EventLevel | str | None = None,
        enable_batch_mode: bool | None = None,
        batch_size: int | None = None,
        batch_timeout: float | None = None,
        max_queue_size: int | None = None,
    ) -> EventStoreConfig:
        """Return a copy with the given fields replaced.

        ``None`` keeps the current value.  ``clear_on_error`` and
        ``clear_global_parameters`` remove the optional field even when no
        replacement is supplied, and take precedence over one that is.
        """
        changes: dict[str, Any] = {
            "collection_name": collection_name,
            "enable_remote_logging": enable_remote_logging,
            "enable_local_logging": enable_local_logging,
            "max_retries": max_retries,
            "retry_delay": retry_delay,
            "on_error": on_error,
            "include_user_info": include_user_info,
            "global_parameters": global_parameters,
            "minimum_level": minimum_level,
            "enable_batch_mode": enable_batch_mode,
            "batch_size": batch_size,
            "batch_timeout": batch_timeout,
            "max_queue_size": max_queue_size,
        }
        changes = {name: value for name, value in changes.items() if value is not None}
        if clear_on_error:
            changes["on_error"] = None
        if clear_global_parameters:
            changes["global_parameters"] = None
        return dataclasses.replace(self, **changes)


__all__ = ["ErrorCallback", "EventStoreConfig"]
