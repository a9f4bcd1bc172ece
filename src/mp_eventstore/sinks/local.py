"""
Local sink for events.

Emits one structlog record per event with a stable short-key field set,
readable offline and independent of the remote store:

* ``@t`` – UTC timestamp (ISO-8601, ``Z`` suffix)
* ``@l`` – level name
* ``@c`` – collection name
* ``@n`` – event name
* ``@p`` – caller parameters, before enrichment
* ``@u`` / ``@e`` – user id and email (when ``include_user_info``)
* ``@g`` – global parameters (when configured)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from mp_eventstore.config.settings import EventStoreConfig
from mp_eventstore.identity import ContextIdentityProvider, IdentityProvider
from mp_eventstore.kernel.levels import EventLevel
from mp_eventstore.kernel.time import Clock, SystemClock, utc_timestamp

# structlog has no "trace" method
_METHODS: dict[EventLevel, str] = {
    EventLevel.DEBUG: "debug",
    EventLevel.TRACE: "debug",
    EventLevel.INFO: "info",
    EventLevel.WARNING: "warning",
    EventLevel.ERROR: "error",
}


class LocalSink:
    """
    Synchronous sink that writes events to the local structured log.

    Never touches the network and never raises: a record that cannot be
    built is replaced by a single ``eventstore.local_failed`` line.

    Args:
        config: Logger configuration (local toggle, collection, user info, globals).
        identity: Source of ``@u`` / ``@e``. Defaults to ``ContextIdentityProvider``.
        logger_name: structlog logger name (default ``"mp_eventstore.local"``).
        clock: Wall clock for ``@t``. Injectable for tests.

    Example:
        sink = LocalSink(EventStoreConfig(collection_name="audit"))
        sink.emit("login", EventLevel.INFO, {"method": "password"})
    """

    EVENT = "eventstore.local"

    def __init__(
        self,
        config: EventStoreConfig,
        identity: IdentityProvider | None = None,
        logger_name: str = "mp_eventstore.local",
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._identity = identity or ContextIdentityProvider()
        self._logger_name = logger_name
        self._clock = clock or SystemClock()

    @property
    def config(self) -> EventStoreConfig:
        return self._config

    @property
    def logger_name(self) -> str:
        return self._logger_name

    def emit(
        self,
        name: str,
        level: EventLevel,
        parameters: Mapping[str, Any] | None,
        user_id: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Emit one local record for an event.

        Args:
            name: Event name.
            level: Event severity.
            parameters: Caller parameters as supplied, before enrichment.
            user_id: Overrides the provider's user id for ``@u``.

        Returns:
            The emitted record, or ``None`` when local logging is disabled or
            the fallback line was written instead.
        """
        config = self._config
        if not config.enable_local_logging:
            return None

        logger = structlog.get_logger(self._logger_name)
        try:
            record: dict[str, Any] = {
                "@t": utc_timestamp(self._clock),
                "@l": level.value,
                "@c": config.collection_name,
                "@n": name,
                "@p": dict(parameters or {}),
            }
            if config.include_user_info:
                record["@u"] = user_id if user_id is not None else self._identity.current_user_id()
                record["@e"] = self._identity.current_user_email()
            if config.global_parameters is not None:
                record["@g"] = dict(config.global_parameters)

            getattr(logger, _METHODS[level])(self.EVENT, **record)
            return record
        except Exception as exc:  # noqa: BLE001 – the local sink never fails a call
            self._fallback(logger, name, exc)
            return None

    @staticmethod
    def _fallback(logger: Any, name: str, exc: Exception) -> None:
        try:
            logger.error("eventstore.local_failed", event_name=name, error=repr(exc))
        except Exception:  # noqa: BLE001
            pass


__all__ = ["LocalSink"]
