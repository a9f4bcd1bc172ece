"""Events – EventEnricher."""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from mp_eventstore.config.settings import EventStoreConfig
from mp_eventstore.events.model import SERVER_TIMESTAMP, EnrichedEvent
from mp_eventstore.identity import IdentityProvider
from mp_eventstore.kernel.levels import EventLevel


class EventEnricher:
    """Build the remote record for an event.

    Layering, last writer wins:

    1. a copy of the caller's parameters (the caller's mapping is never touched)
    2. ``config.global_parameters``
    3. ``user_id`` / ``email`` when ``config.include_user_info``
    4. ``level``, ``event`` and ``timestamp`` (``SERVER_TIMESTAMP``)
    """

    def __init__(self, identity: IdentityProvider) -> None:
        self._identity = identity

    def enrich(
        self,
        name: str,
        level: EventLevel,
        parameters: Mapping[str, Any] | None,
        config: EventStoreConfig,
    ) -> EnrichedEvent:
        record: dict[str, Any] = dict(parameters or {})

        if config.global_parameters:
            record.update(config.global_parameters)

        if config.include_user_info:
            record["user_id"] = self._identity.current_user_id()
            record["email"] = self._identity.current_user_email()

        record["level"] = level.value
        record["event"] = name
        record["timestamp"] = SERVER_TIMESTAMP

        return EnrichedEvent(name=name, level=level, record=MappingProxyType(record))


__all__ = ["EventEnricher"]
