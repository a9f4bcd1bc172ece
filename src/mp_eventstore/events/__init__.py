"""Events – enriched event records, log results, and the enricher."""
from mp_eventstore.events.enricher import EventEnricher
from mp_eventstore.events.model import SERVER_TIMESTAMP, EnrichedEvent, LogResult, ServerTimestamp

__all__ = [
    "EnrichedEvent",
    "EventEnricher",
    "LogResult",
    "SERVER_TIMESTAMP",
    "ServerTimestamp",
]
