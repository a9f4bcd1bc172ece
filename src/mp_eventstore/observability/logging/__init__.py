"""Observability – structlog configuration and helpers."""
from mp_eventstore.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from mp_eventstore.observability.logging.factory import JsonLoggerFactory
from mp_eventstore.observability.logging.processors import IdentityProcessor, get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "IdentityProcessor",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
