"""Observability – structured logging for the pipeline's own diagnostics."""

from mp_eventstore.observability.logging import JsonLoggerFactory, SensitiveFieldsFilter, get_logger

__all__ = ["JsonLoggerFactory", "SensitiveFieldsFilter", "get_logger"]
