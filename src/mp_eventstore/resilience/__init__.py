"""Resilience – bounded retry for remote writes."""

from mp_eventstore.resilience.retry import RetryExecutor

__all__ = ["RetryExecutor"]
