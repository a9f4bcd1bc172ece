"""Resilience – fixed-delay bounded retry backed by tenacity."""
from mp_eventstore.resilience.retry.executor import RetryExecutor

__all__ = ["RetryExecutor"]
