"""Batching – in-memory batch queue and its periodic flush scheduler."""
from mp_eventstore.batching.queue import BatchQueue
from mp_eventstore.batching.scheduler import FlushScheduler

__all__ = ["BatchQueue", "FlushScheduler"]
