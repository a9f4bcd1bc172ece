"""Kernel time – Clock port + implementations."""
from mp_eventstore.kernel.time.clock import Clock, FrozenClock, SystemClock, utc_now, utc_timestamp

__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now", "utc_timestamp"]
