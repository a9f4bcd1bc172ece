"""Testing support – in-memory fakes for the remote sink, identity and clock.

Use in your own tests::

    from mp_eventstore.testing import InMemoryRemoteSink

    sink = InMemoryRemoteSink()
    logger = EventLogger(remote_sink=sink)
"""

from mp_eventstore.testing.fakes import (
    FakeClock,
    FrozenClock,
    InMemoryRemoteSink,
    StaticIdentityProvider,
)

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryRemoteSink",
    "StaticIdentityProvider",
]
