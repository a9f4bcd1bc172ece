"""Testing fakes – in-memory doubles for the event store ports."""
from mp_eventstore.kernel.time import FrozenClock
from mp_eventstore.testing.fakes.clock import FakeClock
from mp_eventstore.testing.fakes.identity import StaticIdentityProvider
from mp_eventstore.testing.fakes.remote import InMemoryRemoteSink

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryRemoteSink",
    "StaticIdentityProvider",
]
