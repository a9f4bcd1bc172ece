"""Identity – who is logging: ambient identity context and provider ports."""
from mp_eventstore.identity.context import Identity, IdentityContext
from mp_eventstore.identity.provider import (
    UNAUTHENTICATED,
    UNINITIALIZED,
    CallableIdentityProvider,
    ContextIdentityProvider,
    IdentityProvider,
)

__all__ = [
    "CallableIdentityProvider",
    "ContextIdentityProvider",
    "Identity",
    "IdentityContext",
    "IdentityProvider",
    "UNAUTHENTICATED",
    "UNINITIALIZED",
]
