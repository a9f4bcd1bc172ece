"""Identity – Identity, IdentityContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar, Token


@dataclasses.dataclass(frozen=True)
class Identity:
    """The authenticated user behind the current request or task."""
    user_id: str | None = None
    email: str | None = None


_CTX_VAR: ContextVar[Identity | None] = ContextVar("_mp_eventstore_identity", default=None)


class IdentityContext:
    """Ambient identity stored in a ``ContextVar``.

    Each asyncio task inherits a copy of the context it was created from, so
    an identity set inside a request handler follows the events it logs,
    including detached ``log_sync`` deliveries.
    """

    @staticmethod
    def set(identity: Identity) -> Token[Identity | None]:
        return _CTX_VAR.set(identity)

    @staticmethod
    def get() -> Identity | None:
        return _CTX_VAR.get()

    @staticmethod
    def reset(token: Token[Identity | None]) -> None:
        _CTX_VAR.reset(token)

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)


__all__ = ["Identity", "IdentityContext"]
