"""Identity – IdentityProvider port and implementations."""
from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from mp_eventstore.identity.context import IdentityContext
from mp_eventstore.observability.logging import get_logger

#: Returned when nobody is signed in.
UNAUTHENTICATED = "null"
#: Returned when the identity subsystem itself is not ready.
UNINITIALIZED = "uninitialized"

_log = get_logger(__name__)


@runtime_checkable
class IdentityProvider(Protocol):
    """Port: current user lookup.  Implementations never raise."""

    def current_user_id(self) -> str: ...

    def current_user_email(self) -> str: ...


class ContextIdentityProvider:
    """Reads the identity bound with :meth:`IdentityContext.set`."""

    def current_user_id(self) -> str:
        identity = IdentityContext.get()
        if identity is None or identity.user_id is None:
            return UNAUTHENTICATED
        return identity.user_id

    def current_user_email(self) -> str:
        identity = IdentityContext.get()
        if identity is None or identity.email is None:
            return UNAUTHENTICATED
        return identity.email


class CallableIdentityProvider:
    """Adapts lookup callables from an auth SDK.

    A callable returning ``None`` means no user is signed in.  A callable that
    raises, or one that was never supplied, means the auth subsystem is not
    ready.

    Example::

        provider = CallableIdentityProvider(
            user_id=lambda: auth.current_user.uid if auth.current_user else None,
            email=lambda: auth.current_user.email if auth.current_user else None,
        )
    """

    def __init__(
        self,
        user_id: Callable[[], str | None] | None = None,
        email: Callable[[], str | None] | None = None,
    ) -> None:
        self._user_id = user_id
        self._email = email

    def current_user_id(self) -> str:
        return self._lookup("user_id", self._user_id)

    def current_user_email(self) -> str:
        return self._lookup("email", self._email)

    @staticmethod
    def _lookup(field: str, fn: Callable[[], str | None] | None) -> str:
        if fn is None:
            return UNINITIALIZED
        try:
            value = fn()
        except Exception as exc:  # noqa: BLE001 – lookups must never raise
            _log.warning("eventstore.identity_unavailable", field=field, error=str(exc))
            return UNINITIALIZED
        return UNAUTHENTICATED if value is None else str(value)


__all__ = [
    "CallableIdentityProvider",
    "ContextIdentityProvider",
    "IdentityProvider",
    "UNAUTHENTICATED",
    "UNINITIALIZED",
]
