"""Testing fakes – StaticIdentityProvider."""
from __future__ import annotations

from mp_eventstore.identity.provider import UNAUTHENTICATED


class StaticIdentityProvider:
    """Identity provider returning fixed values (``"null"`` by default)."""

    def __init__(self, user_id: str = UNAUTHENTICATED, email: str = UNAUTHENTICATED) -> None:
        self.user_id = user_id
        self.email = email

    def current_user_id(self) -> str:
        return self.user_id

    def current_user_email(self) -> str:
        return self.email


__all__ = ["StaticIdentityProvider"]
