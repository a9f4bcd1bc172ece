"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


class IdentityProcessor:
    """structlog processor that injects ``user_id`` from :class:`IdentityContext`.

    Only fills the field when an identity is active and the record does not
    already carry one.

    Usage::

        structlog.configure(processors=[IdentityProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        from mp_eventstore.identity.context import IdentityContext

        identity = IdentityContext.get()
        if identity is not None and identity.user_id is not None:
            event_dict.setdefault("user_id", identity.user_id)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["IdentityProcessor", "get_logger"]
