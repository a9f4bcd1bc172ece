"""Resilience – RetryExecutor.

Wraps one remote write with bounded, fixed-delay retry using ``tenacity``.
No operation is assumed idempotent: a write that succeeded server-side but
looked failed to the client may be repeated.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, TypeVar

import tenacity

from mp_eventstore.kernel.errors import RemoteUninitializedError
from mp_eventstore.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_eventstore.config.settings import EventStoreConfig

T = TypeVar("T")
_log = get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    # cancellation and setup defects end the loop immediately
    return isinstance(exc, Exception) and not isinstance(exc, RemoteUninitializedError)


class RetryExecutor:
    """Run an async operation up to ``max_retries + 1`` times.

    Parameters
    ----------
    max_retries:
        Additional attempts after the first failure.  ``0`` means a single
        attempt.
    delay:
        Seconds to wait between attempts.
    description:
        Label included in retry log lines (e.g. the event name).
    sleep:
        Awaitable sleep used between attempts.  Injectable for tests;
        defaults to tenacity's ``asyncio.sleep``.

    Example
    -------
    ::

        executor = RetryExecutor(max_retries=3, delay=1.0)
        await executor.execute(lambda: sink.write_one("logs", record))
    """

    def __init__(
        self,
        max_retries: int = 3,
        delay: float = 1.0,
        *,
        description: str = "",
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._max_retries = max_retries
        self._delay = delay
        self._description = description
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: EventStoreConfig, *, description: str = "") -> RetryExecutor:
        return cls(config.max_retries, config.retry_delay, description=description)

    @property
    def max_attempts(self) -> int:
        return self._max_retries + 1

    def _before_sleep(self, retry_state: tenacity.RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        _log.warning(
            "eventstore.retry",
            target=self._description or None,
            attempt=retry_state.attempt_number,
            max_retries=self._max_retries,
            delay=self._delay,
            error=repr(exc),
        )

    def _build_retrying(self) -> tenacity.AsyncRetrying:
        kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self.max_attempts),
            wait=tenacity.wait_fixed(self._delay),
            retry=tenacity.retry_if_exception(_is_retryable),
            before_sleep=self._before_sleep,
            reraise=True,
            **kwargs,
        )

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Await *operation* with retry; the last attempt's error propagates unchanged."""
        async for attempt in self._build_retrying():
            with attempt:
                result = await operation()
        return result  # type: ignore[return-value]


__all__ = ["RetryExecutor"]
