"""Shared fixtures: isolate structlog configuration and the EventStore registry."""
from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from mp_eventstore.identity import IdentityContext
from mp_eventstore.registry import EventStore


@pytest.fixture(autouse=True)
def _isolate_global_state() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    EventStore.reset()
    IdentityContext.clear()
    structlog.reset_defaults()
    # drop handlers installed by JsonLoggerFactory.configure
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
