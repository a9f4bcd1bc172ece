"""Config settings – load_config."""
from __future__ import annotations

from typing import Any, Sequence

from mp_eventstore.config.settings.config import EventStoreConfig
from mp_eventstore.config.settings.loaders import ConfigLoader
from mp_eventstore.config.validation import ConfigError


def load_config(
    loaders: Sequence[ConfigLoader] | None = None,
    overrides: dict[str, Any] | None = None,
    base: EventStoreConfig | None = None,
) -> EventStoreConfig:
    """Merge loader outputs and explicit overrides into an ``EventStoreConfig``.

    Parameters
    ----------
    loaders:
        Ordered sequence of :class:`ConfigLoader` instances.  Later loaders
        win on field conflicts.
    overrides:
        Explicit key-value pairs applied after all loaders, useful for
        tests and for values that cannot come from the environment such as
        ``on_error``.
    base:
        Configuration supplying every field no source sets.  Defaults to
        ``EventStoreConfig()``.

    Raises
    ------
    InvalidSettingValueError
        When a value is present but cannot be coerced or fails validation.
    ConfigError
        When an override names a field ``EventStoreConfig`` does not have.
    """
    merged: dict[str, Any] = {}
    for loader in loaders or []:
        merged.update(loader.load())
    if overrides:
        merged.update(overrides)

    base = base or EventStoreConfig()
    on_error = merged.pop("on_error", None)
    global_parameters = merged.pop("global_parameters", None)
    try:
        return base.copy_with(
            on_error=on_error,
            global_parameters=global_parameters,
            **merged,
        )
    except TypeError as exc:
        raise ConfigError(f"Failed to build EventStoreConfig: {exc}") from exc


__all__ = ["load_config"]
