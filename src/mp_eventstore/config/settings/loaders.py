"""Config settings – EnvConfigLoader, DotenvConfigLoader."""
from __future__ import annotations

import abc
import json
import os
from collections.abc import Callable
from typing import Any

from dotenv import load_dotenv

from mp_eventstore.config.validation import InvalidSettingValueError
from mp_eventstore.kernel.levels import EventLevel


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _to_mapping(value: str) -> dict[str, Any]:
    parsed = json.loads(value)
    if not isinstance(parsed, dict):
        raise ValueError("expected a JSON object")
    return parsed


# field name -> coercion from the raw environment string
_COERCERS: dict[str, Callable[[str], Any]] = {
    "collection_name": str.strip,
    "enable_remote_logging": _to_bool,
    "enable_local_logging": _to_bool,
    "max_retries": int,
    "retry_delay": float,
    "include_user_info": _to_bool,
    "global_parameters": _to_mapping,
    "minimum_level": EventLevel.parse,
    "enable_batch_mode": _to_bool,
    "batch_size": int,
    "batch_timeout": float,
    "max_queue_size": int,
}


class ConfigLoader(abc.ABC):
    """Port: read configuration values from an external source.

    Loaders return only the fields they found so that several sources can
    be layered by :func:`~mp_eventstore.config.settings.factory.load_config`.
    """

    @abc.abstractmethod
    def load(self) -> dict[str, Any]: ...


class EnvConfigLoader(ConfigLoader):
    """Load settings from ``<PREFIX>_<FIELD>`` environment variables.

    ``on_error`` cannot be expressed in the environment and is never loaded.
    """

    def __init__(self, prefix: str = "EVENTSTORE") -> None:
        self._prefix = prefix.upper().rstrip("_")

    def env_key(self, field_name: str) -> str:
        return f"{self._prefix}_{field_name}".upper().lstrip("_")

    def load(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field_name, coerce in _COERCERS.items():
            env_key = self.env_key(field_name)
            raw = os.environ.get(env_key)
            if raw is None:
                continue
            try:
                values[field_name] = coerce(raw)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc
        return values


class DotenvConfigLoader(ConfigLoader):
    """Load a ``.env`` file into the environment, then read it like ``EnvConfigLoader``."""

    def __init__(
        self,
        env_file: str = ".env",
        prefix: str = "EVENTSTORE",
        override: bool = False,
    ) -> None:
        self._env_file = env_file
        self._override = override
        self._env = EnvConfigLoader(prefix)

    def load(self) -> dict[str, Any]:
        load_dotenv(self._env_file, override=self._override)
        return self._env.load()


__all__ = ["ConfigLoader", "DotenvConfigLoader", "EnvConfigLoader"]
