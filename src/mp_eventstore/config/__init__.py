"""Config – EventStoreConfig value object and environment loaders."""
from mp_eventstore.config.settings import (
    ConfigLoader,
    DotenvConfigLoader,
    EnvConfigLoader,
    ErrorCallback,
    EventStoreConfig,
    load_config,
)
from mp_eventstore.config.validation import ConfigError, InvalidSettingValueError

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "DotenvConfigLoader",
    "EnvConfigLoader",
    "ErrorCallback",
    "EventStoreConfig",
    "InvalidSettingValueError",
    "load_config",
]
