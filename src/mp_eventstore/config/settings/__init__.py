"""Config settings – immutable logger configuration and its loaders."""
from mp_eventstore.config.settings.config import ErrorCallback, EventStoreConfig
from mp_eventstore.config.settings.factory import load_config
from mp_eventstore.config.settings.loaders import ConfigLoader, DotenvConfigLoader, EnvConfigLoader

__all__ = [
    "ConfigLoader",
    "DotenvConfigLoader",
    "EnvConfigLoader",
    "ErrorCallback",
    "EventStoreConfig",
    "load_config",
]
