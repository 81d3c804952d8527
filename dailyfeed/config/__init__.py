"""Configuration management for the daily feed synchronizer."""

from .loader import Config, default_config_path, load_config, save_config
from .models import ConfigModel, FeedConfig, PostgresConfig, StoreConfig

__all__ = [
    "Config",
    "ConfigModel",
    "FeedConfig",
    "PostgresConfig",
    "StoreConfig",
    "default_config_path",
    "load_config",
    "save_config",
]
