"""Storage for the bot configuration."""

from .config_store import ConfigLoadError, ConfigStore, read_config, write_config

__all__ = ["ConfigLoadError", "ConfigStore", "read_config", "write_config"]
