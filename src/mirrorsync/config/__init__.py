"""Configuration."""

from .settings import ConfigError, Settings, check_settings, load_config_file, load_settings

__all__ = [
    "ConfigError",
    "Settings",
    "check_settings",
    "load_config_file",
    "load_settings",
]
