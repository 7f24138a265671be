"""
Configuration management for sdbconfig.

This module handles the settings model, the registry of configuration
elements, and persistence to ~/.sdb.cfg.
"""

from .settings import Settings
from .defaults import CONFIG_FILE_NAME, default_config_path
from .registry import SettingDescriptor, SettingsRegistry
from .store import ConfigError, ConfigStore

__all__ = [
    "Settings",
    "CONFIG_FILE_NAME",
    "default_config_path",
    "SettingDescriptor",
    "SettingsRegistry",
    "ConfigError",
    "ConfigStore",
]
