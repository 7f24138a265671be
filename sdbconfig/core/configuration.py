"""
Owner of the current debugger configuration.

Ties together the live settings instance, its registry, the config file
and the apply hooks. One Configuration is created at startup and handed
to whatever needs it.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Type

from ..config.registry import SettingDescriptor, SettingsRegistry
from ..config.settings import Settings
from ..config.store import ConfigStore
from .hooks import ApplyHooks

logger = logging.getLogger(__name__)


class Configuration:
    """
    Current configuration plus the operations that keep it consistent.

    Every mutation goes model -> file -> hooks. If the file can't be
    written the model is put back the way it was and the hooks don't run.
    """

    def __init__(
        self,
        settings_cls: Type[Any] = Settings,
        path: Optional[Path] = None,
        hooks: Optional[ApplyHooks] = None,
    ):
        """
        Initialize with default values; call load() to read the file.

        Args:
            settings_cls: Dataclass describing the configuration elements
            path: Configuration file path (defaults to ~/.sdb.cfg)
            hooks: Apply hooks to notify (a new empty list if omitted)
        """
        self.settings = settings_cls()
        self.registry = SettingsRegistry(self.settings)
        self.store = ConfigStore(path)
        self.hooks = hooks if hooks is not None else ApplyHooks()

    @property
    def config_file(self) -> Path:
        return self.store.config_file

    def load(self):
        """Overlay values from the config file, then apply."""
        self.store.load(self.registry)
        self.apply()

    def write(self):
        """
        Save the current values.

        Raises:
            ConfigError: If the file cannot be written
        """
        self.store.save(self.registry)

    def apply(self):
        """Propagate the current values to registered hooks."""
        self.hooks.apply(self.settings)

    def reset(self):
        """
        Restore every element to its default, save and apply.

        Raises:
            ConfigError: If the file cannot be written (values are restored)
        """
        previous = self.registry.snapshot()
        self.registry.reset()
        self._commit(previous)

    def assign(self, descriptor: SettingDescriptor, value: Any):
        """
        Set one element, save and apply.

        Args:
            descriptor: Element to change
            value: New value, already of the element's kind

        Raises:
            ConfigError: If the file cannot be written (value is restored)
            TypeError: If value does not match the element's kind
        """
        previous = self.registry.snapshot()
        descriptor.set(value)
        self._commit(previous)

    def _commit(self, previous: dict):
        try:
            self.write()
        except Exception:
            self.registry.restore(previous)
            raise
        self.apply()
