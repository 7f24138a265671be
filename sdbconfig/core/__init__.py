"""
Live configuration state for sdbconfig.

- Configuration: owns the current settings, their file and apply hooks
- ApplyHooks: callbacks run after the configuration is loaded or changed
"""

from .configuration import Configuration
from .hooks import ApplyHooks

__all__ = ["Configuration", "ApplyHooks"]
