"""
Debugger commands.
"""

from .base import Command, MultiCommand
from .config_command import ConfigCommand

__all__ = ["Command", "MultiCommand", "ConfigCommand"]
