"""
Utility functions for sdbconfig.
"""

from .logger import apply_log_level, setup_logging
from .validators import SettingKind, coerce_value, format_value, parse_bool, parse_int

__all__ = [
    "apply_log_level",
    "setup_logging",
    "SettingKind",
    "coerce_value",
    "format_value",
    "parse_bool",
    "parse_int",
]
