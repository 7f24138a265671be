"""
Logging configuration for sdbconfig.

Command results are reported through logging: INFO for normal output,
ERROR for user-facing failures.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

# Level chosen by setup_logging, restored when DebugLogging is turned off
_base_level = logging.INFO


def setup_logging(log_level: str = "INFO", log_file: bool = False) -> logging.Logger:
    """
    Configure application logging.

    The console handler passes every record and only the root logger's
    level filters, so apply_log_level() can switch verbosity for the
    DebugLogging element by changing that one level.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: If True, also log to file

    Returns:
        Root logger instance
    """
    global _base_level
    _base_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(_base_level)

    # Clear any existing handlers
    logger.handlers.clear()

    # Console handler; the root level decides what is shown
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file_path = log_dir / f"sdbconfig_{timestamp}.log"

        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_file_path}")

    return logger


def get_log_dir() -> Path:
    """
    Get platform-specific log directory.

    Returns:
        Path to log directory
    """
    if os.name == 'nt':  # Windows
        base = os.environ.get('LOCALAPPDATA', os.path.expanduser('~'))
        log_dir = Path(base) / 'sdbconfig' / 'logs'
    else:  # Linux/macOS
        base = os.environ.get('XDG_CACHE_HOME', os.path.expanduser('~/.cache'))
        log_dir = Path(base) / 'sdbconfig' / 'logs'

    return log_dir


def apply_log_level(settings: Any):
    """
    Apply hook: follow the DebugLogging element.

    Lowers the root threshold to DEBUG while it is on and restores the
    level chosen by setup_logging() otherwise.
    """
    level = logging.DEBUG if getattr(settings, "debug_logging", False) else _base_level
    logging.getLogger().setLevel(level)
