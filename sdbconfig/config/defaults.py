"""
Default locations for the sdb configuration file.

The file lives in the user's home directory and is only created once a
configuration value is set or reset.
"""

import os
from pathlib import Path
from typing import Optional

CONFIG_FILE_NAME = ".sdb.cfg"

# Environment variable that overrides the configuration file location
CONFIG_FILE_ENV = "SDB_CONFIG_FILE"


def default_config_path(path: Optional[str] = None) -> Path:
    """
    Get the configuration file path.

    Precedence: explicit path, then $SDB_CONFIG_FILE, then ~/.sdb.cfg.

    Args:
        path: Explicit path, e.g. from the command line

    Returns:
        Absolute path to the configuration file (may not exist yet)
    """
    if path:
        return Path(os.path.expanduser(path)).absolute()

    override = os.environ.get(CONFIG_FILE_ENV)
    if override:
        return Path(os.path.expanduser(override)).absolute()

    return Path(os.path.expanduser('~')) / CONFIG_FILE_NAME
