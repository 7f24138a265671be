#!/usr/bin/env python3
"""
sdbconfig - Main entry point.

Launches the sdb configuration prompt.
"""

from sdbconfig.main import run


if __name__ == "__main__":
    run()
