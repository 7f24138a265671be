"""
sdbconfig - runtime configuration for the sdb debugger front-end.
"""

__version__ = "1.0.0"
