"""
Value coercion for configuration elements.

Every parser returns a (success, value) tuple instead of raising, since
a value that fails to parse is ordinary user input.
"""

import re
from enum import Enum
from typing import Any, Optional, Tuple

# Signed 32-bit range accepted for integer elements
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

_INT_PATTERN = re.compile(r'^[+-]?[0-9]+$')


class SettingKind(Enum):
    """Value kinds a configuration element can declare."""
    BOOL = "bool"
    INT = "int"
    STRING = "string"


def parse_bool(text: str) -> Tuple[bool, Optional[bool]]:
    """
    Parse a boolean written as true/false.

    Matching ignores case and surrounding whitespace.

    Args:
        text: Raw user text

    Returns:
        Tuple of (is_valid, value)
        If not valid, value is None
    """
    word = text.strip().lower()

    if word == "true":
        return True, True
    if word == "false":
        return True, False

    return False, None


def parse_int(text: str) -> Tuple[bool, Optional[int]]:
    """
    Parse a base-10 integer in the signed 32-bit range.

    Only an optional sign and ASCII digits are accepted; digit group
    separators and other numerals are rejected.

    Args:
        text: Raw user text

    Returns:
        Tuple of (is_valid, value)
        If not valid or out of range, value is None
    """
    digits = text.strip()

    if not _INT_PATTERN.match(digits):
        return False, None

    value = int(digits)

    if value < INT_MIN or value > INT_MAX:
        return False, None

    return True, value


def coerce_value(kind: SettingKind, text: str) -> Tuple[bool, Any]:
    """
    Convert user text into a value of the given kind.

    Strings always succeed and are taken verbatim.

    Args:
        kind: Declared kind of the configuration element
        text: Raw user text

    Returns:
        Tuple of (is_valid, value)
    """
    if kind is SettingKind.BOOL:
        return parse_bool(text)
    elif kind is SettingKind.INT:
        return parse_int(text)
    elif kind is SettingKind.STRING:
        return True, text

    raise ValueError(f"Unknown setting kind: {kind}")


def format_value(value: Any) -> str:
    """
    Render a value the way it is reported to the user.

    Bools and ints print as Python does (True, 12). Strings print as-is,
    except that control and other unprintable characters are shown as
    escapes so one report stays on one line.
    """
    if not isinstance(value, str):
        return str(value)
    return "".join(
        char if char.isprintable() else repr(char)[1:-1]
        for char in value
    )
