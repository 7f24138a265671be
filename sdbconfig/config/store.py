"""
Loading and saving the sdb configuration file.

The file holds one HCL attribute per configuration element:

    input_prompt = "(sdb) "
    evaluation_timeout = 1000
    debug_logging = false

It is parsed with python-hcl2 and written by hand, in declaration order.
Every write is parsed back before it replaces the existing file, so a
value that would not survive a restart is refused instead of saved.
"""

import functools
import logging
import os
from pathlib import Path
from typing import Any, Optional, Tuple

from .defaults import default_config_path
from .registry import SettingDescriptor, SettingsRegistry
from ..utils.validators import SettingKind, coerce_value

logger = logging.getLogger(__name__)

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_SIMPLE_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


class ConfigError(Exception):
    """Raised when the configuration file cannot be written."""
    pass


@functools.lru_cache(maxsize=None)
def _string_literal_style() -> Tuple[bool, bool]:
    """
    Work out how the installed python-hcl2 hands back string literals.

    Releases differ in whether the surrounding quotes are kept and in
    whether escape sequences are decoded.

    Returns:
        Tuple of (keeps_quotes, decodes_escapes)
    """
    import hcl2

    value = ConfigStore._unwrap(hcl2.loads('sample = "a\\\\b"\n')["sample"])
    keeps_quotes = len(value) >= 2 and value.startswith('"') and value.endswith('"')
    inner = value[1:-1] if keeps_quotes else value
    return keeps_quotes, inner == "a\\b"


class ConfigStore:
    """
    Persistence for the settings registry.

    Reading never creates the file; the first save does.
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            path: Configuration file path (defaults to ~/.sdb.cfg)
        """
        self.config_file = Path(path) if path is not None else default_config_path()

    def exists(self) -> bool:
        """Check whether the configuration file has been written."""
        return self.config_file.is_file()

    def load(self, registry: SettingsRegistry) -> bool:
        """
        Overlay values from the configuration file onto the registry.

        If the file doesn't exist, nothing is read and the registry keeps
        its current (default) values. If it can't be parsed, defaults are
        kept and the problem is logged. Individual records that name an
        unknown element or hold an invalid value are skipped.

        Args:
            registry: Registry bound to the settings to populate

        Returns:
            True if the file was read
        """
        if not self.config_file.exists():
            logger.debug("No config file found, using defaults")
            return False

        import hcl2

        try:
            with open(self.config_file, 'r', encoding="utf-8") as f:
                parsed = hcl2.load(f)
        except Exception as e:
            logger.error(f"Failed to load configuration from {self.config_file}: {e}, using defaults")
            return False

        for key, raw in parsed.items():
            descriptor = registry.lookup(key)
            if descriptor is None:
                logger.warning(f"Ignoring unknown configuration element '{key}' in {self.config_file}")
                continue

            ok, value = self._read_record(descriptor, raw)
            if not ok:
                logger.warning(
                    f"Ignoring invalid value for '{key}' in {self.config_file}: {raw!r}"
                )
                continue

            descriptor.set(value)

        logger.debug(f"Loaded configuration from {self.config_file}")
        return True

    def save(self, registry: SettingsRegistry):
        """
        Write every element's current value to the configuration file.

        The file is created if needed. The rendered text is parsed back
        first; content then goes to a temporary file which is renamed
        over the target.

        Args:
            registry: Registry bound to the settings to write

        Raises:
            ConfigError: If the values can't be read back or the file
                cannot be written
        """
        text = self._render(registry)
        self._verify(text, registry)

        tmp_file = self.config_file.with_name(self.config_file.name + ".tmp")

        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            with open(tmp_file, 'w', encoding="utf-8") as f:
                f.write(text)

            os.replace(tmp_file, self.config_file)
        except (OSError, UnicodeError) as e:
            logger.debug(f"Write to {self.config_file} failed", exc_info=True)
            if tmp_file.exists():
                try:
                    tmp_file.unlink()
                except OSError:
                    pass
            reason = e.strerror if isinstance(e, OSError) and e.strerror else e
            raise ConfigError(f"{self.config_file}: {reason}") from e

        logger.debug(f"Saved configuration to {self.config_file}")

    def _render(self, registry: SettingsRegistry) -> str:
        lines = []
        for descriptor in registry.descriptors:
            formatted = self._format_value(descriptor.kind, descriptor.get())
            lines.append(f'{descriptor.field_name} = {formatted}')
        return "\n".join(lines) + "\n"

    def _verify(self, text: str, registry: SettingsRegistry):
        """
        Parse rendered text and check every element reads back unchanged.

        Raises:
            ConfigError: If the text doesn't parse or a value differs
        """
        import hcl2

        try:
            parsed = hcl2.loads(text)
        except Exception as e:
            raise ConfigError(f"configuration would not be readable: {e}") from e

        for descriptor in registry.descriptors:
            ok, value = self._read_record(descriptor, parsed.get(descriptor.field_name))
            if not ok or value != descriptor.get():
                raise ConfigError(
                    f"value of {descriptor.name} cannot be stored: {descriptor.get()!r}"
                )

    @classmethod
    def _read_record(cls, descriptor: SettingDescriptor, raw: Any) -> Tuple[bool, Any]:
        """Convert one parsed record to a value of the element's kind."""
        if raw is None:
            return False, None
        text = cls._to_text(descriptor.kind, cls._unwrap(raw))
        return coerce_value(descriptor.kind, text)

    @staticmethod
    def _unwrap(value: Any) -> Any:
        """Unwrap a value that may be wrapped in a single-element list by hcl2."""
        if isinstance(value, list) and len(value) == 1:
            return value[0]
        return value

    @staticmethod
    def _to_text(kind: SettingKind, value: Any) -> str:
        """
        Turn a parsed HCL value back into the text a user would type.

        Quotes and escapes are undone according to what the installed
        python-hcl2 leaves in place. For numbers and booleans, expressions
        such as -5 may come back as "${-5}".
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if not isinstance(value, str):
            return str(value)

        keeps_quotes, decodes_escapes = _string_literal_style()

        if kind is not SettingKind.STRING and value.startswith("${") and value.endswith("}"):
            return value[2:-1].strip()

        if keeps_quotes and len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]

        if kind is SettingKind.STRING and not decodes_escapes:
            value = ConfigStore._unescape(value)

        return value

    @staticmethod
    def _unescape(value: str) -> str:
        """Decode HCL string escapes left in place by the parser."""
        out = []
        i = 0
        while i < len(value):
            char = value[i]
            if char == "\\" and i + 1 < len(value):
                nxt = value[i + 1]
                width = {"u": 4, "U": 8}.get(nxt)
                if width is not None:
                    digits = value[i + 2:i + 2 + width]
                    if len(digits) == width and all(c in "0123456789abcdefABCDEF" for c in digits):
                        out.append(chr(int(digits, 16)))
                        i += 2 + width
                        continue
                out.append(_SIMPLE_UNESCAPES.get(nxt, nxt))
                i += 2
                continue
            if value.startswith("$${", i) or value.startswith("%%{", i):
                out.append(char)
                i += 2
                continue
            out.append(char)
            i += 1
        return "".join(out)

    @staticmethod
    def _format_value(kind: SettingKind, value: Any) -> str:
        """
        Format a value as an HCL literal.

        Strings are written as plain ASCII: "${" and "%{" would open a
        template, so their first character is written as a \\u escape, as
        is anything outside printable ASCII.
        """
        if kind is SettingKind.BOOL:
            return "true" if value else "false"
        elif kind is SettingKind.INT:
            return str(value)

        out = []
        for i, char in enumerate(value):
            code = ord(char)
            if char in _SIMPLE_ESCAPES:
                out.append(_SIMPLE_ESCAPES[char])
            elif char in "$%" and value.startswith("{", i + 1):
                out.append(f"\\u{code:04x}")
            elif code < 0x20 or code > 0x7e:
                out.append(f"\\u{code:04x}" if code <= 0xFFFF else f"\\U{code:08x}")
            else:
                out.append(char)
        return '"' + "".join(out) + '"'
