"""
Registry of configuration elements.

Builds one descriptor per field of the settings dataclass so that get,
list and set work on any element without per-element code.
"""

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from ..utils.validators import SettingKind

_KINDS = {
    bool: SettingKind.BOOL,
    int: SettingKind.INT,
    str: SettingKind.STRING,
}


def display_name(field_name: str) -> str:
    """Convert a field name to the name users see: debug_logging -> DebugLogging."""
    return "".join(part.capitalize() for part in field_name.split("_"))


@dataclass(frozen=True)
class SettingDescriptor:
    """A configuration element bound to the live settings instance."""
    name: str          # e.g. "DebugLogging"
    field_name: str    # e.g. "debug_logging"
    kind: SettingKind
    default: Any
    _getter: Callable[[], Any] = dataclasses.field(repr=False, compare=False)
    _setter: Callable[[Any], None] = dataclasses.field(repr=False, compare=False)

    def get(self) -> Any:
        """Return the current value."""
        return self._getter()

    def set(self, value: Any):
        """
        Assign a new value.

        Raises:
            TypeError: If value does not match the element's kind
        """
        if not _matches_kind(self.kind, value):
            raise TypeError(
                f"{self.name} expects a {self.kind.value} value, got {type(value).__name__}"
            )
        self._setter(value)


def _matches_kind(kind: SettingKind, value: Any) -> bool:
    # bool is a subclass of int, so check it explicitly
    if kind is SettingKind.BOOL:
        return isinstance(value, bool)
    if kind is SettingKind.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, str)


class SettingsRegistry:
    """
    Enumerates the fields of a settings instance as descriptors.

    Descriptors are built once, in field declaration order, and stay
    fixed for the life of the registry.
    """

    def __init__(self, settings: Any):
        """
        Build descriptors for a settings dataclass instance.

        Args:
            settings: Dataclass instance holding the live values

        Raises:
            TypeError: If a field is not bool, int or str
            ValueError: If two element names differ only in case
        """
        if not dataclasses.is_dataclass(settings) or isinstance(settings, type):
            raise TypeError("settings must be a dataclass instance")

        self.settings = settings
        self._descriptors = self._build(settings)

    @staticmethod
    def _build(settings: Any) -> Tuple[SettingDescriptor, ...]:
        hints = typing.get_type_hints(type(settings))
        descriptors = []
        seen: Dict[str, str] = {}

        for field in dataclasses.fields(settings):
            field_type = hints.get(field.name, field.type)
            kind = _KINDS.get(field_type)
            if kind is None:
                raise TypeError(
                    f"Unsupported type for configuration element '{field.name}': {field_type}"
                )

            if field.default is dataclasses.MISSING:
                raise TypeError(f"Configuration element '{field.name}' has no default")

            name = display_name(field.name)
            key = name.lower()
            if key in seen:
                raise ValueError(
                    f"Configuration elements '{seen[key]}' and '{field.name}' share the name {name}"
                )
            seen[key] = field.name

            descriptors.append(SettingDescriptor(
                name=name,
                field_name=field.name,
                kind=kind,
                default=field.default,
                _getter=_make_getter(settings, field.name),
                _setter=_make_setter(settings, field.name),
            ))

        return tuple(descriptors)

    @property
    def descriptors(self) -> Tuple[SettingDescriptor, ...]:
        """All descriptors in declaration order."""
        return self._descriptors

    def resolve(self, query: str) -> Optional[SettingDescriptor]:
        """
        Find the element a (possibly abbreviated) name refers to.

        Matching is a case-insensitive prefix match and the first
        descriptor in declaration order wins, even if later ones also
        match. An empty query matches nothing.

        Args:
            query: Name or name prefix typed by the user

        Returns:
            Matching descriptor or None
        """
        if not query or not query.strip():
            return None

        prefix = query.lower()
        for descriptor in self._descriptors:
            if descriptor.name.lower().startswith(prefix):
                return descriptor

        return None

    def lookup(self, key: str) -> Optional[SettingDescriptor]:
        """
        Find an element by its full display name or field name.

        Used when reading the configuration file; case is ignored but
        abbreviations are not accepted.
        """
        wanted = key.lower()
        for descriptor in self._descriptors:
            if wanted in (descriptor.name.lower(), descriptor.field_name.lower()):
                return descriptor
        return None

    def reset(self):
        """Assign every element its default value."""
        for descriptor in self._descriptors:
            descriptor.set(descriptor.default)

    def snapshot(self) -> Dict[str, Any]:
        """Return the current values keyed by field name."""
        return {d.field_name: d.get() for d in self._descriptors}

    def restore(self, values: Dict[str, Any]):
        """Reassign values captured by snapshot()."""
        for descriptor in self._descriptors:
            if descriptor.field_name in values:
                descriptor.set(values[descriptor.field_name])


def _make_getter(settings: Any, field_name: str) -> Callable[[], Any]:
    return lambda: getattr(settings, field_name)


def _make_setter(settings: Any, field_name: str) -> Callable[[Any], None]:
    def setter(value: Any):
        setattr(settings, field_name, value)
    return setter
