"""
The config|cfg command group.

Sub-commands:
- get <name>: show one configuration element
- list: show all elements (also the default)
- reset: restore defaults
- set <name> <value>: change one element

Element names may be abbreviated to any case-insensitive prefix; the
first element in declaration order that matches is used.
"""

import logging

from ..config.store import ConfigError
from ..core.configuration import Configuration
from ..utils.validators import coerce_value, format_value
from .base import Command, MultiCommand, split_first

logger = logging.getLogger(__name__)


class _ConfigSubCommand(Command):
    """Sub-command operating on a shared Configuration."""

    def __init__(self, configuration: Configuration):
        self.configuration = configuration

    @property
    def registry(self):
        return self.configuration.registry


class ConfigGetCommand(_ConfigSubCommand):
    names = ["get"]
    summary = "Get the value of a configuration element."
    syntax = "config|cfg get <name>"
    help = (
        "Gets the value of the given configuration element.\n"
        "\n"
        "This is either the default value or the value in '~/.sdb.cfg'."
    )

    def process(self, args: str) -> bool:
        name, _ = split_first(args)

        if name is None:
            logger.error("No configuration element name given")
            return False

        descriptor = self.registry.resolve(name)
        if descriptor is None:
            logger.error(f"Configuration element '{name}' not found")
            return False

        logger.info(f"{descriptor.name} = {format_value(descriptor.get())}")
        return True


class ConfigListCommand(_ConfigSubCommand):
    names = ["list"]
    summary = "List all configuration elements and their values."
    syntax = "config|cfg list"
    help = (
        "Lists all configuration elements and their values.\n"
        "\n"
        "These are either the default values or the values in '~/.sdb.cfg'."
    )

    def process(self, args: str) -> bool:
        for descriptor in self.registry.descriptors:
            logger.info(f"{descriptor.name} = {format_value(descriptor.get())}")
        return True


class ConfigResetCommand(_ConfigSubCommand):
    names = ["reset"]
    summary = "Reset configuration values to their defaults."
    syntax = "config|cfg reset"
    help = (
        "Resets all configuration elements to their default values.\n"
        "\n"
        "Note that this overwrites '~/.sdb.cfg' too."
    )

    def process(self, args: str) -> bool:
        try:
            self.configuration.reset()
        except ConfigError as e:
            logger.error(f"Could not write configuration file: {e}")
            return False

        logger.info("All configuration values reset")
        return True


class ConfigSetCommand(_ConfigSubCommand):
    names = ["set"]
    summary = "Set the value of a configuration element."
    syntax = "config|cfg set <name> <value>"
    help = (
        "Sets the value of the given configuration element.\n"
        "\n"
        "If '~/.sdb.cfg' doesn't exist, this command causes it to be created."
    )

    def process(self, args: str) -> bool:
        name, rest = split_first(args)

        if name is None:
            logger.error("No configuration element name given")
            return False

        if not rest:
            logger.error("No configuration value given")
            return False

        descriptor = self.registry.resolve(name)
        if descriptor is None:
            logger.error(f"Configuration element '{name}' not found")
            return False

        ok, value = coerce_value(descriptor.kind, rest)
        if not ok:
            logger.error(
                f"Invalid configuration value for {descriptor.name} "
                f"(expected {descriptor.kind.value}): '{rest}'"
            )
            return False

        was = descriptor.get()

        try:
            self.configuration.assign(descriptor, value)
        except ConfigError as e:
            logger.error(f"Could not write configuration file: {e}")
            return False

        logger.info(f"{descriptor.name} = {format_value(value)} (was {format_value(was)})")
        return True


class ConfigCommand(MultiCommand):
    names = ["config", "cfg"]
    summary = "Manipulate the debugger configuration."
    syntax = "config|cfg [get|list|reset|set] ..."
    help = (
        "Manipulates the debugger configuration.\n"
        "\n"
        "Configuration values are stored in '~/.sdb.cfg' and are loaded on debugger\n"
        "startup. The file is only created when a configuration value is set."
    )

    def __init__(self, configuration: Configuration):
        super().__init__()
        self.configuration = configuration

        self.add_command(ConfigGetCommand, configuration)
        self.add_command(ConfigListCommand, configuration)
        self.add_command(ConfigResetCommand, configuration)
        self.add_command(ConfigSetCommand, configuration)

        self.forward(ConfigListCommand)
