"""
Command base classes.

A command receives the rest of its command line as raw text and reports
results through logging. A MultiCommand routes its first argument to one
of its sub-commands.
"""

import logging
from typing import Dict, List, Optional, Tuple, Type

logger = logging.getLogger(__name__)


def split_first(args: str) -> Tuple[Optional[str], str]:
    """
    Split off the first whitespace-delimited token.

    Returns:
        (token, rest) where rest is everything after the token, trimmed.
        token is None if args is blank.
    """
    stripped = args.strip()
    if not stripped:
        return None, ""

    parts = stripped.split(None, 1)
    rest = parts[1].strip() if len(parts) > 1 else ""
    return parts[0], rest


class Command:
    """Base class for a single command."""

    names: List[str] = []
    summary: str = ""
    syntax: str = ""
    help: str = ""

    @property
    def name(self) -> str:
        return self.names[0] if self.names else ""

    def process(self, args: str) -> bool:
        """
        Run the command.

        Args:
            args: Remainder of the command line

        Returns:
            True if the command succeeded, False if it reported an error
        """
        raise NotImplementedError


class MultiCommand(Command):
    """
    A command made of named sub-commands.

    The first token of the arguments picks the sub-command; the rest is
    passed on. With no arguments, the forward command runs instead.
    """

    def __init__(self):
        self._commands: List[Command] = []
        self._by_name: Dict[str, Command] = {}
        self._forward: Optional[Command] = None

    @property
    def commands(self) -> List[Command]:
        return list(self._commands)

    def add_command(self, command_cls: Type[Command], *args, **kwargs) -> Command:
        """Instantiate and register a sub-command under all its names."""
        command = command_cls(*args, **kwargs)
        for name in command.names:
            if name in self._by_name:
                raise ValueError(f"Duplicate command name: {name}")
            self._by_name[name] = command
        self._commands.append(command)
        return command

    def forward(self, command_cls: Type[Command]):
        """Run the registered sub-command of this class when no arguments are given."""
        for command in self._commands:
            if type(command) is command_cls:
                self._forward = command
                return
        raise ValueError(f"{command_cls.__name__} is not a sub-command of {type(self).__name__}")

    def find(self, name: str) -> Optional[Command]:
        return self._by_name.get(name)

    def _describe(self) -> str:
        return f"'{self.name}' sub-command" if self.name else "command"

    def process(self, args: str) -> bool:
        name, rest = split_first(args)

        if name is None:
            if self._forward is not None:
                return self._forward.process("")
            logger.error(f"No {self._describe()} given")
            return False

        command = self.find(name)
        if command is None:
            logger.error(f"Unknown {self._describe()}: '{name}'")
            return False

        return command.process(rest)

    def help_text(self) -> str:
        """Describe this command and list its sub-commands."""
        lines = [self.help or self.summary, ""]
        for command in self._commands:
            lines.append(f"  {command.syntax or command.name:<36} {command.summary}")
        return "\n".join(lines).rstrip()
