"""
sdbconfig - Main entry point.

Runs a single command line, or an interactive prompt when none is given.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer

from . import __version__
from .commands import Command, ConfigCommand, MultiCommand
from .commands.base import split_first
from .core import ApplyHooks, Configuration
from .utils import apply_log_level, setup_logging

logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("quit", "exit")

app = typer.Typer(
    name="sdbconfig",
    help="Inspect and change the sdb debugger configuration.",
    add_completion=False,
)


class HelpCommand(Command):
    names = ["help", "?"]
    summary = "Show help for a command."
    syntax = "help [command]"

    def __init__(self, root: MultiCommand):
        self.root = root

    def process(self, args: str) -> bool:
        name, _ = split_first(args)

        if name is None:
            for command in self.root.commands:
                logger.info(f"{'|'.join(command.names):<12} {command.summary}")
            return True

        command = self.root.find(name)
        if command is None:
            logger.error(f"No such command: '{name}'")
            return False

        if isinstance(command, MultiCommand):
            logger.info(command.help_text())
        else:
            logger.info(command.help or command.summary)
        return True


class RootCommand(MultiCommand):
    """Top-level commands available at the prompt."""

    def __init__(self, configuration: Configuration):
        super().__init__()
        self.add_command(ConfigCommand, configuration)
        self.add_command(HelpCommand, self)


def create_configuration(path: Optional[Path] = None) -> Configuration:
    """Build the process-wide configuration, load it and apply it once."""
    hooks = ApplyHooks()
    hooks.register(apply_log_level)

    configuration = Configuration(path=path, hooks=hooks)
    configuration.load()
    return configuration


def run_prompt(root: RootCommand, configuration: Configuration) -> int:
    """
    Read command lines until quit/exit or end of input.

    The prompt text is read from the live configuration on every line.

    Returns:
        Process exit code
    """
    while True:
        try:
            line = input(configuration.settings.input_prompt)
        except EOFError:
            break
        except KeyboardInterrupt:
            print()
            continue

        line = line.strip()
        if not line:
            continue
        if line in QUIT_COMMANDS:
            break

        root.process(line)

    return 0


@app.command()
def main(
    command: Optional[List[str]] = typer.Argument(
        None,
        help="Command line to run, e.g. 'config set DebugLogging true'. "
             "Omit to start an interactive prompt.",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file (default: $SDB_CONFIG_FILE or ~/.sdb.cfg).",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Initial logging level."),
    log_file: bool = typer.Option(False, "--log-file/--no-log-file", help="Also log to a file."),
):
    """Inspect and change the sdb debugger configuration."""
    setup_logging(log_level=log_level, log_file=log_file)
    logger.debug(f"sdbconfig v{__version__} starting")

    configuration = create_configuration(config)
    root = RootCommand(configuration)

    if command:
        ok = root.process(" ".join(command))
        raise typer.Exit(code=0 if ok else 1)

    raise typer.Exit(code=run_prompt(root, configuration))


def run():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
