"""task-cli application.

Parses global options, wires the store and operations for one invocation,
dispatches to the registered command and turns domain errors into
messages and exit codes.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Callable

from pydantic import ValidationError
from rich.console import Console

from task_tracker.cli.commands import CommandRegistry
from task_tracker.cli.task_commands import BUILTIN_COMMANDS, render_help
from task_tracker.config import (
    SettingsValidationError,
    TaskTrackerSettings,
    get_settings,
    validate_settings,
)
from task_tracker.errors import CorruptStoreError, InvalidInputError, TaskTrackerError
from task_tracker.logging import Loggers, bind_context, configure_logging, unbind_context
from task_tracker.settings_mixins import LOG_LEVELS
from task_tracker.tasks.operations import TaskOperations
from task_tracker.tasks.store import TaskStore

logger = Loggers.cli()

# Global options that take a value
VALUE_OPTIONS = ("file", "log-level")


def parse_global_options(argv: list[str]) -> tuple[dict[str, str], list[str]]:
    """Split leading global options from the command and its arguments.

    Accepts ``--key=value`` and ``--key value`` for the options in
    VALUE_OPTIONS, ``-h``/``--help``, and ``--`` to end option parsing.

    Returns:
        Tuple of (options, remaining argv starting at the command name)

    Raises:
        InvalidInputError: On an unknown option, a missing option value or
            an unknown log level.
    """
    options: dict[str, str] = {}

    i = 0
    while i < len(argv):
        part = argv[i]

        if part == "--":
            i += 1
            break
        if part in ("-h", "--help"):
            options["help"] = "true"
            i += 1
            continue
        if not part.startswith("--"):
            break

        key = part[2:]
        if "=" in key:
            key, value = key.split("=", 1)
        elif i + 1 < len(argv):
            value = argv[i + 1]
            i += 1
        else:
            raise InvalidInputError(f"Option --{key} requires a value")

        if key not in VALUE_OPTIONS:
            raise InvalidInputError(f"Unknown option --{key}")
        if key == "log-level":
            value = value.lower()
            if value not in LOG_LEVELS:
                valid = ", ".join(LOG_LEVELS)
                raise InvalidInputError(
                    f"Invalid log level '{value}'. Valid levels: {valid}"
                )
        options[key] = value
        i += 1

    return options, argv[i:]


class TaskCLIApp:
    """The task-cli application.

    One instance handles one invocation via run(). Consoles and the clock
    can be injected for tests.
    """

    def __init__(
        self,
        settings: TaskTrackerSettings | None = None,
        console: Console | None = None,
        error_console: Console | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings
        self._clock = clock
        self._operations: TaskOperations | None = None

        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

        self.command_registry = CommandRegistry()
        self._register_builtin_commands()

    @property
    def settings(self) -> TaskTrackerSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def operations(self) -> TaskOperations:
        if self._operations is None:
            raise RuntimeError("Operations are only available while a command runs")
        return self._operations

    def _register_builtin_commands(self) -> None:
        for command_cls in BUILTIN_COMMANDS:
            self.command_registry.register(command_cls())

    def _report_error(self, error: TaskTrackerError) -> None:
        self.error_console.print(f"Error: {error.message}", style="red", markup=False)

    def _on_store_error(self, error: TaskTrackerError) -> None:
        # Write failures surface as exceptions from the operations.
        if isinstance(error, CorruptStoreError):
            self.error_console.print(
                f"Warning: {error.message}", style="yellow", markup=False
            )

    def _create_store(self, file_override: str | None) -> TaskStore:
        settings = self.settings
        if file_override:
            path = Path(file_override).expanduser()
        else:
            validate_settings(settings)
            path = settings.tasks_file
        return TaskStore(path, indent=settings.json_indent, on_error=self._on_store_error)

    def show_help(self) -> None:
        self.console.print(render_help(self))

    def run(self, argv: list[str]) -> int:
        """Run one command.

        Args:
            argv: Command-line arguments without the program name

        Returns:
            Process exit code (0 on success, 1 on any reported error)
        """
        try:
            options, rest = parse_global_options(argv)
        except InvalidInputError as e:
            self._report_error(e)
            self.show_help()
            return 1

        try:
            configure_logging(self.settings, log_level=options.get("log-level"))
            self._operations = TaskOperations(
                self._create_store(options.get("file")),
                clock=self._clock,
            )
        except (ValidationError, SettingsValidationError) as e:
            self.error_console.print(
                f"Invalid configuration: {e}", style="red", markup=False
            )
            return 1

        if not rest or "help" in options:
            self.show_help()
            return 0

        command_name, args = rest[0], rest[1:]
        command = self.command_registry.get(command_name)
        if command is None:
            self.error_console.print(
                f"Error: Unknown command '{command_name}'", style="red", markup=False
            )
            self.show_help()
            return 1

        bind_context(command=command.name)
        logger.debug("executing_command", args=args)
        try:
            command.execute(args, self)
        except TaskTrackerError as e:
            logger.debug("command_failed", error_code=e.error_code)
            self._report_error(e)
            return 1
        finally:
            unbind_context("command")

        logger.debug("command_completed", command=command.name)
        return 0


def main(argv: list[str] | None = None) -> int:
    """Console entry point for task-cli."""
    app = TaskCLIApp()
    return app.run(sys.argv[1:] if argv is None else argv)
