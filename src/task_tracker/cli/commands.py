"""Command registry and base command class.

Provides the foundation for task-cli subcommands.

Example of creating a custom command:

    from task_tracker.cli.commands import Command, CommandCategory

    class ShowCommand(Command):
        '''Show a single task.'''

        def __init__(self):
            super().__init__(
                name="show",
                description="Show one task",
                usage="show <id>",
                examples=["show 3"],
                category=CommandCategory.TASKS,
                min_args=1,
            )

        def execute(self, args: list[str], app: Any) -> None:
            self.check_args(args)
            task = app.operations.get(args[0])
            app.console.print(task.description)
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

from task_tracker.errors import ErrorCode, InvalidInputError

if TYPE_CHECKING:
    from task_tracker.cli.app import TaskCLIApp


class CommandCategory(Enum):
    """Categories for organizing commands."""

    GENERAL = "general"
    TASKS = "tasks"
    STATUS = "status"


class Command(ABC):
    """Base class for task-cli subcommands.

    Subclass this and override execute(). Domain errors raised from
    execute() are reported by the application, not by the command.
    """

    def __init__(
        self,
        name: str,
        description: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
        examples: list[str] | None = None,
        category: CommandCategory = CommandCategory.GENERAL,
        min_args: int = 0,
    ) -> None:
        """Initialize the command.

        Args:
            name: Command name as typed on the command line
            description: Short description of what the command does
            aliases: Alternative names for the command
            usage: Usage string showing syntax (e.g., "update <id> <description>")
            examples: List of example usages
            category: Category for organizing in help
            min_args: Number of positional arguments the command requires
        """
        self.name = name
        self.description = description
        self.aliases = aliases or []
        self.usage = usage or name
        self.examples = examples or []
        self.category = category
        self.min_args = min_args

    @abstractmethod
    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        """Execute the command with given arguments.

        Args:
            args: Arguments following the command name
            app: The CLI application instance
        """
        pass

    def check_args(self, args: list[str]) -> None:
        """Raise InvalidInputError when required arguments are missing."""
        if len(args) < self.min_args:
            raise InvalidInputError(
                f"Missing arguments. Usage: task-cli {self.usage}",
                error_code=ErrorCode.MISSING_REQUIRED,
                details={"command": self.name},
            )

    def get_help(self) -> str:
        """Get detailed help text for this command."""
        lines = [
            f"{self.name}: {self.description}",
            "",
            f"Usage: task-cli {self.usage}",
        ]

        if self.aliases:
            lines.append(f"Aliases: {', '.join(self.aliases)}")

        if self.examples:
            lines.append("")
            lines.append("Examples:")
            for example in self.examples:
                lines.append(f"  task-cli {example}")

        return "\n".join(lines)


class CommandRegistry:
    """Registry for managing task-cli commands."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._categories: dict[CommandCategory, list[Command]] = {
            cat: [] for cat in CommandCategory
        }

    def register(self, command: Command) -> None:
        """Register a command and its aliases."""
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

        if command not in self._categories[command.category]:
            self._categories[command.category].append(command)

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        return self._commands.get(name)

    def all_commands(self) -> list[Command]:
        """Get all unique commands (excluding aliases), in registration order."""
        seen: set[str] = set()
        commands: list[Command] = []
        for cmd in self._commands.values():
            if cmd.name not in seen:
                seen.add(cmd.name)
                commands.append(cmd)
        return commands

    def by_category(self, category: CommandCategory) -> list[Command]:
        """Get commands in a specific category."""
        return self._categories.get(category, [])

    def names(self) -> list[str]:
        """Get all command names and aliases."""
        return list(self._commands.keys())
