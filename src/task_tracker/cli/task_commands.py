"""Built-in task-cli commands."""

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from task_tracker.cli.commands import Command, CommandCategory
from task_tracker.constants import STATUS_STYLES, format_timestamp, truncate
from task_tracker.tasks.models import ListFilter, Task

if TYPE_CHECKING:
    from task_tracker.cli.app import TaskCLIApp


class AddCommand(Command):
    """Add a new task."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add a new task",
            usage='add "<description>"',
            examples=['add "Buy groceries"'],
            category=CommandCategory.TASKS,
            min_args=1,
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.check_args(args)
        task = app.operations.add(" ".join(args))
        app.console.print(f"Task added successfully (ID: {task.id})")


class ListCommand(Command):
    """List tasks, optionally filtered by status."""

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description="List tasks, optionally filtered by status",
            aliases=["ls"],
            usage="list [" + "|".join(f.value for f in ListFilter) + "]",
            examples=["list", "list done", "list in-progress"],
            category=CommandCategory.TASKS,
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        status_filter = args[0] if args else ListFilter.ALL
        tasks = app.operations.list_tasks(status_filter)
        if not tasks:
            app.console.print("No tasks found")
            return
        app.console.print(render_task_table(tasks))


class UpdateCommand(Command):
    """Replace the description of a task."""

    def __init__(self) -> None:
        super().__init__(
            name="update",
            description="Update a task's description",
            usage='update <id> "<description>"',
            examples=['update 1 "Buy groceries and cook dinner"'],
            category=CommandCategory.TASKS,
            min_args=2,
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.check_args(args)
        task = app.operations.update(args[0], " ".join(args[1:]))
        app.console.print(f"Task {task.id} updated successfully")


class DeleteCommand(Command):
    """Delete a task."""

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete a task",
            aliases=["rm"],
            usage="delete <id>",
            examples=["delete 1"],
            category=CommandCategory.TASKS,
            min_args=1,
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.check_args(args)
        task = app.operations.delete(args[0])
        app.console.print(f"Task {task.id} deleted successfully")


class MarkInProgressCommand(Command):
    """Mark a task as in progress."""

    def __init__(self) -> None:
        super().__init__(
            name="mark-in-progress",
            description="Mark a task as in progress",
            usage="mark-in-progress <id>",
            examples=["mark-in-progress 1"],
            category=CommandCategory.STATUS,
            min_args=1,
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.check_args(args)
        task = app.operations.mark_in_progress(args[0])
        app.console.print(f"Task {task.id} marked as in progress")


class MarkDoneCommand(Command):
    """Mark a task as done."""

    def __init__(self) -> None:
        super().__init__(
            name="mark-done",
            description="Mark a task as done",
            usage="mark-done <id>",
            examples=["mark-done 1"],
            category=CommandCategory.STATUS,
            min_args=1,
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        self.check_args(args)
        task = app.operations.mark_done(args[0])
        app.console.print(f"Task {task.id} marked as done")


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands and usage information",
            usage="help [command]",
            examples=["help", "help update"],
            category=CommandCategory.GENERAL,
        )

    def execute(self, args: list[str], app: "TaskCLIApp") -> None:
        if args:
            cmd = app.command_registry.get(args[0])
            if cmd is not None:
                app.console.print(cmd.get_help(), markup=False, highlight=False)
                return
            app.error_console.print(
                f"Unknown command: {args[0]}", style="red", markup=False
            )

        app.console.print(render_help(app))


def render_help(app: "TaskCLIApp") -> Panel:
    """Build the usage panel listing every registered command."""
    table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
    table.add_column("Usage", style="bold cyan", no_wrap=True)
    table.add_column("Description")

    for category in CommandCategory:
        for cmd in app.command_registry.by_category(category):
            table.add_row(Text(cmd.usage), cmd.description)

    return Panel(
        table,
        title="[bold]Task Tracker CLI[/bold]",
        subtitle=Text(
            "Usage: task-cli [--file PATH] [--log-level LEVEL] <command> [arguments]"
        ),
        border_style="cyan",
    )


def render_task_table(tasks: list[Task]) -> Table:
    """Build the table shown by the list command."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Description")
    table.add_column("Status", no_wrap=True)
    table.add_column("Created", no_wrap=True, style="dim")
    table.add_column("Updated", no_wrap=True, style="dim")

    for task in tasks:
        table.add_row(
            str(task.id),
            Text(truncate(task.description)),
            Text(task.status.value, style=STATUS_STYLES.get(task.status.value, "")),
            format_timestamp(task.created_at),
            format_timestamp(task.updated_at),
        )
    return table


BUILTIN_COMMANDS: tuple[type[Command], ...] = (
    AddCommand,
    ListCommand,
    UpdateCommand,
    DeleteCommand,
    MarkInProgressCommand,
    MarkDoneCommand,
    HelpCommand,
)
