"""Command-line interface for the task tracker."""

from task_tracker.cli.app import TaskCLIApp, main, parse_global_options
from task_tracker.cli.commands import Command, CommandCategory, CommandRegistry

__all__ = [
    "Command",
    "CommandCategory",
    "CommandRegistry",
    "TaskCLIApp",
    "main",
    "parse_global_options",
]
