"""Task Tracker - a local command-line task tracker.

Tasks are kept in a JSON file in the working directory and managed with
the ``task-cli`` command:

- add, update and delete tasks
- move tasks through todo, in-progress and done
- list tasks, optionally filtered by status
"""

from task_tracker.config import (
    SettingsContext,
    SettingsValidationError,
    TaskTrackerSettings,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
    validate_settings,
)
from task_tracker.errors import (
    CorruptStoreError,
    ErrorCode,
    InvalidInputError,
    StoreWriteError,
    TaskNotFoundError,
    TaskTrackerError,
)
from task_tracker.tasks import ListFilter, Task, TaskOperations, TaskStatus, TaskStore

__all__ = [
    # Tasks
    "ListFilter",
    "Task",
    "TaskOperations",
    "TaskStatus",
    "TaskStore",
    # Errors
    "CorruptStoreError",
    "ErrorCode",
    "InvalidInputError",
    "StoreWriteError",
    "TaskNotFoundError",
    "TaskTrackerError",
    # Settings
    "TaskTrackerSettings",
    "SettingsContext",
    "SettingsValidationError",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "validate_settings",
    "reload_settings",
]

__version__ = "0.1.0"
