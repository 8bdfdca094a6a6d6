"""Error types for the task tracker.

All domain failures derive from TaskTrackerError so the CLI can catch them
at a single boundary and turn them into a message and an exit code.
"""

from pathlib import Path
from typing import Any


# Common error codes
class ErrorCode:
    """Standard error codes for task tracker failures."""

    # Input errors
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED = "MISSING_REQUIRED"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"

    # Storage errors
    CORRUPT_DATA = "CORRUPT_DATA"
    WRITE_FAILED = "WRITE_FAILED"


class TaskTrackerError(Exception):
    """Base error for task tracker failures.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        recoverable: Whether the command can carry on after the error
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.INVALID_INPUT,
        recoverable: bool = False,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.recoverable = recoverable
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": False,
            "error": {
                "message": self.message,
                "code": self.error_code,
                "recoverable": self.recoverable,
                "details": self.details,
            },
        }


class InvalidInputError(TaskTrackerError):
    """Raised for an empty description, a bad id, or an unknown filter/status."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.INVALID_INPUT,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code=error_code, details=details)


class TaskNotFoundError(TaskTrackerError):
    """Raised when no task carries the requested id."""

    def __init__(self, task_id: int):
        super().__init__(
            f"Task with ID {task_id} not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"task_id": task_id},
        )
        self.task_id = task_id


class CorruptStoreError(TaskTrackerError):
    """The backing file could not be parsed as a task list."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Could not read {path}: {reason}. Starting with an empty task list.",
            error_code=ErrorCode.CORRUPT_DATA,
            recoverable=True,
            details={"path": str(path), "reason": reason},
        )
        self.path = path


class StoreWriteError(TaskTrackerError):
    """The backing file could not be written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Could not save tasks to {path}: {reason}",
            error_code=ErrorCode.WRITE_FAILED,
            recoverable=True,
            details={"path": str(path), "reason": reason},
        )
        self.path = path
