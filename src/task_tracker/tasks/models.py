"""Task record and status types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, value: "str | TaskStatus") -> "TaskStatus":
        """Parse a status string, raising ValueError on unknown values."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Enum):
            value = value.value
        return cls(str(value).strip().lower())


class ListFilter(str, Enum):
    """Filter accepted by the list operation."""

    ALL = "all"
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    def matches(self, task: "Task") -> bool:
        if self is ListFilter.ALL:
            return True
        return task.status.value == self.value


@dataclass
class Task:
    """A single tracked unit of work."""

    id: int
    description: str
    status: TaskStatus = TaskStatus.TODO
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        # Key order is the on-disk field order.
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """Build a task from its JSON form.

        Raises:
            ValueError: If the data does not match the task schema.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        missing = [
            key
            for key in ("id", "description", "status", "createdAt", "updatedAt")
            if key not in data
        ]
        if missing:
            raise ValueError(f"missing field(s): {', '.join(missing)}")

        task_id = data["id"]
        # bool is an int subclass
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise ValueError(f"invalid id {task_id!r}")

        description = data["description"]
        if not isinstance(description, str) or not description.strip():
            raise ValueError(f"task {task_id} has an empty description")
        # json decodes lone surrogate escapes into unencodable strings
        try:
            description.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError(f"task {task_id} has an invalid description") from None

        try:
            status = TaskStatus.parse(data["status"])
        except ValueError:
            raise ValueError(
                f"task {task_id} has unknown status {data['status']!r}"
            ) from None

        for key in ("createdAt", "updatedAt"):
            if not isinstance(data[key], str):
                raise ValueError(f"task {task_id} has a non-string {key}")

        return cls(
            id=task_id,
            description=description,
            status=status,
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )
