"""Task operations: add, list, update, delete and status changes.

Every operation loads the store, works on the in-memory list and, for
mutations, writes the whole list back.
"""

from datetime import datetime, timezone
from typing import Callable

from task_tracker.errors import (
    InvalidInputError,
    StoreWriteError,
    TaskNotFoundError,
)
from task_tracker.logging import Loggers
from task_tracker.tasks.models import ListFilter, Task, TaskStatus
from task_tracker.tasks.store import TaskStore

logger = Loggers.operations()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_task_id(value: int | str) -> int:
    """Validate a task id given as an int or a decimal string.

    Raises:
        InvalidInputError: If the value is not a positive integer.
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid task ID: {value!r}")
    if isinstance(value, int):
        task_id = value
    else:
        text = str(value).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidInputError(f"Invalid task ID: {value!r}")
        task_id = int(text)
    if task_id < 1:
        raise InvalidInputError(f"Invalid task ID: {value!r}")
    return task_id


def parse_list_filter(value: "ListFilter | TaskStatus | str | None") -> ListFilter:
    """Resolve a list filter; None means all tasks.

    Raises:
        InvalidInputError: If the filter is not recognized.
    """
    if value is None:
        return ListFilter.ALL
    if isinstance(value, ListFilter):
        return value
    if isinstance(value, TaskStatus):
        return ListFilter(value.value)
    try:
        return ListFilter(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(f.value for f in ListFilter)
        raise InvalidInputError(
            f"Unknown status filter {value!r}. Use one of: {choices}"
        ) from None


def _require_description(description: str | None) -> str:
    if description is None or not description.strip():
        raise InvalidInputError("Task description cannot be empty")
    try:
        description.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidInputError(
            "Task description contains characters that are not valid text"
        ) from None
    return description.strip()


class TaskOperations:
    """Mutating and querying operations over a TaskStore.

    Example:
        >>> ops = TaskOperations(TaskStore(Path("tasks.json")))
        >>> task = ops.add("Buy groceries")
        >>> ops.mark_done(task.id)
        >>> ops.list_tasks("done")
    """

    def __init__(
        self,
        store: TaskStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or _utc_now

    @property
    def store(self) -> TaskStore:
        return self._store

    def _now(self) -> str:
        return self._clock().isoformat()

    def _save(self, tasks: list[Task]) -> None:
        if not self._store.save(tasks):
            error = self._store.last_error
            if isinstance(error, StoreWriteError):
                raise error
            raise StoreWriteError(self._store.path, "unknown error")

    @staticmethod
    def _find(tasks: list[Task], task_id: int) -> Task:
        for task in tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def add(self, description: str) -> Task:
        """Add a new task with status todo.

        Returns:
            The created task.
        """
        description = _require_description(description)
        tasks = self._store.load()

        now = self._now()
        task = Task(
            id=max((t.id for t in tasks), default=0) + 1,
            description=description,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        tasks.append(task)
        self._save(tasks)

        logger.info("task_added", task_id=task.id)
        return task

    def list_tasks(
        self, status_filter: "ListFilter | TaskStatus | str | None" = ListFilter.ALL
    ) -> list[Task]:
        """List tasks matching a filter, in insertion order.

        Returns:
            Matching tasks; an empty list when nothing matches.
        """
        resolved = parse_list_filter(status_filter)
        return [task for task in self._store.load() if resolved.matches(task)]

    def get(self, task_id: int | str) -> Task:
        """Get a single task by id."""
        return self._find(self._store.load(), parse_task_id(task_id))

    def update(self, task_id: int | str, description: str) -> Task:
        """Replace a task's description."""
        task_id = parse_task_id(task_id)
        description = _require_description(description)

        tasks = self._store.load()
        task = self._find(tasks, task_id)
        task.description = description
        task.updated_at = self._now()
        self._save(tasks)

        logger.info("task_updated", task_id=task_id)
        return task

    def delete(self, task_id: int | str) -> Task:
        """Remove a task. Remaining ids are left untouched.

        Returns:
            The removed task.
        """
        task_id = parse_task_id(task_id)

        tasks = self._store.load()
        task = self._find(tasks, task_id)
        tasks.remove(task)
        self._save(tasks)

        logger.info("task_deleted", task_id=task_id)
        return task

    def set_status(self, task_id: int | str, status: TaskStatus | str) -> Task:
        """Change a task's status."""
        task_id = parse_task_id(task_id)
        try:
            new_status = TaskStatus.parse(status)
        except ValueError:
            raise InvalidInputError(f"Unknown status {status!r}") from None

        tasks = self._store.load()
        task = self._find(tasks, task_id)
        task.status = new_status
        task.updated_at = self._now()
        self._save(tasks)

        logger.info("task_status_changed", task_id=task_id, status=new_status.value)
        return task

    def mark_in_progress(self, task_id: int | str) -> Task:
        return self.set_status(task_id, TaskStatus.IN_PROGRESS)

    def mark_done(self, task_id: int | str) -> Task:
        return self.set_status(task_id, TaskStatus.DONE)
