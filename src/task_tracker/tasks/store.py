"""Simple file-based task store.

Tasks live in a single JSON array on disk, written atomically. The store
is an explicit handle on that file: operations receive it rather than
reaching for a module-level path.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from task_tracker.errors import CorruptStoreError, StoreWriteError, TaskTrackerError
from task_tracker.logging import Loggers
from task_tracker.persistence import atomic_write_json
from task_tracker.tasks.models import Task

if TYPE_CHECKING:
    from task_tracker.config import TaskTrackerSettings

logger = Loggers.store()


class TaskStore:
    """Persistent task collection backed by one JSON file.

    load() and save() never raise for storage problems. A corrupt file or a
    failed write is logged, recorded in ``last_error`` and passed to the
    optional ``on_error`` callback instead, so a command can warn the user
    and carry on.

    Example:
        >>> store = TaskStore(Path("tasks.json"))
        >>> tasks = store.load()
        >>> store.save(tasks)
        True
    """

    def __init__(
        self,
        path: Path,
        indent: int = 4,
        on_error: Callable[[TaskTrackerError], None] | None = None,
    ) -> None:
        self._path = Path(path)
        self._indent = indent
        self._on_error = on_error
        self.last_error: TaskTrackerError | None = None

    @classmethod
    def from_settings(
        cls,
        settings: "TaskTrackerSettings | None" = None,
        on_error: Callable[[TaskTrackerError], None] | None = None,
    ) -> "TaskStore":
        """Create a store for the configured tasks file."""
        if settings is None:
            from task_tracker.config import get_settings

            settings = get_settings()
        return cls(settings.tasks_file, indent=settings.json_indent, on_error=on_error)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        """Load all tasks in file order.

        Returns:
            The stored tasks; an empty list if the file is missing, empty
            or corrupt.
        """
        self.last_error = None

        if not self._path.exists() or self._path.stat().st_size == 0:
            logger.debug("store_empty", path=str(self._path))
            return []

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            tasks = self._parse(raw)
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; deeply
        # nested arrays exhaust the decoder's recursion limit.
        except (OSError, ValueError, RecursionError) as e:
            log = logger.info if self._on_error is not None else logger.warning
            log("store_corrupt", path=str(self._path), error=str(e))
            self._report(CorruptStoreError(self._path, str(e)))
            return []

        logger.debug("store_loaded", path=str(self._path), count=len(tasks))
        return tasks

    def save(self, tasks: list[Task]) -> bool:
        """Overwrite the backing file with the given tasks.

        Returns:
            True if written, False if the write failed (see last_error).
        """
        self.last_error = None
        try:
            atomic_write_json(
                self._path,
                [task.to_dict() for task in tasks],
                indent=self._indent,
            )
        # UnicodeEncodeError: lone surrogates in a description
        except (OSError, UnicodeError) as e:
            logger.error("store_write_failed", path=str(self._path), error=str(e))
            self._report(StoreWriteError(self._path, str(e)))
            return False

        logger.debug("store_saved", path=str(self._path), count=len(tasks))
        return True

    def _report(self, error: TaskTrackerError) -> None:
        self.last_error = error
        if self._on_error is not None:
            self._on_error(error)

    @staticmethod
    def _parse(raw: object) -> list[Task]:
        if not isinstance(raw, list):
            raise ValueError(f"expected a JSON array, got {type(raw).__name__}")

        tasks: list[Task] = []
        seen: set[int] = set()
        for item in raw:
            task = Task.from_dict(item)
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)
        return tasks
