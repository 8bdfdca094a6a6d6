"""Task records, the JSON-backed task store and the operations over it.

Example:
    >>> store = TaskStore(Path("tasks.json"))
    >>> ops = TaskOperations(store)
    >>> task = ops.add("Write release notes")
    >>> ops.mark_in_progress(task.id)
    >>> ops.list_tasks("in-progress")
"""

from task_tracker.tasks.models import ListFilter, Task, TaskStatus
from task_tracker.tasks.operations import TaskOperations, parse_list_filter, parse_task_id
from task_tracker.tasks.store import TaskStore

__all__ = [
    "ListFilter",
    "Task",
    "TaskOperations",
    "TaskStatus",
    "TaskStore",
    "parse_list_filter",
    "parse_task_id",
]
