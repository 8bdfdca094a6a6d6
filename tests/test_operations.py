"""Tests for task operations."""

from pathlib import Path
from unittest.mock import patch

import pytest

from task_tracker.errors import (
    ErrorCode,
    InvalidInputError,
    StoreWriteError,
    TaskNotFoundError,
)
from task_tracker.tasks.models import ListFilter, TaskStatus
from task_tracker.tasks.operations import (
    TaskOperations,
    parse_list_filter,
    parse_task_id,
)


class TestParseTaskId:
    """Tests for id validation."""

    @pytest.mark.parametrize("value, expected", [(1, 1), ("1", 1), (" 42 ", 42), (7, 7)])
    def test_valid(self, value, expected):
        assert parse_task_id(value) == expected

    @pytest.mark.parametrize("value", [0, -3, "0", "-1", "abc", "1.5", "", True, "²"])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError):
            parse_task_id(value)


class TestParseListFilter:
    """Tests for list filter resolution."""

    def test_none_means_all(self):
        assert parse_list_filter(None) is ListFilter.ALL

    def test_strings(self):
        assert parse_list_filter("all") is ListFilter.ALL
        assert parse_list_filter("in-progress") is ListFilter.IN_PROGRESS
        assert parse_list_filter("DONE") is ListFilter.DONE

    def test_status_member(self):
        assert parse_list_filter(TaskStatus.TODO) is ListFilter.TODO

    def test_unknown(self):
        with pytest.raises(InvalidInputError, match="Unknown status filter"):
            parse_list_filter("pending")


class TestAdd:
    """Tests for TaskOperations.add."""

    def test_add_first_task(self, operations: TaskOperations):
        task = operations.add("Buy groceries")
        assert task.id == 1
        assert task.description == "Buy groceries"
        assert task.status is TaskStatus.TODO
        assert task.created_at == "2024-01-01T09:00:00+00:00"
        assert task.created_at == task.updated_at

    def test_add_persists(self, operations: TaskOperations):
        operations.add("Buy groceries")
        assert [t.description for t in operations.store.load()] == ["Buy groceries"]

    def test_ids_strictly_increase(self, operations: TaskOperations):
        ids = [operations.add(f"Task {i}").id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]
        assert len(set(ids)) == 5

    def test_next_id_is_max_plus_one(self, operations: TaskOperations):
        for i in range(3):
            operations.add(f"Task {i}")
        operations.delete(2)
        assert operations.add("Next").id == 4

    @pytest.mark.parametrize("description", ["", "   ", None])
    def test_empty_description(self, operations: TaskOperations, description):
        with pytest.raises(InvalidInputError, match="cannot be empty"):
            operations.add(description)
        assert not operations.store.path.exists()

    def test_description_is_stripped(self, operations: TaskOperations):
        assert operations.add("  Tidy desk  ").description == "Tidy desk"

    def test_unencodable_description(self, operations: TaskOperations):
        with pytest.raises(InvalidInputError, match="not valid text") as exc_info:
            operations.add("bad\udcff")
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT
        assert not operations.store.path.exists()


class TestListTasks:
    """Tests for TaskOperations.list_tasks."""

    @pytest.fixture
    def populated(self, operations: TaskOperations) -> TaskOperations:
        for i in range(1, 6):
            operations.add(f"Task {i}")
        operations.mark_in_progress(1)
        operations.mark_in_progress(4)
        operations.mark_done(3)
        return operations

    def test_default_lists_all_in_order(self, populated: TaskOperations):
        assert [t.id for t in populated.list_tasks()] == [1, 2, 3, 4, 5]

    def test_done_after_marking_three(self, populated: TaskOperations):
        assert [t.id for t in populated.list_tasks("done")] == [3]

    def test_in_progress(self, populated: TaskOperations):
        assert [t.id for t in populated.list_tasks("in-progress")] == [1, 4]

    def test_todo(self, populated: TaskOperations):
        assert [t.id for t in populated.list_tasks(ListFilter.TODO)] == [2, 5]

    def test_empty_result(self, operations: TaskOperations):
        operations.add("Only todo")
        assert operations.list_tasks("done") == []

    def test_empty_store(self, operations: TaskOperations):
        assert operations.list_tasks() == []

    def test_unknown_filter(self, operations: TaskOperations):
        with pytest.raises(InvalidInputError):
            operations.list_tasks("someday")


class TestUpdate:
    """Tests for TaskOperations.update."""

    def test_update_description(self, operations: TaskOperations):
        created = operations.add("Old")
        updated = operations.update(created.id, "New")
        assert updated.description == "New"
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at
        assert operations.get(created.id).description == "New"

    def test_update_accepts_string_id(self, operations: TaskOperations):
        operations.add("Old")
        assert operations.update("1", "New").id == 1

    def test_update_missing_id_leaves_file_unchanged(
        self, operations: TaskOperations, tasks_file: Path
    ):
        operations.add("Keep me")
        before = tasks_file.read_bytes()
        with pytest.raises(TaskNotFoundError) as exc_info:
            operations.update(99, "Nope")
        assert exc_info.value.task_id == 99
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND
        assert tasks_file.read_bytes() == before

    def test_update_invalid_id(self, operations: TaskOperations):
        with pytest.raises(InvalidInputError, match="Invalid task ID"):
            operations.update("abc", "New")

    def test_update_empty_description(self, operations: TaskOperations):
        operations.add("Old")
        with pytest.raises(InvalidInputError):
            operations.update(1, "  ")
        assert operations.get(1).description == "Old"

    def test_update_unencodable_description(self, operations: TaskOperations):
        operations.add("Old")
        with pytest.raises(InvalidInputError, match="not valid text"):
            operations.update(1, "bad\udcff")
        assert operations.get(1).description == "Old"


class TestDelete:
    """Tests for TaskOperations.delete."""

    def test_delete_removes_exactly_one(self, operations: TaskOperations):
        for i in range(1, 4):
            operations.add(f"Task {i}")
        removed = operations.delete(2)
        assert removed.id == 2
        assert [t.id for t in operations.list_tasks()] == [1, 3]

    def test_delete_missing(self, operations: TaskOperations, tasks_file: Path):
        operations.add("Task")
        before = tasks_file.read_bytes()
        with pytest.raises(TaskNotFoundError):
            operations.delete(5)
        assert tasks_file.read_bytes() == before

    def test_delete_invalid_id(self, operations: TaskOperations):
        with pytest.raises(InvalidInputError):
            operations.delete("-1")


class TestSetStatus:
    """Tests for status changes."""

    def test_mark_in_progress(self, operations: TaskOperations):
        created = operations.add("Task")
        task = operations.mark_in_progress(created.id)
        assert task.status is TaskStatus.IN_PROGRESS
        assert task.updated_at > created.updated_at

    def test_mark_done(self, operations: TaskOperations):
        operations.add("Task")
        operations.mark_done(1)
        assert operations.get(1).status is TaskStatus.DONE

    def test_set_status_string(self, operations: TaskOperations):
        operations.add("Task")
        assert operations.set_status(1, "done").status is TaskStatus.DONE

    def test_set_status_back_to_todo(self, operations: TaskOperations):
        operations.add("Task")
        operations.mark_done(1)
        assert operations.set_status(1, TaskStatus.TODO).status is TaskStatus.TODO

    def test_unknown_status(self, operations: TaskOperations):
        operations.add("Task")
        with pytest.raises(InvalidInputError, match="Unknown status"):
            operations.set_status(1, "blocked")

    def test_missing_id(self, operations: TaskOperations):
        with pytest.raises(TaskNotFoundError):
            operations.mark_done(1)

    def test_get_missing(self, operations: TaskOperations):
        with pytest.raises(TaskNotFoundError):
            operations.get(1)


class TestStorageFailures:
    """Tests for corrupt files and failed writes."""

    def test_corrupt_file_starts_empty(self, operations: TaskOperations, tasks_file: Path):
        tasks_file.write_text("not json")
        assert operations.list_tasks() == []
        task = operations.add("Fresh start")
        assert task.id == 1
        assert [t.id for t in operations.list_tasks()] == [1]

    def test_write_failure_raises_store_write_error(self, operations: TaskOperations):
        with patch(
            "task_tracker.tasks.store.atomic_write_json",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(StoreWriteError, match="disk full"):
                operations.add("Task")
        assert operations.list_tasks() == []
