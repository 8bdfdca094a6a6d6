"""Shared test fixtures and utilities for task-tracker tests.

Provides:
- MockContext for isolating tests from global settings
- Temporary workspace fixtures
- Store and operations fixtures with a controllable clock
"""

import io
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
import structlog
from rich.console import Console

from task_tracker.config import (
    TaskTrackerSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from task_tracker.tasks.operations import TaskOperations
from task_tracker.tasks.store import TaskStore


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting the global settings singleton
    - Providing a temporary data directory
    - Clearing TASK_TRACKER_* environment variables

    Usage:
        with MockContext() as ctx:
            settings = ctx.settings
            data_dir = ctx.data_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: TaskTrackerSettings | None = None
        self._env_patch = None

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        data_dir = Path(self._temp_dir.name)

        cleaned = {
            key: value
            for key, value in os.environ.items()
            if not key.startswith("TASK_TRACKER_")
        }
        self._env_patch = patch.dict(os.environ, cleaned, clear=True)
        self._env_patch.start()

        self._settings = TaskTrackerSettings(
            data_dir=data_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        if self._env_patch is not None:
            self._env_patch.stop()
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> TaskTrackerSettings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def data_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


class FakeClock:
    """Clock that advances one second on every call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


def make_console() -> Console:
    """Console writing plain text to an in-memory buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


def console_output(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop logging configuration bound to a test's captured streams."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated settings context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def tasks_file(temp_workspace: Path) -> Path:
    return temp_workspace / "tasks.json"


@pytest.fixture
def store(tasks_file: Path) -> TaskStore:
    return TaskStore(tasks_file)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def operations(store: TaskStore, clock: FakeClock) -> TaskOperations:
    return TaskOperations(store, clock=clock)
