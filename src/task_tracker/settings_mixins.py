"""Settings mixins for storage layout and CLI configuration.

AppSettingsMixin: Application identity and disk layout (app_name, data_dir, tasks file).
CLISettingsMixin: CLI-specific settings (logging).

Kept outside cli/ so that config.py can compose TaskTrackerSettings
without importing the cli package.
"""

from pathlib import Path
from typing import Literal, get_args

from pydantic import Field, field_validator

LogLevel = Literal["debug", "info", "warning", "error"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Should be composed with pydantic BaseSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="task_tracker",
        title="App Name",
        description="Application name, also used for config directory names",
    )

    data_dir: Path = Field(
        default_factory=Path.cwd,
        title="Data Directory",
        description="Directory holding the tasks file",
    )

    tasks_filename: str = Field(
        default="tasks.json",
        title="Tasks Filename",
        description="Name of the JSON file tasks are stored in",
    )

    json_indent: int = Field(
        default=4,
        ge=0,
        le=8,
        title="JSON Indent",
        description="Indentation used when writing the tasks file",
    )

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @property
    def tasks_file(self) -> Path:
        """Full path of the tasks file."""
        return self.data_dir / self.tasks_filename


class CLISettingsMixin:
    """Settings for CLI configuration.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: LogLevel = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )
