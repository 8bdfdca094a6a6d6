"""Configuration for the task tracker.

Settings Management:
    The module provides both global singleton and context-based settings:

    1. Global singleton (simple cases):
        set_settings(my_settings)
        settings = get_settings()

    2. Context-based (isolated contexts, tests):
        with SettingsContext(my_settings):
            settings = get_settings()  # Returns my_settings

Settings Loading Priority (highest to lowest):
    1. Constructor arguments
    2. Environment variables (TASK_TRACKER_* prefix)
    3. Project config (./.<app_name>/settings.json)
    4. User config (~/.<app_name>/settings.json)
    5. .env file
    6. Default values
"""

import os
from contextlib import contextmanager
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Generator, Tuple, Type

from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from task_tracker.logging import Loggers
from task_tracker.settings_mixins import AppSettingsMixin, CLISettingsMixin

__all__ = [
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

APP_NAME = "task_tracker"

logger = Loggers.config()


class SettingsValidationError(Exception):
    """Raised when settings validation fails."""

    pass


def _get_json_config_source(
    settings_cls: Type[BaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists.

    Raises:
        SettingsValidationError: If the file cannot be read or parsed
    """
    if not json_file.is_file():
        return None
    try:
        source = JsonConfigSettingsSource(settings_cls, json_file=json_file)
    # JSONDecodeError and UnicodeDecodeError are ValueErrors
    except (OSError, ValueError) as e:
        logger.warning("config_file_invalid", path=str(json_file), error=str(e))
        raise SettingsValidationError(
            f"Config file {json_file} is not valid JSON: {e}"
        ) from e
    logger.debug("config_file_loaded", path=str(json_file))
    return source


def _config_dir_name(settings_cls: Type[BaseSettings]) -> str:
    """Directory name for JSON config files, derived from app_name.

    app_name cannot come from the JSON files it locates, so only an
    environment override or the field default apply here.
    """
    env_prefix = settings_cls.model_config.get("env_prefix", "")
    app_name = os.environ.get(f"{env_prefix}APP_NAME")
    if not app_name:
        field_info = settings_cls.model_fields.get("app_name")
        app_name = field_info.default if field_info is not None else None
    return f".{app_name or APP_NAME}"


class TaskTrackerSettings(AppSettingsMixin, CLISettingsMixin, BaseSettings):
    """Settings for the task tracker.

    Mixins provide organized settings:
    - AppSettingsMixin: Disk layout (data directory, tasks file)
    - CLISettingsMixin: Logging settings
    """

    model_config = SettingsConfigDict(
        env_prefix="TASK_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Layer JSON config files between env vars and the .env file.

        Note: JSON sources are only included if the files exist. They are
        looked up in ``.<app_name>/settings.json`` under the working
        directory and the home directory.
        """
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
        ]

        config_dir = _config_dir_name(settings_cls)

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / config_dir / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / config_dir / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)

        return tuple(sources)


# Context variable for settings (takes precedence over global singleton)
_settings_context: ContextVar[TaskTrackerSettings | None] = ContextVar(
    "settings_context", default=None
)

_settings_instance: TaskTrackerSettings | None = None


def get_settings() -> TaskTrackerSettings:
    """Get the current settings instance.

    Settings resolution order:
    1. Context variable (set via SettingsContext or set_context_settings)
    2. Global singleton (set via set_settings)
    3. Fresh TaskTrackerSettings instance (created on first access)
    """
    context_settings = _settings_context.get()
    if context_settings is not None:
        return context_settings

    global _settings_instance
    if _settings_instance is None:
        _settings_instance = TaskTrackerSettings()
    return _settings_instance


def set_settings(settings: TaskTrackerSettings) -> None:
    """Set the global settings instance."""
    global _settings_instance
    _settings_instance = settings


def set_context_settings(settings: TaskTrackerSettings | None) -> Token:
    """Set settings for the current context.

    Returns:
        Token that can be used to reset the context variable.
    """
    return _settings_context.set(settings)


def get_context_settings() -> TaskTrackerSettings | None:
    """Get settings from current context (if any)."""
    return _settings_context.get()


@contextmanager
def SettingsContext(
    settings: TaskTrackerSettings,
) -> Generator[TaskTrackerSettings, None, None]:
    """Context manager for isolated settings.

    Example:
        with SettingsContext(test_settings) as s:
            store = TaskStore.from_settings()  # uses test_settings
    """
    token = _settings_context.set(settings)
    try:
        yield settings
    finally:
        _settings_context.reset(token)


def reload_settings() -> TaskTrackerSettings:
    """Reload settings (clears global singleton and context cache)."""
    global _settings_instance
    _settings_instance = None
    _settings_context.set(None)
    return get_settings()


def validate_settings(settings: TaskTrackerSettings) -> None:
    """Validate settings for runtime use.

    Raises:
        SettingsValidationError: If validation fails
    """
    errors = []

    if settings.data_dir.exists() and not settings.data_dir.is_dir():
        errors.append(f"Data directory {settings.data_dir} is not a directory.")

    if settings.tasks_file.is_dir():
        errors.append(f"Tasks file {settings.tasks_file} is a directory.")

    if errors:
        logger.warning("settings_invalid", errors=errors)
        raise SettingsValidationError("\n".join(errors))

    logger.debug("settings_validated", tasks_file=str(settings.tasks_file))
