"""Shared constants for task-tracker."""

from datetime import datetime

# Description truncation in list output
DESCRIPTION_PREVIEW_LENGTH = 60

# rich styles per task status
STATUS_STYLES = {
    "todo": "yellow",
    "in-progress": "cyan",
    "done": "green",
}


def truncate(text: str, max_length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    """Truncate text with ellipsis if it exceeds max_length."""
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def format_timestamp(value: str) -> str:
    """Format a stored ISO timestamp as local 'YYYY-MM-DD HH:MM'.

    Values that do not parse are shown as-is.
    """
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        return value
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime("%Y-%m-%d %H:%M")
