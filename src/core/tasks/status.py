# src/core/tasks/status.py
"""Status phrase normalizer."""

from src.core.tasks.models import STATUSES

STATUS_ALIASES = {
    "todo": "Not started",
    "to do": "Not started",
    "not started": "Not started",
    "notstarted": "Not started",
    "doing": "In progress",
    "in progress": "In progress",
    "inprogress": "In progress",
    "done": "Done",
    "complete": "Done",
    "completed": "Done",
}


def normalize_status(text: str) -> str:
    """Map an informal status phrase to its canonical label.

    Lookup is case-insensitive and ignores repeated whitespace. Unknown
    phrases are returned unchanged so callers can report them.

    Args:
        text: Status as typed by the user.

    Returns:
        Canonical label, or the input itself when unmapped.

    Examples:
        >>> normalize_status("doing")
        'In progress'
        >>> normalize_status("Not   Started")
        'Not started'
        >>> normalize_status("blocked")
        'blocked'
    """
    key = " ".join(text.split()).lower()
    return STATUS_ALIASES.get(key, text)


def is_canonical_status(value: str | None) -> bool:
    """Check whether a value is one of the store's status labels."""
    return value in STATUSES
