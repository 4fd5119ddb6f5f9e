# src/core/tasks/parser.py
"""Pure function-based flag parser for task commands.

A task command looks like::

    !task [-high|-medium|-low] [-due <date>] [-status <status>] [-id <n>] text

Flags may appear in any order before the free text. Each matcher is a pure
function that either consumes one flag from the front of the remaining
text or returns None; the parser keeps applying the matchers until none
of them fires. Whatever is left is the residual text (the task name on
the create path).
"""

import re
from collections.abc import Callable
from dataclasses import replace
from datetime import date

from src.core.tasks.dates import MONTHS, normalize_due_date
from src.core.tasks.models import ParseResult, TaskIntent
from src.core.tasks.status import normalize_status

TASK_PREFIX = "!task"
LIST_COMMAND = "!tasks"

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))

TASK_COMMAND_PATTERN = re.compile(r"^!task(?:\s|$)", re.IGNORECASE)
PRIORITY_FLAG = re.compile(r"^-(high|medium|low)(?:\s+|$)", re.IGNORECASE)
DUE_FLAG = re.compile(
    rf"^-due\s+((?:{_MONTH_NAMES})\s+\d{{1,2}}(?!\S)|\S+)(?:\s+|$)",
    re.IGNORECASE,
)
STATUS_FLAG = re.compile(
    r"^-status\s+(not\s+started|in\s+progress|to\s+do|\S+)(?:\s+|$)", re.IGNORECASE
)
ID_FLAG = re.compile(r"^-id\s+(\d+)(?:\s+|$)", re.IGNORECASE)

# (intent, remaining text, today) -> (updated intent, remaining text) or None
FlagMatcher = Callable[[TaskIntent, str, date], tuple[TaskIntent, str] | None]


def _match_priority(
    intent: TaskIntent, text: str, today: date
) -> tuple[TaskIntent, str] | None:
    match = PRIORITY_FLAG.match(text)
    if not match:
        return None
    priority = match.group(1).capitalize()
    return replace(intent, priority=priority), text[match.end() :]


def _match_due(
    intent: TaskIntent, text: str, today: date
) -> tuple[TaskIntent, str] | None:
    match = DUE_FLAG.match(text)
    if not match:
        return None
    # Unparseable dates are consumed and dropped, never left in the name
    due_date = normalize_due_date(match.group(1), today=today)
    return replace(intent, due_date=due_date), text[match.end() :]


def _match_status(
    intent: TaskIntent, text: str, today: date
) -> tuple[TaskIntent, str] | None:
    match = STATUS_FLAG.match(text)
    if not match:
        return None
    status = normalize_status(match.group(1))
    return replace(intent, status=status), text[match.end() :]


def _match_id(
    intent: TaskIntent, text: str, today: date
) -> tuple[TaskIntent, str] | None:
    match = ID_FLAG.match(text)
    if not match:
        return None
    task_id = int(match.group(1)) or None  # ids are positive
    return replace(intent, task_id=task_id), text[match.end() :]


FLAG_MATCHERS: tuple[FlagMatcher, ...] = (
    _match_priority,
    _match_due,
    _match_status,
    _match_id,
)


def is_list_command(text: str) -> bool:
    """Check whether text is exactly the list command (`!tasks`)."""
    return text.strip().lower() == LIST_COMMAND


def is_task_command(text: str) -> bool:
    """Check whether text starts with the `!task` prefix.

    Examples:
        >>> is_task_command("!task buy milk")
        True
        >>> is_task_command("!TASK")
        True
        >>> is_task_command("!tasks")
        False
        >>> is_task_command("please !task this")
        False
    """
    return bool(TASK_COMMAND_PATTERN.match(text.strip()))


def parse_flags(text: str, today: date | None = None) -> ParseResult:
    """Strip recognized flags from the front of text.

    Args:
        text: Command body without the prefix.
        today: Reference date for year-less due dates.

    Returns:
        ParseResult with the collected flags and the trimmed residual text.
    """
    today = today or date.today()
    intent = TaskIntent()
    remaining = text.strip()

    while remaining:
        for matcher in FLAG_MATCHERS:
            matched = matcher(intent, remaining, today)
            if matched is not None:
                intent, remaining = matched
                break
        else:
            break

    return ParseResult(intent=intent, residual_text=remaining.strip())


def parse_task_command(text: str, today: date | None = None) -> ParseResult:
    """Parse a `!task` command into flags and residual text.

    The caller is expected to have checked is_task_command(). This function
    never raises.

    Args:
        text: Raw message text starting with `!task`.
        today: Reference date for year-less due dates.

    Returns:
        ParseResult. The intent's task_name is left unset; the residual text
        becomes the name once the reconciler settles on this result.

    Examples:
        >>> result = parse_task_command("!task -high -due 2025-03-01 ship it")
        >>> result.intent.priority, result.intent.due_date, result.residual_text
        ('High', '2025-03-01', 'ship it')
    """
    body = text.strip()[len(TASK_PREFIX) :]
    return parse_flags(body, today=today)
