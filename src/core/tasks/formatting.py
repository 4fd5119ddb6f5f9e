# src/core/tasks/formatting.py
"""Reply text for task commands.

Replies use Slack mrkdwn (*bold*, <url|label>, ``` blocks).
"""

from src.core.tasks.models import STATUSES, TaskRecord

USAGE = (
    "Usage: `!task [-high|-medium|-low] [-due <date>] [-status <status>] "
    "[-id <n>] <task name>` or `!tasks` to list open tasks"
)

EMPTY_LIST_REPLY = ":tada: No open tasks. Everything is done!"

NAME_LIMIT = 30
NAME_CUT = 27

FIELD_LABELS = {
    "status": "Status",
    "due_date": "Due",
    "priority": "Priority",
}


def escape_mrkdwn(text: str) -> str:
    """Escape the characters Slack treats as control sequences."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def truncate_name(name: str) -> str:
    """Cut names longer than 30 characters to 27 plus an ellipsis.

    Examples:
        >>> truncate_name("short")
        'short'
        >>> truncate_name("x" * 31)
        'xxxxxxxxxxxxxxxxxxxxxxxxxxx...'
    """
    if len(name) > NAME_LIMIT:
        return name[:NAME_CUT] + "..."
    return name


def _task_label(record: TaskRecord) -> str:
    return f"#{record.task_id}" if record.task_id is not None else "Task"


def format_created(
    record: TaskRecord,
    priority: str | None = None,
    due_date: str | None = None,
    status: str | None = None,
) -> str:
    """Reply for a newly created task.

    Args:
        record: Record returned by the store.
        priority: Priority the user asked for.
        due_date: Due date the user asked for.
        status: Status the user asked for.

    Returns:
        Reply text with id, echoed fields and link.
    """
    details = []
    if priority:
        details.append(f"{priority} priority")
    if due_date:
        details.append(f"due {due_date}")
    if status:
        details.append(status)

    id_text = f" #{record.task_id}" if record.task_id is not None else ""
    detail_text = f" ({', '.join(details)})" if details else ""
    name = escape_mrkdwn(record.name)
    lines = [f":white_check_mark: Task{id_text} created{detail_text}: *{name}*"]
    if record.url:
        lines.append(f"<{record.url}>")
    return "\n".join(lines)


def format_updated(record: TaskRecord, changes: dict[str, str]) -> str:
    """Reply for an updated task listing exactly the changed fields."""
    name = escape_mrkdwn(record.name)
    lines = [f":pencil2: Updated task {_task_label(record)}: *{name}*"]
    for field_name, value in changes.items():
        lines.append(f"• {FIELD_LABELS.get(field_name, field_name)} → {value}")
    if record.url:
        lines.append(f"<{record.url}>")
    return "\n".join(lines)


def format_task_table(records: list[TaskRecord]) -> str:
    """Render open tasks as a monospace table.

    Args:
        records: Tasks in display order.

    Returns:
        Table wrapped in a code block, or the empty-state reply.
    """
    if not records:
        return EMPTY_LIST_REPLY

    header = ("ID", "Task", "Status", "Due")
    rows = [
        (
            str(record.task_id) if record.task_id is not None else "-",
            truncate_name(record.name),
            record.status or "-",
            record.due_date or "-",
        )
        for record in records
    ]
    widths = [max(len(row[i]) for row in [header, *rows]) for i in range(len(header))]

    def _line(row: tuple[str, ...]) -> str:
        # pad before escaping so columns line up as rendered
        padded = "  ".join(cell.ljust(width) for cell, width in zip(row, widths))
        return escape_mrkdwn(padded.rstrip())

    lines = [_line(header), "  ".join("-" * width for width in widths)]
    lines.extend(_line(row) for row in rows)
    body = "\n".join(lines)
    count = len(records)
    return f"*Open tasks ({count})*\n```\n{body}\n```"


def format_missing_name() -> str:
    return f":x: Please provide a task name. {USAGE}"


def format_unknown_status(status: str) -> str:
    allowed = ", ".join(STATUSES)
    return f":x: Unknown status '{status}'. Use one of: {allowed}"


def format_no_updates(task_id: int) -> str:
    return (
        f":x: No updates specified for task #{task_id}. "
        "Add -status, -due or a priority flag."
    )


def format_not_found(task_id: int) -> str:
    return f":x: Task #{task_id} not found."


STORE_ACTIONS = {
    "create": "create the task",
    "find": "look up the task",
    "update": "update the task",
    "list": "list tasks",
}


def format_store_failure(operation: str) -> str:
    action = STORE_ACTIONS.get(operation, "reach the task database")
    return f":x: Failed to {action}. Check the bot logs."
