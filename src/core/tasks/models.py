# src/core/tasks/models.py
"""Data models for task commands.

This module defines the transient structures that flow through the
command pipeline for a single chat message:

- TaskIntent: what the user wants done (create or update a task)
- ParseResult: the deterministic parser's output plus leftover text
- Interpretation: the final intent and which interpreter produced it
- TaskRecord: a task as stored in the task database
"""

from dataclasses import dataclass, field
from typing import Literal

PRIORITIES: tuple[str, ...] = ("High", "Medium", "Low")
STATUSES: tuple[str, ...] = ("Not started", "In progress", "Done")

DEFAULT_STATUS = "Not started"


@dataclass
class TaskIntent:
    """Structured representation of a task command.

    Attributes:
        task_id: Numeric id of an existing task. Present means "update".
        task_name: Name for a new task. Ignored when task_id is set.
        priority: One of PRIORITIES.
        due_date: Canonical YYYY-MM-DD string.
        status: Status label. Canonical after validation; the deterministic
            parser passes unrecognized values through unchanged.
    """

    task_id: int | None = None
    task_name: str | None = None
    priority: str | None = None
    due_date: str | None = None
    status: str | None = None

    @property
    def is_actionable(self) -> bool:
        """True when the intent can reach the store (an id or a name)."""
        return self.task_id is not None or bool(
            self.task_name and self.task_name.strip()
        )

    def updates(self) -> dict[str, str]:
        """Return the fields an update command would change.

        Returns:
            Mapping of field name to new value, in display order.
        """
        changes: dict[str, str] = {}
        if self.status:
            changes["status"] = self.status
        if self.due_date:
            changes["due_date"] = self.due_date
        if self.priority:
            changes["priority"] = self.priority
        return changes


@dataclass
class ParseResult:
    """Output of the deterministic flag parser.

    Attributes:
        intent: Partially filled intent (task_name is not set here).
        residual_text: Text left after every recognized flag was stripped.
    """

    intent: TaskIntent = field(default_factory=TaskIntent)
    residual_text: str = ""


@dataclass
class Interpretation:
    """Final intent chosen by the reconciler.

    Attributes:
        intent: The authoritative intent.
        source: "parser" for the deterministic result, "model" when the
            language-model answer replaced it.
        escalated: Whether the ambiguity detector asked for the model.
    """

    intent: TaskIntent
    source: Literal["parser", "model"] = "parser"
    escalated: bool = False


@dataclass
class TaskRecord:
    """A task as stored in the task database.

    Attributes:
        page_id: Opaque store handle used for updates.
        task_id: Human-facing numeric id, if the database assigns one.
        name: Display name.
        url: Link to the task.
        status: Current status label.
        due_date: Due date as YYYY-MM-DD.
        priority: Priority label.
    """

    page_id: str
    task_id: int | None
    name: str
    url: str = ""
    status: str | None = None
    due_date: str | None = None
    priority: str | None = None
