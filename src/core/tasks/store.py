# src/core/tasks/store.py
"""Task store protocol.

Decouples the command dispatcher from a specific task database. The Notion
implementation lives in src.interfaces.notion.
"""

from typing import Protocol

from src.core.tasks.models import TaskRecord


class StoreError(Exception):
    """Raised when the task database cannot complete a request."""

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.operation = operation


class TaskStore(Protocol):
    """Protocol for task database backends.

    Implementations must not retry internally; failures surface as
    StoreError and are reported by the dispatcher.
    """

    async def create(
        self,
        name: str,
        priority: str | None = None,
        due_date: str | None = None,
        status: str | None = None,
    ) -> TaskRecord:
        """Create a task. Status defaults to "Not started"."""
        ...

    async def find_by_id(self, task_id: int) -> TaskRecord | None:
        """Look up a task by its numeric id."""
        ...

    async def update(
        self,
        record: TaskRecord,
        status: str | None = None,
        due_date: str | None = None,
        priority: str | None = None,
    ) -> TaskRecord:
        """Update the given fields of an existing task."""
        ...

    async def list_incomplete(self) -> list[TaskRecord]:
        """List tasks not marked Done, earliest due date first."""
        ...
