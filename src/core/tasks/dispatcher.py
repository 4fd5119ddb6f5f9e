# src/core/tasks/dispatcher.py
"""Command dispatcher for task messages.

Routes `!tasks` to the store listing and `!task ...` through the intent
reconciler to create or update a task. Every command gets exactly one reply;
failures are converted to reply text here and never escape to the chat
listener.
"""

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from src.core.tasks.formatting import (
    format_created,
    format_missing_name,
    format_no_updates,
    format_not_found,
    format_store_failure,
    format_task_table,
    format_unknown_status,
    format_updated,
)
from src.core.tasks.models import TaskIntent
from src.core.tasks.parser import is_list_command, is_task_command
from src.core.tasks.reconciler import IntentReconciler
from src.core.tasks.status import is_canonical_status
from src.core.tasks.store import StoreError, TaskStore

logger = logging.getLogger(__name__)

GENERIC_FAILURE_REPLY = (
    ":x: Something went wrong handling that command. Check the bot logs."
)


class ValidationFailure(Exception):
    """Raised when a command is rejected before reaching the store."""

    def __init__(self, reply: str):
        super().__init__(reply)
        self.reply = reply


class TaskCommandDispatcher:
    """Dispatcher turning chat messages into task store operations.

    Attributes:
        store: Task store used for create/find/update/list.
        reconciler: Reconciler producing the final intent for `!task`.

    Example:
        >>> dispatcher = TaskCommandDispatcher(store, IntentReconciler())
        >>> reply = await dispatcher.handle("!task -high buy milk")
        >>> if reply is not None:
        ...     await say(reply)
    """

    def __init__(
        self,
        store: TaskStore,
        reconciler: IntentReconciler,
        timezone: str = "UTC",
    ) -> None:
        """Initialize the dispatcher.

        Args:
            store: Task store implementation.
            reconciler: Intent reconciler.
            timezone: IANA zone name used to determine "today".
        """
        self.store = store
        self.reconciler = reconciler
        self._tz = ZoneInfo(timezone)

    def today(self) -> date:
        """Current date in the configured timezone."""
        return datetime.now(self._tz).date()

    async def handle(self, text: str) -> str | None:
        """Handle one inbound message.

        Args:
            text: Message text.

        Returns:
            Reply text, or None if the message is not a task command.
        """
        if is_list_command(text):
            operation = "list"
        elif is_task_command(text):
            operation = "task"
        else:
            return None

        try:
            if operation == "list":
                return await self._list_tasks()
            return await self._handle_task(text)
        except ValidationFailure as e:
            logger.info("Rejected command: %s", e.reply)
            return e.reply
        except StoreError as e:
            logger.exception("Task store %s failed: %s", e.operation, e)
            return format_store_failure(e.operation)
        except Exception as e:
            logger.exception("Unexpected error handling command: %s", e)
            return GENERIC_FAILURE_REPLY

    async def _list_tasks(self) -> str:
        records = await self.store.list_incomplete()
        logger.info("Listing %d open task(s)", len(records))
        return format_task_table(records)

    async def _handle_task(self, text: str) -> str:
        interpretation = await self.reconciler.reconcile(text, today=self.today())
        intent = interpretation.intent
        logger.info(
            "Task intent from %s (escalated=%s): %s",
            interpretation.source,
            interpretation.escalated,
            intent,
        )

        if intent.status is not None and not is_canonical_status(intent.status):
            raise ValidationFailure(format_unknown_status(intent.status))
        if not intent.is_actionable:
            raise ValidationFailure(format_missing_name())

        if intent.task_id is not None:
            return await self._update_task(intent.task_id, intent)
        return await self._create_task(intent)

    async def _create_task(self, intent: TaskIntent) -> str:
        name = (intent.task_name or "").strip()
        record = await self.store.create(
            name,
            priority=intent.priority,
            due_date=intent.due_date,
            status=intent.status,
        )
        return format_created(
            record,
            priority=intent.priority,
            due_date=intent.due_date,
            status=intent.status,
        )

    async def _update_task(self, task_id: int, intent: TaskIntent) -> str:
        # task_name is never used on this path, not even as a rename
        changes = intent.updates()
        if not changes:
            raise ValidationFailure(format_no_updates(task_id))

        record = await self.store.find_by_id(task_id)
        if record is None:
            raise ValidationFailure(format_not_found(task_id))

        updated = await self.store.update(record, **changes)
        return format_updated(updated, changes)
