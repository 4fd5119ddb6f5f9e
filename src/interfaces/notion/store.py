# src/interfaces/notion/store.py
"""Notion implementation of the TaskStore protocol.

Talks to the Notion REST API with httpx. The target database is expected to
have these properties:

- "Task name": title
- "Status": status (Not started / In progress / Done)
- "Priority": select (High / Medium / Low)
- "Due date": date
- "ID": unique_id (auto-numbered task id)

No retries are performed here. Every HTTP or payload error is raised as
StoreError for the dispatcher to report.
"""

import logging
from typing import Any

import httpx

from src.core.tasks.models import DEFAULT_STATUS, TaskRecord
from src.core.tasks.store import StoreError

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"

NAME_PROPERTY = "Task name"
STATUS_PROPERTY = "Status"
PRIORITY_PROPERTY = "Priority"
DUE_DATE_PROPERTY = "Due date"
ID_PROPERTY = "ID"


def _rich_text(parts: list[dict[str, Any]]) -> str:
    return "".join(
        part.get("plain_text") or part.get("text", {}).get("content", "")
        for part in parts
    )


def page_to_record(page: dict[str, Any]) -> TaskRecord:
    """Convert a Notion page object to a TaskRecord.

    Args:
        page: Page object as returned by the Notion API.

    Returns:
        TaskRecord built from the page properties.

    Raises:
        StoreError: If the page has no id.
    """
    page_id = page.get("id")
    if not page_id:
        raise StoreError("Notion page without id", operation="read")

    props = page.get("properties", {})
    status = props.get(STATUS_PROPERTY, {}).get("status") or {}
    priority = props.get(PRIORITY_PROPERTY, {}).get("select") or {}
    due = props.get(DUE_DATE_PROPERTY, {}).get("date") or {}
    unique_id = props.get(ID_PROPERTY, {}).get("unique_id") or {}
    due_start = due.get("start")

    return TaskRecord(
        page_id=page_id,
        task_id=unique_id.get("number"),
        name=_rich_text(props.get(NAME_PROPERTY, {}).get("title", [])),
        url=page.get("url", ""),
        status=status.get("name"),
        due_date=due_start[:10] if due_start else None,
        priority=priority.get("name"),
    )


def build_properties(
    name: str | None = None,
    status: str | None = None,
    due_date: str | None = None,
    priority: str | None = None,
) -> dict[str, Any]:
    """Build a Notion properties payload containing only the given fields."""
    properties: dict[str, Any] = {}
    if name is not None:
        properties[NAME_PROPERTY] = {"title": [{"text": {"content": name}}]}
    if status is not None:
        properties[STATUS_PROPERTY] = {"status": {"name": status}}
    if due_date is not None:
        properties[DUE_DATE_PROPERTY] = {"date": {"start": due_date}}
    if priority is not None:
        properties[PRIORITY_PROPERTY] = {"select": {"name": priority}}
    return properties


class NotionTaskStore:
    """Task store backed by a Notion database.

    Example:
        >>> store = NotionTaskStore(token="secret_...", database_id="2f6c...")
        >>> record = await store.create("write report", priority="High")
        >>> print(record.task_id, record.url)
        >>> await store.aclose()
    """

    def __init__(
        self,
        token: str,
        database_id: str,
        api_version: str = "2022-06-28",
        timeout: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            token: Notion integration token.
            database_id: Target database id.
            api_version: Value of the Notion-Version header.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            ValueError: If token or database_id is empty.
        """
        if not token or not database_id:
            raise ValueError("NOTION_TOKEN and NOTION_DATABASE_ID are required.")

        self.database_id = database_id
        self._client = httpx.AsyncClient(
            base_url=NOTION_API_URL,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": api_version,
                "Content-Type": "application/json",
            },
        )

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON body.

        Raises:
            StoreError: On transport errors, non-2xx responses or bad JSON.
        """
        try:
            response = await self._client.request(method, path, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Notion %s failed with HTTP %s: %s",
                operation,
                e.response.status_code,
                e.response.text[:200],
            )
            raise StoreError(
                f"Notion returned HTTP {e.response.status_code}", operation=operation
            ) from e
        except httpx.HTTPError as e:
            raise StoreError(f"Notion request failed: {e}", operation=operation) from e
        except ValueError as e:
            raise StoreError("Notion returned invalid JSON", operation=operation) from e

    async def _query(
        self, operation: str, body: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Query the database, following pagination cursors."""
        pages: list[dict[str, Any]] = []
        cursor: str | None = None
        while True:
            request_body = dict(body)
            if cursor:
                request_body["start_cursor"] = cursor
            data = await self._request(
                "POST", f"/databases/{self.database_id}/query", operation, request_body
            )
            pages.extend(data.get("results", []))
            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                return pages

    async def create(
        self,
        name: str,
        priority: str | None = None,
        due_date: str | None = None,
        status: str | None = None,
    ) -> TaskRecord:
        """Create a task page in the database."""
        payload = {
            "parent": {"database_id": self.database_id},
            "properties": build_properties(
                name=name,
                status=status or DEFAULT_STATUS,
                due_date=due_date,
                priority=priority,
            ),
        }
        page = await self._request("POST", "/pages", "create", payload)
        record = page_to_record(page)
        logger.info("Created Notion task %s (%s)", record.task_id, record.page_id)
        return record

    async def find_by_id(self, task_id: int) -> TaskRecord | None:
        """Find a task by its unique_id number."""
        pages = await self._query(
            "find",
            {
                "filter": {"property": ID_PROPERTY, "unique_id": {"equals": task_id}},
                "page_size": 1,
            },
        )
        if not pages:
            return None
        return page_to_record(pages[0])

    async def update(
        self,
        record: TaskRecord,
        status: str | None = None,
        due_date: str | None = None,
        priority: str | None = None,
    ) -> TaskRecord:
        """Patch the given properties of an existing task page."""
        properties = build_properties(
            status=status, due_date=due_date, priority=priority
        )
        page = await self._request(
            "PATCH", f"/pages/{record.page_id}", "update", {"properties": properties}
        )
        logger.info("Updated Notion task %s: %s", record.task_id, sorted(properties))
        return page_to_record(page)

    async def list_incomplete(self) -> list[TaskRecord]:
        """List tasks whose status is not Done, earliest due date first."""
        pages = await self._query(
            "list",
            {
                "filter": {
                    "property": STATUS_PROPERTY,
                    "status": {"does_not_equal": "Done"},
                },
                "sorts": [{"property": DUE_DATE_PROPERTY, "direction": "ascending"}],
            },
        )
        return [page_to_record(page) for page in pages]

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
