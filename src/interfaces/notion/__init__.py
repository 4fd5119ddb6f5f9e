"""Notion integration package.

Provides NotionTaskStore, the Notion-backed implementation of the
TaskStore protocol used by the task command dispatcher.
"""

from src.interfaces.notion.store import NotionTaskStore, page_to_record

__all__ = ["NotionTaskStore", "page_to_record"]
