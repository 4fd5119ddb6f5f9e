# src/utils/logging.py
"""Root logging setup for the task bot.

Two output modes are supported, picked by the LOG_FORMAT setting:
- "text": one human-readable line per record
- "json": one JSON object per record, see StructuredFormatter

Every record written while a chat message is being handled carries that
message's key ("<channel>:<ts>"), so a single command can be traced from
the Slack event through the parser, the model and the Notion calls.
"""

import json
import logging
from contextvars import ContextVar
from typing import Any

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMATS = ("text", "json")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(request_id: str) -> None:
    """Bind the key of the chat message being handled.

    Args:
        request_id: Message key, e.g. "C123:1700000000.000100".
    """
    request_id_var.set(request_id)


def get_request_id() -> str:
    """Return the bound message key, or "" outside a message."""
    return request_id_var.get()


class StructuredFormatter(logging.Formatter):
    """Formats records as single-line JSON objects.

    Keys: timestamp, level, logger, message, plus request_id while a
    message is being handled and exception when exc_info is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False)


def _resolve_level(level: str) -> int:
    """Map a level name to its number, INFO for unknown names."""
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Install a single stream handler on the root logger.

    Existing root handlers are replaced so repeated calls do not duplicate
    output.

    Args:
        level: Level name such as "INFO" or "DEBUG".
        log_format: One of LOG_FORMATS. Unknown values mean "text".
    """
    handler = logging.StreamHandler()
    if log_format.strip().lower() == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logging.basicConfig(level=_resolve_level(level), handlers=[handler], force=True)

    # slack_bolt and httpx are chatty at INFO
    for name in ("httpx", "slack_bolt", "slack_sdk"):
        logging.getLogger(name).setLevel(logging.WARNING)
