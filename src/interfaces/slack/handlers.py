# src/interfaces/slack/handlers.py
"""Event handlers for the Slack task bot.

Provides the `message` event handler: it filters out bot messages, message
edits and (optionally) other channels, hands `!task` / `!tasks` commands to
the TaskCommandDispatcher, and posts the single reply in the message's
thread.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from slack_sdk.errors import SlackApiError

from src.core.tasks.dispatcher import TaskCommandDispatcher
from src.utils.logging import set_request_id

logger = logging.getLogger(__name__)

MessageHandler = Callable[..., Awaitable[None]]


def _is_bot_message(event: dict[str, Any]) -> bool:
    """Check whether an event was posted by a bot (including this one)."""
    return bool(event.get("bot_id")) or event.get("subtype") == "bot_message"


def _unescape(text: str) -> str:
    """Undo Slack's escaping of &, < and > in message text."""
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


def _should_handle(event: dict[str, Any], channel_id: str) -> bool:
    """Apply bot, subtype and channel filtering to a message event.

    Args:
        event: Slack message event.
        channel_id: Only channel to serve; empty serves every channel.

    Returns:
        True if the message should be passed to the dispatcher.
    """
    if _is_bot_message(event):
        return False
    # message_changed, channel_join, ... carry no new command
    if event.get("subtype"):
        return False
    if channel_id and event.get("channel") != channel_id:
        return False
    return True


def create_message_handler(
    dispatcher: TaskCommandDispatcher, channel_id: str = ""
) -> MessageHandler:
    """Create the `message` event listener bound to a dispatcher.

    Args:
        dispatcher: Dispatcher handling task commands.
        channel_id: Optional channel restriction.

    Returns:
        Async listener accepting Slack's `event` and `say` arguments.
    """

    async def handle_message(event: dict[str, Any], say: Callable) -> None:
        """Handle one Slack message event."""
        if not _should_handle(event, channel_id):
            return

        text = _unescape(event.get("text") or "")
        event_ts = event.get("ts", "")
        channel = event.get("channel", "")
        set_request_id(f"{channel}:{event_ts}")

        reply = await dispatcher.handle(text)
        if reply is None:
            return

        logger.info(
            "Replying to command from %s in %s: %s",
            event.get("user", "unknown"),
            channel,
            text[:100],
        )
        thread_ts = event.get("thread_ts") or event_ts
        try:
            await say(text=reply, thread_ts=thread_ts)
        except SlackApiError as e:
            logger.error("Failed to send reply to Slack: %s", e.response.get("error"))

    return handle_message

