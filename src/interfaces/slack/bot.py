# src/interfaces/slack/bot.py
"""Slack task bot with AsyncApp and AsyncSocketModeHandler.

Listens to channel messages and answers:
- `!task [-high|-medium|-low] [-due <date>] [-status <status>] [-id <n>] text`
- `!tasks`

Clients (Notion store, language-model interpreter, Slack app) are built once
here and injected into the dispatcher.
"""

import asyncio
import logging

from dotenv import load_dotenv
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp

from src.config import Settings
from src.core.agent.factory import create_interpreter
from src.core.tasks.dispatcher import TaskCommandDispatcher
from src.core.tasks.reconciler import IntentReconciler
from src.interfaces.notion.store import NotionTaskStore
from src.interfaces.slack.handlers import create_message_handler
from src.utils.logging import configure_logging
from src.utils.observability import setup_logfire

logger = logging.getLogger(__name__)


def create_dispatcher(
    settings: Settings, store: NotionTaskStore
) -> TaskCommandDispatcher:
    """Wire the reconciler and store into a dispatcher.

    Args:
        settings: Application settings.
        store: Task store.

    Returns:
        TaskCommandDispatcher ready to handle messages.
    """
    reconciler = IntentReconciler(interpreter=create_interpreter(settings))
    return TaskCommandDispatcher(store, reconciler, timezone=settings.timezone)


def create_bot(
    settings: Settings,
) -> tuple[AsyncApp, AsyncSocketModeHandler, NotionTaskStore]:
    """Create and configure the Slack bot.

    Args:
        settings: Application settings.

    Returns:
        Tuple of (AsyncApp, AsyncSocketModeHandler, NotionTaskStore). The
        store must be closed by the caller.
    """
    store = NotionTaskStore(
        token=settings.notion_token,
        database_id=settings.notion_database_id,
        api_version=settings.notion_api_version,
    )
    dispatcher = create_dispatcher(settings, store)

    app = AsyncApp(token=settings.slack_bot_token)
    app.event("message")(create_message_handler(dispatcher, settings.task_channel_id))

    handler = AsyncSocketModeHandler(app, settings.slack_app_token)
    return app, handler, store


async def start_bot(settings: Settings) -> None:
    """Start the Slack bot with Socket Mode."""
    _, handler, store = create_bot(settings)

    if settings.task_channel_id:
        logger.info(
            "Serving task commands in channel %s only", settings.task_channel_id
        )

    logger.info("Starting Slack task bot with Socket Mode...")
    try:
        await handler.start_async()
    except asyncio.CancelledError:
        logger.info("Received shutdown signal")
    finally:
        await handler.close_async()
        await store.aclose()
        logger.info("Slack task bot stopped")


def main() -> None:
    """Entry point with graceful shutdown handling."""
    load_dotenv()
    settings = Settings()
    configure_logging(settings.log_level, settings.log_format)
    setup_logfire(settings)

    try:
        asyncio.run(start_bot(settings))
    except KeyboardInterrupt:
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
