"""Optional Logfire tracing for model and Notion calls."""

import logging

from src.config import Settings

logger = logging.getLogger(__name__)


def setup_logfire(settings: Settings) -> bool:
    """Turn on Logfire when LOGFIRE_TOKEN is configured.

    Instruments pydantic-ai (interpreter runs) and httpx (Notion requests).
    Must run before the first command is handled.

    Args:
        settings: Application settings.

    Returns:
        True if tracing is active.
    """
    if not settings.logfire_token:
        logger.debug("LOGFIRE_TOKEN not set, tracing disabled")
        return False

    try:
        import logfire

        logfire.configure(
            token=settings.logfire_token,
            service_name="task-relay",
            send_to_logfire="if-token-present",
        )
        logfire.instrument_pydantic_ai()
        logfire.instrument_httpx()
    except Exception as e:
        # The bot works without tracing
        logger.warning("Logfire setup failed, continuing without it: %s", e)
        return False

    logger.info("Logfire tracing enabled")
    return True
