"""Logging and tracing helpers shared by the task bot."""

from src.utils.logging import configure_logging, get_request_id, set_request_id
from src.utils.observability import setup_logfire

__all__ = [
    "configure_logging",
    "get_request_id",
    "set_request_id",
    "setup_logfire",
]
