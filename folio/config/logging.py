"""
Structured logging configuration using structlog.

Development renders colored console lines; staging and production emit one
JSON object per line. Search text is user input, so every event's ``query``
field is capped before rendering.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from folio.config.settings import get_settings

MAX_LOGGED_QUERY_LENGTH = 50

_QUIET_LOGGERS = ("aiosqlite", "uvicorn.access", "httpx")


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Tag events with app name, version and environment."""
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.environment
    return event_dict


def cap_query_length(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Truncate the ``query`` field, marking cut values with an ellipsis."""
    query = event_dict.get("query")
    if isinstance(query, str) and len(query) > MAX_LOGGED_QUERY_LENGTH:
        event_dict["query"] = query[:MAX_LOGGED_QUERY_LENGTH] + "..."
    return event_dict


def build_processors(json_output: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        cap_query_length,
        add_app_context,
    ]
    # The renderer must stay last
    if json_output:
        return processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return processors + [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name (default from settings)
        json_output: Force JSON or console rendering (default by environment)
    """
    settings = get_settings()
    level = level or settings.log_level
    if json_output is None:
        json_output = settings.environment != "development"

    structlog.configure(
        processors=build_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
