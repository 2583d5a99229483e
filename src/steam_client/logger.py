"""
Structured logging for the Steam client.

Every client component (api_client, rate_limiter, matcher, steam_client)
logs through a structlog logger bound with ``component=<name>``. Events
are short sentence-case messages with key/value context such as
``app_id``, ``endpoint`` or ``retry_after``.

The library only emits events. Applications that embed it decide how they
are rendered by calling ``setup_logging`` once at startup; until then
structlog's default console output is used.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from steam_client.config import LoggingConfig


def _renderer(config: LoggingConfig) -> "Processor":
    if config.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Route the client's log events to stdout.

    JSON lines suit log shippers; the console renderer is for local
    debugging of searches and rate limiting. Call it before constructing
    clients, since components bind their loggers at construction time.

    Args:
        config: Logging configuration (read from LOG_* environment if None)
    """
    config = config or LoggingConfig()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if config.include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
    processors.append(_renderer(config))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # httpx logs each request through stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.level),
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a logger for a client component.

    Args:
        name: Logger name (the calling module's ``__name__``)
        **initial_context: Values bound to every event, typically ``component``

    Example:
        >>> logger = get_logger(__name__, component="matcher")
        >>> logger.info("Search index built", catalog_size=152_000)
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
