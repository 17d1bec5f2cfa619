"""
Structured Logging Module using structlog

Every log line emitted by the fetch pipeline carries:
- the derived cache key of the fetch in progress (via context variables)
- a stage identifier for the step of the fetch protocol
- an ISO timestamp and upper-case level name

Architectural Decision: structlog for structured logging
- Context-aware logging with automatic field injection
- JSON output for log aggregation, console output for development
"""

import logging
import sys
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, WrappedLogger

from redis_cacher.core.config.settings import get_settings

FETCH_CONTEXT_KEY = "cache_key"


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def add_log_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Upper-case the level name added by structlog.stdlib.add_log_level."""
    if "level" in event_dict:
        event_dict["level"] = event_dict["level"].upper()
    return event_dict


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Setup structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')

    Values not given are taken from LoggingSettings.
    """
    if log_level is None or log_format is None:
        settings = get_settings()
        log_level = log_level or settings.logging.LOG_LEVEL
        log_format = log_format or settings.logging.LOG_FORMAT

    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level.upper())
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # cache_key of the current fetch
            add_timestamp,
            structlog.stdlib.add_log_level,
            add_log_level_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value", stage="FETCH.2")
    """
    return structlog.get_logger(name)


def fetch_context(cache_key: str):
    """
    Context manager binding the derived cache key to every log line inside it.

    The previous binding is restored on exit, so a fetch awaited inline does
    not leak its key into the caller's context. Background write tasks copy
    the context at creation and keep the key of the fetch that spawned them.

    Usage:
        with fetch_context("cacher:user:42"):
            logger.debug("Value found in cache")
    """
    return structlog.contextvars.bound_contextvars(**{FETCH_CONTEXT_KEY: cache_key})


def get_fetch_context() -> str | None:
    """Get the cache key bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get(FETCH_CONTEXT_KEY)


def log_stage(
    logger: structlog.stdlib.BoundLogger, stage: str, message: str, level: str = "info", **kwargs
) -> None:
    """
    Log a message with stage information.

    Usage:
        log_stage(logger, Stage.FETCH_HIT, "Cache hit", level="debug")
    """
    log_func = getattr(logger, level.lower())
    log_func(message, stage=str(getattr(stage, "value", stage)), **kwargs)
