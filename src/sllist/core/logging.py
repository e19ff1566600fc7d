"""
Structured logging for the sllist engine.

The engine logs a handful of lifecycle events (``list_created``,
``list_destroyed``, ``list_cleared``) and one debug event for every call it
declines (``operation_ignored``). Events go through structlog and are handed
to the stdlib ``logging`` module, so an application's own handlers decide
where they end up. Nothing is written to stdout, where ``print_list`` writes.

Architecture:
    ::

        get_logger(__name__)   (never configures structlog)
            │
        configure_logging()    (application startup only)
            ↓
        processor chain:
          1. merge_contextvars
          2. add_log_level / add_logger_name
          3. TimeStamper(fmt="iso")
          4. StackInfoRenderer / set_exc_info
          5. add_service_metadata
          6. elasticsearch_compatible   (JSON only)
          7. JSONRenderer | ConsoleRenderer
            ↓
        logging.getLogger(name)   (level set on the "sllist" logger)

Examples:
    >>> from sllist.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> logger = get_logger(__name__)
    >>> logger.debug("operation_ignored", operation="remove_front")

Guardrails:
    ❌ DON'T: Call ``configure_logging`` from library code
    ✅ DO: Let applications call it once at startup

Tags:
    logging, structlog, observability, sllist

Doc-Types:
    - API Reference
    - Observability Guide
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from sllist.core.settings import get_settings


_SERVICE_NAME = "sllist"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")
    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")
    return event_dict


def _configure_structlog(level: str, json_format: bool | None, service: str) -> None:
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # module-level loggers must pick up a later configure_logging() call
        cache_logger_on_first_use=False,
    )


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    service: str | None = None,
) -> None:
    """Configure structured logging for an application using sllist.

    Unset arguments fall back to :class:`~sllist.core.settings.SllistSettings`.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs

    Example:
        configure_logging(level="DEBUG", json_format=False)
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json_format is None:
        json_format = settings.log_json

    _configure_structlog(level, json_format, service or settings.service_name)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
    )
    logging.getLogger("sllist").setLevel(getattr(logging, level))


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger bound to the stdlib logger ``name``.

    Never configures structlog. Processors come from whatever the
    application configured (structlog's defaults otherwise), and the stdlib
    logger's level decides what is emitted, so an unconfigured process
    drops the engine's debug events instead of printing them.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.wrap_logger(
        logging.getLogger(name or _SERVICE_NAME),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


__all__ = [
    "configure_logging",
    "get_logger",
]
