"""Structured logging configuration using structlog.

Console output in dev, JSON lines everywhere else. Standard-library records
(uvicorn, SQLAlchemy) go through the same renderer so one request produces
one consistent stream.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from product_api import __version__
from product_api.config import settings

QUIET_LOGGERS = ("uvicorn.access", "aiosqlite", "asyncio")


def add_service_info(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp every event with the service name, version and environment."""
    event_dict.setdefault("service", settings.project_name)
    event_dict.setdefault("version", __version__)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _renderer() -> Processor:
    if settings.log_json and settings.environment != "dev":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging() -> None:
    """Configure structlog and route stdlib logging through it.

    Sets up:
    - Shared processors (context vars, level, timestamp, service info)
    - JSON or console rendering depending on environment
    - A root stdlib handler using ``structlog.stdlib.ProcessorFormatter``
    """
    level = logging.getLevelName(settings.log_level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            _renderer(),
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # Reduce noise from third-party libraries
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )


def bind_request_context(method: str, path: str, request_id: str | None = None) -> str:
    """Start a fresh log context for one HTTP request.

    Returns:
        The request id bound to the context (generated when not supplied)
    """
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=method,
        path=path,
    )
    return request_id


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Logger name (usually __name__)
        **initial_context: Initial context to bind to the logger

    Returns:
        Bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
