"""Infrastructure - Database, logging."""

from product_api.infra.database import (
    close_db_engine,
    create_schema,
    get_db_session,
)
from product_api.infra.logging import bind_request_context, get_logger, setup_logging

__all__ = [
    "get_db_session",
    "close_db_engine",
    "create_schema",
    "setup_logging",
    "get_logger",
    "bind_request_context",
]
