"""Async database configuration.

Provides:
- Async SQLAlchemy engine and session factory
- Per-request session context with rollback on error
- Schema creation and connectivity check used at startup
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from product_api.config import settings
from product_api.infra.logging import get_logger
from product_api.models.base import Base

logger = get_logger(__name__)

# Global engine (initialized lazily, disposed on shutdown)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the async database engine."""
    global _engine

    if _engine is None:
        url = make_url(settings.database_url)
        options: dict[str, Any] = {"echo": settings.debug}

        # SQLite pools do not take sizing arguments
        if url.get_backend_name() != "sqlite":
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_pool_max_overflow,
                pool_pre_ping=True,  # Verify connections before use
                pool_recycle=1800,  # Recycle connections after 30 min
            )

        logger.info(
            "Creating database engine",
            backend=url.get_backend_name(),
            database=url.database,
        )
        _engine = create_async_engine(url, **options)

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _session_factory


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get an async database session.

    Writers commit explicitly, so leaving the block only closes the
    session. Any exception rolls back pending work and is re-raised.

    Example:
        async with get_db_session() as session:
            result = await session.execute(select(Product))
    """
    factory = get_session_factory()
    session = factory()

    try:
        yield session

    except Exception as e:
        await session.rollback()
        logger.error("Database session error", error=str(e))
        raise

    finally:
        await session.close()


async def create_schema(engine: AsyncEngine | None = None) -> None:
    """Create all tables registered on the model metadata."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured", tables=sorted(Base.metadata.tables))


async def close_db_engine() -> None:
    """Close the database engine and all connections.

    Call this during application shutdown.
    """
    global _engine, _session_factory

    if _engine is not None:
        logger.info("Closing database engine")
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def check_db_connection(session: AsyncSession) -> bool:
    """Run a trivial query on ``session``.

    Returns:
        True if the query succeeded, False otherwise
    """
    try:
        await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database connection failed", error=str(e))
        return False


async def verify_db_connection() -> bool:
    """Verify database connectivity with a fresh session."""
    async with get_db_session() as session:
        ok = await check_db_connection(session)
    if ok:
        logger.info("Database connection verified")
    return ok
