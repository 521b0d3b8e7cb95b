"""Shared fixtures: in-memory database, product factory and API client."""

import itertools
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from product_api.api.deps import get_db
from product_api.main import app
from product_api.models.base import Base
from product_api.models.product import Product
from product_api.services.product_service import ProductService

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

ProductFactory = Callable[..., Awaitable[Product]]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite database with the schema created."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session


@pytest.fixture
def service(db_session: AsyncSession) -> ProductService:
    return ProductService(db_session)


@pytest.fixture
def product_factory(db_session: AsyncSession) -> ProductFactory:
    """Insert products directly, each created one minute after the last."""
    counter = itertools.count()

    async def create(**overrides) -> Product:
        n = next(counter)
        timestamp = BASE_TIME + timedelta(minutes=n)
        values = {
            "name": f"Product {n:02d}",
            "description": f"Description {n}",
            "price": 10.0 + n,
            "category": "general",
            "is_active": True,
            "created_at": timestamp,
            "updated_at": timestamp,
        }
        values.update(overrides)
        product = Product(**values)
        db_session.add(product)
        await db_session.commit()
        return product

    return create


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, sharing the test's database session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
