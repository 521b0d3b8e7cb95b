"""FastAPI dependencies for dependency injection.

Provides:
- Request-scoped database session
- Product service bound to that session
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.infra.database import get_db_session
from product_api.services.product_service import ProductService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the duration of one request."""
    async with get_db_session() as session:
        yield session


# Type aliases for cleaner annotations
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_product_service(db: DbSession) -> ProductService:
    """Build a product service around the request's session."""
    return ProductService(db)


Products = Annotated[ProductService, Depends(get_product_service)]
