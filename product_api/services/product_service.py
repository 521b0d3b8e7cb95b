"""Product Service - single entry point between the API and the store.

Reads delegate to ``ProductQuery``. Writes stamp timestamps and defaults
explicitly, then commit exactly once; a failed commit is rolled back and
re-raised.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from product_api.core.product_query import ProductFilters, ProductQuery, SortSpec
from product_api.infra.logging import get_logger
from product_api.models.product import Product
from product_api.schemas.product import WRITABLE_FIELDS, ProductPatch, ProductWrite, as_utc

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductService:
    """Service for reading and writing products."""

    DEFAULT_LIMIT = 500

    def __init__(self, session: AsyncSession, query: ProductQuery | None = None) -> None:
        """Initialize product service.

        Args:
            session: Request-scoped database session
            query: Query composer (defaults to one bound to ``session``)
        """
        self.session = session
        self.query = query or ProductQuery(session)

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_all(self, only_active: bool = True) -> Sequence[Product]:
        """First ``DEFAULT_LIMIT`` products, newest first."""
        return await self.query.paginate(only_active, 1, self.DEFAULT_LIMIT)

    async def get_paginated(
        self,
        only_active: bool,
        page: int,
        limit: int = DEFAULT_LIMIT,
    ) -> Sequence[Product]:
        return await self.query.paginate(only_active, page, limit)

    async def get_by_criteria(
        self,
        filters: ProductFilters,
        sort: SortSpec | None = None,
    ) -> Sequence[Product]:
        return await self.query.find_by_criteria(filters, sort)

    async def count_all(
        self,
        only_active: bool = True,
        filters: ProductFilters | None = None,
    ) -> int:
        return await self.query.count_all(only_active, filters)

    async def get_by_id(self, product_id: int) -> Product | None:
        return await self.session.get(Product, product_id)

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(self, data: ProductWrite) -> Product:
        """Create and persist a product.

        Both timestamps get the same instant and ``is_active`` defaults to
        true. The returned product carries its store-assigned id.

        Args:
            data: Validated product fields

        Returns:
            The persisted product
        """
        now = utcnow()
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            category=data.category,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
        )
        self.session.add(product)
        await self._commit()

        logger.info(
            "Product created",
            product_id=product.id,
            category=product.category,
            is_active=product.is_active,
        )
        return product

    async def update(
        self,
        product: Product,
        data: ProductWrite | ProductPatch,
        partial: bool,
    ) -> Product:
        """Apply ``data`` to ``product`` and persist it.

        Args:
            product: Stored product to modify
            data: Full payload, or a patch whose supplied fields are applied
            partial: When false every writable field must be present

        Returns:
            The updated product

        Raises:
            ValueError: If a full update is missing writable fields
        """
        if isinstance(data, ProductPatch):
            changes = data.changes()
        else:
            changes = data.model_dump()

        if not partial:
            missing = [name for name in WRITABLE_FIELDS if name not in changes]
            if missing:
                raise ValueError(f"Full update requires all fields, missing: {missing}")

        for name, value in changes.items():
            setattr(product, name, value)
        product.updated_at = self._next_updated_at(product)
        await self._commit()

        logger.info(
            "Product updated",
            product_id=product.id,
            partial=partial,
            fields=sorted(changes),
        )
        return product

    async def delete(self, product: Product) -> None:
        """Permanently remove ``product`` from the store."""
        product_id = product.id
        await self.session.delete(product)
        await self._commit()
        logger.info("Product deleted", product_id=product_id)

    @staticmethod
    def _next_updated_at(product: Product) -> datetime:
        now = utcnow()
        previous = as_utc(product.updated_at) if product.updated_at else None
        # Clock may not advance between two quick writes
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Product write failed", error=str(e), error_type=type(e).__name__)
            raise
