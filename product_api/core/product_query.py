"""Query composition for the product collection.

Turns optional filter, sort and pagination parameters into SQLAlchemy
selects. Listing and counting share ``ProductQuery.apply_filters`` so a
list response's total always reflects the filters that produced it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.core.coercion import parse_bool, parse_float
from product_api.infra.logging import get_logger
from product_api.models.product import Product

logger = get_logger(__name__)

SortDirection = Literal["ASC", "DESC"]

# Wire field name -> mapped column
SORTABLE_FIELDS = {
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
    "price": Product.price,
    "name": Product.name,
    "category": Product.category,
}
DEFAULT_SORT_FIELD = "createdAt"

StatementT = TypeVar("StatementT", bound=Select[Any])


@dataclass(frozen=True)
class ProductFilters:
    """Optional predicates over the product collection.

    Attributes:
        category: Exact category match
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        is_active: Exact active-flag match
    """

    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    is_active: bool | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> ProductFilters:
        """Build filters from raw query parameters.

        Unknown keys are ignored. Prices that do not parse as numbers are
        dropped; ``isActive`` uses truthy-string parsing, so unrecognized
        values mean ``False``.
        """
        is_active = params.get("isActive")
        return cls(
            category=params.get("category") or None,
            min_price=parse_float(params.get("minPrice")),
            max_price=parse_float(params.get("maxPrice")),
            is_active=parse_bool(is_active) if is_active is not None else None,
        )

    def is_empty(self) -> bool:
        return (
            self.category is None
            and self.min_price is None
            and self.max_price is None
            and self.is_active is None
        )


@dataclass(frozen=True)
class SortSpec:
    """Normalized ordering for criteria queries."""

    field: str = DEFAULT_SORT_FIELD
    direction: SortDirection = "DESC"

    @classmethod
    def normalize(cls, field: str | None, direction: str | None) -> SortSpec:
        """Coerce arbitrary input into an allowed field and direction.

        An unknown or missing field discards the whole request and yields
        the default ``createdAt DESC``. Otherwise any direction other than
        ``ASC`` (case-insensitive) becomes ``DESC``.
        """
        field = (field or "").strip()
        if field not in SORTABLE_FIELDS:
            return cls()
        normalized: SortDirection = (
            "ASC" if (direction or "").strip().upper() == "ASC" else "DESC"
        )
        return cls(field=field, direction=normalized)

    @classmethod
    def parse(cls, raw: str | None) -> SortSpec:
        """Parse a ``"field,direction"`` query value."""
        if not raw:
            return cls()
        field, _, direction = raw.partition(",")
        return cls.normalize(field, direction)


class ProductQuery:
    """Builds and runs filtered, sorted and paginated product reads."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def apply_filters(
        stmt: StatementT,
        filters: ProductFilters | None = None,
        only_active: bool = False,
    ) -> StatementT:
        """Add the active-flag and filter predicates to ``stmt``.

        Args:
            stmt: Select over ``Product`` (rows or an aggregate)
            filters: Optional filter set
            only_active: Restrict to ``is_active = true``

        Returns:
            The statement with WHERE clauses added
        """
        if only_active:
            stmt = stmt.where(Product.is_active.is_(True))

        if filters is None:
            return stmt

        if filters.is_active is not None:
            stmt = stmt.where(Product.is_active.is_(filters.is_active))
        if filters.category is not None:
            stmt = stmt.where(Product.category == filters.category)
        if filters.min_price is not None:
            stmt = stmt.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Product.price <= filters.max_price)

        return stmt

    async def paginate(self, only_active: bool, page: int, limit: int) -> Sequence[Product]:
        """Return one page of products, newest first.

        Args:
            only_active: Restrict to active products
            page: 1-based page number
            limit: Page size

        Returns:
            At most ``limit`` products after skipping ``(page - 1) * limit``
        """
        page = max(1, page)
        limit = max(1, limit)

        stmt = self.apply_filters(select(Product), only_active=only_active)
        stmt = (
            stmt.order_by(Product.created_at.desc(), Product.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )

        result = await self._session.execute(stmt)
        products = result.scalars().all()

        logger.debug(
            "Paginated products",
            only_active=only_active,
            page=page,
            limit=limit,
            returned=len(products),
        )
        return products

    async def find_by_criteria(
        self,
        filters: ProductFilters,
        sort: SortSpec | None = None,
    ) -> Sequence[Product]:
        """Return every product matching ``filters`` in ``sort`` order."""
        sort = sort or SortSpec()
        column = SORTABLE_FIELDS[sort.field]

        stmt = self.apply_filters(select(Product), filters)
        if sort.direction == "ASC":
            stmt = stmt.order_by(column.asc(), Product.id.asc())
        else:
            stmt = stmt.order_by(column.desc(), Product.id.desc())

        result = await self._session.execute(stmt)
        products = result.scalars().all()

        logger.debug(
            "Products found by criteria",
            filters=filters,
            sort_field=sort.field,
            sort_direction=sort.direction,
            returned=len(products),
        )
        return products

    async def count_all(
        self,
        only_active: bool = True,
        filters: ProductFilters | None = None,
    ) -> int:
        """Count products under the same predicates as the list queries."""
        stmt = self.apply_filters(
            select(func.count(Product.id)),
            filters,
            only_active=only_active,
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())
