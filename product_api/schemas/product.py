"""Product schemas for request validation and wire mapping."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, StrictBool, field_serializer, field_validator

from product_api.models.product import CATEGORY_MAX_LENGTH, NAME_MAX_LENGTH, Product

# Attributes a client may write, by Python name
WRITABLE_FIELDS = ("name", "description", "price", "category", "is_active")


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (some stores drop the offset)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _not_blank(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} must not be blank")
    return value


def _not_boolean(value: Any, field_name: str) -> Any:
    # Lax float parsing would turn true/false into 1.0/0.0
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number")
    return value


class ProductWrite(BaseModel):
    """Payload for creating or fully replacing a product.

    ``isActive`` may be omitted and then defaults to true.
    """

    name: str = Field(
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Product name",
        examples=["USB-C Cable 1m"],
    )
    description: str = Field(
        min_length=1,
        description="Product description",
    )
    price: float = Field(
        allow_inf_nan=False,
        description="Unit price",
        examples=[19.99],
    )
    category: str = Field(
        min_length=1,
        max_length=CATEGORY_MAX_LENGTH,
        description="Category name (1-127 characters)",
        examples=["cables"],
    )
    is_active: StrictBool = Field(
        default=True,
        alias="isActive",
        description="Whether the product is listed",
    )

    model_config = {"extra": "forbid", "populate_by_name": True}

    @field_validator("price", mode="before")
    @classmethod
    def reject_boolean_price(cls, v: Any, info) -> Any:
        return _not_boolean(v, info.field_name)

    @field_validator("name", "description", "category")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        return _not_blank(v, info.field_name)


class ProductPatch(BaseModel):
    """Partial update payload.

    Every field is optional. Only the fields present in the request body
    (see ``model_fields_set``) are applied; explicit nulls are rejected.
    """

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, allow_inf_nan=False)
    category: str | None = Field(default=None, min_length=1, max_length=CATEGORY_MAX_LENGTH)
    is_active: StrictBool | None = Field(default=None, alias="isActive")

    model_config = {"extra": "forbid", "populate_by_name": True}

    @field_validator("name", "description", "price", "category", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v: Any, info) -> Any:
        # Defaults are not validated, so this only sees supplied values
        if v is None:
            raise ValueError(f"{info.field_name} must not be null")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def reject_boolean_price(cls, v: Any, info) -> Any:
        return _not_boolean(v, info.field_name)

    @field_validator("name", "description", "category")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        return _not_blank(v, info.field_name)

    def changes(self) -> dict[str, Any]:
        """Supplied fields keyed by Python attribute name."""
        return self.model_dump(include=self.model_fields_set)


class ProductRead(BaseModel):
    """Wire representation of a stored product."""

    id: int
    name: str
    description: str
    price: float
    category: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    is_active: bool = Field(alias="isActive")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return as_utc(value).isoformat()

    @classmethod
    def from_model(cls, product: Product) -> "ProductRead":
        return cls.model_validate(product)


class ListMeta(BaseModel):
    """Paging information attached to list responses."""

    total: int = Field(description="Number of products matching the query")
    page: int = Field(description="Requested page (1-based)")
    limit: int = Field(description="Page size used for the query")


class ProductListResponse(BaseModel):
    """List envelope: ``{data: [...], meta: {...}}``."""

    data: list[ProductRead]
    meta: ListMeta
