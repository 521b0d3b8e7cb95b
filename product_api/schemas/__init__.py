"""Pydantic schemas for request/response validation."""

from product_api.schemas.common import (
    ErrorResponse,
    FieldViolation,
    HealthResponse,
    HealthzResponse,
    PingResponse,
    ValidationErrorResponse,
)
from product_api.schemas.product import (
    ListMeta,
    ProductListResponse,
    ProductPatch,
    ProductRead,
    ProductWrite,
)

__all__ = [
    "ErrorResponse",
    "FieldViolation",
    "HealthResponse",
    "HealthzResponse",
    "PingResponse",
    "ValidationErrorResponse",
    "ListMeta",
    "ProductListResponse",
    "ProductPatch",
    "ProductRead",
    "ProductWrite",
]
