"""SQLAlchemy models for the product catalog."""

from product_api.models.base import Base, TimestampMixin
from product_api.models.product import Product

__all__ = [
    "Base",
    "TimestampMixin",
    "Product",
]
