"""Business logic services."""

from product_api.services.product_service import ProductService

__all__ = [
    "ProductService",
]
