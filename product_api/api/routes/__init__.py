"""API routes module."""

from product_api.api.routes.health import ping_router
from product_api.api.routes.health import router as health_router
from product_api.api.routes.products import router as products_router

__all__ = ["health_router", "ping_router", "products_router"]
