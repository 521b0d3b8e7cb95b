"""Core module - query composition and parameter coercion."""

from product_api.core.coercion import parse_bool, parse_float, parse_int
from product_api.core.product_query import (
    ProductFilters,
    ProductQuery,
    SortSpec,
)

__all__ = [
    "ProductFilters",
    "ProductQuery",
    "SortSpec",
    "parse_bool",
    "parse_float",
    "parse_int",
]
