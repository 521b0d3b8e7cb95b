"""Product endpoints: list, read, create, replace, patch and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from product_api.api.deps import Products
from product_api.core.coercion import parse_bool, parse_int
from product_api.core.product_query import ProductFilters, SortSpec
from product_api.infra.logging import get_logger
from product_api.models.product import Product
from product_api.schemas.common import ErrorResponse, ValidationErrorResponse
from product_api.schemas.product import (
    ListMeta,
    ProductListResponse,
    ProductPatch,
    ProductRead,
    ProductWrite,
)
from product_api.services.product_service import ProductService

router = APIRouter()
logger = get_logger(__name__)

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}

# Largest id the integer primary key column can hold
MAX_PRODUCT_ID = 2**31 - 1

INVALID = {
    400: {"model": ErrorResponse, "description": "Malformed JSON body"},
    422: {"model": ValidationErrorResponse, "description": "Invalid payload"},
}


async def get_product_or_404(product_id: str, service: Products) -> Product:
    """Load the product addressed by the path or fail with 404.

    Ids that are not plain decimal digits, or that exceed the column range,
    cannot exist and are answered with 404 without querying.
    """
    product = None
    if product_id.isascii() and product_id.isdigit() and int(product_id) <= MAX_PRODUCT_ID:
        product = await service.get_by_id(int(product_id))
    if product is None:
        logger.info("Product not found", product_id=product_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


ExistingProduct = Annotated[Product, Depends(get_product_or_404)]


@router.get(
    "/products",
    response_model=ProductListResponse,
    summary="List products",
    responses={204: {"description": "No products match"}},
)
async def list_products(
    response: Response,
    service: Products,
    category: Annotated[str | None, Query()] = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
    is_active: Annotated[str | None, Query(alias="isActive")] = None,
    page: Annotated[str | None, Query(description="1-based page number")] = None,
    limit: Annotated[str | None, Query(description="Page size")] = None,
    sort: Annotated[str | None, Query(examples=["createdAt,DESC"])] = None,
    include_all: Annotated[str | None, Query(alias="all", description="Include inactive products")] = None,
) -> ProductListResponse | Response:
    """List products.

    The first matching mode wins:
    1. any filter parameter -> filtered and sorted, unpaginated
    2. ``page`` and ``limit`` -> one page of active products
    3. truthy ``all`` -> every product, active or not
    4. otherwise -> active products
    """
    filter_values = {
        "category": category,
        "minPrice": min_price,
        "maxPrice": max_price,
        "isActive": is_active,
    }
    filters = ProductFilters.from_query(filter_values)
    page_number = 1

    if any(value is not None for value in filter_values.values()):
        products = await service.get_by_criteria(filters, SortSpec.parse(sort))
        # Criteria results are not restricted to active products
        total = await service.count_all(False, filters)
        limit_used = len(products)
    elif page is not None and limit is not None:
        page_number = max(1, parse_int(page, 1))
        limit_used = max(1, parse_int(limit, ProductService.DEFAULT_LIMIT))
        products = await service.get_paginated(True, page_number, limit_used)
        total = await service.count_all(True)
    elif parse_bool(include_all):
        products = await service.get_all(False)
        total = await service.count_all(False)
        limit_used = ProductService.DEFAULT_LIMIT
    else:
        products = await service.get_all(True)
        total = await service.count_all(True)
        limit_used = ProductService.DEFAULT_LIMIT

    if not products:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    response.headers["X-Total-Count"] = str(total)
    return ProductListResponse(
        data=[ProductRead.from_model(product) for product in products],
        meta=ListMeta(
            total=total,
            page=page_number,
            limit=limit_used,
        ),
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductRead,
    summary="Get one product",
    responses=NOT_FOUND,
)
async def get_product(product: ExistingProduct) -> ProductRead:
    return ProductRead.from_model(product)


@router.post(
    "/products",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    responses=INVALID,
)
async def create_product(
    payload: ProductWrite,
    request: Request,
    response: Response,
    service: Products,
) -> ProductRead:
    """Create a product and point ``Location`` at it."""
    product = await service.create(payload)
    response.headers["Location"] = request.url_for("get_product", product_id=product.id).path
    return ProductRead.from_model(product)


@router.put(
    "/products/{product_id}",
    response_model=ProductRead,
    summary="Replace product",
    responses={**NOT_FOUND, **INVALID},
)
async def replace_product(
    payload: ProductWrite,
    product: ExistingProduct,
    service: Products,
) -> ProductRead:
    """Overwrite every writable field; an omitted ``isActive`` resets to true."""
    product = await service.update(product, payload, partial=False)
    return ProductRead.from_model(product)


@router.patch(
    "/products/{product_id}",
    response_model=ProductRead,
    summary="Patch product",
    responses={**NOT_FOUND, **INVALID},
)
async def patch_product(
    payload: ProductPatch,
    product: ExistingProduct,
    service: Products,
) -> ProductRead:
    """Overwrite only the fields present in the body."""
    product = await service.update(product, payload, partial=True)
    return ProductRead.from_model(product)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product",
    responses=NOT_FOUND,
)
async def delete_product(product: ExistingProduct, service: Products) -> Response:
    await service.delete(product)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
