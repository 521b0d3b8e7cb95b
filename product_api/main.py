"""FastAPI application entry point.

Product Catalog API: CRUD over products with filtered, sorted and
paginated listing.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_api import __version__
from product_api.config import settings
from product_api.infra.database import close_db_engine, create_schema, verify_db_connection
from product_api.infra.logging import bind_request_context, get_logger, setup_logging

# Import routers
from product_api.api.routes.health import ping_router
from product_api.api.routes.health import router as health_router
from product_api.api.routes.products import router as products_router

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Create missing tables (when enabled)
    - Verify database connection

    Shutdown:
    - Close database connections
    """
    logger.info(
        "Product Catalog API starting",
        environment=settings.environment,
        version=__version__,
    )

    if settings.db_create_schema:
        await create_schema()

    db_ok = await verify_db_connection()
    if not db_ok:
        logger.warning("Database connection failed - will retry on first request")

    yield

    logger.info("Product Catalog API shutting down")
    await close_db_engine()
    logger.info("Cleanup complete")


app = FastAPI(
    title=settings.project_name,
    description="CRUD API for the product catalog",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "dev" else None,
    redoc_url=None,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Bind request context for all logs and record the outcome."""
    request_id = bind_request_context(
        request.method,
        request.url.path,
        request.headers.get("X-Request-ID"),
    )
    start_time = time.perf_counter()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "Request handled",
        status_code=response.status_code,
        duration_ms=int((time.perf_counter() - start_time) * 1000),
    )
    return response


# =============================================================================
# Exception Handlers
# =============================================================================


def _violation_field(loc: tuple) -> str:
    """Name the offending field from a pydantic error location."""
    if len(loc) > 1:
        return ".".join(str(part) for part in loc[1:])
    return str(loc[0]) if loc else "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map validation failures to 400 (malformed JSON) or 422 (violations)."""
    errors = exc.errors()

    if any(error["type"] == "json_invalid" for error in errors):
        logger.info("Rejected malformed JSON body")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid JSON"},
        )

    violations = [
        {"field": _violation_field(tuple(error["loc"])), "message": error["msg"]}
        for error in errors
    ]
    logger.info("Rejected invalid request", violations=len(violations))
    return JSONResponse(
        status_code=422,
        content={"errors": violations},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as ``{"error": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions, including store failures."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "error_type": type(exc).__name__,
        },
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(ping_router, prefix=settings.api_prefix, tags=["Health"])
app.include_router(products_router, prefix=settings.api_prefix, tags=["Products"])


# =============================================================================
# Root Endpoint
# =============================================================================


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": settings.project_name,
        "version": __version__,
        "environment": settings.environment,
    }
