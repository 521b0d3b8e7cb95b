"""Health check endpoints.

``/healthz`` and ``/ping`` are static liveness answers. ``/health/ready``
runs a trivial query to report whether the database is reachable.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from product_api import __version__
from product_api.api.deps import DbSession
from product_api.config import settings
from product_api.infra.database import check_db_connection
from product_api.infra.logging import get_logger
from product_api.schemas.common import HealthResponse, HealthzResponse, PingResponse

router = APIRouter()
ping_router = APIRouter()
logger = get_logger(__name__)


@router.get("/healthz", response_model=HealthzResponse)
async def healthz() -> HealthzResponse:
    """Liveness check with the current server time."""
    return HealthzResponse(
        status="ok",
        time=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready(db: DbSession, response: Response) -> HealthResponse:
    """Readiness check.

    Returns 503 with status ``degraded`` when the database does not answer.
    """
    checks = {"database": await check_db_connection(db)}
    all_healthy = all(checks.values())

    if not all_healthy:
        logger.warning("Readiness check failed", checks=checks)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@ping_router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    return PingResponse()
