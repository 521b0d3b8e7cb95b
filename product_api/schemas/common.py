"""Common schemas for API responses."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Single error message, used for 400/404/500 responses."""

    error: str = Field(description="Error message")
    error_type: str | None = Field(default=None, description="Error type/class name")

    model_config = {"extra": "forbid"}


class FieldViolation(BaseModel):
    """One invalid field in a request payload."""

    field: str = Field(description="Offending field, or 'body' for the whole payload")
    message: str = Field(description="Human readable reason")


class ValidationErrorResponse(BaseModel):
    """422 response listing every field violation."""

    errors: list[FieldViolation]


class HealthResponse(BaseModel):
    """Readiness check response."""

    status: str = Field(description="Health status (healthy, degraded)")
    version: str = Field(description="Service version")
    environment: str = Field(description="Environment name")
    checks: dict[str, bool] = Field(default_factory=dict, description="Individual health checks")

    model_config = {"extra": "forbid"}


class HealthzResponse(BaseModel):
    """Liveness probe response."""

    status: str = Field(default="ok")
    time: str = Field(description="Server time, ISO-8601")


class PingResponse(BaseModel):
    pong: bool = True
