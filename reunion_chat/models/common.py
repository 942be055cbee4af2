"""Common models used across the API."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="User-safe error message")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp"
    )


class RateLimitResponse(BaseModel):
    """Body returned with HTTP 429."""

    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(..., description="User-safe error message")
    retry_after: str = Field(
        ..., alias="retryAfter", description="When to retry, e.g. '15 minutes'"
    )


class NotFoundResponse(BaseModel):
    """Body returned for unknown routes."""

    error: str = Field("Endpoint not found", description="Error summary")
    message: str = Field("The requested endpoint does not exist.", description="Error detail")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    context_version: str = Field(..., description="Version of the embedded reunion context")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Check timestamp"
    )
