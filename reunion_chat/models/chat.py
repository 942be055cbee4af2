"""Chat request and response models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request body for the chat endpoint (documentation only).

    The endpoint validates the raw body itself so that rate limiting runs
    first and each failure gets its own message.
    """

    message: str = Field(..., max_length=1000, description="User question about the reunion")


class ChatResponse(BaseModel):
    """Response body for a successful chat request."""

    response: str = Field(..., description="Generated answer text")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Response timestamp"
    )
