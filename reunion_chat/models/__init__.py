"""Pydantic models for API requests and responses."""

from .chat import ChatRequest, ChatResponse
from .common import ErrorResponse, HealthResponse, NotFoundResponse, RateLimitResponse

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "NotFoundResponse",
    "RateLimitResponse",
]
