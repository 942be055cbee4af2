"""
Rate limiting configuration for the chat relay.

Provides the shared Limiter instance used by the chat endpoint: a fixed
window per client address, held in ``limits`` storage whose keys expire with
the window. Set REUNION_RATE_LIMIT_ENABLED=false to disable (e.g. in CI).

Memory storage is per process, so several instances each enforce their own
limit unless REUNION_RATE_LIMIT_STORAGE_URI points at a shared backend.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from reunion_chat.config import Settings, settings
from reunion_chat.models.common import RateLimitResponse

logger = logging.getLogger(__name__)

RATE_LIMIT_ERROR = "Too many requests from this IP, please try again later."


def build_limiter(config: Settings) -> Limiter:
    """Create a Limiter from settings."""
    return Limiter(
        key_func=get_remote_address,
        enabled=config.rate_limit_enabled,
        headers_enabled=True,
        strategy="fixed-window",
        storage_uri=config.rate_limit_storage_uri,
    )


limiter = build_limiter(settings)


def chat_rate_limit() -> str:
    return settings.chat_rate_limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return the 429 body with a retry hint and standard rate-limit headers."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")

    body = RateLimitResponse(error=RATE_LIMIT_ERROR, retry_after=settings.retry_after)
    response = JSONResponse(status_code=429, content=body.model_dump(by_alias=True))
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)
