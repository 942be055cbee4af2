"""
Chat API endpoint.

Relays a reunion question to the text provider. Rate limiting runs before
the body is validated; validation and provider errors are translated to
user-safe JSON bodies here.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.responses import JSONResponse

from reunion_chat.config import settings
from reunion_chat.errors import InvalidInput, ProviderFailure
from reunion_chat.models.chat import ChatRequest, ChatResponse
from reunion_chat.models.common import ErrorResponse, RateLimitResponse
from reunion_chat.rate_limit import chat_rate_limit, limiter
from reunion_chat.services import ChatRelayService, GeminiProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

# Module-level relay (created once, reused across requests)
_relay_service: ChatRelayService | None = None


def get_relay_service() -> ChatRelayService:
    """Get or create the shared relay service."""
    global _relay_service
    if _relay_service is None:
        _relay_service = ChatRelayService(
            GeminiProvider.from_settings(settings),
            max_message_length=settings.max_message_length,
        )
    return _relay_service


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing, empty or too long message"},
        429: {"model": RateLimitResponse, "description": "Too many requests from this address"},
        500: {"model": ErrorResponse, "description": "Provider unavailable or failed"},
    },
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ChatRequest.model_json_schema()}},
            "required": True,
        }
    },
)
@limiter.limit(chat_rate_limit)
def chat(
    request: Request,  # noqa: ARG001 - required by slowapi limiter
    response: Response,  # noqa: ARG001 - slowapi writes rate-limit headers here
    payload: Any = Body(None),
    relay: ChatRelayService = Depends(get_relay_service),
) -> ChatResponse | JSONResponse:
    """
    Ask a question about the reunion.

    Returns HTTP 400 for a missing, blank or over-long message and HTTP 500
    with a generic message when the provider fails.
    """
    try:
        return relay.handle_chat(payload)

    except InvalidInput as e:
        logger.info(f"Chat request rejected: {e.message}")
        return _error_response(e.status_code, e.message)

    except ProviderFailure as e:
        return _error_response(e.status_code, e.message)
