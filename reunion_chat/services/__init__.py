"""Service layer for the chat relay."""

from .provider import DEFAULT_PARAMS, GeminiProvider, GenerationParams, TextProvider
from .relay import ChatRelayService

__all__ = [
    "ChatRelayService",
    "DEFAULT_PARAMS",
    "GeminiProvider",
    "GenerationParams",
    "TextProvider",
]
