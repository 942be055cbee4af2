"""
Chat relay service.

Validates a raw chat payload, wraps the question in the reunion prompt and
hands it to the text provider. Holds no per-user state.
"""

import logging
import time
from typing import Any

from reunion_chat.context import REUNION_CONTEXT, build_prompt
from reunion_chat.errors import InvalidInput, ProviderFailure
from reunion_chat.models.chat import ChatResponse
from reunion_chat.services.provider import DEFAULT_PARAMS, GenerationParams, TextProvider

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 1000

MISSING_MESSAGE_ERROR = "Message is required and must be a non-empty string"
MESSAGE_TOO_LONG_ERROR = "Message too long. Maximum {limit} characters allowed."


class ChatRelayService:
    """Service for relaying chat questions to the text provider."""

    def __init__(
        self,
        provider: TextProvider,
        context: str = REUNION_CONTEXT,
        params: GenerationParams = DEFAULT_PARAMS,
        max_message_length: int = MAX_MESSAGE_LENGTH,
    ):
        self.provider = provider
        self.context = context
        self.params = params
        self.max_message_length = max_message_length

    def validate(self, payload: Any) -> str:
        """
        Extract the message from a raw request body.

        Checks run in order: present and text, non-blank, within length.

        Args:
            payload: Decoded JSON body

        Returns:
            The message, untrimmed

        Raises:
            InvalidInput: If any check fails
        """
        message = payload.get("message") if isinstance(payload, dict) else None

        if not isinstance(message, str):
            raise InvalidInput(MISSING_MESSAGE_ERROR)

        if not message.strip():
            raise InvalidInput(MISSING_MESSAGE_ERROR)

        if len(message) > self.max_message_length:
            raise InvalidInput(MESSAGE_TOO_LONG_ERROR.format(limit=self.max_message_length))

        return message

    def handle_chat(self, payload: Any) -> ChatResponse:
        """
        Answer one chat request.

        Args:
            payload: Decoded JSON body, expected to be ``{"message": str}``

        Returns:
            ChatResponse with the provider's text

        Raises:
            InvalidInput: Bad request body (provider not called)
            ProviderFailure: Provider could not answer
        """
        message = self.validate(payload)
        prompt = build_prompt(message, self.context)

        start = time.perf_counter()
        try:
            text = self.provider.generate(prompt, self.params)
        except ProviderFailure as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(f"Chat relay failed after {elapsed_ms:.0f}ms: {e.reason}")
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Chat relay answered in {elapsed_ms:.0f}ms ({len(message)} chars in)")

        return ChatResponse(response=text)
