"""Chat client for the reunion relay.

Mirrors what the chat widget on the reunion pages does: send the question to
the relay and, when that fails for any reason, answer from the keyword
fallback table instead of showing an error.
"""

import logging
from dataclasses import dataclass, field

import requests

from reunion_chat.fallback import fallback

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "https://reunion-chatbot-backend-9161453686.us-central1.run.app"
EMPTY_REPLY = "Sorry, I could not generate a response."


@dataclass
class ChatMessage:
    """One line of the conversation shown to the user.

    Attributes:
        role: "user" or "bot"
        text: Message text
        fallback: True when the bot reply came from the fallback table
    """

    role: str
    text: str
    fallback: bool = False


@dataclass
class ReunionChatClient:
    """Client for the chat relay with local fallback.

    Attributes:
        backend_url: Base URL of the relay service
        timeout: Seconds to wait for the relay before falling back
        messages: Conversation history, oldest first
    """

    backend_url: str = DEFAULT_BACKEND_URL
    timeout: float = 35.0
    messages: list[ChatMessage] = field(default_factory=list)

    def __post_init__(self):
        self.backend_url = self.backend_url.rstrip("/")

    def get_ai_response(self, message: str) -> str:
        """Ask the relay.

        Args:
            message: User question

        Returns:
            The relay's answer text

        Raises:
            requests.RequestException: If the request fails or returns non-2xx
            ValueError: If the body is not JSON or the reply is not text
        """
        response = requests.post(
            f"{self.backend_url}/api/chat",
            json={"message": message},
            timeout=self.timeout,
        )
        response.raise_for_status()

        data = response.json()
        reply = data.get("response") if isinstance(data, dict) else None
        if reply is not None and not isinstance(reply, str):
            raise ValueError(f"Relay reply is {type(reply).__name__}, not text")
        return reply or EMPTY_REPLY

    def get_static_response(self, message: str) -> str:
        """Answer from the keyword fallback table without any I/O."""
        return fallback(message)

    def ask(self, message: str) -> str | None:
        """Send a message and record the exchange.

        Returns:
            The bot reply, or None for a blank message (nothing is sent)
        """
        message = message.strip()
        if not message:
            return None

        self.messages.append(ChatMessage(role="user", text=message))

        try:
            reply = self.get_ai_response(message)
            used_fallback = False
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Relay unavailable, using fallback answer: {e}")
            reply = self.get_static_response(message)
            used_fallback = True

        self.messages.append(ChatMessage(role="bot", text=reply, fallback=used_fallback))
        return reply
