"""
Text generation providers.

The relay only needs ``generate(prompt, params) -> str``; GeminiProvider
implements it against the Gemini ``generateContent`` REST endpoint.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Protocol

import requests

from reunion_chat.config import Settings
from reunion_chat.errors import ProviderFailure

logger = logging.getLogger(__name__)

# Upstream bodies can be large; only this much goes into the log
_LOG_BODY_LIMIT = 500
_CHUNK_SIZE = 8192


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters sent with every prompt."""

    temperature: float = 0.7
    max_output_tokens: int = 500
    top_p: float = 0.8
    top_k: int = 40

    def to_generation_config(self) -> dict[str, Any]:
        return {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
            "topP": self.top_p,
            "topK": self.top_k,
        }


DEFAULT_PARAMS = GenerationParams()


class TextProvider(Protocol):
    """Anything that turns a prompt into generated text."""

    def generate(self, prompt: str, params: GenerationParams = DEFAULT_PARAMS) -> str:
        """Return generated text or raise ProviderFailure."""
        ...


class GeminiProvider:
    """
    Gemini generateContent client.

    Makes exactly one HTTP attempt per call, bounded by ``timeout`` seconds.
    Every failure mode is raised as ProviderFailure with the detail kept in
    ``reason`` and the log.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiProvider":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.provider_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str, params: GenerationParams = DEFAULT_PARAMS) -> str:
        """
        Generate a reply for the prompt.

        ``timeout`` bounds the whole call. requests applies it to connect and
        to each socket read, so the body is streamed and the elapsed time is
        checked between chunks.

        Args:
            prompt: Fully assembled prompt
            params: Sampling parameters

        Returns:
            Text of the first candidate

        Raises:
            ProviderFailure: On missing credentials, transport errors, timeouts,
                non-2xx responses or a body without candidate text
        """
        if not self.configured:
            logger.error("Gemini request skipped: GEMINI_API_KEY is not configured")
            raise ProviderFailure("missing API key")

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": params.to_generation_config(),
        }

        deadline = time.monotonic() + self.timeout
        try:
            response = requests.post(
                self.endpoint,
                json=body,
                headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
                timeout=self.timeout,
                stream=True,
            )
            try:
                raw = _read_body(response, deadline)
            finally:
                response.close()
        except requests.Timeout as e:
            logger.error(f"Gemini request timed out after {self.timeout}s: {e}")
            raise ProviderFailure("timeout") from e
        except requests.RequestException as e:
            logger.error(f"Gemini request failed: {type(e).__name__}: {e}")
            raise ProviderFailure(f"transport error: {type(e).__name__}") from e

        if not response.ok:
            logger.error(
                f"Gemini API error {response.status_code}: "
                f"{raw[:_LOG_BODY_LIMIT].decode('utf-8', errors='replace')}"
            )
            raise ProviderFailure(f"status {response.status_code}")

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error(
                "Gemini returned non-JSON body: "
                f"{raw[:_LOG_BODY_LIMIT].decode('utf-8', errors='replace')}"
            )
            raise ProviderFailure("non-JSON response") from e

        text = extract_candidate_text(data)
        if text is None:
            logger.error(f"Unexpected Gemini response shape: {str(data)[:_LOG_BODY_LIMIT]}")
            raise ProviderFailure("malformed response")

        return text


def _read_body(response: requests.Response, deadline: float) -> bytes:
    """Read a streamed body, giving up once ``deadline`` (monotonic) has passed."""
    chunks = []
    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
        if time.monotonic() > deadline:
            raise requests.Timeout("response body not received within the deadline")
        chunks.append(chunk)
    return b"".join(chunks)


def extract_candidate_text(data: Any) -> str | None:
    """
    Pull ``candidates[0].content.parts[0].text`` out of a response body.

    Returns:
        The text, or None when any level is missing, mistyped or blank
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None

    if not isinstance(text, str) or not text.strip():
        return None
    return text
