"""
Tests for the chat API endpoint.

Tests POST /api/chat with a fake provider injected through dependency overrides.
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

from reunion_chat.errors import GENERIC_PROVIDER_ERROR
from reunion_chat.services.provider import GeminiProvider
from reunion_chat.services.relay import MISSING_MESSAGE_ERROR


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestChatEndpoint:
    """Tests for POST /api/chat."""

    def test_returns_answer(self, client, fake_provider):
        """Should return the provider's text and a parseable timestamp."""
        response = client.post("/api/chat", json={"message": "When does the reunion start?"})

        assert response.status_code == 200
        data = response.json()
        assert data["response"] == fake_provider.reply
        assert _parse_timestamp(data["timestamp"]).tzinfo is not None
        assert len(fake_provider.calls) == 1

    def test_prompt_contains_question(self, client, fake_provider):
        """Should send the literal question inside the assembled prompt."""
        client.post("/api/chat", json={"message": "Is there a gala dinner?"})

        prompt, params = fake_provider.calls[0]
        assert "USER QUESTION: Is there a gala dinner?" in prompt
        assert params.max_output_tokens == 500

    def test_rejects_missing_message(self, client, fake_provider):
        """Should return 400 when the body has no message field."""
        response = client.post("/api/chat", json={"text": "hello"})

        assert response.status_code == 400
        assert response.json()["error"] == MISSING_MESSAGE_ERROR
        assert fake_provider.calls == []

    def test_rejects_non_string_message(self, client, fake_provider):
        """Should return 400 when message is not text."""
        response = client.post("/api/chat", json={"message": 42})

        assert response.status_code == 400
        assert fake_provider.calls == []

    def test_rejects_whitespace_message(self, client, fake_provider):
        """Should return 400 for empty or whitespace-only messages."""
        for message in ("", "   ", "\n\t "):
            response = client.post("/api/chat", json={"message": message})
            assert response.status_code == 400
            assert response.json()["error"] == MISSING_MESSAGE_ERROR

        assert fake_provider.calls == []

    def test_rejects_too_long_message(self, client, fake_provider):
        """Should return 400 for messages over 1000 characters without calling the provider."""
        response = client.post("/api/chat", json={"message": "x" * 1001})

        assert response.status_code == 400
        assert response.json()["error"] == "Message too long. Maximum 1000 characters allowed."
        assert "timestamp" in response.json()
        assert fake_provider.calls == []

    def test_accepts_message_at_limit(self, client, fake_provider):
        """A message of exactly 1000 characters is allowed."""
        response = client.post("/api/chat", json={"message": "y" * 1000})

        assert response.status_code == 200
        assert len(fake_provider.calls) == 1

    def test_rejects_non_object_body(self, client, fake_provider):
        """Should return 400 for JSON bodies that are not objects."""
        response = client.post("/api/chat", json=["schedule"])

        assert response.status_code == 400
        assert fake_provider.calls == []

    def test_rejects_malformed_json(self, client, fake_provider):
        """Should return 400 for bodies that are not valid JSON."""
        response = client.post(
            "/api/chat",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()
        assert fake_provider.calls == []

    def test_provider_failure_is_generic(self, make_client, failing_provider):
        """Should return 500 with a generic message when the provider fails."""
        client = make_client(failing_provider)

        response = client.post("/api/chat", json={"message": "What is the schedule?"})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == GENERIC_PROVIDER_ERROR
        assert "503" not in data["error"]
        assert "timestamp" in data

    def test_missing_api_key_fails_every_request(self, make_client):
        """Should fail each request with the generic error when no key is configured."""
        client = make_client(GeminiProvider(api_key=""))

        with patch("reunion_chat.services.provider.requests.post") as mock_post:
            for _ in range(2):
                response = client.post("/api/chat", json={"message": "Hello"})
                assert response.status_code == 500
                assert response.json()["error"] == GENERIC_PROVIDER_ERROR
                assert "GEMINI_API_KEY" not in response.text

        mock_post.assert_not_called()

    def test_upstream_error_body_not_exposed(self, make_client):
        """Upstream error details stay out of the response."""
        client = make_client(GeminiProvider(api_key="test-key"))
        upstream = MagicMock(ok=False, status_code=500)
        upstream.iter_content.return_value = [b"quota exceeded for project 1234"]

        with patch("reunion_chat.services.provider.requests.post", return_value=upstream):
            response = client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 500
        assert "quota" not in response.text
        assert "1234" not in response.text

    def test_upstream_timeout_is_provider_failure(self, make_client):
        """A provider timeout maps to the generic 500."""
        client = make_client(GeminiProvider(api_key="test-key", timeout=0.1))

        with patch(
            "reunion_chat.services.provider.requests.post",
            side_effect=requests.Timeout("read timed out"),
        ):
            response = client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 500
        assert response.json()["error"] == GENERIC_PROVIDER_ERROR

    def test_malformed_upstream_body_is_provider_failure(self, make_client):
        """A 200 from the provider without candidate text maps to the generic 500."""
        client = make_client(GeminiProvider(api_key="test-key"))
        upstream = MagicMock(ok=True, status_code=200)
        upstream.iter_content.return_value = [b'{"promptFeedback": {"blockReason": "SAFETY"}}']

        with patch("reunion_chat.services.provider.requests.post", return_value=upstream):
            response = client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 500
        assert "SAFETY" not in response.text

    def test_unexpected_error_returns_internal_error(self, make_client):
        """Unexpected exceptions become a generic 500."""

        class BrokenProvider:
            def generate(self, prompt, params=None):
                raise RuntimeError("database password is hunter2")

        client = make_client(BrokenProvider(), raise_server_exceptions=False)

        response = client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal server error",
            "message": "An unexpected error occurred.",
        }


class TestNotFound:
    """Tests for unmatched routes."""

    def test_unknown_route_returns_404_body(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Endpoint not found",
            "message": "The requested endpoint does not exist.",
        }

    def test_unknown_post_route_returns_404_body(self, client):
        response = client.post("/chat", json={"message": "hi"})

        assert response.status_code == 404
        assert response.json()["error"] == "Endpoint not found"

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_wrong_method_on_chat_returns_404_body(self, client, fake_provider, method):
        response = client.request(method.upper(), "/api/chat")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Endpoint not found",
            "message": "The requested endpoint does not exist.",
        }
        assert fake_provider.calls == []

    def test_post_to_health_returns_404_body(self, client):
        response = client.post("/health")

        assert response.status_code == 404
        assert response.json()["error"] == "Endpoint not found"
