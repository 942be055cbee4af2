"""
Pytest configuration and shared fixtures for relay tests.
"""

import pytest
from fastapi.testclient import TestClient

from reunion_chat.errors import ProviderFailure
from reunion_chat.services.provider import DEFAULT_PARAMS, GenerationParams


class FakeProvider:
    """Provider double that records prompts and returns a fixed reply or raises."""

    def __init__(self, reply: str = "The reunion runs August 12-15, 2025.", error=None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, GenerationParams]] = []

    def generate(self, prompt: str, params: GenerationParams = DEFAULT_PARAMS) -> str:
        self.calls.append((prompt, params))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def make_provider():
    """Factory for fake providers with a chosen reply or error."""
    return FakeProvider


@pytest.fixture
def fake_provider():
    """Provider that always answers."""
    return FakeProvider()


@pytest.fixture
def failing_provider():
    """Provider that always fails the way an outage would."""
    return FakeProvider(error=ProviderFailure("status 503"))


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start and finish every test with empty rate-limit counters."""
    from reunion_chat.rate_limit import limiter

    limiter.reset()
    yield
    limiter.reset()


def _make_client(provider, **client_kwargs):
    from reunion_chat.api.chat import get_relay_service
    from reunion_chat.main import app
    from reunion_chat.services.relay import ChatRelayService

    relay = ChatRelayService(provider)
    app.dependency_overrides[get_relay_service] = lambda: relay
    return TestClient(app, **client_kwargs)


@pytest.fixture
def client(fake_provider):
    """Create FastAPI test client backed by the fake provider."""
    from reunion_chat.main import app

    yield _make_client(fake_provider)
    app.dependency_overrides.clear()


@pytest.fixture
def make_client():
    """Factory for test clients backed by a given provider."""
    from reunion_chat.main import app

    yield _make_client
    app.dependency_overrides.clear()
