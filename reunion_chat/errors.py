"""Exceptions raised by the chat relay.

The messages on these exceptions are safe to show to API clients; anything
internal goes to the log instead.
"""

GENERIC_PROVIDER_ERROR = "An error occurred processing your request. Please try again."


class RelayError(Exception):
    """Base class for chat relay errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(RelayError):
    """The chat request is missing, empty or too long."""

    status_code = 400


class ProviderFailure(RelayError):
    """The text provider could not produce an answer.

    Covers transport errors, timeouts, non-2xx statuses, malformed bodies and
    missing credentials. ``reason`` is for logs only.
    """

    status_code = 500

    def __init__(self, reason: str):
        super().__init__(GENERIC_PROVIDER_ERROR)
        self.reason = reason
