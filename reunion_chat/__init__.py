"""
Reunion chat relay.

Relays questions about the Pearson College UWC 20th Reunion to a
generative-text provider, with a keyword-matched fallback for when the relay
or network is unavailable.
"""

from .client import ReunionChatClient
from .fallback import fallback

__all__ = ["ReunionChatClient", "fallback"]
