"""
Keyword-matched canned answers used when the relay is unreachable.

Rules are evaluated in order and the first rule with a trigger contained in
the lower-cased message wins, so the table order is the tie-break when a
message mentions several topics.
"""

from dataclasses import dataclass

from reunion_chat.context import CONTACT_EMAIL, EVENT_DATES


@dataclass(frozen=True)
class KeywordRule:
    """A topic rule: any trigger substring selects the answer.

    Attributes:
        topic: Short topic label (for logging and tests)
        triggers: Lower-case substrings that select this rule
        answer: Canned answer text
    """

    topic: str
    triggers: tuple[str, ...]
    answer: str

    def matches(self, lowered: str) -> bool:
        return any(trigger in lowered for trigger in self.triggers)


KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        topic="schedule",
        triggers=("schedule", "agenda"),
        answer=(
            "Check out our interactive schedule at schedule.html or add the events to your "
            f"Google Calendar! The reunion runs {EVENT_DATES}."
        ),
    ),
    KeywordRule(
        topic="accommodation",
        triggers=("accommodation", "room", "stay"),
        answer=(
            "Accommodation is in student rooms with 4-5 single beds each. Check-in is after "
            "12pm on August 12th at the Dining Hall Registration Desk."
        ),
    ),
    KeywordRule(
        topic="transport",
        triggers=("transport", "shuttle", "airport"),
        answer=(
            "Free shuttles available (register by June 28): 12pm Swartz Bay, 1pm YYJ Airport, "
            f"2pm Royal BC Museum. Contact {CONTACT_EMAIL} to register."
        ),
    ),
    KeywordRule(
        topic="pricing",
        triggers=("cost", "price", "fee"),
        answer=(
            "Single day rates: $151.20 off-site, $188.10 on-site. Child rates: $125.38 "
            f"off-site, $159.62 on-site. Contact {CONTACT_EMAIL} for registration."
        ),
    ),
    KeywordRule(
        topic="kids",
        triggers=("kids", "children", "family"),
        answer=(
            "Yes! Kids are welcome. We have a dedicated Kids Camp with activities. "
            "Check kids-camp.html for the full schedule."
        ),
    ),
    KeywordRule(
        topic="weather",
        triggers=("weather", "clothes", "pack"),
        answer=(
            "August in Victoria: 15-25°C days, 10-15°C evenings. Bring layers, rain gear, "
            "walking shoes, and something dressy for the gala dinner."
        ),
    ),
    KeywordRule(
        topic="contact",
        triggers=("contact", "help", "phone"),
        answer=(
            f"Main contact: {CONTACT_EMAIL}. For urgent matters: Phoebe Mason +1 778 769 3745, "
            "Ruba Elfurjani +1 778 401 1493. Join our WhatsApp group for live updates!"
        ),
    ),
)

DEFAULT_ANSWER = (
    "I can help with questions about the reunion schedule, accommodation, transportation, "
    "costs, kids activities, weather, and contacts. For detailed information, check our FAQ "
    f"section or contact {CONTACT_EMAIL}."
)


def match_rule(message: str, rules: tuple[KeywordRule, ...] = KEYWORD_RULES) -> KeywordRule | None:
    """Return the first rule matching the message, or None."""
    lowered = message.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule
    return None


def fallback(message: str) -> str:
    """
    Answer a question from the canned keyword table.

    Never raises and never returns an empty string.

    Args:
        message: Free-text user question

    Returns:
        Canned answer for the first matching topic, or DEFAULT_ANSWER
    """
    rule = match_rule(message)
    if rule is None:
        return DEFAULT_ANSWER
    return rule.answer
