"""Decides whether a chat message needs the user's transactions to be answered."""

from collections.abc import Iterable

from debtdude.config import settings


def requires_grounding(message: str, keywords: Iterable[str] | None = None) -> bool:
    """
    Check if a message asks about the user's own money.

    Plain case-insensitive substring match against the trigger terms
    ("spent" matches "overspent", "bill" matches "billing"). Over-matching is
    acceptable here; a miss would let the model answer a numeric question
    without data.

    Args:
        message: Free-text user message
        keywords: Trigger terms. Defaults to settings.grounding_keywords.
    """
    if not message:
        return False

    terms = settings.grounding_keywords if keywords is None else keywords
    message_lower = message.lower()

    return any(term.lower() in message_lower for term in terms if term)
