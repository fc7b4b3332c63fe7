"""Chat exchange handling: store the user's message, route it, store the reply."""

import logging
from collections.abc import Sequence

from debtdude.db.memory import ConversationStore
from debtdude.models import Message, MessageExchange, Transaction
from debtdude.services.llm_client import TextGenerator
from debtdude.services.router import Refused, route_message
from debtdude.utils.time import display_time

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_MESSAGE = (
    "This question requires transaction data to answer properly. "
    "Please ensure your Firebase transactions are synced."
)


class InsufficientDataError(Exception):
    """Raised when a message cannot be answered with the data available."""

    def __init__(self, message: str = INSUFFICIENT_DATA_MESSAGE):
        super().__init__(message)


def _new_message(store: ConversationStore, text: str, is_me: bool) -> Message:
    now = store.now()
    return Message(
        id=store.next_id(),
        text=text,
        is_me=is_me,
        timestamp=now,
        display_time=display_time(now),
    )


async def send_message(
    store: ConversationStore,
    conversation_id: str,
    text: str,
    transactions: Sequence[Transaction] | None = None,
    generator: TextGenerator | None = None,
) -> MessageExchange:
    """
    Record a user message and the assistant's reply.

    The user message is stored even when no reply can be given.

    Raises:
        InsufficientDataError: If the router refused to answer
    """
    user_message = _new_message(store, text, is_me=True)
    store.append_message(conversation_id, user_message)

    result = await route_message(text, transactions, generator=generator, now=user_message.timestamp)
    if isinstance(result, Refused):
        logger.info(f"No reply for conversation {conversation_id}: {result.reason.value}")
        raise InsufficientDataError()

    ai_message = _new_message(store, result.text, is_me=False)
    store.append_message(conversation_id, ai_message)
    store.record_exchange(conversation_id, text, ai_message.timestamp)

    return MessageExchange(user_message=user_message, ai_message=ai_message)
