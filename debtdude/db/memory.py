"""In-memory conversation and message storage for DebtDude.

Conversations live for the lifetime of the process. All access goes
through one lock so that message appends for a conversation keep their
order under concurrent requests.
"""

import logging
import threading
import time
from datetime import datetime

from debtdude.models import Conversation, Message
from debtdude.utils.time import Clock, utc_now

logger = logging.getLogger(__name__)


class ConversationStore:
    """Process-local conversation store."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._lock = threading.Lock()
        self._conversations: dict[str, Conversation] = {}
        self._messages: dict[str, list[Message]] = {}
        self._last_id = 0

    def now(self) -> datetime:
        """Current time according to the store's clock."""
        return self._clock()

    def next_id(self) -> str:
        """Millisecond timestamp id, bumped when needed so ids never repeat."""
        with self._lock:
            return self._next_id_locked()

    def _next_id_locked(self) -> str:
        candidate = time.time_ns() // 1_000_000
        self._last_id = max(candidate, self._last_id + 1)
        return str(self._last_id)

    def create_conversation(self, title: str | None = None, user_id: str | None = None) -> Conversation:
        """Create and register a new, empty conversation."""
        now = self._clock()
        with self._lock:
            conversation = Conversation(
                id=self._next_id_locked(),
                title=title or "New Conversation",
                user_id=user_id,
                created_at=now,
                last_message="Conversation started",
                last_message_time=now,
            )
            self._conversations[conversation.id] = conversation
            self._messages[conversation.id] = []

        logger.info(f"Created conversation {conversation.id}")
        return conversation

    def list_conversations(self, user_id: str | None = None) -> list[Conversation]:
        """Get conversations in creation order, optionally for one user."""
        with self._lock:
            conversations = list(self._conversations.values())
        if user_id is not None:
            conversations = [c for c in conversations if c.user_id == user_id]
        return conversations

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        """Get a conversation by id."""
        with self._lock:
            return self._conversations.get(conversation_id)

    def append_message(self, conversation_id: str, message: Message) -> None:
        """Append a message. The message list is created on first use."""
        with self._lock:
            self._messages.setdefault(conversation_id, []).append(message)

    def list_messages(self, conversation_id: str) -> list[Message]:
        """Get a copy of a conversation's messages, oldest first."""
        with self._lock:
            return list(self._messages.get(conversation_id, []))

    def record_exchange(self, conversation_id: str, last_message: str, at: datetime | None = None) -> None:
        """Update the conversation's last-message preview, if the conversation exists."""
        at = at or self._clock()
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                logger.debug(f"No conversation {conversation_id} to update")
                return
            self._conversations[conversation_id] = conversation.model_copy(
                update={"last_message": last_message, "last_message_time": at}
            )

    def clear(self) -> None:
        """Drop all conversations and messages."""
        with self._lock:
            self._conversations.clear()
            self._messages.clear()


# Global store instance
store = ConversationStore()


def get_store() -> ConversationStore:
    """FastAPI dependency returning the process store."""
    return store
