"""In-memory conversation store: per-user conversations with ordered, append-only messages."""

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime

from chatgate.schemas.conversation import (
    DEFAULT_CONVERSATION_TITLE,
    Conversation,
    Message,
    MessageRole,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ConversationNotFoundError(Exception):
    """Raised when a conversation does not exist or is not owned by the caller."""

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        self.message = "Conversation not found"
        super().__init__(self.message)


class MonotonicIdGenerator:
    """
    Time-derived string ids (epoch milliseconds) that never repeat.

    Two calls in the same millisecond get consecutive values, so ids are
    strictly increasing in generation order.
    """

    def __init__(self, time_ms: Callable[[], int] = lambda: time.time_ns() // 1_000_000) -> None:
        self._time_ms = time_ms
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            self._last = max(self._time_ms(), self._last + 1)
            return str(self._last)


@dataclass
class _Entry:
    conversation: Conversation
    lock: threading.Lock = field(default_factory=threading.Lock)
    deleted: bool = False


class ConversationStore:
    """
    Owns every conversation and its messages.

    Mutations of one conversation are serialized by that conversation's lock;
    the registry lock only guards membership, so distinct conversations never
    block each other. Every read returns a deep copy.
    """

    def __init__(
        self,
        clock: Clock = _utc_now,
        id_generator: MonotonicIdGenerator | None = None,
    ) -> None:
        self._clock = clock
        self._ids = id_generator or MonotonicIdGenerator()
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def _owned_entry(self, conversation_id: str, user_id: int) -> _Entry:
        with self._lock:
            entry = self._entries.get(conversation_id)
        if entry is None or entry.conversation.user_id != user_id:
            raise ConversationNotFoundError(conversation_id)
        return entry

    @contextmanager
    def _locked(self, entry: _Entry) -> Iterator[Conversation]:
        with entry.lock:
            if entry.deleted:
                raise ConversationNotFoundError(entry.conversation.id)
            yield entry.conversation

    def _snapshot(self, entry: _Entry) -> Conversation | None:
        with entry.lock:
            if entry.deleted:
                return None
            return entry.conversation.model_copy(deep=True)

    def list_for_user(self, user_id: int) -> list[Conversation]:
        """All conversations owned by user_id, in creation order."""
        with self._lock:
            entries = [e for e in self._entries.values() if e.conversation.user_id == user_id]
        snapshots = (self._snapshot(e) for e in entries)
        return [c for c in snapshots if c is not None]

    def get_for_user(self, conversation_id: str, user_id: int) -> Conversation:
        snapshot = self._snapshot(self._owned_entry(conversation_id, user_id))
        if snapshot is None:
            raise ConversationNotFoundError(conversation_id)
        return snapshot

    def list_messages(self, conversation_id: str, user_id: int) -> list[Message]:
        return self.get_for_user(conversation_id, user_id).messages

    def create(self, user_id: int, title: str | None = None) -> Conversation:
        now = self._clock()
        conversation = Conversation(
            id=self._ids.next_id(),
            title=title or DEFAULT_CONVERSATION_TITLE,
            user_id=user_id,
            messages=[],
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._entries[conversation.id] = _Entry(conversation=conversation)
        logger.info("Conversation created", extra={"conversation_id": conversation.id, "user_id": user_id})
        return conversation.model_copy(deep=True)

    def new_message(self, role: MessageRole, content: str) -> Message:
        """Build a message with a fresh id and the current time; not yet appended anywhere."""
        return Message(id=self._ids.next_id(), role=role, content=content, timestamp=self._clock())

    def _append(self, conversation: Conversation, message: Message) -> Message:
        # Keep timestamps non-decreasing even if the clock steps backwards.
        if conversation.messages and message.timestamp < conversation.messages[-1].timestamp:
            message = message.model_copy(update={"timestamp": conversation.messages[-1].timestamp})
        conversation.messages.append(message)
        conversation.updated_at = max(conversation.updated_at, message.timestamp)
        return message

    def append_user_message(self, conversation_id: str, user_id: int, content: str) -> Message:
        """Append a user-role message to a conversation owned by user_id."""
        entry = self._owned_entry(conversation_id, user_id)
        with self._locked(entry) as conversation:
            return self._append(conversation, self.new_message("user", content))

    def append_assistant_message(self, conversation_id: str, message: Message) -> Message:
        """
        Append a pre-built assistant message.

        Raises ConversationNotFoundError if the conversation was deleted meanwhile.
        """
        with self._lock:
            entry = self._entries.get(conversation_id)
        if entry is None:
            raise ConversationNotFoundError(conversation_id)
        with self._locked(entry) as conversation:
            return self._append(conversation, message)

    def delete(self, conversation_id: str, user_id: int) -> None:
        entry = self._owned_entry(conversation_id, user_id)
        with self._locked(entry):
            entry.deleted = True
            with self._lock:
                self._entries.pop(conversation_id, None)
        logger.info("Conversation deleted", extra={"conversation_id": conversation_id, "user_id": user_id})
