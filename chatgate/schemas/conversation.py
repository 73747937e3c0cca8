"""Conversation and message schemas (stored state and request/response bodies)."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MessageRole = Literal["user", "assistant"]

DEFAULT_CONVERSATION_TITLE = "New Conversation"


class Message(BaseModel):
    """One message in a conversation. Immutable once appended."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: MessageRole
    content: str
    timestamp: datetime


class Conversation(BaseModel):
    """
    A user's conversation with the assistant.

    Serialized with camelCase keys (userId, createdAt, updatedAt).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    user_id: int
    messages: list[Message] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CreateConversationRequest(BaseModel):
    """Body for POST /conversations. An absent or empty title becomes the default."""

    title: str | None = Field(default=None, max_length=500)


class SendMessageRequest(BaseModel):
    """Body for POST /conversations/{id}/messages."""

    content: str = Field(..., min_length=1, description="User message; sent verbatim as the prompt")


class MessageExchangeResponse(BaseModel):
    """The user message and the assistant reply produced from it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_message: Message
    assistant_message: Message


class StatusMessage(BaseModel):
    """Plain acknowledgement body, e.g. after deletion."""

    message: str
