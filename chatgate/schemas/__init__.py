"""Pydantic request/response schemas."""

from chatgate.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    Role,
    SessionClaims,
    TokenResponse,
)
from chatgate.schemas.conversation import (
    DEFAULT_CONVERSATION_TITLE,
    Conversation,
    CreateConversationRequest,
    Message,
    MessageExchangeResponse,
    MessageRole,
    SendMessageRequest,
    StatusMessage,
)
from chatgate.schemas.health import HealthResponse
from chatgate.schemas.query import QueryRequest, QueryResponse

__all__ = [
    "DEFAULT_CONVERSATION_TITLE",
    "Conversation",
    "CreateConversationRequest",
    "CurrentUserResponse",
    "HealthResponse",
    "LoginRequest",
    "Message",
    "MessageExchangeResponse",
    "MessageRole",
    "QueryRequest",
    "QueryResponse",
    "Role",
    "SendMessageRequest",
    "SessionClaims",
    "StatusMessage",
    "TokenResponse",
]
