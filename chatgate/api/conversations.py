"""Conversation endpoints: list, read, create, delete, and chat with the assistant."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from chatgate.api.auth import get_current_user
from chatgate.api.deps import get_completion_client, get_conversation_store
from chatgate.schemas.auth import SessionClaims
from chatgate.schemas.conversation import (
    Conversation,
    CreateConversationRequest,
    Message,
    MessageExchangeResponse,
    SendMessageRequest,
    StatusMessage,
)
from chatgate.services.chat import send_message
from chatgate.services.completion import CompletionClient, CompletionServiceError
from chatgate.services.conversation_store import ConversationNotFoundError, ConversationStore

logger = logging.getLogger(__name__)

router = APIRouter()

Store = Annotated[ConversationStore, Depends(get_conversation_store)]
CurrentUser = Annotated[SessionClaims, Depends(get_current_user)]

PROCESSING_ERROR = "Error processing your query"


def _not_found(e: ConversationNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("", response_model=list[Conversation])
def list_conversations(user: CurrentUser, store: Store) -> list[Conversation]:
    """List the caller's conversations in creation order."""
    return store.list_for_user(user.id)


@router.get("/{conversation_id}", response_model=Conversation)
def get_conversation(conversation_id: str, user: CurrentUser, store: Store) -> Conversation:
    try:
        return store.get_for_user(conversation_id, user.id)
    except ConversationNotFoundError as e:
        raise _not_found(e) from e


@router.get("/{conversation_id}/messages", response_model=list[Message])
def list_messages(conversation_id: str, user: CurrentUser, store: Store) -> list[Message]:
    try:
        return store.list_messages(conversation_id, user.id)
    except ConversationNotFoundError as e:
        raise _not_found(e) from e


@router.post("", response_model=Conversation, status_code=status.HTTP_201_CREATED)
def create_conversation(
    user: CurrentUser,
    store: Store,
    body: CreateConversationRequest | None = None,
) -> Conversation:
    """Create an empty conversation; title defaults to 'New Conversation'."""
    title = body.title if body is not None else None
    return store.create(user.id, title)


@router.post("/{conversation_id}/messages", response_model=MessageExchangeResponse)
async def post_message(
    conversation_id: str,
    body: SendMessageRequest,
    user: CurrentUser,
    store: Store,
    completion: Annotated[CompletionClient, Depends(get_completion_client)],
) -> MessageExchangeResponse:
    """
    Send a message and get the assistant's reply.

    If the completion service fails the user message is kept, no reply is
    stored, and the response is a 500 with a generic message.
    """
    try:
        user_message, assistant_message = await send_message(
            store, completion, conversation_id, user.id, body.content
        )
    except ConversationNotFoundError as e:
        raise _not_found(e) from e
    except CompletionServiceError as e:
        logger.error(
            "Error calling LLM API: %s",
            e.message,
            exc_info=e.cause,
            extra={"conversation_id": conversation_id, "user_id": user.id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PROCESSING_ERROR,
        ) from e
    return MessageExchangeResponse(user_message=user_message, assistant_message=assistant_message)


@router.delete("/{conversation_id}", response_model=StatusMessage)
def delete_conversation(conversation_id: str, user: CurrentUser, store: Store) -> StatusMessage:
    try:
        store.delete(conversation_id, user.id)
    except ConversationNotFoundError as e:
        raise _not_found(e) from e
    return StatusMessage(message="Conversation deleted")
