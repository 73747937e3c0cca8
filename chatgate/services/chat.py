"""Request orchestration: conversational append and direct query through the completion client."""

import logging

from chatgate.schemas.auth import SessionClaims
from chatgate.schemas.conversation import Message
from chatgate.services.completion import CompletionClient
from chatgate.services.conversation_store import ConversationStore
from chatgate.services.permissions import (
    PermissionDeniedError,
    has_permission,
    required_permission_for_prompt,
)

logger = logging.getLogger(__name__)


async def send_message(
    store: ConversationStore,
    completion: CompletionClient,
    conversation_id: str,
    user_id: int,
    content: str,
) -> tuple[Message, Message]:
    """
    Append a user message, ask the model, append its reply; return both messages.

    The user message stays in the conversation if the completion fails
    (CompletionServiceError propagates and no assistant message is added).
    Raises ConversationNotFoundError if the caller does not own the conversation.

    The store calls run on the event loop. Each holds a conversation lock only
    for a list append, so the loop never waits on threadpool handlers for long.
    No lock is held while the completion is awaited.
    """
    user_message = store.append_user_message(conversation_id, user_id, content)
    reply = await completion.complete(content)
    assistant_message = store.append_assistant_message(
        conversation_id, store.new_message("assistant", reply)
    )
    return user_message, assistant_message


async def run_query(completion: CompletionClient, claims: SessionClaims, prompt: str) -> str:
    """
    Check the prompt's required permission against the caller's role, then complete it.

    Raises PermissionDeniedError before any remote call when the role lacks it.
    """
    permission = required_permission_for_prompt(prompt)
    if not has_permission(claims, permission):
        logger.info(
            "Query denied",
            extra={"user_id": claims.id, "role": claims.role, "permission": permission},
        )
        raise PermissionDeniedError(permission)
    return await completion.complete(prompt)
