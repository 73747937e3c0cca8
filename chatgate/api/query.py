"""Direct query endpoint: permission-gated single prompt to the completion service."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from chatgate.api.auth import get_current_user
from chatgate.api.deps import get_completion_client
from chatgate.schemas.auth import SessionClaims
from chatgate.schemas.query import QueryRequest, QueryResponse
from chatgate.services.chat import run_query
from chatgate.services.completion import CompletionClient, CompletionServiceError
from chatgate.services.permissions import PermissionDeniedError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=QueryResponse)
async def post_query(
    body: QueryRequest,
    user: Annotated[SessionClaims, Depends(get_current_user)],
    completion: Annotated[CompletionClient, Depends(get_completion_client)],
) -> QueryResponse:
    """
    Answer a free-text prompt.

    Prompts containing 'sensitive' require the view_sensitive permission;
    all others require query_basic_data.
    """
    try:
        text = await run_query(completion, user, body.prompt)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
    except CompletionServiceError as e:
        logger.error("Error calling LLM API: %s", e.message, exc_info=e.cause)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error processing your query",
        ) from e
    return QueryResponse(response=text)
