"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from chatgate.api.deps import get_app_settings, get_completion_client
from chatgate.core.config import Settings
from chatgate.schemas.health import HealthResponse
from chatgate.services.completion import CompletionClient

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    settings: Annotated[Settings, Depends(get_app_settings)],
    completion: Annotated[CompletionClient, Depends(get_completion_client)],
) -> HealthResponse:
    """
    Return service health status and whether the completion service is configured.
    Used by load balancers and monitoring.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        llm_configured=completion.configured,
    )
