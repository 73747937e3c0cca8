"""Request/response schemas for the direct query endpoint."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Free-text prompt sent straight to the completion service."""

    prompt: str = Field(..., min_length=1, description="Prompt text")


class QueryResponse(BaseModel):
    """Completion text returned by the remote model."""

    response: str
