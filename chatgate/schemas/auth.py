"""Request/response schemas for auth endpoints and session claims."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["admin", "manager", "user"]


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """Signed session token returned after successful login."""

    token: str = Field(..., description="JWT session token; send as 'Authorization: Bearer <token>'")


class SessionClaims(BaseModel):
    """Identity carried in a verified session token. Never stored server-side."""

    id: int
    username: str
    role: str
    issued_at: datetime
    expires_at: datetime


class CurrentUserResponse(BaseModel):
    """Response for GET /me: caller identity and the permissions of their role."""

    id: int
    username: str
    role: str
    permissions: list[str]
    expires_at: datetime
