"""JWT login and the bearer-token gate (get_current_user) used by every protected route."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chatgate.api.deps import get_authenticator
from chatgate.schemas.auth import CurrentUserResponse, LoginRequest, SessionClaims, TokenResponse
from chatgate.services.authenticator import (
    Authenticator,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
from chatgate.services.permissions import permissions_for

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        token = authenticator.login(body.username, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return TokenResponse(token=token)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> SessionClaims:
    """Dependency: require a valid Bearer JWT. 401 if missing, 403 if invalid or expired."""
    token = credentials.credentials if credentials is not None else None
    try:
        return authenticator.authenticate(token)
    except MissingTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message,
        ) from e


@router.get("/me", response_model=CurrentUserResponse)
def read_me(
    user: Annotated[SessionClaims, Depends(get_current_user)],
) -> CurrentUserResponse:
    """Return the caller's identity and the permissions granted to their role."""
    return CurrentUserResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        permissions=sorted(permissions_for(user.role)),
        expires_at=user.expires_at,
    )
