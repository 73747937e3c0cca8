"""Authenticator: password login issuing signed session tokens, and token verification."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

import jwt
from pydantic import ValidationError

from chatgate.core.security import create_access_token, decode_access_token, verify_password
from chatgate.schemas.auth import SessionClaims
from chatgate.services.credentials import CredentialStore

if TYPE_CHECKING:
    from chatgate.core.config import Settings

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Caller-visible login failure messages; both map to the same HTTP status.
INVALID_CREDENTIAL_MESSAGES = {
    "unknown_user": "Invalid credentials. Invalid User.",
    "wrong_password": "Invalid credentials. Invalid Password.",
}


def utc_now() -> datetime:
    return datetime.now(UTC)


class InvalidCredentialsError(Exception):
    """Raised when login fails; reason tells which check failed."""

    def __init__(self, reason: Literal["unknown_user", "wrong_password"]) -> None:
        self.reason = reason
        self.message = INVALID_CREDENTIAL_MESSAGES[reason]
        super().__init__(self.message)


class MissingTokenError(Exception):
    """Raised when a protected request carries no bearer token."""

    def __init__(self) -> None:
        self.message = "Access denied"
        super().__init__(self.message)


class InvalidTokenError(Exception):
    """Raised when a bearer token fails signature, expiry or claims checks."""

    def __init__(self, cause: Exception | None = None) -> None:
        self.message = "Invalid token"
        self.cause = cause
        super().__init__(self.message)


class Authenticator:
    """Stateless token authentication against a CredentialStore."""

    def __init__(
        self,
        credentials: CredentialStore,
        settings: "Settings",
        clock: Clock = utc_now,
    ) -> None:
        self._credentials = credentials
        self._settings = settings
        self._clock = clock

    def login(self, username: str, password: str) -> str:
        """
        Verify username/password and return a signed token valid for JWT_EXPIRE_MINUTES.

        Raises InvalidCredentialsError for an unknown username or a wrong password.
        """
        user = self._credentials.get_by_username(username)
        if user is None:
            logger.info(
                "Login failed (%s) for %r",
                "unknown_user",
                username,
                extra={"username": username, "reason": "unknown_user"},
            )
            raise InvalidCredentialsError("unknown_user")
        if not verify_password(password, user.password_hash):
            logger.info(
                "Login failed (%s) for %r",
                "wrong_password",
                username,
                extra={"username": username, "reason": "wrong_password"},
            )
            raise InvalidCredentialsError("wrong_password")
        token = create_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role,
            settings=self._settings,
            now=self._clock(),
        )
        logger.info(
            "Login succeeded for user_id=%s role=%s",
            user.id,
            user.role,
            extra={"user_id": user.id, "role": user.role})
        return token

    def authenticate(self, token: str | None) -> SessionClaims:
        """
        Verify a bearer token and return its claims.

        Raises MissingTokenError when no token is given, InvalidTokenError when the
        signature or expiry check fails or the claims are malformed.
        """
        if not token:
            raise MissingTokenError()
        try:
            payload = decode_access_token(token, self._settings)
        except jwt.PyJWTError as e:
            logger.info("Token rejected: %s", e)
            raise InvalidTokenError(cause=e) from e
        try:
            return SessionClaims(
                id=payload["id"],
                username=payload["username"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.info("Token rejected: malformed claims")
            raise InvalidTokenError(cause=e) from e
