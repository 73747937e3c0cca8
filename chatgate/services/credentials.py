"""Credential store: the fixed set of accounts that may log in."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from chatgate.core.config import SeedUser
from chatgate.core.security import hash_password

logger = logging.getLogger(__name__)


class User(BaseModel):
    """
    Account record for JWT authentication and role-based access control.

    role: 'admin', 'manager' or 'user'
    """

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    password_hash: str
    role: str


class CredentialStore:
    """Immutable lookup of users by username and id, built once at startup."""

    def __init__(self, users: Iterable[User]) -> None:
        self._users = tuple(users)
        self._by_username = {u.username: u for u in self._users}
        self._by_id = {u.id: u for u in self._users}
        if len(self._by_username) != len(self._users) or len(self._by_id) != len(self._users):
            raise ValueError("User ids and usernames must be unique")

    @classmethod
    def from_seed(cls, seed_users: Iterable[SeedUser], rounds: int = 12) -> "CredentialStore":
        """Build the store from configured seed users, hashing any plain passwords."""
        users = []
        for seed in seed_users:
            if seed.password_hash is not None:
                password_hash = seed.password_hash
            else:
                password_hash = hash_password(seed.password.get_secret_value(), rounds=rounds)
            users.append(
                User(id=seed.id, username=seed.username, password_hash=password_hash, role=seed.role)
            )
        logger.info("Credential store seeded with %d users", len(users))
        return cls(users)

    def get_by_username(self, username: str) -> User | None:
        """Exact, case-sensitive username match."""
        return self._by_username.get(username)

    def get_by_id(self, user_id: int) -> User | None:
        return self._by_id.get(user_id)

    def list_users(self) -> list[User]:
        return list(self._users)
