"""Unit tests for chatgate.core.config: validation of settings and seed users."""

import unittest

from pydantic import SecretStr, ValidationError

from chatgate.core.config import SeedUser, Settings


class TestSeedUsers(unittest.TestCase):
    """Seed users need exactly one secret, and unique ids/usernames."""

    def test_default_seed(self) -> None:
        settings = Settings(BCRYPT_ROUNDS=4)
        self.assertEqual(
            [(u.id, u.username, u.role) for u in settings.SEED_USERS],
            [(1, "admin", "admin"), (2, "manager", "manager"), (3, "user", "user")],
        )

    def test_requires_one_secret(self) -> None:
        with self.assertRaises(ValidationError):
            SeedUser(id=1, username="a", role="user")
        with self.assertRaises(ValidationError):
            SeedUser(id=1, username="a", role="user", password=SecretStr("x"), password_hash="$2b$...")

    def test_unknown_role_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            SeedUser(id=1, username="a", role="root", password=SecretStr("x"))

    def test_duplicate_usernames_rejected(self) -> None:
        users = [
            SeedUser(id=1, username="a", role="user", password=SecretStr("x")),
            SeedUser(id=2, username="a", role="admin", password=SecretStr("y")),
        ]
        with self.assertRaises(ValidationError):
            Settings(SEED_USERS=users)


class TestSettingsValidation(unittest.TestCase):
    """Invalid values fail at construction."""

    def test_empty_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET=SecretStr("  "))

    def test_llm_base_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(LLM_BASE_URL="ftp://example.com")
        self.assertEqual(Settings(LLM_BASE_URL="https://example.com/").LLM_BASE_URL, "https://example.com")

    def test_timeout_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(LLM_REQUEST_TIMEOUT_SEC=0)
        with self.assertRaises(ValidationError):
            Settings(LLM_REQUEST_TIMEOUT_SEC=301)

    def test_blank_api_key_means_unset(self) -> None:
        self.assertIsNone(Settings(LLM_API_KEY=SecretStr("")).LLM_API_KEY)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=3)
