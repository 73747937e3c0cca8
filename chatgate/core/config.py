"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chatgate.schemas.auth import Role


class SeedUser(BaseModel):
    """One account seeded into the credential store at startup."""

    id: int
    username: str = Field(..., min_length=1, max_length=255)
    role: Role
    # Exactly one of password (hashed at startup) or password_hash (bcrypt, used as-is).
    password: SecretStr | None = None
    password_hash: str | None = None

    @model_validator(mode="after")
    def validate_secret(self) -> "SeedUser":
        if (self.password is None) == (self.password_hash is None):
            raise ValueError(
                f"Seed user '{self.username}' needs exactly one of password or password_hash"
            )
        return self


def _default_seed_users() -> list[SeedUser]:
    return [
        SeedUser(id=1, username="admin", role="admin", password=SecretStr("adminpass")),
        SeedUser(id=2, username="manager", role="manager", password=SecretStr("managerpass")),
        SeedUser(id=3, username="user", role="user", password=SecretStr("userpass")),
    ]


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Remote completion service (Anthropic Messages API)
    LLM_BASE_URL: str = "https://api.anthropic.com"
    LLM_API_KEY: SecretStr | None = None
    LLM_API_VERSION: str = "2023-06-01"
    LLM_MODEL: str = "claude-3-sonnet-20240229"
    LLM_MAX_TOKENS: int = 1000
    LLM_REQUEST_TIMEOUT_SEC: float = 60.0

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # Bcrypt cost used when hashing plain seed passwords.
    BCRYPT_ROUNDS: int = 12

    # Accounts available for login; JSON list in the environment.
    SEED_USERS: list[SeedUser] = Field(default_factory=_default_seed_users)

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("API_PREFIX must start with '/' (e.g. /api)")
        return v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LLM_BASE_URL")
    @classmethod
    def validate_llm_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("LLM_BASE_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "LLM_BASE_URL must use http or https (e.g. https://api.anthropic.com)"
            )
        return v.strip().rstrip("/")

    @field_validator("LLM_API_KEY")
    @classmethod
    def validate_llm_api_key(cls, v: SecretStr | None) -> SecretStr | None:
        if v is None or not v.get_secret_value().strip():
            return None
        return v

    @field_validator("LLM_MODEL", "LLM_API_VERSION")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("LLM_MODEL and LLM_API_VERSION must be non-empty")
        return v.strip()

    @field_validator("LLM_MAX_TOKENS")
    @classmethod
    def validate_llm_max_tokens(cls, v: int) -> int:
        if v < 1 or v > 100000:
            raise ValueError("LLM_MAX_TOKENS must be between 1 and 100000")
        return v

    @field_validator("LLM_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_llm_timeout(cls, v: float) -> float:
        if v <= 0 or v > 300:
            raise ValueError(
                "LLM_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 300"
            )
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("SEED_USERS")
    @classmethod
    def validate_seed_users(cls, v: list[SeedUser]) -> list[SeedUser]:
        usernames = [u.username for u in v]
        if len(set(usernames)) != len(usernames):
            raise ValueError("SEED_USERS usernames must be unique")
        ids = [u.id for u in v]
        if len(set(ids)) != len(ids):
            raise ValueError("SEED_USERS ids must be unique")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
