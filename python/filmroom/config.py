"""Application settings loaded from environment variables.

Environment Configuration:
    FILMROOM_ENV: Deployment environment (local | test | staging | prod)
    DATABASE_URL: SQLAlchemy URL of the managed PostgreSQL store (required)

Auth Configuration (required in all environments):
    AUTH_SECRET: Symmetric key used to sign session tokens
    CAPTAIN_PASSWORD: Shared password for the captain role
    INVITE_CODE: Code contributors must present to register

Tuning:
    BCRYPT_ROUNDS: bcrypt cost factor for new password hashes (default 12)
    SHEET_FETCH_TIMEOUT_S: Timeout for the Google Sheet CSV export fetch
    DB_POOL_SIZE: Connections kept open to the store (default 5)
    DB_POOL_RECYCLE_S: Recycle pooled connections older than this (default 300)
"""

from enum import Enum
from functools import lru_cache
from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Valid deployment environments."""

    LOCAL = "local"
    TEST = "test"
    STAGING = "staging"
    PROD = "prod"


class Settings(BaseSettings):
    """Application configuration.

    Validation rules:
    - DATABASE_URL is always required
    - AUTH_SECRET, CAPTAIN_PASSWORD and INVITE_CODE are required in all environments
    """

    filmroom_env: Environment = Field(default=Environment.LOCAL, alias="FILMROOM_ENV")
    database_url: Annotated[str, Field(alias="DATABASE_URL")]

    # Auth settings (required in all environments)
    auth_secret: str | None = Field(default=None, alias="AUTH_SECRET")
    captain_password: str | None = Field(default=None, alias="CAPTAIN_PASSWORD")
    invite_code: str | None = Field(default=None, alias="INVITE_CODE")

    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS")

    # Google Sheet import
    sheet_fetch_timeout_s: float = Field(default=15.0, alias="SHEET_FETCH_TIMEOUT_S")

    # Connection pool; the managed store closes idle connections on its side
    db_pool_size: int = Field(default=5, alias="DB_POOL_SIZE")
    db_pool_recycle_s: int = Field(default=300, alias="DB_POOL_RECYCLE_S")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def validate_required_settings(self) -> "Settings":
        """Ensure auth settings are present and tuning values are sane."""
        missing = []
        if not self.auth_secret:
            missing.append("AUTH_SECRET")
        if not self.captain_password:
            missing.append("CAPTAIN_PASSWORD")
        if not self.invite_code:
            missing.append("INVITE_CODE")

        if missing:
            raise ValueError(f"Missing required auth settings: {', '.join(missing)}")

        # bcrypt refuses cost factors outside 4..31
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")

        if self.sheet_fetch_timeout_s <= 0:
            raise ValueError("SHEET_FETCH_TIMEOUT_S must be > 0")

        if self.db_pool_size < 1:
            raise ValueError("DB_POOL_SIZE must be >= 1")

        return self

    @property
    def secure_cookies(self) -> bool:
        """Whether the session cookie carries the Secure attribute."""
        return self.filmroom_env in (Environment.STAGING, Environment.PROD)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If required settings are missing or invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()
