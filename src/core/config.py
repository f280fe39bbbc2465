"""Settings loaded from the environment (and an optional ``.env`` file).

Secrets (database URL, both JWT secrets, the identity provider client secret)
have no defaults, so a missing variable fails at import rather than at the
first login.

    from src.core.config import settings

    settings.refresh_token_expire_days
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment


class Settings(BaseSettings):
    """Flat settings object; environment variables match field names, case-insensitive."""

    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO", description="Minimum log level name")

    app_name: str = Field(default="Appraisal Auth")
    app_version: str = Field(default="0.1.0")

    # Storage
    database_url: str = Field(
        description="postgresql+asyncpg://... or sqlite+aiosqlite://...",
    )
    db_echo: bool = Field(default=False, description="Echo SQL statements")
    revocation_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="'redis' when several API processes must share revocations",
    )
    redis_url: str = Field(default="redis://localhost:6379/0")

    # Application tokens
    jwt_access_secret: str = Field(description="HMAC key for access tokens")
    jwt_refresh_secret: str = Field(description="HMAC key for refresh tokens")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=15)
    refresh_token_expire_days: int = Field(default=7)
    session_expire_days: int = Field(default=7)
    bcrypt_rounds: int = Field(
        default=10, description="Cost factor for stored refresh-token hashes"
    )

    # Identity provider
    idp_base_url: str = Field(description="e.g. https://sso.example.com")
    idp_realm: str
    idp_client_id: str
    idp_client_secret: str
    idp_redirect_uri: str = Field(description="Where the provider sends the code")
    idp_timeout_seconds: float = Field(default=10.0)

    # HTTP
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Prefix of Problem Details type URLs",
    )
    api_v1_prefix: str = Field(default="/api/v1")
    cors_origins: str = Field(
        default="http://localhost:3000", description="Comma-separated origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @field_validator("jwt_access_secret", "jwt_refresh_secret")
    @classmethod
    def validate_secret_length(cls, v: str) -> str:
        # HS256 keys shorter than the digest weaken the MAC
        if len(v.encode("utf-8")) < 32:
            raise ValueError("JWT secrets must be at least 32 bytes")
        return v

    @field_validator("idp_base_url", "api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_distinct_secrets(self) -> "Settings":
        """A refresh token must never verify as an access token, and vice versa."""
        if self.jwt_access_secret == self.jwt_refresh_secret:
            raise ValueError("jwt_access_secret and jwt_refresh_secret must differ")
        return self

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, read once."""
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
