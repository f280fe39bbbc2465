# mypy: disable-error-code="arg-type"
"""Adapter factories.

Stateless or pooled adapters are process singletons behind ``lru_cache``.
The database session is the one request-scoped dependency: FastAPI opens it
per request through ``Depends(get_db_session)`` and every repository in that
request shares it.

Tests swap adapters with ``app.dependency_overrides`` or call
``get_x.cache_clear()``.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols import (
        IdentityProviderProtocol,
        LoggerProtocol,
        RevocationStoreProtocol,
        SecretHasherProtocol,
        TokenIssuerProtocol,
    )


@lru_cache()
def get_database() -> Database:
    return Database(database_url=settings.database_url, echo=settings.db_echo)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed on success and rolled back on error."""
    async with get_database().get_session() as session:
        yield session


@lru_cache()
def get_revocation_store() -> "RevocationStoreProtocol":
    """Revoked-jti set chosen by REVOCATION_BACKEND.

    ``memory`` only works with a single API process; ``redis`` is shared.
    """
    if settings.revocation_backend == "redis":
        from redis.asyncio import Redis

        from src.infrastructure.cache import RedisRevocationStore

        client = Redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return RedisRevocationStore(redis_client=client)

    from src.infrastructure.cache import InMemoryRevocationStore

    return InMemoryRevocationStore()


@lru_cache()
def get_token_issuer() -> "TokenIssuerProtocol":
    from src.infrastructure.security import JWTTokenIssuer

    return JWTTokenIssuer(
        access_secret=settings.jwt_access_secret,
        refresh_secret=settings.jwt_refresh_secret,
        revocation_store=get_revocation_store(),
        access_expiration_minutes=settings.access_token_expire_minutes,
        refresh_expiration_days=settings.refresh_token_expire_days,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache()
def get_secret_hasher() -> "SecretHasherProtocol":
    from src.infrastructure.security import BcryptSecretHasher

    return BcryptSecretHasher(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_identity_provider() -> "IdentityProviderProtocol":
    from src.infrastructure.providers.oidc import OIDCIdentityProvider

    return OIDCIdentityProvider.from_settings(settings)


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """JSON lines everywhere except development."""
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )
