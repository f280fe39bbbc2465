"""Pytest configuration for async testing.

This configuration ensures:
1. Required settings exist before any ``src`` module is imported
2. Async tests are marked automatically
3. Database fixtures are isolated (one SQLite file per test)
4. Security adapters use cheap parameters (bcrypt cost 4)
"""

import asyncio
import os

# Settings are loaded at import time of src.core.config
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_auth.db")
os.environ.setdefault(
    "JWT_ACCESS_SECRET", "test-access-secret-0123456789-abcdefghijklmnop"
)
os.environ.setdefault(
    "JWT_REFRESH_SECRET", "test-refresh-secret-0123456789-qrstuvwxyzabcd"
)
os.environ.setdefault("IDP_BASE_URL", "https://sso.test.local")
os.environ.setdefault("IDP_REALM", "appraisal")
os.environ.setdefault("IDP_CLIENT_ID", "appraisal-api")
os.environ.setdefault("IDP_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("IDP_REDIRECT_URI", "http://localhost:8000/oauth/callback")
os.environ.setdefault("REVOCATION_BACKEND", "memory")

from datetime import UTC, datetime, timedelta  # noqa: E402
from unittest.mock import Mock  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from uuid_extensions import uuid7  # noqa: E402

from src.domain.entities import User  # noqa: E402
from src.domain.enums import UserRole  # noqa: E402
from src.domain.value_objects import TokenPair  # noqa: E402
from src.infrastructure.cache import InMemoryRevocationStore  # noqa: E402
from src.infrastructure.persistence.database import Database  # noqa: E402
from src.infrastructure.security import (  # noqa: E402
    BcryptSecretHasher,
    JWTTokenIssuer,
)

ACCESS_SECRET = "unit-access-secret-0123456789-abcdefghijklmnop"
REFRESH_SECRET = "unit-refresh-secret-0123456789-qrstuvwxyzabcd"


# =============================================================================
# Test helper functions for domain entities
# =============================================================================


def create_user(
    *,
    user_id: UUID | None = None,
    external_id: str = "idp-subject-1",
    email: str = "jane@example.com",
    name: str = "Jane Doe",
    roles: list[UserRole] | None = None,
    is_active: bool = True,
) -> User:
    """Helper to create a User entity for testing.

    Usage:
        user = create_user()
        inactive = create_user(is_active=False)
    """
    return User(
        id=user_id or uuid7(),
        external_id=external_id,
        email=email,
        name=name,
        roles=roles if roles is not None else [UserRole.USER],
        is_active=is_active,
    )


def create_token_pair(
    *,
    jti: str = "jti-1",
    access_token: str = "access.token.value",
    refresh_token: str = "refresh.token.value",
) -> TokenPair:
    """Helper to create a TokenPair without signing anything."""
    return TokenPair(
        access_token=access_token,
        refresh_token=refresh_token,
        jti=jti,
        expires_in=900,
        refresh_expires_at=datetime.now(UTC) + timedelta(days=7),
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Logger double recording structured calls."""
    return Mock()


@pytest.fixture
def revocation_store():
    """Fresh in-memory revocation store per test."""
    return InMemoryRevocationStore()


@pytest.fixture
def token_issuer(revocation_store):
    """JWT issuer with test secrets and an isolated revocation store."""
    return JWTTokenIssuer(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        revocation_store=revocation_store,
    )


@pytest.fixture
def secret_hasher():
    """Bcrypt hasher at the minimum cost factor."""
    return BcryptSecretHasher(cost_factor=4)


@pytest_asyncio.fixture
async def database(tmp_path):
    """SQLite database with all tables, one file per test."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'auth.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database):
    """Async session bound to the per-test database."""
    async with database.async_session() as session:
        yield session


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: API tests with TestClient")
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


# Test execution configuration
def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
