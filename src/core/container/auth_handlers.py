"""Authentication handler dependency factories.

Request-scoped handler instances for authentication operations:
- Login (authorization code exchange), token refresh, logout
- Current user and active session queries
- Expired record purge

Repositories and application services share the request's database
session; issuer, hasher, identity provider and logger are app-scoped.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.infrastructure import (
    get_db_session,
    get_identity_provider,
    get_logger,
    get_secret_hasher,
    get_token_issuer,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )
    from src.application.commands.handlers.logout_user_handler import LogoutUserHandler
    from src.application.commands.handlers.purge_expired_auth_records_handler import (
        PurgeExpiredAuthRecordsHandler,
    )
    from src.application.commands.handlers.refresh_tokens_handler import (
        RefreshTokensHandler,
    )
    from src.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )
    from src.application.queries.handlers.list_active_sessions_handler import (
        ListActiveSessionsHandler,
    )
    from src.application.services import RefreshTokenLedger, SessionTracker


# ============================================================================
# Application Services (Request-Scoped)
# ============================================================================


def build_session_tracker(session: AsyncSession) -> "SessionTracker":
    """Build a SessionTracker bound to a database session."""
    from src.application.services import SessionTracker
    from src.infrastructure.persistence.repositories import (
        RefreshTokenRepository,
        SessionRepository,
    )

    return SessionTracker(
        session_repo=SessionRepository(session=session),
        refresh_token_repo=RefreshTokenRepository(session=session),
        token_issuer=get_token_issuer(),
        logger=get_logger(),
    )


def build_refresh_token_ledger(
    session: AsyncSession, session_tracker: "SessionTracker"
) -> "RefreshTokenLedger":
    """Build a RefreshTokenLedger bound to a database session."""
    from src.application.services import RefreshTokenLedger
    from src.infrastructure.persistence.repositories import RefreshTokenRepository

    return RefreshTokenLedger(
        refresh_token_repo=RefreshTokenRepository(session=session),
        secret_hasher=get_secret_hasher(),
        token_issuer=get_token_issuer(),
        session_tracker=session_tracker,
        logger=get_logger(),
    )


# ============================================================================
# Authentication Handler Factories
# ============================================================================


async def get_authenticate_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "AuthenticateUserHandler":
    """Get AuthenticateUser command handler (request-scoped).

    Returns:
        AuthenticateUserHandler instance.
    """
    from src.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    session_tracker = build_session_tracker(session)
    return AuthenticateUserHandler(
        identity_provider=get_identity_provider(),
        user_repo=UserRepository(session=session),
        token_issuer=get_token_issuer(),
        ledger=build_refresh_token_ledger(session, session_tracker),
        session_tracker=session_tracker,
        logger=get_logger(),
        session_expire_days=settings.session_expire_days,
    )


async def get_refresh_tokens_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshTokensHandler":
    """Get RefreshTokens command handler (request-scoped).

    Returns:
        RefreshTokensHandler instance.
    """
    from src.application.commands.handlers.refresh_tokens_handler import (
        RefreshTokensHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    session_tracker = build_session_tracker(session)
    return RefreshTokensHandler(
        token_issuer=get_token_issuer(),
        user_repo=UserRepository(session=session),
        ledger=build_refresh_token_ledger(session, session_tracker),
        logger=get_logger(),
    )


async def get_logout_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutUserHandler":
    """Get LogoutUser command handler (request-scoped).

    Returns:
        LogoutUserHandler instance.
    """
    from src.application.commands.handlers.logout_user_handler import LogoutUserHandler

    return LogoutUserHandler(
        session_tracker=build_session_tracker(session),
        token_issuer=get_token_issuer(),
        identity_provider=get_identity_provider(),
        logger=get_logger(),
    )


async def get_purge_expired_auth_records_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "PurgeExpiredAuthRecordsHandler":
    """Get PurgeExpiredAuthRecords command handler (request-scoped)."""
    from src.application.commands.handlers.purge_expired_auth_records_handler import (
        PurgeExpiredAuthRecordsHandler,
    )
    from src.infrastructure.persistence.repositories import (
        RefreshTokenRepository,
        SessionRepository,
    )

    return PurgeExpiredAuthRecordsHandler(
        refresh_token_repo=RefreshTokenRepository(session=session),
        session_repo=SessionRepository(session=session),
        logger=get_logger(),
    )


async def get_get_current_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetCurrentUserHandler":
    """Get GetCurrentUser query handler (request-scoped)."""
    from src.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return GetCurrentUserHandler(user_repo=UserRepository(session=session))


async def get_list_active_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListActiveSessionsHandler":
    """Get ListActiveSessions query handler (request-scoped)."""
    from src.application.queries.handlers.list_active_sessions_handler import (
        ListActiveSessionsHandler,
    )

    return ListActiveSessionsHandler(session_tracker=build_session_tracker(session))
