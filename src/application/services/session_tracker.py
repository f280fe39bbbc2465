"""Session tracker service.

Owns the lifecycle of login sessions and the "revoke everything" response
used by logout and by refresh token theft detection.

Architecture:
    - Application service (uses repositories through domain protocols)
    - Request-scoped (built per request with the request's repositories)

Revoke-all:
    1. Mark every unrevoked refresh record of the user revoked
    2. Push each of their ``jti`` values into the revocation set, with the
       record expiry as TTL, so access tokens of those pairs die as well
    3. Delete every session of the user
"""

from datetime import UTC, datetime
from uuid import UUID

from src.domain.entities import SessionRecord
from src.domain.protocols import (
    LoggerProtocol,
    RefreshTokenRepository,
    SessionRepository,
    TokenIssuerProtocol,
)
from src.domain.value_objects import DeviceMetadata


class SessionTracker:
    """Create, list and revoke user sessions.

    Attributes:
        _session_repo: Session persistence.
        _refresh_token_repo: Refresh record persistence (revoke-all).
        _token_issuer: Revocation set access (revoke-all).
        _logger: Structured logger.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        refresh_token_repo: RefreshTokenRepository,
        token_issuer: TokenIssuerProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._refresh_token_repo = refresh_token_repo
        self._token_issuer = token_issuer
        self._logger = logger

    def build(
        self,
        *,
        user_id: UUID,
        expires_at: datetime,
        device: DeviceMetadata | None = None,
        session_id: UUID | None = None,
    ) -> SessionRecord:
        """Validate and build a session without persisting it.

        Raises:
            ValueError: If the device details are invalid.
        """
        return SessionRecord.create(
            user_id=user_id,
            expires_at=expires_at,
            device=device,
            session_id=session_id,
        )

    async def persist(self, session: SessionRecord) -> SessionRecord:
        """Persist a session built with ``build``."""
        await self._session_repo.save(session)
        self._logger.info(
            "session_created",
            user_id=str(session.user_id),
            session_id=str(session.id),
        )
        return session

    async def create(
        self,
        *,
        user_id: UUID,
        expires_at: datetime,
        device: DeviceMetadata | None = None,
        session_id: UUID | None = None,
    ) -> SessionRecord:
        """Build and persist a new session.

        Raises:
            ValueError: If the device details are invalid.
        """
        session = self.build(
            user_id=user_id,
            expires_at=expires_at,
            device=device,
            session_id=session_id,
        )
        return await self.persist(session)

    async def revoke_all_for_user(self, user_id: UUID) -> int:
        """Revoke every refresh token and delete every session of a user.

        Idempotent: a second call finds nothing left to revoke.

        Returns:
            Number of sessions deleted.
        """
        now = datetime.now(UTC)
        revoked = await self._refresh_token_repo.revoke_all_for_user(user_id, now)
        for record in revoked:
            await self._token_issuer.revoke_by_id(
                record.lookup_key, expires_at=record.expires_at
            )

        deleted = await self._session_repo.delete_all_for_user(user_id)

        self._logger.info(
            "user_sessions_revoked",
            user_id=str(user_id),
            refresh_tokens_revoked=len(revoked),
            sessions_deleted=deleted,
        )
        return deleted

    async def list_active(
        self, user_id: UUID, now: datetime | None = None
    ) -> list[SessionRecord]:
        """Unexpired sessions of a user, newest first."""
        now = now or datetime.now(UTC)
        sessions = await self._session_repo.find_by_user_id(user_id)
        return [session for session in sessions if not session.is_expired(now)]

    async def touch(self, session_id: UUID, at: datetime | None = None) -> None:
        """Record activity on a session."""
        await self._session_repo.update_last_used(session_id, at or datetime.now(UTC))
