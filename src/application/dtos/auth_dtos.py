"""Authentication DTOs (Data Transfer Objects).

Response/result dataclasses for authentication handlers.
These carry data from handlers back to the presentation layer.

DTOs:
    - UserProjection: public view of a user
    - AuthenticationResult: result of AuthenticateUser
    - SessionView: one entry of ListActiveSessions
    - PurgeResult: result of PurgeExpiredAuthRecords
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.entities import SessionRecord, User
from src.domain.value_objects import TokenPair


@dataclass(frozen=True, kw_only=True)
class UserProjection:
    """Public view of a user.

    Attributes:
        id: Local user identifier.
        external_id: Subject id at the identity provider.
        email: Email address.
        name: Display name.
        roles: Role values.
        is_active: Account active status.
    """

    id: UUID
    external_id: str
    email: str
    name: str
    roles: list[str]
    is_active: bool

    @classmethod
    def from_entity(cls, user: User) -> "UserProjection":
        return cls(
            id=user.id,
            external_id=user.external_id,
            email=user.email,
            name=user.name,
            roles=user.role_values,
            is_active=user.is_active,
        )


@dataclass(frozen=True, kw_only=True)
class AuthenticationResult:
    """Response from a successful login.

    Attributes:
        tokens: Application token pair.
        user: The logged-in user.
        session_id: Session created for this login.
    """

    tokens: TokenPair
    user: UserProjection
    session_id: UUID


@dataclass(frozen=True, kw_only=True)
class SessionView:
    """Session as shown to its owner."""

    id: UUID
    device_id: str | None
    user_agent: str | None
    ip_address: str | None
    created_at: datetime
    last_used: datetime
    expires_at: datetime
    is_current: bool = False

    @classmethod
    def from_entity(
        cls, session: SessionRecord, current_session_id: UUID | None = None
    ) -> "SessionView":
        return cls(
            id=session.id,
            device_id=session.device_id,
            user_agent=session.user_agent,
            ip_address=session.ip_address,
            created_at=session.created_at,
            last_used=session.last_used,
            expires_at=session.expires_at,
            is_current=session.id == current_session_id,
        )


@dataclass(frozen=True, kw_only=True)
class PurgeResult:
    """Counts of records removed by a sweep.

    Attributes:
        refresh_tokens_deleted: Expired or revoked refresh records deleted.
        sessions_deleted: Expired sessions deleted.
    """

    refresh_tokens_deleted: int
    sessions_deleted: int
