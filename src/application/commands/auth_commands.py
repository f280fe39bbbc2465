"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Commands don't return values (handlers return Result types)
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.domain.value_objects import DeviceMetadata


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Complete an OAuth2 authorization-code login.

    The code and PKCE verifier are exchanged at the identity provider; the
    resulting identity is mapped to a local user, and a session plus an
    application token pair are created.

    Attributes:
        code: Authorization code returned by the identity provider.
        code_verifier: PKCE verifier generated when the flow started.
        redirect_uri: Redirect URI used in the authorization request
            (adapter default when None).
        device: Device details of the client.

    Example:
        >>> command = AuthenticateUser(
        ...     code="abc",
        ...     code_verifier=pair.code_verifier,
        ...     device=DeviceMetadata(user_agent="Mozilla/5.0"),
        ... )
        >>> result = await handler.handle(command)
    """

    code: str = field(repr=False)
    code_verifier: str = field(repr=False)
    redirect_uri: str | None = None
    device: DeviceMetadata = field(default_factory=DeviceMetadata)


@dataclass(frozen=True, kw_only=True)
class RefreshTokens:
    """Rotate a refresh token into a new token pair.

    Attributes:
        refresh_token: Raw refresh token presented by the client.
    """

    refresh_token: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End every session of a user.

    Attributes:
        user_id: User logging out.
        access_token_jti: ``jti`` of the access token used for the request,
            revoked immediately when given.
        access_token_expires_at: Expiry of that access token (revocation TTL).
        provider_token: Identity provider token to revoke at the provider.
    """

    user_id: UUID
    access_token_jti: str | None = None
    access_token_expires_at: datetime | None = None
    provider_token: str | None = field(default=None, repr=False)


@dataclass(frozen=True, kw_only=True)
class PurgeExpiredAuthRecords:
    """Sweep expired or revoked refresh records and expired sessions.

    Invoked externally (cron, admin endpoint). Nothing schedules it.

    Attributes:
        now: Reference time (default: current time).
    """

    now: datetime | None = None
