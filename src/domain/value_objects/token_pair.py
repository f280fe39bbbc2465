"""Access/refresh token pair returned to clients."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenPair:
    """Freshly minted application tokens.

    Raw token strings are excluded from ``repr`` so that a pair never ends up
    in logs by accident.

    Attributes:
        access_token: Short-lived JWT signed with the access secret.
        refresh_token: Long-lived JWT signed with the refresh secret.
        jti: Token id shared by both tokens, also the refresh record lookup key.
        expires_in: Access token lifetime in seconds.
        refresh_expires_at: Absolute expiry of the refresh token.
        token_type: Always "bearer".
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    jti: str
    expires_in: int
    refresh_expires_at: datetime
    token_type: str = "bearer"
