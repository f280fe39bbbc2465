"""Verified (or, for decode_unsafe, merely parsed) application token claims."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenPayload:
    """Claims of an application access or refresh token.

    Attributes:
        user_id: Subject (``sub`` claim).
        email: User email at issuance.
        roles: Role values at issuance. Not trustworthy when ``jti`` is revoked.
        jti: Unique token id shared by the access and refresh token of a pair;
            the revocation key.
        issued_at: ``iat`` claim.
        expires_at: ``exp`` claim.
        session_id: Session the pair belongs to (``sid`` claim), if any.
    """

    user_id: UUID
    email: str
    roles: list[str] = field(default_factory=list)
    jti: str
    issued_at: datetime
    expires_at: datetime
    session_id: UUID | None = None
