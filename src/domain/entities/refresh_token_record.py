"""Refresh token record entity.

One record exists per issued refresh token. The raw token is never stored,
only a slow salted hash plus a non-secret lookup key (the token's ``jti``).

State machine:
    ACTIVE -> USED      (normal rotation)
    ACTIVE -> REVOKED   (logout or theft response)
    USED   -> REVOKED   (theft response)

USED and REVOKED are terminal: ``used`` never goes back to False and
``revoked_at`` never changes once set.
"""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, slots=True, kw_only=True)
class RefreshTokenRecord:
    """Persisted state of one refresh token.

    Immutable: transitions return a new record. Invariants are checked on
    every construction, including rehydration from storage.

    Attributes:
        id: Record identifier.
        user_id: Owning user.
        lookup_key: Non-secret index into the user's records (token ``jti``).
        token_hash: One-way hash of the raw refresh token.
        expires_at: Refresh token expiry.
        created_at: Issuance time.
        used: True once the token has been redeemed.
        revoked_at: When the record was revoked, if it was.

    Raises:
        ValueError: If lookup_key or token_hash is empty, datetimes are naive,
            or expires_at is not after created_at.
    """

    id: UUID
    user_id: UUID
    lookup_key: str
    token_hash: str
    expires_at: datetime
    created_at: datetime
    used: bool = False
    revoked_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate record invariants."""
        if not self.lookup_key:
            raise ValueError("lookup_key is required")
        if not self.token_hash:
            raise ValueError("token_hash is required")
        if self.expires_at.tzinfo is None or self.created_at.tzinfo is None:
            raise ValueError("timestamps must be timezone-aware")
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be after created_at")

    @classmethod
    def create(
        cls,
        *,
        user_id: UUID,
        lookup_key: str,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime | None = None,
    ) -> "RefreshTokenRecord":
        """Build a new ACTIVE record."""
        return cls(
            id=uuid7(),
            user_id=user_id,
            lookup_key=lookup_key,
            token_hash=token_hash,
            expires_at=expires_at,
            created_at=created_at or datetime.now(UTC),
        )

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once ``expires_at`` has passed."""
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_active(self, now: datetime | None = None) -> bool:
        """Redeemable: not used, not revoked, not expired."""
        return not self.used and not self.is_revoked and not self.is_expired(now)

    def mark_used(self) -> "RefreshTokenRecord":
        """Return the USED version of this record."""
        if self.used:
            return self
        return replace(self, used=True)

    def revoke(self, at: datetime | None = None) -> "RefreshTokenRecord":
        """Return the REVOKED version of this record.

        The first revocation time is kept if the record is already revoked.
        """
        if self.revoked_at is not None:
            return self
        return replace(self, revoked_at=at or datetime.now(UTC))
