"""refresh_tokens table: the ledger of every refresh token issued.

Only the bcrypt hash of a token is stored. ``lookup_key`` is the token's
jti, unique and non-secret, so redemption finds the row without scanning
hashes. ``used`` and ``revoked_at`` only ever move forward, through the
conditional UPDATEs in RefreshTokenRepository.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, UTCDateTime


class RefreshToken(BaseModel):
    __tablename__ = "refresh_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    lookup_key: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    token_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, index=True, nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime, default=None)

    # Purge sweep: expired or revoked
    __table_args__ = (Index("idx_refresh_tokens_cleanup", "expires_at", "revoked_at"),)

    def __repr__(self) -> str:
        return (
            f"<RefreshToken(id={self.id}, user_id={self.user_id}, used={self.used}, "
            f"revoked={self.revoked_at is not None})>"
        )
