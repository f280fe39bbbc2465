"""RefreshTokenRepository protocol for refresh token persistence.

Storage contract of the refresh token ledger. The only state transition a
caller may perform directly is the atomic compare-and-set in
``mark_used_if_unused``; there is no generic update.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.refresh_token_record import RefreshTokenRecord


class RefreshTokenRepository(Protocol):
    """Refresh token repository protocol (port).

    Implementations:
        - RefreshTokenRepository (SQLAlchemy): src/infrastructure/persistence/repositories/
    """

    async def save(self, record: RefreshTokenRecord) -> None:
        """Insert a new record."""
        ...

    async def find_by_lookup_key(
        self, user_id: UUID, lookup_key: str
    ) -> RefreshTokenRecord | None:
        """Find the user's record for a token id, whatever its state."""
        ...

    async def find_by_user_id(
        self, user_id: UUID, *, active_only: bool = False
    ) -> list[RefreshTokenRecord]:
        """List the user's records.

        Args:
            user_id: Owning user.
            active_only: Only unused, unrevoked, unexpired records.
        """
        ...

    async def mark_used_if_unused(self, record_id: UUID) -> bool:
        """Atomically flip ``used`` from False to True.

        The update only applies while the record is unused and unrevoked.
        Exactly one of several concurrent callers gets True.
        """
        ...

    async def revoke_all_for_user(
        self, user_id: UUID, revoked_at: datetime
    ) -> list[RefreshTokenRecord]:
        """Set ``revoked_at`` on every not-yet-revoked record of the user.

        Returns:
            The records that were revoked by this call.
        """
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every record of the user. Returns the number deleted."""
        ...

    async def delete_expired_or_revoked(self, now: datetime) -> int:
        """Sweep records that expired or were revoked. Returns the number deleted."""
        ...
