"""RefreshTokenRepository - SQLAlchemy implementation for refresh token persistence.

Records are never updated through the ORM unit of work. The two state
changes (used, revoked_at) are single conditional UPDATE statements, so
concurrent requests race inside the database, not in Python.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.refresh_token_record import RefreshTokenRecord
from src.infrastructure.persistence.models.refresh_token import RefreshToken


def _to_domain(model: RefreshToken) -> RefreshTokenRecord:
    """Convert database model to domain entity."""
    return RefreshTokenRecord(
        id=model.id,
        user_id=model.user_id,
        lookup_key=model.lookup_key,
        token_hash=model.token_hash,
        expires_at=model.expires_at,
        created_at=model.created_at,
        used=model.used,
        revoked_at=model.revoked_at,
    )


class RefreshTokenRepository:
    """SQLAlchemy implementation for refresh token persistence.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = RefreshTokenRepository(session)
        ...     record = await repo.find_by_lookup_key(user_id, jti)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def save(self, record: RefreshTokenRecord) -> None:
        """Insert a new record."""
        self.session.add(
            RefreshToken(
                id=record.id,
                user_id=record.user_id,
                lookup_key=record.lookup_key,
                token_hash=record.token_hash,
                used=record.used,
                expires_at=record.expires_at,
                revoked_at=record.revoked_at,
                created_at=record.created_at,
            )
        )
        await self.session.commit()

    async def find_by_lookup_key(
        self, user_id: UUID, lookup_key: str
    ) -> RefreshTokenRecord | None:
        """Find the user's record for a token id, whatever its state."""
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .where(RefreshToken.lookup_key == lookup_key)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def find_by_user_id(
        self, user_id: UUID, *, active_only: bool = False
    ) -> list[RefreshTokenRecord]:
        """List the user's records, newest first.

        Args:
            user_id: Owning user.
            active_only: Only unused, unrevoked, unexpired records.
        """
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .order_by(RefreshToken.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        records = [_to_domain(model) for model in result.scalars().all()]
        if active_only:
            records = [record for record in records if record.is_active()]
        return records

    async def mark_used_if_unused(self, record_id: UUID) -> bool:
        """Atomically flip ``used`` from False to True.

        Returns:
            True if this call performed the transition.
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == record_id)
            .where(RefreshToken.used.is_(False))
            .where(RefreshToken.revoked_at.is_(None))
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def revoke_all_for_user(
        self, user_id: UUID, revoked_at: datetime
    ) -> list[RefreshTokenRecord]:
        """Set ``revoked_at`` on every not-yet-revoked record of the user.

        Returns:
            The records revoked by this call (already revoked ones keep
            their original timestamp and are not returned).
        """
        stmt_select = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .where(RefreshToken.revoked_at.is_(None))
            .execution_options(populate_existing=True)
        )
        rows = await self.session.execute(stmt_select)
        records = [_to_domain(model) for model in rows.scalars().all()]
        if not records:
            return []

        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id.in_([record.id for record in records]))
            .where(RefreshToken.revoked_at.is_(None))
            .values(revoked_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return [record.revoke(revoked_at) for record in records]

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every record of the user."""
        stmt = delete(RefreshToken).where(RefreshToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def delete_expired_or_revoked(self, now: datetime) -> int:
        """Sweep records that expired or were revoked."""
        stmt = delete(RefreshToken).where(
            or_(
                RefreshToken.expires_at <= now,
                RefreshToken.revoked_at.is_not(None),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0
