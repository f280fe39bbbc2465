"""SessionRepository - SQLAlchemy implementation for session persistence."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.session_record import SessionRecord
from src.infrastructure.persistence.models.session import Session as SessionModel


def _to_domain(model: SessionModel) -> SessionRecord:
    """Convert database model to domain entity."""
    return SessionRecord(
        id=model.id,
        user_id=model.user_id,
        device_id=model.device_id,
        user_agent=model.user_agent,
        ip_address=model.ip_address,
        expires_at=model.expires_at,
        created_at=model.created_at,
        last_used=model.last_used,
    )


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def save(self, session: SessionRecord) -> None:
        """Insert a new session."""
        self.session.add(
            SessionModel(
                id=session.id,
                user_id=session.user_id,
                device_id=session.device_id,
                user_agent=session.user_agent,
                ip_address=session.ip_address,
                expires_at=session.expires_at,
                last_used=session.last_used,
                created_at=session.created_at,
            )
        )
        await self.session.commit()

    async def find_by_id(self, session_id: UUID) -> SessionRecord | None:
        stmt = (
            select(SessionModel)
            .where(SessionModel.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def find_by_user_id(self, user_id: UUID) -> list[SessionRecord]:
        """List all sessions of a user (expired included), newest first."""
        stmt = (
            select(SessionModel)
            .where(SessionModel.user_id == user_id)
            .order_by(SessionModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def update_last_used(self, session_id: UUID, at: datetime) -> None:
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == session_id)
            .values(last_used=at)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def delete(self, session_id: UUID) -> bool:
        stmt = delete(SessionModel).where(SessionModel.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return (result.rowcount or 0) > 0

    async def delete_all_for_user(self, user_id: UUID) -> int:
        stmt = delete(SessionModel).where(SessionModel.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(SessionModel).where(SessionModel.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0
