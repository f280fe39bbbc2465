"""SessionRepository protocol for session persistence."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.session_record import SessionRecord


class SessionRepository(Protocol):
    """Session repository protocol (port).

    Implementations:
        - SessionRepository (SQLAlchemy): src/infrastructure/persistence/repositories/
    """

    async def save(self, session: SessionRecord) -> None:
        """Insert a new session."""
        ...

    async def find_by_id(self, session_id: UUID) -> SessionRecord | None:
        """Find a session by id."""
        ...

    async def find_by_user_id(self, user_id: UUID) -> list[SessionRecord]:
        """List all sessions of a user (expired included), newest first."""
        ...

    async def update_last_used(self, session_id: UUID, at: datetime) -> None:
        """Record activity on a session. No-op if the session is gone."""
        ...

    async def delete(self, session_id: UUID) -> bool:
        """Delete one session. Returns True if it existed."""
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every session of the user. Returns the number deleted."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Sweep expired sessions. Returns the number deleted."""
        ...
