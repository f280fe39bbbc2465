"""UserRepository protocol for user persistence."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User


class UserRepository(Protocol):
    """User repository protocol (port).

    Implementations:
        - UserRepository (SQLAlchemy): src/infrastructure/persistence/repositories/
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by local id."""
        ...

    async def find_by_external_id(self, external_id: str) -> User | None:
        """Find user by identity provider subject id."""
        ...

    async def save(self, user: User) -> None:
        """Insert a new user."""
        ...

    async def update(self, user: User) -> None:
        """Persist changes to an existing user."""
        ...
