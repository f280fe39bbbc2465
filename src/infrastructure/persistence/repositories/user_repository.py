"""Users table adapter for UserRepositoryProtocol."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from src.domain.entities.user import User
from src.domain.enums import UserRole
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """Looks users up by local id or by provider subject.

    ``update`` writes the profile fields refreshed at login together with
    the locally owned roles and active flag.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        return await self._find_one(UserModel.id == user_id)

    async def find_by_external_id(self, external_id: str) -> User | None:
        return await self._find_one(UserModel.external_id == external_id)

    async def save(self, user: User) -> None:
        self.session.add(
            UserModel(
                id=user.id,
                external_id=user.external_id,
                email=user.email,
                name=user.name,
                roles=[role.value for role in user.roles],
                is_active=user.is_active,
                created_at=user.created_at,
                updated_at=user.updated_at,
            )
        )
        await self.session.commit()

    async def update(self, user: User) -> None:
        """Raises NoResultFound when the user row does not exist."""
        result = await self.session.execute(select(UserModel).where(UserModel.id == user.id))
        model = result.scalar_one()

        model.email = user.email
        model.name = user.name
        model.roles = [role.value for role in user.roles]
        model.is_active = user.is_active
        model.updated_at = user.updated_at
        await self.session.commit()

    async def _find_one(self, condition: ColumnElement[bool]) -> User | None:
        result = await self.session.execute(select(UserModel).where(condition))
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return User(
            id=model.id,
            external_id=model.external_id,
            email=model.email,
            name=model.name,
            roles=[UserRole(value) for value in model.roles],
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
