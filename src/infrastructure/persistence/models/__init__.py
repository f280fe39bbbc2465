"""ORM models for the three auth tables.

Importing this package registers users, refresh_tokens and sessions on
``BaseModel.metadata`` (used by Alembic and ``Database.create_all``).
Repositories convert between these rows and the domain entities.
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.models.refresh_token import RefreshToken
from src.infrastructure.persistence.models.session import Session
from src.infrastructure.persistence.models.user import User

__all__ = [
    "BaseModel",
    "RefreshToken",
    "Session",
    "User",
]
