"""SQLAlchemy repositories, one per aggregate, each bound to a request session."""

from src.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from src.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["RefreshTokenRepository", "SessionRepository", "UserRepository"]
