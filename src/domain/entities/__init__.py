"""Domain entities.

Usage:
    from src.domain.entities import RefreshTokenRecord, SessionRecord, User
"""

from src.domain.entities.refresh_token_record import RefreshTokenRecord
from src.domain.entities.session_record import SessionRecord
from src.domain.entities.user import User

__all__ = ["RefreshTokenRecord", "SessionRecord", "User"]
