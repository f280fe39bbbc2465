"""Command handlers.

Usage:
    from src.application.commands.handlers import AuthenticateUserHandler
"""

from src.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from src.application.commands.handlers.logout_user_handler import LogoutUserHandler
from src.application.commands.handlers.purge_expired_auth_records_handler import (
    PurgeExpiredAuthRecordsHandler,
)
from src.application.commands.handlers.refresh_tokens_handler import (
    RefreshTokensHandler,
)

__all__ = [
    "AuthenticateUserHandler",
    "LogoutUserHandler",
    "PurgeExpiredAuthRecordsHandler",
    "RefreshTokensHandler",
]
