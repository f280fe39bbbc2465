"""Application commands (CQRS write operations).

Usage:
    from src.application.commands import AuthenticateUser, RefreshTokens
"""

from src.application.commands.auth_commands import (
    AuthenticateUser,
    LogoutUser,
    PurgeExpiredAuthRecords,
    RefreshTokens,
)

__all__ = [
    "AuthenticateUser",
    "LogoutUser",
    "PurgeExpiredAuthRecords",
    "RefreshTokens",
]
