"""Application DTOs.

Usage:
    from src.application.dtos import AuthenticationResult, UserProjection
"""

from src.application.dtos.auth_dtos import (
    AuthenticationResult,
    PurgeResult,
    SessionView,
    UserProjection,
)

__all__ = [
    "AuthenticationResult",
    "PurgeResult",
    "SessionView",
    "UserProjection",
]
