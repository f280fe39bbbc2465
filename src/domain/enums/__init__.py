"""Domain enums package.

Usage:
    from src.domain.enums import UserRole
"""

from src.domain.enums.user_role import DEFAULT_ROLE, UserRole

__all__ = ["DEFAULT_ROLE", "UserRole"]
