"""Roles carried in the ``roles`` claim of access tokens.

Roles are local data. Logins refresh a user's profile from the identity
provider but never touch their roles; first-time users get DEFAULT_ROLE.
"""

from enum import Enum


class UserRole(str, Enum):
    """str-valued so roles serialize straight into JWT claims."""

    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


DEFAULT_ROLE = UserRole.USER
