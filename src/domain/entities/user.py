"""User domain entity.

Local mirror of an identity provider account. Identity (email, name) is
owned by the provider and synchronized on every login; roles and the active
flag are owned locally.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.enums import DEFAULT_ROLE, UserRole
from src.domain.value_objects.email import Email


@dataclass(slots=True, kw_only=True)
class User:
    """User domain entity.

    Business Rules:
        - New users get the default role (user)
        - Login synchronizes email and name, never roles
        - Deactivated users cannot obtain or refresh tokens

    Attributes:
        id: Local user identifier.
        external_id: Subject id at the identity provider (unique).
        email: Email address (normalized).
        name: Display name.
        roles: Locally assigned roles.
        is_active: Account active status.
        created_at: Timestamp when user was created.
        updated_at: Timestamp when user was last updated.
    """

    id: UUID
    external_id: str
    email: str
    name: str
    roles: list[UserRole] = field(default_factory=lambda: [DEFAULT_ROLE])
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, *, external_id: str, email: str, name: str) -> "User":
        """Create a first-time user from provider claims.

        Raises:
            ValueError: If the email is malformed or external_id is empty.
        """
        if not external_id:
            raise ValueError("external_id is required")
        return cls(
            id=uuid7(),
            external_id=external_id,
            email=str(Email(email)),
            name=name,
        )

    def sync_profile(self, *, email: str, name: str) -> bool:
        """Copy provider-owned fields onto the user.

        Returns:
            True if anything changed.
        """
        normalized = str(Email(email))
        if normalized == self.email and name == self.name:
            return False
        self.email = normalized
        self.name = name
        self.updated_at = datetime.now(UTC)
        return True

    def deactivate(self) -> None:
        """Disable the account."""
        self.is_active = False
        self.updated_at = datetime.now(UTC)

    def activate(self) -> None:
        """Re-enable the account."""
        self.is_active = True
        self.updated_at = datetime.now(UTC)

    @property
    def role_values(self) -> list[str]:
        """Role values as plain strings (token claim format)."""
        return [role.value for role in self.roles]
