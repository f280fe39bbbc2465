"""users table: one row per identity provider subject."""

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """Local mirror of a provider account.

    email and name are overwritten from the claims on every login; roles and
    is_active are local and survive logins untouched.
    """

    __tablename__ = "users"

    external_id: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Role values as a JSON array, e.g. ["manager"]
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, external_id={self.external_id}, active={self.is_active})>"
