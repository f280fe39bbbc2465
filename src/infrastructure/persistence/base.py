"""Declarative base and the UTC datetime column type.

ORM models live only in this layer; repositories copy values between them
and the domain entities.

    BaseModel (id, created_at)
    ├── BaseMutableModel (+ updated_at)
    │   └── User
    ├── RefreshToken    (changed only through conditional UPDATEs)
    └── Session
"""

from datetime import UTC, datetime
from uuid import UUID as PythonUUID, uuid4

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator[datetime]):
    """Timestamp column that accepts and returns aware UTC datetimes only.

    PostgreSQL stores timestamptz. SQLite has no offset, so values are
    stored as naive UTC and re-tagged on load; expiry comparisons then
    behave the same on both.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime cannot be stored in a UTC column")
        value = value.astimezone(UTC)
        return value.replace(tzinfo=None) if dialect.name == "sqlite" else value

    def process_result_value(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class BaseModel(DeclarativeBase):
    """id and created_at for every table.

    Repositories always pass both from the entity; the defaults cover rows
    inserted by hand or by migrations.
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id})>"


class BaseMutableModel(BaseModel):
    """Adds updated_at, bumped by SQLAlchemy on every ORM update."""

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(UTC),
    )
