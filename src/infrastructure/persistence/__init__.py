"""SQLAlchemy persistence: declarative base, engine/session factory, models
and the repositories that map them to domain entities."""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
