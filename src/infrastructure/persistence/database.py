"""Async engine and session factory.

PostgreSQL (asyncpg) in deployments, SQLite (aiosqlite) in tests. Both
enforce the ``ON DELETE CASCADE`` from users to refresh_tokens and sessions;
SQLite only does so once ``PRAGMA foreign_keys`` is switched on for each
connection, which happens here.

Repositories commit their own statements (each refresh-token state change
must be durable before the caller reacts to it). ``get_session`` adds an
outer commit/rollback for anything left pending.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine plus session factory for one database URL.

    Example:
        >>> db = Database("postgresql+asyncpg://auth:secret@db/auth")
        >>> async with db.get_session() as session:
        ...     user = await UserRepository(session).find_by_id(user_id)
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0,
    ) -> None:
        """Create the engine.

        Args:
            database_url: ``postgresql+asyncpg://...`` or ``sqlite+aiosqlite://...``.
            echo: Log every SQL statement.
            pool_size: Pooled connections (PostgreSQL only).
            max_overflow: Connections allowed above pool_size (PostgreSQL only).
        """
        engine_kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        is_sqlite = database_url.startswith("sqlite")

        if is_sqlite:
            engine_kwargs["connect_args"] = {"timeout": 30}
        else:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow
            engine_kwargs["connect_args"] = {"command_timeout": 60, "timeout": 30}

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
        if is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that commits on clean exit and rolls back on exception."""
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create every table directly (tests only; deployments run Alembic)."""
        from src.infrastructure.persistence.models import BaseModel

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def close(self) -> None:
        """Dispose of pooled connections."""
        await self.engine.dispose()
