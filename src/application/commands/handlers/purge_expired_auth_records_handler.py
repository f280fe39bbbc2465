"""PurgeExpiredAuthRecords command handler.

Deletes refresh token records that expired or were revoked, and sessions
that expired. Invoked externally on a timer; nothing here schedules it.
"""

from datetime import UTC, datetime

from src.application.commands.auth_commands import PurgeExpiredAuthRecords
from src.application.dtos import PurgeResult
from src.core.result import Result, Success
from src.domain.errors import AuthError
from src.domain.protocols import (
    LoggerProtocol,
    RefreshTokenRepository,
    SessionRepository,
)


class PurgeExpiredAuthRecordsHandler:
    """Handler for PurgeExpiredAuthRecords command."""

    def __init__(
        self,
        refresh_token_repo: RefreshTokenRepository,
        session_repo: SessionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._refresh_token_repo = refresh_token_repo
        self._session_repo = session_repo
        self._logger = logger

    async def handle(self, cmd: PurgeExpiredAuthRecords) -> Result[PurgeResult, AuthError]:
        now = cmd.now or datetime.now(UTC)
        refresh_deleted = await self._refresh_token_repo.delete_expired_or_revoked(now)
        sessions_deleted = await self._session_repo.delete_expired(now)

        self._logger.info(
            "auth_records_purged",
            refresh_tokens_deleted=refresh_deleted,
            sessions_deleted=sessions_deleted,
        )
        return Success(
            value=PurgeResult(
                refresh_tokens_deleted=refresh_deleted,
                sessions_deleted=sessions_deleted,
            )
        )
