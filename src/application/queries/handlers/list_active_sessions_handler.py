"""ListActiveSessions query handler.

Fetches from database (no cache for list operations).
"""

from src.application.dtos import SessionView
from src.application.queries.auth_queries import ListActiveSessions
from src.application.services import SessionTracker
from src.core.result import Result, Success
from src.domain.errors import AuthError


class ListActiveSessionsHandler:
    """Handler for listing the unexpired sessions of a user."""

    def __init__(self, session_tracker: SessionTracker) -> None:
        self._session_tracker = session_tracker

    async def handle(
        self, query: ListActiveSessions
    ) -> Result[list[SessionView], AuthError]:
        sessions = await self._session_tracker.list_active(query.user_id)
        return Success(
            value=[
                SessionView.from_entity(session, query.current_session_id)
                for session in sessions
            ]
        )
