"""Unit tests for authentication query handlers.

Covers GetCurrentUserHandler and ListActiveSessionsHandler.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from src.application.dtos import SessionView, UserProjection
from src.application.queries.auth_queries import GetCurrentUser, ListActiveSessions
from src.application.queries.handlers.get_current_user_handler import (
    GetCurrentUserHandler,
)
from src.application.queries.handlers.list_active_sessions_handler import (
    ListActiveSessionsHandler,
)
from src.application.services import SessionTracker
from src.core.result import Failure, Success
from src.domain.entities import SessionRecord
from src.domain.enums import UserRole
from src.domain.errors import UserDeactivatedError, UserNotFoundError
from src.domain.value_objects import DeviceMetadata
from tests.conftest import create_user


@pytest.mark.unit
class TestGetCurrentUserHandler:
    """Test GetCurrentUserHandler."""

    async def test_active_user_projected(self):
        # Arrange
        user = create_user(roles=[UserRole.ADMIN])
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = user
        handler = GetCurrentUserHandler(user_repo=user_repo)

        # Act
        result = await handler.handle(GetCurrentUser(user_id=user.id))

        # Assert
        assert result == Success(
            value=UserProjection(
                id=user.id,
                external_id=user.external_id,
                email=user.email,
                name=user.name,
                roles=["admin"],
                is_active=True,
            )
        )

    async def test_missing_user(self):
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = None
        user_id = uuid7()

        result = await GetCurrentUserHandler(user_repo).handle(
            GetCurrentUser(user_id=user_id)
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, UserNotFoundError)
        assert result.error.user_id == user_id

    async def test_deactivated_user(self):
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = create_user(is_active=False)

        result = await GetCurrentUserHandler(user_repo).handle(
            GetCurrentUser(user_id=uuid7())
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, UserDeactivatedError)


@pytest.mark.unit
class TestListActiveSessionsHandler:
    """Test ListActiveSessionsHandler."""

    async def test_sessions_mapped_and_current_flagged(self):
        # Arrange
        user_id = uuid7()
        expires_at = datetime.now(UTC) + timedelta(days=7)
        current = SessionRecord.create(
            user_id=user_id,
            expires_at=expires_at,
            device=DeviceMetadata(device_id="laptop"),
        )
        other = SessionRecord.create(user_id=user_id, expires_at=expires_at)
        tracker = Mock(spec=SessionTracker)
        tracker.list_active.return_value = [current, other]
        handler = ListActiveSessionsHandler(session_tracker=tracker)

        # Act
        result = await handler.handle(
            ListActiveSessions(user_id=user_id, current_session_id=current.id)
        )

        # Assert
        assert isinstance(result, Success)
        views = result.value
        assert [view.id for view in views] == [current.id, other.id]
        assert all(isinstance(view, SessionView) for view in views)
        assert views[0].is_current is True
        assert views[0].device_id == "laptop"
        assert views[1].is_current is False
        tracker.list_active.assert_awaited_once_with(user_id)

    async def test_no_sessions(self):
        tracker = Mock(spec=SessionTracker)
        tracker.list_active.return_value = []

        result = await ListActiveSessionsHandler(tracker).handle(
            ListActiveSessions(user_id=uuid7())
        )

        assert result == Success(value=[])
