"""GetCurrentUser query handler.

Resolves the user behind a verified access token. Deactivated users are
rejected even though their token is still structurally valid.
"""

from src.application.dtos import UserProjection
from src.application.queries.auth_queries import GetCurrentUser
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthError, UserDeactivatedError, UserNotFoundError
from src.domain.protocols import UserRepository


class GetCurrentUserHandler:
    """Handler for GetCurrentUser query."""

    def __init__(self, user_repo: UserRepository) -> None:
        """Initialize handler with dependencies.

        Args:
            user_repo: User repository for persistence.
        """
        self._user_repo = user_repo

    async def handle(self, query: GetCurrentUser) -> Result[UserProjection, AuthError]:
        """Handle GetCurrentUser query.

        Returns:
            Success(UserProjection) for an active user.
            Failure(UserNotFoundError) if the user does not exist.
            Failure(UserDeactivatedError) if the user is inactive.
        """
        user = await self._user_repo.find_by_id(query.user_id)
        if user is None:
            return Failure(
                error=UserNotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    user_id=query.user_id,
                )
            )
        if not user.is_active:
            return Failure(
                error=UserDeactivatedError(
                    code=ErrorCode.USER_DEACTIVATED,
                    message="User account is deactivated",
                    user_id=user.id,
                )
            )
        return Success(value=UserProjection.from_entity(user))
