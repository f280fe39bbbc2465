"""Users resource router.

Endpoints:
    GET /api/v1/users/me - Current user
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.application.queries.auth_queries import GetCurrentUser
from src.application.queries.handlers.get_current_user_handler import (
    GetCurrentUserHandler,
)
from src.core.container import get_get_current_user_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"description": "Not authenticated", "model": ProblemDetails},
        403: {"description": "Account deactivated", "model": ProblemDetails},
    },
    summary="Get current user",
)
async def get_me(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    handler: GetCurrentUserHandler = Depends(get_get_current_user_handler),
) -> UserResponse | JSONResponse:
    """Get current user.

    GET /api/v1/users/me → 200 OK
    """
    result = await handler.handle(GetCurrentUser(user_id=current_user.user_id))

    match result:
        case Success(value=user):
            return UserResponse(
                id=user.id,
                external_id=user.external_id,
                email=user.email,
                name=user.name,
                roles=user.roles,
                is_active=user.is_active,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request, get_trace_id())
