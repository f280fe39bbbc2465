"""Sessions of the caller: list devices, log out.

GET    /api/v1/sessions          200, newest first, current one flagged
DELETE /api/v1/sessions/current  204, ends every session of the caller
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from src.application.commands.auth_commands import LogoutUser
from src.application.commands.handlers.logout_user_handler import LogoutUserHandler
from src.application.queries.auth_queries import ListActiveSessions
from src.application.queries.handlers.list_active_sessions_handler import (
    ListActiveSessionsHandler,
)
from src.core.container import get_list_active_sessions_handler, get_logout_user_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import SessionListResponse, SessionResponse

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get(
    "",
    response_model=SessionListResponse,
    responses={401: {"description": "Not authenticated", "model": ProblemDetails}},
    summary="List sessions",
    description="List the caller's unexpired sessions, newest first.",
)
async def list_sessions(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    handler: ListActiveSessionsHandler = Depends(get_list_active_sessions_handler),
) -> SessionListResponse | JSONResponse:
    result = await handler.handle(
        ListActiveSessions(
            user_id=current_user.user_id,
            current_session_id=current_user.session_id,
        )
    )

    match result:
        case Success(value=sessions):
            return SessionListResponse(
                sessions=[
                    SessionResponse(
                        id=session.id,
                        device_id=session.device_id,
                        user_agent=session.user_agent,
                        ip_address=session.ip_address,
                        created_at=session.created_at,
                        last_used=session.last_used,
                        expires_at=session.expires_at,
                        is_current=session.is_current,
                    )
                    for session in sessions
                ],
                total_count=len(sessions),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request, get_trace_id())


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        401: {"description": "Not authenticated", "model": ProblemDetails},
    },
    summary="Delete current session",
    description="Logout: revoke every refresh token and session of the caller.",
)
async def delete_current_session(
    current_user: CurrentUser = Depends(get_current_user),
    handler: LogoutUserHandler = Depends(get_logout_user_handler),
) -> Response:
    """The bearer token of this request is revoked along with the refresh tokens."""
    await handler.handle(
        LogoutUser(
            user_id=current_user.user_id,
            access_token_jti=current_user.token_jti,
            access_token_expires_at=current_user.expires_at,
        )
    )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
