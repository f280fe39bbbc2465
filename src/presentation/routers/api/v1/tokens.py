"""POST /api/v1/tokens: exchange a refresh token for a new pair."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import RefreshTokens
from src.application.commands.handlers.refresh_tokens_handler import (
    RefreshTokensHandler,
)
from src.core.container import get_refresh_tokens_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import TokenCreateRequest, TokenCreateResponse

router = APIRouter(prefix="/tokens", tags=["Tokens"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TokenCreateResponse,
    responses={
        401: {"description": "Refresh token invalid, expired or reused", "model": ProblemDetails},
        403: {"description": "Account deactivated", "model": ProblemDetails},
    },
    summary="Rotate refresh token",
)
async def create_tokens(
    request: Request,
    data: TokenCreateRequest,
    handler: RefreshTokensHandler = Depends(get_refresh_tokens_handler),
) -> TokenCreateResponse | JSONResponse:
    """Single-use rotation: the presented refresh token is spent.

    Presenting a spent token again is treated as theft and ends every
    session of its owner.
    """
    match await handler.handle(RefreshTokens(refresh_token=data.refresh_token)):
        case Success(value=pair):
            return TokenCreateResponse(
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
                token_type=pair.token_type,
                expires_in=pair.expires_in,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request, get_trace_id())
