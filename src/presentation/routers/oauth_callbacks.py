"""OAuth callback router for user login.

Handles the OAuth 2.0 Authorization Code callback from the identity provider.
This endpoint is external-facing (dictated by the registered redirect URI)
and not part of the versioned API.

Flow:
    1. Client calls POST /api/v1/authorizations -> verifier + state cookies
    2. User logs in at the provider -> provider redirects here with code
    3. State is checked against the cookie (CSRF protection)
    4. Code + verifier are handed to AuthenticateUser -> tokens + session

Security:
    - State must match the oauth_state cookie exactly
    - Verifier and state cookies are cleared after the callback
"""

import ipaddress
import secrets

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import AuthenticateUser
from src.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from src.core.container import get_authenticate_user_handler
from src.core.result import Failure, Success
from src.domain.value_objects import DeviceMetadata
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.authorizations import (
    OAUTH_STATE_COOKIE,
    PKCE_VERIFIER_COOKIE,
)
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import AuthenticationResponse, UserResponse

oauth_router = APIRouter(tags=["OAuth Callbacks"])

DEVICE_ID_HEADER = "X-Device-Id"


def _device_from_request(request: Request) -> DeviceMetadata:
    """Collect device details from headers and the connection.

    The peer address comes from the server, so a non-IP value (a unix socket,
    a test client) is dropped. Client-reported headers are passed through
    unchanged and validated by the caller.
    """
    ip_address = request.client.host if request.client else None
    if ip_address is not None:
        try:
            ipaddress.ip_address(ip_address)
        except ValueError:
            ip_address = None

    return DeviceMetadata(
        device_id=request.headers.get(DEVICE_ID_HEADER),
        user_agent=request.headers.get("user-agent"),
        ip_address=ip_address,
    )


@oauth_router.get(
    "/oauth/callback",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthenticationResponse,
    responses={
        400: {"description": "State mismatch, missing verifier or invalid device details", "model": ProblemDetails},
        401: {"description": "Authentication failed", "model": ProblemDetails},
        403: {"description": "Account deactivated", "model": ProblemDetails},
    },
    summary="OAuth callback",
)
async def oauth_callback(
    request: Request,
    code: str = Query(..., min_length=1, description="Authorization code"),
    state: str = Query(..., min_length=1, description="State from the authorization"),
    handler: AuthenticateUserHandler = Depends(get_authenticate_user_handler),
) -> JSONResponse:
    """Complete login.

    GET /oauth/callback?code=...&state=... → 201 Created

    Returns:
        JSONResponse with tokens and user on success.
        JSONResponse with Problem Details on failure (400/401/403).
    """
    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    if not expected_state or not secrets.compare_digest(
        expected_state.encode(), state.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="OAuth state does not match",
        )

    code_verifier = request.cookies.get(PKCE_VERIFIER_COOKIE)
    if not code_verifier:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="PKCE verifier is missing",
        )

    device = _device_from_request(request)
    try:
        device.validate()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid device details: {e}",
        ) from e

    result = await handler.handle(
        AuthenticateUser(
            code=code,
            code_verifier=code_verifier,
            device=device,
        )
    )

    match result:
        case Success(value=auth):
            body = AuthenticationResponse(
                access_token=auth.tokens.access_token,
                refresh_token=auth.tokens.refresh_token,
                token_type=auth.tokens.token_type,
                expires_in=auth.tokens.expires_in,
                session_id=auth.session_id,
                user=UserResponse(
                    id=auth.user.id,
                    external_id=auth.user.external_id,
                    email=auth.user.email,
                    name=auth.user.name,
                    roles=auth.user.roles,
                    is_active=auth.user.is_active,
                ),
            )
            response = JSONResponse(
                status_code=status.HTTP_201_CREATED,
                content=body.model_dump(mode="json"),
            )
        case Failure(error=error):
            response = ErrorResponseBuilder.from_auth_error(
                error, request, get_trace_id()
            )

    # One login attempt per authorization
    response.delete_cookie(OAUTH_STATE_COOKIE)
    response.delete_cookie(PKCE_VERIFIER_COOKIE)
    return response
