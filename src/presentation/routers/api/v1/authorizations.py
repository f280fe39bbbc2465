"""Authorizations resource router.

Starts the OAuth2 authorization-code flow with PKCE.

Endpoints:
    POST /api/v1/authorizations - Create authorization (PKCE verifier + state)

The verifier and state never leave the server side of the browser: they are
stored in short-lived HttpOnly cookies and read back by GET /oauth/callback.
"""

from fastapi import APIRouter, Depends, Response, status

from src.core.config import settings
from src.core.container import get_identity_provider
from src.domain.protocols import IdentityProviderProtocol
from src.infrastructure.security import generate_pkce_pair
from src.schemas.auth_schemas import AuthorizationCreateResponse

PKCE_VERIFIER_COOKIE = "pkce_verifier"
OAUTH_STATE_COOKIE = "oauth_state"
AUTHORIZATION_COOKIE_MAX_AGE = 600  # 10 minutes

router = APIRouter(prefix="/authorizations", tags=["Authorizations"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthorizationCreateResponse,
    summary="Create authorization",
    description="Start a login: returns the identity provider URL to redirect to.",
)
async def create_authorization(
    response: Response,
    identity_provider: IdentityProviderProtocol = Depends(get_identity_provider),
) -> AuthorizationCreateResponse:
    """Create authorization.

    POST /api/v1/authorizations → 201 Created

    Args:
        response: Response used to set the flow cookies.
        identity_provider: Identity provider adapter (injected).

    Returns:
        AuthorizationCreateResponse with the provider login URL and state.
    """
    pkce = generate_pkce_pair()

    authorization_url = identity_provider.build_authorization_url(
        state=pkce.state,
        code_challenge=pkce.code_challenge,
    )

    for name, value in (
        (PKCE_VERIFIER_COOKIE, pkce.code_verifier),
        (OAUTH_STATE_COOKIE, pkce.state),
    ):
        response.set_cookie(
            key=name,
            value=value,
            max_age=AUTHORIZATION_COOKIE_MAX_AGE,
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
        )

    return AuthorizationCreateResponse(authorization_url=authorization_url, state=pkce.state)
