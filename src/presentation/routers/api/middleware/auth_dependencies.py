"""Bearer authentication for protected routes.

``get_current_user`` verifies the access token (signature, expiry and the
revocation set) and exposes its claims as CurrentUser. Tokens whose pair
was logged out or caught in a theft response are rejected here, before any
handler runs.

    @router.get("/me")
    async def me(current_user: CurrentUser = Depends(get_current_user)): ...
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.container import get_token_issuer
from src.core.result import Failure, Success
from src.domain.protocols import TokenIssuerProtocol

# auto_error=False: HTTPBearer would answer a missing header with 403
bearer_scheme = HTTPBearer(auto_error=False)

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Claims of a verified access token.

    ``session_id`` (sid), ``token_jti`` (jti) and ``expires_at`` (exp) are
    what logout needs to revoke this very token.
    """

    user_id: UUID
    email: str
    roles: list[str]
    session_id: UUID | None = None
    token_jti: str | None = None
    expires_at: datetime | None = None


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_issuer: Annotated[TokenIssuerProtocol, Depends(get_token_issuer)],
) -> CurrentUser:
    """Raises HTTPException 401 when the token is absent or fails verification."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_CHALLENGE,
        )

    match await token_issuer.verify_access(credentials.credentials):
        case Success(value=payload):
            return CurrentUser(
                user_id=payload.user_id,
                email=payload.email,
                roles=payload.roles,
                session_id=payload.session_id,
                token_jti=payload.jti,
                expires_at=payload.expires_at,
            )
        case Failure(error=error):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=error.message,
                headers=_CHALLENGE,
            )
