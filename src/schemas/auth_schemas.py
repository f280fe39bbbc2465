"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

RESTful Endpoints (resource-based):
    POST   /api/v1/authorizations    - Create authorization (start PKCE flow)
    GET    /oauth/callback           - Complete login (authorization code)
    POST   /api/v1/tokens            - Create tokens (refresh)
    DELETE /api/v1/sessions/current  - Delete current session (logout)
    GET    /api/v1/sessions          - List active sessions
    GET    /api/v1/users/me          - Current user
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Authorization (PKCE flow start)
# =============================================================================


class AuthorizationCreateResponse(BaseModel):
    """Response schema for authorization creation (201 Created).

    The PKCE verifier and the state are also set as HttpOnly cookies; the
    client only has to follow ``authorization_url``.
    """

    authorization_url: str = Field(..., description="Identity provider login URL")
    state: str = Field(..., description="Opaque CSRF state echoed by the callback")


# =============================================================================
# User
# =============================================================================


class UserResponse(BaseModel):
    """Response schema for the current user."""

    id: UUID = Field(..., description="User identifier")
    external_id: str = Field(..., description="Subject id at the identity provider")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")
    roles: list[str] = Field(..., description="Assigned roles")
    is_active: bool = Field(..., description="Account active status")


# =============================================================================
# Tokens
# =============================================================================


class TokenCreateRequest(BaseModel):
    """Request schema for token creation (refresh).

    POST /api/v1/tokens
    Returns: 201 Created
    """

    refresh_token: str = Field(
        ...,
        min_length=1,
        description="Current refresh token",
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"refresh_token": "eyJhbGciOiJIUzI1NiIs..."}}
    )


class TokenCreateResponse(BaseModel):
    """Response schema for token creation (201 Created).

    Returns new tokens (rotation: old refresh token is consumed).
    """

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token (single use)")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(
        default=900, description="Access token expiration in seconds"
    )


class AuthenticationResponse(TokenCreateResponse):
    """Response schema for a completed login (201 Created)."""

    session_id: UUID = Field(..., description="Session created for this login")
    user: UserResponse = Field(..., description="Logged-in user")


# =============================================================================
# Sessions
# =============================================================================


class SessionResponse(BaseModel):
    """Response schema for a single session."""

    id: UUID = Field(..., description="Session identifier")
    device_id: str | None = Field(None, description="Client-supplied device id")
    user_agent: str | None = Field(None, description="User agent at login")
    ip_address: str | None = Field(None, description="IP address at login")
    created_at: datetime = Field(..., description="When session was created")
    last_used: datetime = Field(..., description="Last activity timestamp")
    expires_at: datetime = Field(..., description="When session expires")
    is_current: bool = Field(
        default=False,
        description="Whether this is the current session",
    )


class SessionListResponse(BaseModel):
    """Response schema for listing active sessions."""

    sessions: list[SessionResponse] = Field(..., description="Active sessions")
    total_count: int = Field(..., description="Number of active sessions")
