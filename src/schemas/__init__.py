"""Pydantic request and response bodies of the HTTP API."""

from src.schemas.auth_schemas import (
    AuthenticationResponse,
    AuthorizationCreateResponse,
    SessionListResponse,
    SessionResponse,
    TokenCreateRequest,
    TokenCreateResponse,
    UserResponse,
)

__all__ = [
    "AuthenticationResponse",
    "AuthorizationCreateResponse",
    "SessionListResponse",
    "SessionResponse",
    "TokenCreateRequest",
    "TokenCreateResponse",
    "UserResponse",
]
