"""Routers mounted under API_V1_PREFIX.

authorizations (login start), tokens (refresh), sessions (list, logout),
users (current user). The OAuth callback sits outside the prefix because
its URL is registered with the identity provider.
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.routers.api.v1 import authorizations, sessions, tokens, users

v1_router = APIRouter(prefix=settings.api_v1_prefix)
for module in (authorizations, tokens, sessions, users):
    v1_router.include_router(module.router)

__all__ = ["v1_router"]
