"""Routers mounted outside the /api/v1 prefix.

The OAuth callback path is fixed by the redirect URI registered at the
identity provider; system routes serve health checks and diagnostics.
"""

from src.presentation.routers.oauth_callbacks import oauth_router
from src.presentation.routers.system import system_router

__all__ = ["oauth_router", "system_router"]
