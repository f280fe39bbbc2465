"""Unversioned endpoints for load balancers and operators: /, /health, /config."""

from typing import Any

from fastapi import APIRouter, HTTPException, status

from src.core.config import settings

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check; touches neither the database nor the revocation store."""
    return {"status": "healthy"}


@system_router.get("/config")
async def show_config() -> dict[str, Any]:
    """Effective non-secret settings. Development only, 403 elsewhere.

    Secrets and the database URL are never included.
    """
    if not settings.is_development:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Configuration is only exposed in development",
        )

    return {
        "environment": settings.environment.value,
        "debug": settings.debug,
        "api_v1_prefix": settings.api_v1_prefix,
        "access_token_expire_minutes": settings.access_token_expire_minutes,
        "refresh_token_expire_days": settings.refresh_token_expire_days,
        "revocation_backend": settings.revocation_backend,
        "identity_provider": f"{settings.idp_base_url}/realms/{settings.idp_realm}",
        "cors_origins": settings.cors_origin_list,
    }
