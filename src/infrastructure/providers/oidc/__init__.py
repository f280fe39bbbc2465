"""OpenID Connect identity provider adapter."""

from src.infrastructure.providers.oidc.oidc_identity_provider import (
    OIDCIdentityProvider,
)

__all__ = ["OIDCIdentityProvider"]
