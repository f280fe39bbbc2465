"""Identity provider protocol (port).

The authentication core needs three operations from the external OAuth2/OIDC
provider (exchange, validate, revoke) plus the authorization URL used to
start the PKCE flow.

All calls are network operations bounded by a timeout. Failures are returned
as IdentityProviderError values and are never retried here.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.errors import IdentityProviderError
from src.domain.value_objects import ProviderClaims, ProviderTokens


class IdentityProviderProtocol(Protocol):
    """Protocol for the external identity provider."""

    @property
    def provider_name(self) -> str:
        """Short provider name for logs and errors."""
        ...

    def build_authorization_url(
        self,
        *,
        state: str,
        code_challenge: str,
        redirect_uri: str | None = None,
    ) -> str:
        """Build the provider login URL for the PKCE authorization-code flow."""
        ...

    async def exchange_code(
        self,
        *,
        code: str,
        code_verifier: str,
        redirect_uri: str | None = None,
    ) -> Result[ProviderTokens, IdentityProviderError]:
        """Exchange an authorization code (plus PKCE verifier) for provider tokens."""
        ...

    async def validate_provider_token(
        self, access_token: str
    ) -> Result[ProviderClaims, IdentityProviderError]:
        """Validate a provider access token and return its subject claims."""
        ...

    async def revoke_provider_token(
        self, token: str
    ) -> Result[None, IdentityProviderError]:
        """Revoke a provider token (logout at the provider)."""
        ...
