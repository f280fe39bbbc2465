"""Identity provider error types for the IdentityProviderProtocol contract.

These errors define the failure cases an identity provider adapter can
return. The authentication handlers translate all of them into
AuthenticationFailedError; they are never retried automatically.

Usage:
    async def exchange_code(...) -> Result[ProviderTokens, IdentityProviderError]:
        if response.status_code == 401:
            return Failure(error=IdentityProviderAuthenticationError(...))
        return Success(value=tokens)
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityProviderError(DomainError):
    """Base identity provider error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        provider_name: Name of the identity provider (keycloak, ...).
        details: Additional context (status code, error description).
    """

    provider_name: str
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityProviderAuthenticationError(IdentityProviderError):
    """The provider rejected the code, verifier or token.

    Raised when:
    - Authorization code is invalid, expired or already used
    - PKCE verifier does not match the challenge
    - Provider access token is invalid or expired
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityProviderUnavailableError(IdentityProviderError):
    """The provider could not be reached in time.

    Raised when:
    - Provider returns 5xx errors
    - Request times out
    - Connection fails

    Attributes:
        is_transient: Whether the error is likely transient.
    """

    is_transient: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityProviderRateLimitError(IdentityProviderError):
    """Provider returned 429 Too Many Requests.

    Attributes:
        retry_after: Seconds to wait before retrying (from Retry-After header).
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityProviderInvalidResponseError(IdentityProviderError):
    """Provider response was malformed or missing required fields.

    Attributes:
        response_body: Raw response body (truncated) for debugging.
    """

    response_body: str | None = None
