"""Domain errors package.

Usage:
    from src.domain.errors import AuthError, TokenTheftDetectedError
    from src.domain.errors import IdentityProviderError
"""

from src.domain.errors.auth_error import (
    AuthenticationFailedError,
    AuthError,
    InvalidTokenError,
    TokenExpiredError,
    TokenTheftDetectedError,
    UserDeactivatedError,
    UserNotFoundError,
)
from src.domain.errors.identity_provider_error import (
    IdentityProviderAuthenticationError,
    IdentityProviderError,
    IdentityProviderInvalidResponseError,
    IdentityProviderRateLimitError,
    IdentityProviderUnavailableError,
)

__all__ = [
    # Authentication failures
    "AuthError",
    "AuthenticationFailedError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenTheftDetectedError",
    "UserDeactivatedError",
    "UserNotFoundError",
    # Identity provider errors
    "IdentityProviderError",
    "IdentityProviderAuthenticationError",
    "IdentityProviderInvalidResponseError",
    "IdentityProviderRateLimitError",
    "IdentityProviderUnavailableError",
]
