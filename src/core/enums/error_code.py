"""Machine-readable failure codes.

The value doubles as the last segment of the Problem Details ``type`` URL
(``{api_base_url}/errors/token_theft_detected``), so values are part of
the public API and must not be renamed.
"""

from enum import Enum


class ErrorCode(Enum):
    # Local authentication outcomes
    AUTHENTICATION_FAILED = "authentication_failed"
    USER_NOT_FOUND = "user_not_found"
    USER_DEACTIVATED = "user_deactivated"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    TOKEN_THEFT_DETECTED = "token_theft_detected"

    # Identity provider call outcomes, never shown to clients as-is
    IDENTITY_PROVIDER_AUTHENTICATION_FAILED = "identity_provider_authentication_failed"
    IDENTITY_PROVIDER_UNAVAILABLE = "identity_provider_unavailable"
    IDENTITY_PROVIDER_RATE_LIMITED = "identity_provider_rate_limited"
    IDENTITY_PROVIDER_INVALID_RESPONSE = "identity_provider_invalid_response"
