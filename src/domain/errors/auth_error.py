"""Authentication failure variants.

The closed set of failures a use case of the authentication core can return.
Each variant is a value carried by ``Failure``; none of them is raised.

Variants:
    AuthenticationFailedError: IdP exchange/validation failed, or an
        unexpected error happened during login.
    UserDeactivatedError: account exists but is disabled (403-equivalent).
    UserNotFoundError: referenced user no longer exists.
    TokenExpiredError: refresh token unknown, not matching, expired or revoked.
    TokenTheftDetectedError: an already-redeemed refresh token was presented
        again; every session of the user has been revoked.
    InvalidTokenError: signature, claim or revocation check failed.

Usage:
    match result:
        case Failure(error=UserDeactivatedError()):
            return forbidden()
        case Failure(error=AuthError() as error):
            return unauthorized(error)
"""

from dataclasses import dataclass
from uuid import UUID

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthError(DomainError):
    """Base class of every authentication failure."""


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationFailedError(AuthError):
    """Login could not be completed.

    Attributes:
        cause: Diagnostic description of the underlying failure. Logged,
            never sent to clients.
    """

    cause: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UserDeactivatedError(AuthError):
    """The account is disabled; no tokens may be issued for it."""

    user_id: UUID | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UserNotFoundError(AuthError):
    """The user referenced by a token does not exist."""

    user_id: UUID | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenExpiredError(AuthError):
    """Refresh token is unknown, expired or revoked.

    The three cases are not distinguished so callers cannot test for the
    existence of a token.
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenTheftDetectedError(AuthError):
    """A refresh token was redeemed twice.

    By the time this error is returned, all refresh tokens and sessions of
    the user have already been revoked.
    """

    user_id: UUID | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidTokenError(AuthError):
    """Token signature, claims, expiry or revocation check failed."""
