"""Values exchanged with the external identity provider."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderTokens:
    """Token response of an authorization-code exchange.

    Attributes:
        access_token: Provider access token (used to fetch user info).
        refresh_token: Provider refresh token, when issued.
        expires_in: Provider access token lifetime in seconds.
        token_type: Usually "Bearer".
        id_token: OIDC id token, when issued.
    """

    access_token: str = field(repr=False)
    refresh_token: str | None = field(default=None, repr=False)
    expires_in: int | None = None
    token_type: str = "Bearer"
    id_token: str | None = field(default=None, repr=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderClaims:
    """Subject claims returned by the provider for a valid access token.

    Attributes:
        subject: Provider-side user id (``sub``), stored as the local
            user's external id.
        email: Email address.
        name: Display name.
        email_verified: Provider's verification flag, if reported.
    """

    subject: str
    email: str
    name: str
    email_verified: bool | None = None
