"""OIDC identity provider implementing IdentityProviderProtocol.

Talks to a Keycloak-style OpenID Connect provider. Endpoints live under
``{base_url}/realms/{realm}/protocol/openid-connect/``:

    auth      - browser login (authorization URL)
    token     - authorization-code exchange
    userinfo  - provider access token validation + subject claims
    revoke    - token revocation (logout at the provider)

Configuration loaded from settings (src/core/config.py):
    - idp_base_url, idp_realm
    - idp_client_id, idp_client_secret
    - idp_redirect_uri
    - idp_timeout_seconds

Every request is bounded by the configured timeout. Timeouts and network
errors become IdentityProviderUnavailableError; nothing is retried here.
"""

from typing import Any
from urllib.parse import urlencode

import httpx
import structlog

from src.core.config import Settings
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import (
    IdentityProviderAuthenticationError,
    IdentityProviderError,
    IdentityProviderInvalidResponseError,
    IdentityProviderRateLimitError,
    IdentityProviderUnavailableError,
)
from src.domain.value_objects import ProviderClaims, ProviderTokens

logger = structlog.get_logger(__name__)

DEFAULT_SCOPE = "openid email profile"


class OIDCIdentityProvider:
    """OpenID Connect identity provider adapter.

    Example:
        >>> provider = OIDCIdentityProvider.from_settings(settings)
        >>> result = await provider.exchange_code(code=code, code_verifier=verifier)
        >>> match result:
        ...     case Success(value=tokens):
        ...         claims = await provider.validate_provider_token(tokens.access_token)
        ...     case Failure(error=error):
        ...         print(error.message)
    """

    def __init__(
        self,
        *,
        base_url: str,
        realm: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        provider_name: str = "keycloak",
    ) -> None:
        """Initialize OIDC provider.

        Args:
            base_url: Provider base URL (no trailing slash).
            realm: Realm holding the client.
            client_id: OAuth client id.
            client_secret: OAuth client secret.
            redirect_uri: Default redirect URI for the code flow.
            timeout: HTTP request timeout in seconds.
            provider_name: Name used in logs and errors.

        Raises:
            ValueError: If a required setting is empty.
        """
        if not base_url:
            raise ValueError("idp_base_url is required")
        if not realm:
            raise ValueError("idp_realm is required")
        if not client_id:
            raise ValueError("idp_client_id is required")

        self._base_url = base_url.rstrip("/")
        self._realm = realm
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._timeout = timeout
        self._provider_name = provider_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "OIDCIdentityProvider":
        """Build the adapter from application settings."""
        return cls(
            base_url=settings.idp_base_url,
            realm=settings.idp_realm,
            client_id=settings.idp_client_id,
            client_secret=settings.idp_client_secret,
            redirect_uri=settings.idp_redirect_uri,
            timeout=settings.idp_timeout_seconds,
        )

    @property
    def provider_name(self) -> str:
        """Return provider name."""
        return self._provider_name

    @property
    def _endpoint_base(self) -> str:
        return f"{self._base_url}/realms/{self._realm}/protocol/openid-connect"

    @property
    def _auth_url(self) -> str:
        return f"{self._endpoint_base}/auth"

    @property
    def _token_url(self) -> str:
        return f"{self._endpoint_base}/token"

    @property
    def _userinfo_url(self) -> str:
        return f"{self._endpoint_base}/userinfo"

    @property
    def _revoke_url(self) -> str:
        return f"{self._endpoint_base}/revoke"

    def build_authorization_url(
        self,
        *,
        state: str,
        code_challenge: str,
        redirect_uri: str | None = None,
    ) -> str:
        """Build the provider login URL (PKCE, S256)."""
        params = {
            "client_id": self._client_id,
            "redirect_uri": redirect_uri or self._redirect_uri,
            "response_type": "code",
            "scope": DEFAULT_SCOPE,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
            "state": state,
        }
        return f"{self._auth_url}?{urlencode(params)}"

    async def exchange_code(
        self,
        *,
        code: str,
        code_verifier: str,
        redirect_uri: str | None = None,
    ) -> Result[ProviderTokens, IdentityProviderError]:
        """Exchange an authorization code for provider tokens.

        Returns:
            Success(ProviderTokens): access token (+ refresh/id token if issued).
            Failure(IdentityProviderAuthenticationError): Code or verifier rejected.
            Failure(IdentityProviderUnavailableError): Provider unreachable.
        """
        logger.info("idp_token_exchange_started", provider=self._provider_name)

        response = await self._send(
            "exchange",
            "POST",
            self._token_url,
            data={
                "grant_type": "authorization_code",
                "code": code,
                "code_verifier": code_verifier,
                "redirect_uri": redirect_uri or self._redirect_uri,
                "client_id": self._client_id,
                "client_secret": self._client_secret,
            },
        )
        if isinstance(response, Failure):
            return response

        parsed = self._parse_json(response.value, "exchange")
        if isinstance(parsed, Failure):
            return parsed
        data = parsed.value

        try:
            tokens = ProviderTokens(
                access_token=data["access_token"],
                refresh_token=data.get("refresh_token"),
                expires_in=data.get("expires_in"),
                token_type=data.get("token_type", "Bearer"),
                id_token=data.get("id_token"),
            )
        except KeyError as e:
            return self._missing_field(response.value, "exchange", e)

        logger.info("idp_token_exchange_succeeded", provider=self._provider_name)
        return Success(value=tokens)

    async def validate_provider_token(
        self, access_token: str
    ) -> Result[ProviderClaims, IdentityProviderError]:
        """Validate a provider access token via the userinfo endpoint.

        The display name falls back to ``preferred_username``, then email.
        """
        response = await self._send(
            "userinfo",
            "GET",
            self._userinfo_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if isinstance(response, Failure):
            return response

        parsed = self._parse_json(response.value, "userinfo")
        if isinstance(parsed, Failure):
            return parsed
        data = parsed.value

        try:
            email = data["email"]
            claims = ProviderClaims(
                subject=data["sub"],
                email=email,
                name=data.get("name") or data.get("preferred_username") or email,
                email_verified=data.get("email_verified"),
            )
        except KeyError as e:
            return self._missing_field(response.value, "userinfo", e)

        return Success(value=claims)

    async def revoke_provider_token(
        self, token: str
    ) -> Result[None, IdentityProviderError]:
        """Revoke a provider token."""
        response = await self._send(
            "revoke",
            "POST",
            self._revoke_url,
            data={
                "token": token,
                "client_id": self._client_id,
                "client_secret": self._client_secret,
            },
        )
        if isinstance(response, Failure):
            return response

        logger.info("idp_token_revoked", provider=self._provider_name)
        return Success(value=None)

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> Result[httpx.Response, IdentityProviderError]:
        """Send one request and map transport/status failures."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(
                f"idp_{operation}_timeout",
                provider=self._provider_name,
                error=str(e),
            )
            return Failure(
                error=IdentityProviderUnavailableError(
                    code=ErrorCode.IDENTITY_PROVIDER_UNAVAILABLE,
                    message="Identity provider request timed out",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )
        except httpx.RequestError as e:
            logger.warning(
                f"idp_{operation}_connection_error",
                provider=self._provider_name,
                error=str(e),
            )
            return Failure(
                error=IdentityProviderUnavailableError(
                    code=ErrorCode.IDENTITY_PROVIDER_UNAVAILABLE,
                    message=f"Failed to connect to identity provider: {e}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        return self._check_status(response, operation)

    def _check_status(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[httpx.Response, IdentityProviderError]:
        # Handle rate limiting
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
            logger.warning(
                f"idp_{operation}_rate_limited",
                provider=self._provider_name,
                retry_after=retry_seconds,
            )
            return Failure(
                error=IdentityProviderRateLimitError(
                    code=ErrorCode.IDENTITY_PROVIDER_RATE_LIMITED,
                    message="Identity provider rate limit exceeded",
                    provider_name=self._provider_name,
                    retry_after=retry_seconds,
                )
            )

        # Handle authentication errors (4xx)
        if response.status_code in (400, 401, 403):
            logger.warning(
                f"idp_{operation}_auth_failed",
                provider=self._provider_name,
                status_code=response.status_code,
            )
            return Failure(
                error=IdentityProviderAuthenticationError(
                    code=ErrorCode.IDENTITY_PROVIDER_AUTHENTICATION_FAILED,
                    message=f"Identity provider rejected {operation}: {response.status_code}",
                    provider_name=self._provider_name,
                    details={"status_code": response.status_code},
                )
            )

        # Handle server errors (5xx)
        if response.status_code >= 500:
            logger.warning(
                f"idp_{operation}_server_error",
                provider=self._provider_name,
                status_code=response.status_code,
            )
            return Failure(
                error=IdentityProviderUnavailableError(
                    code=ErrorCode.IDENTITY_PROVIDER_UNAVAILABLE,
                    message=f"Identity provider server error: {response.status_code}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        # Handle unexpected status codes
        if response.status_code not in (200, 204):
            logger.warning(
                f"idp_{operation}_unexpected_status",
                provider=self._provider_name,
                status_code=response.status_code,
            )
            return Failure(
                error=IdentityProviderInvalidResponseError(
                    code=ErrorCode.IDENTITY_PROVIDER_INVALID_RESPONSE,
                    message=f"Unexpected response from identity provider: {response.status_code}",
                    provider_name=self._provider_name,
                    response_body=response.text[:500],
                )
            )

        return Success(value=response)

    def _parse_json(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], IdentityProviderError]:
        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"idp_{operation}_invalid_json",
                provider=self._provider_name,
                error=str(e),
            )
            return Failure(
                error=IdentityProviderInvalidResponseError(
                    code=ErrorCode.IDENTITY_PROVIDER_INVALID_RESPONSE,
                    message="Invalid JSON response from identity provider",
                    provider_name=self._provider_name,
                    response_body=response.text[:500],
                )
            )

        if not isinstance(data, dict):
            return Failure(
                error=IdentityProviderInvalidResponseError(
                    code=ErrorCode.IDENTITY_PROVIDER_INVALID_RESPONSE,
                    message="Identity provider response is not a JSON object",
                    provider_name=self._provider_name,
                    response_body=response.text[:500],
                )
            )
        return Success(value=data)

    def _missing_field(
        self,
        response: httpx.Response,
        operation: str,
        error: KeyError,
    ) -> Failure[IdentityProviderError]:
        logger.error(
            f"idp_{operation}_missing_field",
            provider=self._provider_name,
            missing_field=str(error),
        )
        return Failure(
            error=IdentityProviderInvalidResponseError(
                code=ErrorCode.IDENTITY_PROVIDER_INVALID_RESPONSE,
                message=f"Missing required field in identity provider response: {error}",
                provider_name=self._provider_name,
                response_body=response.text[:500],
            )
        )
