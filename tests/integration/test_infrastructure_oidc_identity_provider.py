"""Integration tests for OIDCIdentityProvider.

HTTP traffic is intercepted with pytest-httpx; everything else is real.

Tests cover:
- Authorization URL (PKCE parameters)
- Code exchange request shape and response mapping
- Userinfo validation and name fallback
- Error mapping (4xx, 429, 5xx, timeouts, malformed bodies)
- Token revocation
"""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from pytest_httpx import HTTPXMock

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import (
    IdentityProviderAuthenticationError,
    IdentityProviderInvalidResponseError,
    IdentityProviderRateLimitError,
    IdentityProviderUnavailableError,
)
from src.infrastructure.providers.oidc import OIDCIdentityProvider

BASE = "https://sso.example.com/realms/appraisal/protocol/openid-connect"
TOKEN_URL = f"{BASE}/token"
USERINFO_URL = f"{BASE}/userinfo"
REVOKE_URL = f"{BASE}/revoke"


@pytest.fixture
def provider():
    return OIDCIdentityProvider(
        base_url="https://sso.example.com/",
        realm="appraisal",
        client_id="appraisal-api",
        client_secret="client-secret",
        redirect_uri="http://localhost:8000/oauth/callback",
        timeout=2.0,
    )


def _form(request: httpx.Request) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


@pytest.mark.integration
class TestAuthorizationUrl:
    """Test login URL construction."""

    def test_url_carries_pkce_parameters(self, provider):
        url = provider.build_authorization_url(state="state-1", code_challenge="chal")

        parsed = urlparse(url)
        params = {key: values[0] for key, values in parse_qs(parsed.query).items()}
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == f"{BASE}/auth"
        assert params["code_challenge"] == "chal"
        assert params["code_challenge_method"] == "S256"
        assert params["state"] == "state-1"
        assert params["response_type"] == "code"
        assert params["client_id"] == "appraisal-api"
        assert params["redirect_uri"] == "http://localhost:8000/oauth/callback"
        assert "openid" in params["scope"]

    def test_redirect_uri_override(self, provider):
        url = provider.build_authorization_url(
            state="s", code_challenge="c", redirect_uri="http://other/cb"
        )

        assert parse_qs(urlparse(url).query)["redirect_uri"] == ["http://other/cb"]

    def test_missing_realm_rejected(self):
        with pytest.raises(ValueError, match="idp_realm"):
            OIDCIdentityProvider(
                base_url="https://sso.example.com",
                realm="",
                client_id="api",
                client_secret="s",
                redirect_uri="http://localhost/cb",
            )


@pytest.mark.integration
class TestExchangeCode:
    """Test the authorization-code exchange."""

    async def test_successful_exchange(self, provider, httpx_mock: HTTPXMock):
        # Arrange
        httpx_mock.add_response(
            method="POST",
            url=TOKEN_URL,
            json={
                "access_token": "idp-access",
                "refresh_token": "idp-refresh",
                "expires_in": 300,
                "token_type": "Bearer",
                "id_token": "idp-id",
            },
        )

        # Act
        result = await provider.exchange_code(code="code-1", code_verifier="verifier-1")

        # Assert
        assert isinstance(result, Success)
        assert result.value.access_token == "idp-access"
        assert result.value.refresh_token == "idp-refresh"
        assert result.value.expires_in == 300

        form = _form(httpx_mock.get_request())
        assert form == {
            "grant_type": "authorization_code",
            "code": "code-1",
            "code_verifier": "verifier-1",
            "redirect_uri": "http://localhost:8000/oauth/callback",
            "client_id": "appraisal-api",
            "client_secret": "client-secret",
        }

    async def test_rejected_code(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST", url=TOKEN_URL, status_code=400, json={"error": "invalid_grant"}
        )

        result = await provider.exchange_code(code="bad", code_verifier="v")

        assert isinstance(result, Failure)
        assert isinstance(result.error, IdentityProviderAuthenticationError)
        assert result.error.code == ErrorCode.IDENTITY_PROVIDER_AUTHENTICATION_FAILED
        assert result.error.provider_name == "keycloak"

    async def test_rate_limited(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST", url=TOKEN_URL, status_code=429, headers={"Retry-After": "30"}
        )

        result = await provider.exchange_code(code="c", code_verifier="v")

        assert isinstance(result.error, IdentityProviderRateLimitError)
        assert result.error.retry_after == 30

    async def test_server_error_unavailable(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, status_code=503)

        result = await provider.exchange_code(code="c", code_verifier="v")

        assert isinstance(result.error, IdentityProviderUnavailableError)
        assert result.error.is_transient is True

    async def test_timeout_unavailable(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        result = await provider.exchange_code(code="c", code_verifier="v")

        assert isinstance(result.error, IdentityProviderUnavailableError)
        assert result.error.message == "Identity provider request timed out"

    async def test_connection_error_unavailable(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        result = await provider.exchange_code(code="c", code_verifier="v")

        assert isinstance(result.error, IdentityProviderUnavailableError)

    async def test_invalid_json(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, text="<html>oops</html>")

        result = await provider.exchange_code(code="c", code_verifier="v")

        assert isinstance(result.error, IdentityProviderInvalidResponseError)

    async def test_missing_access_token(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, json={"token_type": "Bearer"})

        result = await provider.exchange_code(code="c", code_verifier="v")

        assert isinstance(result.error, IdentityProviderInvalidResponseError)
        assert "access_token" in result.error.message


@pytest.mark.integration
class TestValidateProviderToken:
    """Test userinfo validation."""

    async def test_claims_mapped(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET",
            url=USERINFO_URL,
            json={
                "sub": "idp-42",
                "email": "jane@example.com",
                "name": "Jane Doe",
                "email_verified": True,
            },
        )

        result = await provider.validate_provider_token("idp-access")

        assert isinstance(result, Success)
        assert result.value.subject == "idp-42"
        assert result.value.name == "Jane Doe"
        assert result.value.email_verified is True
        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == "Bearer idp-access"

    async def test_name_falls_back_to_username_then_email(
        self, provider, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(
            method="GET",
            url=USERINFO_URL,
            json={"sub": "a", "email": "a@example.com", "preferred_username": "jdoe"},
        )
        httpx_mock.add_response(
            method="GET", url=USERINFO_URL, json={"sub": "b", "email": "b@example.com"}
        )

        first = await provider.validate_provider_token("t1")
        second = await provider.validate_provider_token("t2")

        assert first.value.name == "jdoe"
        assert second.value.name == "b@example.com"

    async def test_expired_provider_token(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url=USERINFO_URL, status_code=401)

        result = await provider.validate_provider_token("expired")

        assert isinstance(result.error, IdentityProviderAuthenticationError)

    async def test_missing_subject(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET", url=USERINFO_URL, json={"email": "a@example.com"}
        )

        result = await provider.validate_provider_token("t")

        assert isinstance(result.error, IdentityProviderInvalidResponseError)


@pytest.mark.integration
class TestRevokeProviderToken:
    """Test revocation at the provider."""

    async def test_revoke_posts_token(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=REVOKE_URL, status_code=200)

        result = await provider.revoke_provider_token("idp-refresh")

        assert result == Success(value=None)
        form = _form(httpx_mock.get_request())
        assert form["token"] == "idp-refresh"
        assert form["client_id"] == "appraisal-api"

    async def test_revoke_failure_returned(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=REVOKE_URL, status_code=500)

        result = await provider.revoke_provider_token("idp-refresh")

        assert isinstance(result.error, IdentityProviderUnavailableError)
