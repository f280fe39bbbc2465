"""API tests for GET /oauth/callback.

Architecture:
- Real app with the AuthenticateUser handler replaced by a stub
- Flow cookies set on the client, as the browser would send them
- Verifies CSRF state checks, status mapping and RFC 7807 bodies
"""

import pytest
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from src.application.dtos import AuthenticationResult, UserProjection
from src.core.container import get_authenticate_user_handler
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import AuthenticationFailedError, UserDeactivatedError
from src.main import app
from tests.conftest import create_token_pair, create_user


class StubAuthenticateUserHandler:
    """Stub handler recording the command it receives."""

    def __init__(self, result):
        self.result = result
        self.commands = []

    async def handle(self, cmd):
        self.commands.append(cmd)
        return self.result


def _success_result() -> Success:
    user = create_user()
    return Success(
        value=AuthenticationResult(
            tokens=create_token_pair(jti="jti-login"),
            user=UserProjection.from_entity(user),
            session_id=uuid7(),
        )
    )


@pytest.fixture(autouse=True)
def override_dependencies():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def _install(result) -> StubAuthenticateUserHandler:
    handler = StubAuthenticateUserHandler(result)
    app.dependency_overrides[get_authenticate_user_handler] = lambda: handler
    return handler


def _set_flow_cookies(client, state="state-1", verifier="v" * 43):
    client.cookies.set("oauth_state", state)
    if verifier is not None:
        client.cookies.set("pkce_verifier", verifier)


@pytest.mark.api
class TestOAuthCallbackSuccess:
    """Successful logins."""

    def test_returns_tokens_and_user(self, client):
        # Arrange
        handler = _install(_success_result())
        _set_flow_cookies(client)

        # Act
        response = client.get(
            "/oauth/callback",
            params={"code": "auth-code", "state": "state-1"},
            headers={"User-Agent": "pytest-agent", "X-Device-Id": "laptop"},
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["access_token"] == "access.token.value"
        assert body["refresh_token"] == "refresh.token.value"
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 900
        assert body["user"]["email"] == "jane@example.com"
        assert body["user"]["roles"] == ["user"]

        cmd = handler.commands[0]
        assert cmd.code == "auth-code"
        assert cmd.code_verifier == "v" * 43
        assert cmd.device.user_agent == "pytest-agent"
        assert cmd.device.device_id == "laptop"

    def test_flow_cookies_cleared(self, client):
        _install(_success_result())
        _set_flow_cookies(client)

        response = client.get(
            "/oauth/callback", params={"code": "auth-code", "state": "state-1"}
        )

        set_cookies = " ".join(response.headers.get_list("set-cookie"))
        assert "oauth_state=" in set_cookies
        assert "pkce_verifier=" in set_cookies


@pytest.mark.api
class TestOAuthCallbackRejected:
    """Requests refused before reaching the handler."""

    def test_state_mismatch(self, client):
        handler = _install(_success_result())
        _set_flow_cookies(client, state="expected")

        response = client.get(
            "/oauth/callback", params={"code": "auth-code", "state": "forged"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "OAuth state does not match"
        assert handler.commands == []

    def test_missing_state_cookie(self, client):
        handler = _install(_success_result())

        response = client.get(
            "/oauth/callback", params={"code": "auth-code", "state": "state-1"}
        )

        assert response.status_code == 400
        assert handler.commands == []

    def test_missing_verifier_cookie(self, client):
        handler = _install(_success_result())
        _set_flow_cookies(client, verifier=None)

        response = client.get(
            "/oauth/callback", params={"code": "auth-code", "state": "state-1"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "PKCE verifier is missing"
        assert handler.commands == []

    def test_oversized_user_agent_rejected(self, client):
        handler = _install(_success_result())
        _set_flow_cookies(client)

        response = client.get(
            "/oauth/callback",
            params={"code": "auth-code", "state": "state-1"},
            headers={"User-Agent": "A" * 501},
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid device details")
        assert "user_agent" in response.json()["detail"]
        assert handler.commands == []

    def test_user_agent_at_limit_passed_through(self, client):
        handler = _install(_success_result())
        _set_flow_cookies(client)

        response = client.get(
            "/oauth/callback",
            params={"code": "auth-code", "state": "state-1"},
            headers={"User-Agent": "A" * 500},
        )

        assert response.status_code == 201
        assert handler.commands[0].device.user_agent == "A" * 500

    def test_missing_code(self, client):
        _install(_success_result())
        _set_flow_cookies(client)

        response = client.get("/oauth/callback", params={"state": "state-1"})

        assert response.status_code == 422


@pytest.mark.api
class TestOAuthCallbackFailure:
    """Handler failures mapped to Problem Details."""

    def test_authentication_failed_is_401_without_cause(self, client):
        # Arrange
        _install(
            Failure(
                error=AuthenticationFailedError(
                    code=ErrorCode.AUTHENTICATION_FAILED,
                    message="Authentication failed",
                    cause="invalid_grant: code already used",
                )
            )
        )
        _set_flow_cookies(client)

        # Act
        response = client.get(
            "/oauth/callback", params={"code": "auth-code", "state": "state-1"}
        )

        # Assert
        assert response.status_code == 401
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert body["status"] == 401
        assert body["type"].endswith("/errors/authentication_failed")
        assert body["detail"] == "Authentication failed. Please try again."
        assert "invalid_grant" not in response.text
        assert body["instance"] == "/oauth/callback"

    def test_deactivated_user_is_403(self, client):
        _install(
            Failure(
                error=UserDeactivatedError(
                    code=ErrorCode.USER_DEACTIVATED,
                    message="User account is deactivated",
                )
            )
        )
        _set_flow_cookies(client)

        response = client.get(
            "/oauth/callback", params={"code": "auth-code", "state": "state-1"}
        )

        assert response.status_code == 403
        assert response.json()["title"] == "Account Deactivated"
