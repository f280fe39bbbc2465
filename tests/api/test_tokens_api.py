"""API tests for POST /api/v1/tokens (refresh).

Architecture:
- Real app with the RefreshTokens handler replaced by a stub
- Verifies rotation response shape, error status mapping and RFC 7807 bodies

Full stack rotation (real handlers and database) is covered in
tests/integration/test_auth_flows.py.
"""

import pytest
from fastapi.testclient import TestClient

from src.core.container import get_refresh_tokens_handler
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import (
    InvalidTokenError,
    TokenExpiredError,
    TokenTheftDetectedError,
    UserDeactivatedError,
)
from src.main import app
from tests.conftest import create_token_pair


class StubRefreshTokensHandler:
    """Stub handler recording the command it receives."""

    def __init__(self, result):
        self.result = result
        self.commands = []

    async def handle(self, cmd):
        self.commands.append(cmd)
        return self.result


@pytest.fixture(autouse=True)
def override_dependencies():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def _install(result) -> StubRefreshTokensHandler:
    handler = StubRefreshTokensHandler(result)
    app.dependency_overrides[get_refresh_tokens_handler] = lambda: handler
    return handler


@pytest.mark.api
class TestCreateTokens:
    """Tests for POST /api/v1/tokens."""

    def test_rotation_returns_new_pair(self, client):
        # Arrange
        handler = _install(
            Success(
                value=create_token_pair(
                    jti="jti-2", access_token="new-access", refresh_token="new-refresh"
                )
            )
        )

        # Act
        response = client.post(
            "/api/v1/tokens", json={"refresh_token": "old-refresh"}
        )

        # Assert
        assert response.status_code == 201
        assert response.json() == {
            "access_token": "new-access",
            "refresh_token": "new-refresh",
            "token_type": "bearer",
            "expires_in": 900,
        }
        assert handler.commands[0].refresh_token == "old-refresh"

    def test_reuse_detected_is_401(self, client):
        _install(
            Failure(
                error=TokenTheftDetectedError(
                    code=ErrorCode.TOKEN_THEFT_DETECTED,
                    message="Refresh token reuse detected; all sessions have been revoked",
                )
            )
        )

        response = client.post("/api/v1/tokens", json={"refresh_token": "replayed"})

        assert response.status_code == 401
        body = response.json()
        assert body["type"].endswith("/errors/token_theft_detected")
        assert body["title"] == "Token Reuse Detected"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.parametrize(
        "error",
        [
            TokenExpiredError(
                code=ErrorCode.TOKEN_EXPIRED,
                message="Refresh token is invalid, expired or revoked",
            ),
            InvalidTokenError(code=ErrorCode.TOKEN_INVALID, message="Invalid token"),
        ],
    )
    def test_invalid_or_expired_is_401(self, client, error):
        _install(Failure(error=error))

        response = client.post("/api/v1/tokens", json={"refresh_token": "bad"})

        assert response.status_code == 401
        assert response.json()["type"].endswith(f"/errors/{error.code.value}")

    def test_deactivated_user_is_403(self, client):
        _install(
            Failure(
                error=UserDeactivatedError(
                    code=ErrorCode.USER_DEACTIVATED,
                    message="User account is deactivated",
                )
            )
        )

        response = client.post("/api/v1/tokens", json={"refresh_token": "token"})

        assert response.status_code == 403
        assert "www-authenticate" not in response.headers

    def test_empty_refresh_token_is_422(self, client):
        handler = _install(Success(value=create_token_pair()))

        response = client.post("/api/v1/tokens", json={"refresh_token": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["errors"][0]["field"] == "refresh_token"
        assert handler.commands == []

    def test_missing_body_is_422(self, client):
        _install(Success(value=create_token_pair()))

        response = client.post("/api/v1/tokens", json={})

        assert response.status_code == 422
