"""Unit tests for Settings validation."""

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.core.enums import Environment

ACCESS = "a" * 32
REFRESH = "b" * 32


def _settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "jwt_access_secret": ACCESS,
        "jwt_refresh_secret": REFRESH,
        "idp_base_url": "https://sso.example.com/",
        "idp_realm": "appraisal",
        "idp_client_id": "api",
        "idp_client_secret": "secret",
        "idp_redirect_uri": "http://localhost:8000/oauth/callback",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.mark.unit
class TestSettings:
    """Test configuration loading and validators."""

    def test_defaults(self):
        settings = _settings(environment="testing")

        assert settings.environment == Environment.TESTING
        assert settings.is_testing is True
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.session_expire_days == 7
        assert settings.bcrypt_rounds == 10
        assert settings.revocation_backend == "memory"
        assert settings.idp_timeout_seconds == 10.0

    def test_trailing_slash_stripped(self):
        settings = _settings()

        assert settings.idp_base_url == "https://sso.example.com"

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 bytes"):
            _settings(jwt_access_secret="short")

    def test_equal_secrets_rejected(self):
        with pytest.raises(ValidationError, match="must differ"):
            _settings(jwt_refresh_secret=ACCESS)

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_bcrypt_rounds_range(self, rounds):
        with pytest.raises(ValidationError, match="bcrypt_rounds"):
            _settings(bcrypt_rounds=rounds)

    def test_unknown_revocation_backend_rejected(self):
        with pytest.raises(ValidationError):
            _settings(revocation_backend="memcached")

    def test_cors_origin_list(self):
        settings = _settings(cors_origins="http://a.test, http://b.test")

        assert settings.cors_origin_list == ["http://a.test", "http://b.test"]
