"""Unit tests for RefreshTokenLedger.

Tests cover:
- Recording a freshly issued pair (hash stored, never the raw token)
- Redeem ordering: unknown/mismatch, expired, used (theft), revoked
- Lost compare-and-set races
- Rotation keeps the session id and touches the session
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from src.application.services import RefreshTokenLedger, SessionTracker
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities import RefreshTokenRecord
from src.domain.errors import TokenExpiredError, TokenTheftDetectedError
from src.domain.value_objects import TokenPayload
from tests.conftest import create_token_pair, create_user

RAW_TOKEN = "raw.refresh.token"


def _record(user_id, **overrides) -> RefreshTokenRecord:
    now = datetime.now(UTC)
    values = {
        "id": uuid7(),
        "user_id": user_id,
        "lookup_key": "jti-1",
        "token_hash": "stored-hash",
        "created_at": now - timedelta(hours=1),
        "expires_at": now + timedelta(days=6),
    }
    values.update(overrides)
    return RefreshTokenRecord(**values)


def _payload(user_id, session_id=None) -> TokenPayload:
    now = datetime.now(UTC)
    return TokenPayload(
        user_id=user_id,
        email="jane@example.com",
        roles=["user"],
        jti="jti-1",
        issued_at=now,
        expires_at=now + timedelta(days=7),
        session_id=session_id,
    )


@pytest.fixture
def user():
    return create_user()


@pytest.fixture
def refresh_token_repo(user):
    repo = AsyncMock()
    repo.find_by_lookup_key.return_value = _record(user.id)
    repo.mark_used_if_unused.return_value = True
    return repo


@pytest.fixture
def hasher():
    hasher = Mock()
    hasher.hash.return_value = "new-hash"
    hasher.verify.return_value = True
    return hasher


@pytest.fixture
def token_issuer():
    issuer = Mock()
    issuer.issue_pair.return_value = create_token_pair(jti="jti-2")
    return issuer


@pytest.fixture
def session_tracker():
    tracker = Mock(spec=SessionTracker)
    tracker.revoke_all_for_user.return_value = 1
    return tracker


@pytest.fixture
def ledger(refresh_token_repo, hasher, token_issuer, session_tracker, mock_logger):
    return RefreshTokenLedger(
        refresh_token_repo=refresh_token_repo,
        secret_hasher=hasher,
        token_issuer=token_issuer,
        session_tracker=session_tracker,
        logger=mock_logger,
    )


@pytest.mark.unit
class TestLedgerRecord:
    """Test recording issued pairs."""

    async def test_record_stores_hash_and_lookup_key(
        self, ledger, refresh_token_repo, hasher, user
    ):
        # Arrange
        pair = create_token_pair(jti="jti-9", refresh_token="raw-secret")

        # Act
        record = await ledger.record(user, pair)

        # Assert
        hasher.hash.assert_called_once_with("raw-secret")
        refresh_token_repo.save.assert_awaited_once_with(record)
        assert record.lookup_key == "jti-9"
        assert record.token_hash == "new-hash"
        assert record.expires_at == pair.refresh_expires_at
        assert record.user_id == user.id
        assert record.is_active()


@pytest.mark.unit
class TestLedgerRedeemSuccess:
    """Test successful rotation."""

    async def test_rotation_issues_pair_for_same_session(
        self, ledger, refresh_token_repo, token_issuer, session_tracker, user
    ):
        # Arrange
        session_id = uuid7()
        record = refresh_token_repo.find_by_lookup_key.return_value

        # Act
        result = await ledger.redeem(RAW_TOKEN, _payload(user.id, session_id), user)

        # Assert
        assert isinstance(result, Success)
        assert result.value.jti == "jti-2"
        refresh_token_repo.mark_used_if_unused.assert_awaited_once_with(record.id)
        token_issuer.issue_pair.assert_called_once_with(
            user.id, user.email, ["user"], session_id=session_id
        )
        saved = refresh_token_repo.save.call_args.args[0]
        assert saved.lookup_key == "jti-2"
        session_tracker.touch.assert_awaited_once_with(session_id)

    async def test_rotation_without_session_skips_touch(
        self, ledger, session_tracker, user
    ):
        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result, Success)
        session_tracker.touch.assert_not_awaited()

    async def test_lookup_uses_subject_and_jti(self, ledger, refresh_token_repo, hasher, user):
        await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        refresh_token_repo.find_by_lookup_key.assert_any_await(user.id, "jti-1")
        hasher.verify.assert_called_once_with(RAW_TOKEN, "stored-hash")


@pytest.mark.unit
class TestLedgerRedeemRejections:
    """Test every rejection branch in order."""

    async def test_unknown_token_expired(self, ledger, refresh_token_repo, session_tracker, user):
        refresh_token_repo.find_by_lookup_key.return_value = None

        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result, Failure)
        assert isinstance(result.error, TokenExpiredError)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        session_tracker.revoke_all_for_user.assert_not_awaited()

    async def test_hash_mismatch_expired(self, ledger, hasher, refresh_token_repo, user):
        hasher.verify.return_value = False

        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result.error, TokenExpiredError)
        refresh_token_repo.mark_used_if_unused.assert_not_awaited()

    async def test_expired_wins_over_used(
        self, ledger, refresh_token_repo, session_tracker, user
    ):
        now = datetime.now(UTC)
        refresh_token_repo.find_by_lookup_key.return_value = _record(
            user.id,
            created_at=now - timedelta(days=8),
            expires_at=now - timedelta(seconds=1),
            used=True,
        )

        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result.error, TokenExpiredError)
        session_tracker.revoke_all_for_user.assert_not_awaited()

    async def test_used_token_triggers_theft_response(
        self, ledger, refresh_token_repo, session_tracker, token_issuer, mock_logger, user
    ):
        # Arrange
        refresh_token_repo.find_by_lookup_key.return_value = _record(user.id, used=True)

        # Act
        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, TokenTheftDetectedError)
        assert result.error.user_id == user.id
        session_tracker.revoke_all_for_user.assert_awaited_once_with(user.id)
        token_issuer.issue_pair.assert_not_called()
        assert mock_logger.warning.call_args.args[0] == "refresh_token_theft_detected"

    async def test_revoked_token_expired_without_theft(
        self, ledger, refresh_token_repo, session_tracker, user
    ):
        refresh_token_repo.find_by_lookup_key.return_value = _record(
            user.id, revoked_at=datetime.now(UTC)
        )

        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result.error, TokenExpiredError)
        session_tracker.revoke_all_for_user.assert_not_awaited()

    async def test_used_and_revoked_token_is_theft(
        self, ledger, refresh_token_repo, session_tracker, user
    ):
        refresh_token_repo.find_by_lookup_key.return_value = _record(
            user.id, used=True, revoked_at=datetime.now(UTC)
        )

        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result.error, TokenTheftDetectedError)
        session_tracker.revoke_all_for_user.assert_awaited_once()

    async def test_all_rejections_share_one_message(self, ledger, refresh_token_repo, user):
        refresh_token_repo.find_by_lookup_key.return_value = None
        unknown = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        refresh_token_repo.find_by_lookup_key.return_value = _record(
            user.id, revoked_at=datetime.now(UTC)
        )
        revoked = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert unknown.error.message == revoked.error.message


@pytest.mark.unit
class TestLedgerConcurrentRedeem:
    """Test the compare-and-set outcome of concurrent redemptions."""

    async def test_lost_race_to_used_record_is_theft(
        self, ledger, refresh_token_repo, session_tracker, token_issuer, user
    ):
        # Arrange
        fresh = _record(user.id)
        refresh_token_repo.find_by_lookup_key.side_effect = [fresh, fresh.mark_used()]
        refresh_token_repo.mark_used_if_unused.return_value = False

        # Act
        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        # Assert
        assert isinstance(result.error, TokenTheftDetectedError)
        session_tracker.revoke_all_for_user.assert_awaited_once_with(user.id)
        token_issuer.issue_pair.assert_not_called()

    async def test_lost_race_to_revocation_is_expired(
        self, ledger, refresh_token_repo, session_tracker, user
    ):
        fresh = _record(user.id)
        refresh_token_repo.find_by_lookup_key.side_effect = [
            fresh,
            fresh.revoke(datetime.now(UTC)),
        ]
        refresh_token_repo.mark_used_if_unused.return_value = False

        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result.error, TokenExpiredError)
        session_tracker.revoke_all_for_user.assert_not_awaited()

    async def test_record_gone_after_lost_race_is_expired(
        self, ledger, refresh_token_repo, user
    ):
        refresh_token_repo.find_by_lookup_key.side_effect = [_record(user.id), None]
        refresh_token_repo.mark_used_if_unused.return_value = False

        result = await ledger.redeem(RAW_TOKEN, _payload(user.id), user)

        assert isinstance(result.error, TokenExpiredError)
