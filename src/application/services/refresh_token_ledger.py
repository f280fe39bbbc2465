"""Refresh token ledger service.

Persists one record per issued refresh token and redeems tokens with
single-use rotation and reuse detection.

Redeem flow:
1. Find the candidate record by (sub, jti) of the presented token
2. Verify the raw token against the stored hash
3. Expired -> TokenExpired (whether used or not)
4. Already used -> theft response (revoke everything) -> TokenTheftDetected
5. Revoked -> TokenExpired
6. Atomic compare-and-set used=False -> True; on a lost race, re-read and
   treat a now-used record as theft
7. Issue a new pair for the same session, record it, touch the session

Architecture:
    - Application service, request-scoped
    - Storage errors are not caught: they propagate as exceptions
"""

from datetime import UTC, datetime

from src.application.services.session_tracker import SessionTracker
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import RefreshTokenRecord, User
from src.domain.errors import AuthError, TokenExpiredError, TokenTheftDetectedError
from src.domain.protocols import (
    LoggerProtocol,
    RefreshTokenRepository,
    SecretHasherProtocol,
    TokenIssuerProtocol,
)
from src.domain.value_objects import TokenPair, TokenPayload


class RefreshTokenLedger:
    """Record and redeem refresh tokens.

    Attributes:
        _refresh_token_repo: Refresh record persistence.
        _secret_hasher: One-way hash for raw refresh tokens.
        _token_issuer: Mints the replacement pair.
        _session_tracker: Theft response and session activity.
        _logger: Structured logger.
    """

    def __init__(
        self,
        refresh_token_repo: RefreshTokenRepository,
        secret_hasher: SecretHasherProtocol,
        token_issuer: TokenIssuerProtocol,
        session_tracker: SessionTracker,
        logger: LoggerProtocol,
    ) -> None:
        self._refresh_token_repo = refresh_token_repo
        self._secret_hasher = secret_hasher
        self._token_issuer = token_issuer
        self._session_tracker = session_tracker
        self._logger = logger

    async def record(self, user: User, pair: TokenPair) -> RefreshTokenRecord:
        """Persist the refresh half of a freshly issued pair."""
        record = RefreshTokenRecord.create(
            user_id=user.id,
            lookup_key=pair.jti,
            token_hash=self._secret_hasher.hash(pair.refresh_token),
            expires_at=pair.refresh_expires_at,
        )
        await self._refresh_token_repo.save(record)
        return record

    async def redeem(
        self,
        raw_refresh_token: str,
        presented: TokenPayload,
        user: User,
    ) -> Result[TokenPair, AuthError]:
        """Exchange a valid, unused refresh token for a new pair.

        Args:
            raw_refresh_token: Token string as presented by the client.
            presented: Verified claims of that token.
            user: Active owner of the token.

        Returns:
            Success(TokenPair) with the rotated pair.
            Failure(TokenExpiredError) if the token is unknown, does not
                match, expired or was revoked.
            Failure(TokenTheftDetectedError) if the token was already used.

        Side Effects:
            - Marks the presented record used
            - Persists the new record and touches the session
            - On reuse, revokes every token and session of the user
        """
        # Step 1-2: Candidate lookup + hash verification
        record = await self._refresh_token_repo.find_by_lookup_key(
            presented.user_id, presented.jti
        )
        if record is None or not self._secret_hasher.verify(
            raw_refresh_token, record.token_hash
        ):
            return Failure(error=self._expired())

        # Step 3: Expired wins over used
        now = datetime.now(UTC)
        if record.is_expired(now):
            return Failure(error=self._expired())

        # Step 4: Reuse of a rotated token
        if record.used:
            return Failure(error=await self._theft_response(user, record))

        # Step 5: Revoked by logout or an earlier theft response
        if record.is_revoked:
            return Failure(error=self._expired())

        # Step 6: Single-use transition, decided by the database
        if not await self._refresh_token_repo.mark_used_if_unused(record.id):
            current = await self._refresh_token_repo.find_by_lookup_key(
                presented.user_id, presented.jti
            )
            if current is not None and current.used:
                return Failure(error=await self._theft_response(user, current))
            return Failure(error=self._expired())

        # Step 7: Rotate
        pair = self._token_issuer.issue_pair(
            user.id,
            user.email,
            user.role_values,
            session_id=presented.session_id,
        )
        await self.record(user, pair)
        if presented.session_id is not None:
            await self._session_tracker.touch(presented.session_id)

        self._logger.info(
            "refresh_token_rotated",
            user_id=str(user.id),
            session_id=str(presented.session_id) if presented.session_id else None,
        )
        return Success(value=pair)

    async def _theft_response(
        self, user: User, record: RefreshTokenRecord
    ) -> TokenTheftDetectedError:
        self._logger.warning(
            "refresh_token_theft_detected",
            user_id=str(user.id),
            record_id=str(record.id),
        )
        await self._session_tracker.revoke_all_for_user(user.id)
        return TokenTheftDetectedError(
            code=ErrorCode.TOKEN_THEFT_DETECTED,
            message="Refresh token reuse detected; all sessions have been revoked",
            user_id=user.id,
        )

    @staticmethod
    def _expired() -> TokenExpiredError:
        return TokenExpiredError(
            code=ErrorCode.TOKEN_EXPIRED,
            message="Refresh token is invalid, expired or revoked",
        )
