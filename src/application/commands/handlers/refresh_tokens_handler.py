"""RefreshTokens command handler.

Flow:
1. Verify the refresh token (signature, expiry, revocation set)
2. Resolve the user from the ``sub`` claim
3. Reject missing or deactivated users (before any redemption)
4. Redeem the token in the ledger (rotation + reuse detection)
5. Return Success(TokenPair)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (adapters are injected via protocols)
"""

from src.application.commands.auth_commands import RefreshTokens
from src.application.services import RefreshTokenLedger
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthError, UserDeactivatedError, UserNotFoundError
from src.domain.protocols import LoggerProtocol, TokenIssuerProtocol, UserRepository
from src.domain.value_objects import TokenPair


class RefreshTokensHandler:
    """Handler for RefreshTokens command.

    Implements single-use refresh token rotation: every successful refresh
    consumes the presented token and returns a new pair for the same session.
    """

    def __init__(
        self,
        token_issuer: TokenIssuerProtocol,
        user_repo: UserRepository,
        ledger: RefreshTokenLedger,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize refresh handler with dependencies.

        Args:
            token_issuer: Application JWT issuer (verification).
            user_repo: User persistence.
            ledger: Refresh token ledger (redemption).
            logger: Structured logger.
        """
        self._token_issuer = token_issuer
        self._user_repo = user_repo
        self._ledger = ledger
        self._logger = logger

    async def handle(self, cmd: RefreshTokens) -> Result[TokenPair, AuthError]:
        """Handle RefreshTokens command.

        Args:
            cmd: RefreshTokens command with the raw refresh token.

        Returns:
            Success(TokenPair) with the rotated pair.
            Failure(InvalidTokenError) if verification failed.
            Failure(UserNotFoundError | UserDeactivatedError) for a bad owner.
            Failure(TokenExpiredError | TokenTheftDetectedError) from the ledger.
        """
        # Step 1: Verify token
        verification = await self._token_issuer.verify_refresh(cmd.refresh_token)
        match verification:
            case Failure(error=error):
                self._logger.info("token_refresh_rejected", reason=error.message)
                return Failure(error=error)
            case Success(value=payload):
                pass

        # Step 2-3: Resolve and gate the user
        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            return Failure(
                error=UserNotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    user_id=payload.user_id,
                )
            )
        if not user.is_active:
            self._logger.warning("token_refresh_user_deactivated", user_id=str(user.id))
            return Failure(
                error=UserDeactivatedError(
                    code=ErrorCode.USER_DEACTIVATED,
                    message="User account is deactivated",
                    user_id=user.id,
                )
            )

        # Step 4-5: Redeem
        return await self._ledger.redeem(cmd.refresh_token, payload, user)
