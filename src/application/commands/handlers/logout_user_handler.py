"""LogoutUser command handler.

Flow:
1. Revoke every refresh token and delete every session of the user
2. Revoke the access token used for the request (if its jti is known)
3. Revoke the identity provider token (if given, best-effort)
4. Return Success(None)

Logout is idempotent: logging out twice is not an error.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (adapters are injected via protocols)
"""

from src.application.commands.auth_commands import LogoutUser
from src.application.services import SessionTracker
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthError
from src.domain.protocols import (
    IdentityProviderProtocol,
    LoggerProtocol,
    TokenIssuerProtocol,
)


class LogoutUserHandler:
    """Handler for LogoutUser command."""

    def __init__(
        self,
        session_tracker: SessionTracker,
        token_issuer: TokenIssuerProtocol,
        identity_provider: IdentityProviderProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize logout handler with dependencies.

        Args:
            session_tracker: Session lifecycle service (revoke-all).
            token_issuer: Application JWT issuer (revocation set).
            identity_provider: External provider (provider token revocation).
            logger: Structured logger.
        """
        self._session_tracker = session_tracker
        self._token_issuer = token_issuer
        self._identity_provider = identity_provider
        self._logger = logger

    async def handle(self, cmd: LogoutUser) -> Result[None, AuthError]:
        """Handle LogoutUser command.

        Args:
            cmd: LogoutUser command.

        Returns:
            Success(None) always.

        Side Effects:
            - Revokes all refresh tokens and deletes all sessions of the user.
            - Adds the current access token jti to the revocation set.
            - Revokes the provider token at the identity provider.
        """
        # Step 1: Revoke everything
        sessions_deleted = await self._session_tracker.revoke_all_for_user(cmd.user_id)

        # Step 2: Current access token
        if cmd.access_token_jti:
            await self._token_issuer.revoke_by_id(
                cmd.access_token_jti, expires_at=cmd.access_token_expires_at
            )

        # Step 3: Provider token (best-effort)
        if cmd.provider_token:
            result = await self._identity_provider.revoke_provider_token(
                cmd.provider_token
            )
            if isinstance(result, Failure):
                self._logger.warning(
                    "provider_token_revocation_failed",
                    user_id=str(cmd.user_id),
                    error_code=result.error.code.value,
                )

        self._logger.info(
            "user_logged_out",
            user_id=str(cmd.user_id),
            sessions_deleted=sessions_deleted,
        )

        # Step 4: Always succeed
        return Success(value=None)
