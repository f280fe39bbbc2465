"""AuthenticateUser command handler.

Flow:
1. Exchange authorization code + PKCE verifier at the identity provider
2. Validate the provider access token and read the subject claims
3. Find the local user by provider subject, or create it (role: user)
4. Synchronize email/name of an existing user (roles are kept)
5. Reject deactivated users (provider token revoked best-effort)
6. Build and validate the session record
7. Issue the token pair bound to the session id
8. Record the refresh token in the ledger
9. Persist the session
10. Return Success(AuthenticationResult)

On failure:
- Identity provider failures and unexpected exceptions -> AuthenticationFailed
- Inactive user -> UserDeactivated

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (adapters are injected via protocols)
"""

from datetime import UTC, datetime, timedelta

from src.application.commands.auth_commands import AuthenticateUser
from src.application.dtos import AuthenticationResult, UserProjection
from src.application.services import RefreshTokenLedger, SessionTracker
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import User
from src.domain.errors import (
    AuthenticationFailedError,
    AuthError,
    IdentityProviderError,
    UserDeactivatedError,
)
from src.domain.protocols import (
    IdentityProviderProtocol,
    LoggerProtocol,
    TokenIssuerProtocol,
    UserRepository,
)
from src.domain.value_objects import ProviderClaims


class AuthenticateUserHandler:
    """Handler for AuthenticateUser command.

    Turns an identity provider authorization code into a local user, a
    session and an application token pair.
    """

    def __init__(
        self,
        identity_provider: IdentityProviderProtocol,
        user_repo: UserRepository,
        token_issuer: TokenIssuerProtocol,
        ledger: RefreshTokenLedger,
        session_tracker: SessionTracker,
        logger: LoggerProtocol,
        session_expire_days: int = 7,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            identity_provider: External OAuth2/OIDC provider.
            user_repo: User persistence.
            token_issuer: Application JWT issuer.
            ledger: Refresh token ledger.
            session_tracker: Session lifecycle service.
            logger: Structured logger.
            session_expire_days: Lifetime of the created session.
        """
        self._identity_provider = identity_provider
        self._user_repo = user_repo
        self._token_issuer = token_issuer
        self._ledger = ledger
        self._session_tracker = session_tracker
        self._logger = logger
        self._session_ttl = timedelta(days=session_expire_days)

    async def handle(
        self, cmd: AuthenticateUser
    ) -> Result[AuthenticationResult, AuthError]:
        """Handle AuthenticateUser command.

        Args:
            cmd: AuthenticateUser command.

        Returns:
            Success(AuthenticationResult) on successful login.
            Failure(AuthenticationFailedError) if the provider rejected the
                code or anything unexpected happened.
            Failure(UserDeactivatedError) if the account is disabled.

        Side Effects:
            - Creates or updates the local user.
            - Persists one refresh token record and one session.
        """
        try:
            return await self._authenticate(cmd)
        except Exception as e:
            self._logger.error(
                "authentication_unexpected_error",
                error=e,
                provider=self._identity_provider.provider_name,
            )
            return Failure(
                error=AuthenticationFailedError(
                    code=ErrorCode.AUTHENTICATION_FAILED,
                    message=f"Authentication failed: {e}",
                    cause=type(e).__name__,
                )
            )

    async def _authenticate(
        self, cmd: AuthenticateUser
    ) -> Result[AuthenticationResult, AuthError]:
        # Device details are checked before any user row can be written
        cmd.device.validate()

        # Step 1: Code exchange
        exchange_result = await self._identity_provider.exchange_code(
            code=cmd.code,
            code_verifier=cmd.code_verifier,
            redirect_uri=cmd.redirect_uri,
        )
        match exchange_result:
            case Failure(error=provider_error):
                return Failure(error=self._provider_failure(provider_error))
            case Success(value=provider_tokens):
                pass

        # Step 2: Provider token validation
        claims_result = await self._identity_provider.validate_provider_token(
            provider_tokens.access_token
        )
        match claims_result:
            case Failure(error=provider_error):
                return Failure(error=self._provider_failure(provider_error))
            case Success(value=claims):
                pass

        # Step 3-4: Find or create the local user
        user = await self._resolve_user(claims)

        # Step 5: Deactivation gate
        if not user.is_active:
            await self._revoke_provider_token(provider_tokens.access_token, user)
            self._logger.warning("authentication_user_deactivated", user_id=str(user.id))
            return Failure(
                error=UserDeactivatedError(
                    code=ErrorCode.USER_DEACTIVATED,
                    message="User account is deactivated",
                    user_id=user.id,
                )
            )

        # Step 6: Session validated before anything token-related is stored
        session = self._session_tracker.build(
            user_id=user.id,
            expires_at=datetime.now(UTC) + self._session_ttl,
            device=cmd.device,
        )

        # Step 7-9: Issue, record, persist
        pair = self._token_issuer.issue_pair(
            user.id, user.email, user.role_values, session_id=session.id
        )
        await self._ledger.record(user, pair)
        await self._session_tracker.persist(session)

        self._logger.info(
            "authentication_succeeded",
            user_id=str(user.id),
            session_id=str(session.id),
            provider=self._identity_provider.provider_name,
        )

        # Step 10: Return Success
        return Success(
            value=AuthenticationResult(
                tokens=pair,
                user=UserProjection.from_entity(user),
                session_id=session.id,
            )
        )

    async def _resolve_user(self, claims: ProviderClaims) -> User:
        user = await self._user_repo.find_by_external_id(claims.subject)
        if user is None:
            user = User.create(
                external_id=claims.subject,
                email=claims.email,
                name=claims.name,
            )
            await self._user_repo.save(user)
            self._logger.info("user_created", user_id=str(user.id))
            return user

        if user.sync_profile(email=claims.email, name=claims.name):
            await self._user_repo.update(user)
        return user

    async def _revoke_provider_token(self, token: str, user: User) -> None:
        """Revoke at the provider; a failure is only logged."""
        result = await self._identity_provider.revoke_provider_token(token)
        if isinstance(result, Failure):
            self._logger.warning(
                "provider_token_revocation_failed",
                user_id=str(user.id),
                error_code=result.error.code.value,
            )

    def _provider_failure(
        self, error: IdentityProviderError
    ) -> AuthenticationFailedError:
        self._logger.warning(
            "authentication_provider_failed",
            provider=error.provider_name,
            error_code=error.code.value,
            reason=error.message,
        )
        return AuthenticationFailedError(
            code=ErrorCode.AUTHENTICATION_FAILED,
            message="Authentication failed",
            cause=error.message,
        )
