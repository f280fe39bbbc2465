"""Token issuer protocol (port).

Mints and verifies the application's own access/refresh JWTs. Independent of
the identity provider's tokens.

Reference implementation:
    src.infrastructure.security.jwt_token_issuer.JWTTokenIssuer
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.errors import InvalidTokenError
from src.domain.value_objects import TokenPair, TokenPayload


class TokenIssuerProtocol(Protocol):
    """Protocol for application token issuance and verification."""

    def issue_pair(
        self,
        user_id: UUID,
        email: str,
        roles: list[str],
        session_id: UUID | None = None,
    ) -> TokenPair:
        """Mint an access/refresh pair sharing one fresh ``jti``.

        Access and refresh tokens are signed with different secrets and
        carry different expiries.
        """
        ...

    async def verify_access(
        self, token: str
    ) -> Result[TokenPayload, InvalidTokenError]:
        """Verify an access token (signature, expiry, revocation)."""
        ...

    async def verify_refresh(
        self, token: str
    ) -> Result[TokenPayload, InvalidTokenError]:
        """Verify a refresh token (signature, expiry, revocation)."""
        ...

    def decode_unsafe(self, token: str) -> TokenPayload | None:
        """Parse claims WITHOUT verifying the signature.

        For non-authoritative lookups only. Never authorize on this result.
        Returns None if the token cannot be parsed at all.
        """
        ...

    async def revoke_by_id(self, jti: str, expires_at: datetime | None = None) -> None:
        """Add ``jti`` to the revocation set (idempotent).

        Args:
            jti: Token id to revoke.
            expires_at: When the revoked tokens expire anyway; the entry may
                be dropped after that. Defaults to the refresh token lifetime.
        """
        ...
