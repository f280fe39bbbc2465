"""JWT token issuer (adapter).

Implements TokenIssuerProtocol using PyJWT with HMAC-SHA256.

Security:
    - Separate secrets for access and refresh tokens (each >= 256 bits), so
      leaking one secret does not let an attacker forge the other token kind
    - Short-lived access tokens (15 minutes), long-lived refresh tokens (7 days)
    - One uuid7 ``jti`` per pair, shared by both tokens, used as revocation key
    - Verification consults the revocation store after signature and expiry

Claims:
    sub, email, roles, jti, iat, exp, type ("access" or "refresh"), and sid
    (session id) when known. Verification requires the expected type.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import InvalidTokenError
from src.domain.protocols.revocation_store_protocol import RevocationStoreProtocol
from src.domain.value_objects import TokenPair, TokenPayload

_REQUIRED_CLAIMS = ["sub", "jti", "iat", "exp", "type"]

# Values of the ``type`` claim
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JWTTokenIssuer:
    """JWT access/refresh token issuer and verifier.

    Usage:
        from src.core.container import get_token_issuer

        issuer = get_token_issuer()
        pair = issuer.issue_pair(user_id, email, ["user"], session_id=sid)
        result = await issuer.verify_access(pair.access_token)
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        revocation_store: RevocationStoreProtocol,
        access_expiration_minutes: int = 15,
        refresh_expiration_days: int = 7,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize the issuer.

        Args:
            access_secret: HMAC secret for access tokens (>= 32 bytes).
            refresh_secret: HMAC secret for refresh tokens (>= 32 bytes,
                different from access_secret).
            revocation_store: Where revoked ``jti`` values live.
            access_expiration_minutes: Access token lifetime.
            refresh_expiration_days: Refresh token lifetime.
            algorithm: HMAC algorithm (default HS256).

        Raises:
            ValueError: If a secret is too short or both secrets are equal.
        """
        for secret in (access_secret, refresh_secret):
            if len(secret.encode("utf-8")) < 32:
                msg = "JWT secret key must be at least 32 bytes (256 bits)"
                raise ValueError(msg)
        if access_secret == refresh_secret:
            msg = "Access and refresh tokens must use different secrets"
            raise ValueError(msg)

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._revocation_store = revocation_store
        self._access_ttl = timedelta(minutes=access_expiration_minutes)
        self._refresh_ttl = timedelta(days=refresh_expiration_days)
        self._algorithm = algorithm

    @property
    def refresh_lifetime(self) -> timedelta:
        return self._refresh_ttl

    def issue_pair(
        self,
        user_id: UUID,
        email: str,
        roles: list[str],
        session_id: UUID | None = None,
    ) -> TokenPair:
        """Mint an access/refresh pair.

        Both tokens carry the same claims apart from ``exp`` and ``type``
        and are signed with their own secret.
        """
        now = datetime.now(UTC)
        jti = str(uuid7())
        access_expires_at = now + self._access_ttl
        refresh_expires_at = now + self._refresh_ttl

        claims: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "roles": list(roles),
            "jti": jti,
            "iat": int(now.timestamp()),
        }
        if session_id is not None:
            claims["sid"] = str(session_id)

        access_token: str = jwt.encode(
            {
                **claims,
                "type": ACCESS_TOKEN_TYPE,
                "exp": int(access_expires_at.timestamp()),
            },
            self._access_secret,
            algorithm=self._algorithm,
        )
        refresh_token: str = jwt.encode(
            {
                **claims,
                "type": REFRESH_TOKEN_TYPE,
                "exp": int(refresh_expires_at.timestamp()),
            },
            self._refresh_secret,
            algorithm=self._algorithm,
        )

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            jti=jti,
            expires_in=int(self._access_ttl.total_seconds()),
            refresh_expires_at=datetime.fromtimestamp(
                int(refresh_expires_at.timestamp()), UTC
            ),
        )

    async def verify_access(
        self, token: str
    ) -> Result[TokenPayload, InvalidTokenError]:
        """Verify an access token against the access secret."""
        return await self._verify(token, self._access_secret, ACCESS_TOKEN_TYPE)

    async def verify_refresh(
        self, token: str
    ) -> Result[TokenPayload, InvalidTokenError]:
        """Verify a refresh token against the refresh secret."""
        return await self._verify(token, self._refresh_secret, REFRESH_TOKEN_TYPE)

    def decode_unsafe(self, token: str) -> TokenPayload | None:
        """Read claims without checking signature or expiry.

        Never authorize anything on the returned payload.
        """
        try:
            claims = jwt.decode(
                token,
                options={"verify_signature": False},
                algorithms=[self._algorithm],
            )
            return _to_payload(claims)
        except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
            return None

    async def revoke_by_id(self, jti: str, expires_at: datetime | None = None) -> None:
        """Revoke every token carrying ``jti`` (idempotent)."""
        await self._revocation_store.revoke(
            jti, expires_at or datetime.now(UTC) + self._refresh_ttl
        )

    async def _verify(
        self, token: str, secret: str, expected_type: str
    ) -> Result[TokenPayload, InvalidTokenError]:
        try:
            # PyJWT validates signature, exp and iat
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
            if claims["type"] != expected_type:
                raise ValueError("wrong token type")
            payload = _to_payload(claims)
        except jwt.ExpiredSignatureError:
            return Failure(
                error=InvalidTokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Token has expired",
                )
            )
        except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
            return Failure(
                error=InvalidTokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid token",
                )
            )

        if await self._revocation_store.is_revoked(payload.jti):
            return Failure(
                error=InvalidTokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Token has been revoked",
                )
            )

        return Success(value=payload)


def _to_payload(claims: dict[str, Any]) -> TokenPayload:
    """Map decoded claims to TokenPayload.

    Raises:
        KeyError, TypeError, ValueError: If a claim is missing or malformed.
    """
    roles = claims.get("roles", [])
    if not isinstance(roles, list):
        raise TypeError("roles claim must be a list")
    session_id = claims.get("sid")
    return TokenPayload(
        user_id=UUID(str(claims["sub"])),
        email=str(claims.get("email", "")),
        roles=[str(role) for role in roles],
        jti=str(claims["jti"]),
        issued_at=datetime.fromtimestamp(int(claims["iat"]), UTC),
        expires_at=datetime.fromtimestamp(int(claims["exp"]), UTC),
        session_id=UUID(str(session_id)) if session_id else None,
    )
