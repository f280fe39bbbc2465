"""In-memory revocation store.

Process-wide set of revoked token ids. Entries live until the revoked token
would have expired; expired entries are purged lazily on access.

Only correct for a single process: a restart forgets every revocation and
other instances never see them. Use RedisRevocationStore when the service
runs on more than one instance.
"""

from datetime import UTC, datetime


class InMemoryRevocationStore:
    """Dict-backed implementation of RevocationStoreProtocol."""

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        """Mark ``jti`` revoked until ``expires_at``.

        Revoking twice keeps the later expiry.
        """
        current = self._revoked.get(jti)
        if current is None or expires_at > current:
            self._revoked[jti] = expires_at

    async def is_revoked(self, jti: str) -> bool:
        self._purge_expired()
        return jti in self._revoked

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._revoked)

    def _purge_expired(self) -> None:
        now = datetime.now(UTC)
        expired = [jti for jti, until in self._revoked.items() if until <= now]
        for jti in expired:
            del self._revoked[jti]
