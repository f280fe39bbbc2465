"""Revocation store protocol (port).

Holds the ``jti`` values of revoked application tokens until those tokens
would have expired anyway.

Implementations:
    - InMemoryRevocationStore: process-wide, single instance deployments
    - RedisRevocationStore: shared across instances and restarts
"""

from datetime import datetime
from typing import Protocol


class RevocationStoreProtocol(Protocol):
    """Key-value set of revoked token ids with per-entry expiry."""

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        """Mark ``jti`` revoked until ``expires_at`` (idempotent)."""
        ...

    async def is_revoked(self, jti: str) -> bool:
        """Check whether ``jti`` is currently revoked."""
        ...
