"""Redis revocation store.

Shared revocation set for multi-instance deployments. Each revoked ``jti``
is a key written with SETEX, so Redis drops it when the revoked token would
have expired anyway.

Redis errors propagate: a revocation check that cannot be answered must not
be treated as "not revoked".

Key format:
    revoked_jti:{jti}
"""

import math
from datetime import UTC, datetime

from redis.asyncio import Redis

KEY_PREFIX = "revoked_jti"


class RedisRevocationStore:
    """Redis implementation of RevocationStoreProtocol.

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(self, redis_client: Redis) -> None:
        """Initialize store.

        Args:
            redis_client: Async Redis client instance.
        """
        self._redis = redis_client

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        """Mark ``jti`` revoked for the token's remaining validity.

        A token that has already expired needs no entry.
        """
        ttl = math.ceil((expires_at - datetime.now(UTC)).total_seconds())
        if ttl <= 0:
            return
        await self._redis.setex(_key(jti), ttl, "1")

    async def is_revoked(self, jti: str) -> bool:
        return bool(await self._redis.exists(_key(jti)))


def _key(jti: str) -> str:
    return f"{KEY_PREFIX}:{jti}"
