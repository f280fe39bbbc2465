"""Revocation store adapters.

All dependencies are managed through src.core.container
(``get_revocation_store()`` picks the adapter from settings).

Architecture:
- InMemoryRevocationStore: process-wide dict (single instance, tests)
- RedisRevocationStore: shared Redis keys with TTL (multi-instance)
"""

from src.infrastructure.cache.memory_revocation_store import InMemoryRevocationStore
from src.infrastructure.cache.redis_revocation_store import RedisRevocationStore

__all__ = [
    "InMemoryRevocationStore",
    "RedisRevocationStore",
]
