"""Secret hashing protocol (port).

Slow, salted one-way hashing of refresh token secrets. Matching must use the
hash algorithm's own compare, never string equality.
"""

from typing import Protocol


class SecretHasherProtocol(Protocol):
    """Protocol for hashing and verifying refresh token secrets."""

    def hash(self, secret: str) -> str:
        """Hash a raw secret (new salt per call)."""
        ...

    def verify(self, secret: str, secret_hash: str) -> bool:
        """Check a raw secret against a stored hash."""
        ...
