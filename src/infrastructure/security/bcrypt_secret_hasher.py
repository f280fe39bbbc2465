"""Bcrypt secret hashing service (adapter).

Implements SecretHasherProtocol for refresh token secrets.

Security:
    - Bcrypt with configurable cost factor (default 10)
    - Fresh salt per hash, constant-time compare via bcrypt.checkpw
    - bcrypt only reads 72 bytes of input, and signed JWTs are much longer
      with a shared header prefix. The secret is first reduced to its
      SHA-256 hex digest (64 bytes) so the whole token contributes.
"""

import hashlib

import bcrypt


class BcryptSecretHasher:
    """Bcrypt hasher for refresh token secrets.

    Usage:
        hasher = BcryptSecretHasher(cost_factor=10)
        token_hash = hasher.hash(pair.refresh_token)
        hasher.verify(pair.refresh_token, token_hash)  # True
    """

    def __init__(self, cost_factor: int = 10) -> None:
        """Initialize bcrypt hasher.

        Args:
            cost_factor: Bcrypt cost factor, 4 to 31. Each +1 doubles the
                work; values below 10 are only meant for tests.

        Raises:
            ValueError: If cost_factor is outside 4..31.
        """
        if not 4 <= cost_factor <= 31:
            msg = "Cost factor must be between 4 and 31"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash(self, secret: str) -> str:
        """Hash a raw secret.

        Returns:
            Bcrypt hash string ($2b$<cost>$...), 60 characters.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(_prehash(secret), salt).decode("utf-8")

    def verify(self, secret: str, secret_hash: str) -> bool:
        """Check a raw secret against a stored hash.

        Returns False (never raises) for malformed hashes.
        """
        try:
            return bcrypt.checkpw(_prehash(secret), secret_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False


def _prehash(secret: str) -> bytes:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest().encode("ascii")
