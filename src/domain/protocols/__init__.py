"""Domain protocols (ports).

Infrastructure adapters implement these protocols structurally (no
inheritance). Application handlers depend only on them.

Usage:
    from src.domain.protocols import TokenIssuerProtocol, RefreshTokenRepository
"""

from src.domain.protocols.identity_provider_protocol import IdentityProviderProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.refresh_token_repository import RefreshTokenRepository
from src.domain.protocols.revocation_store_protocol import RevocationStoreProtocol
from src.domain.protocols.secret_hasher_protocol import SecretHasherProtocol
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.token_issuer_protocol import TokenIssuerProtocol
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    "IdentityProviderProtocol",
    "LoggerProtocol",
    "RefreshTokenRepository",
    "RevocationStoreProtocol",
    "SecretHasherProtocol",
    "SessionRepository",
    "TokenIssuerProtocol",
    "UserRepository",
]
