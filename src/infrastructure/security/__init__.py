"""Security infrastructure adapters.

This package contains:
- JWT access/refresh token issuing and verification
- Bcrypt hashing of refresh token secrets
- PKCE helpers for the authorization-code flow
"""

from src.infrastructure.security.bcrypt_secret_hasher import BcryptSecretHasher
from src.infrastructure.security.jwt_token_issuer import JWTTokenIssuer
from src.infrastructure.security.pkce import (
    PKCEPair,
    derive_code_challenge,
    generate_code_verifier,
    generate_pkce_pair,
    generate_state,
    verify_code_challenge,
)

__all__ = [
    "BcryptSecretHasher",
    "JWTTokenIssuer",
    "PKCEPair",
    "derive_code_challenge",
    "generate_code_verifier",
    "generate_pkce_pair",
    "generate_state",
    "verify_code_challenge",
]
