"""PKCE (Proof Key for Code Exchange) helpers, RFC 7636.

Generates the verifier/challenge/state triple that binds an authorization
code to the client that started the login.

Usage:
    pkce = generate_pkce_pair()
    url = identity_provider.build_authorization_url(
        state=pkce.state, code_challenge=pkce.code_challenge
    )
    # store pkce.code_verifier and pkce.state client-side, then on callback:
    await handler.handle(AuthenticateUser(code=code, code_verifier=verifier, ...))
"""

import base64
import hashlib
import hmac
import secrets
from dataclasses import dataclass, field

CODE_CHALLENGE_METHOD = "S256"
MIN_VERIFIER_LENGTH = 43
MAX_VERIFIER_LENGTH = 128
DEFAULT_VERIFIER_LENGTH = 64


@dataclass(frozen=True, slots=True, kw_only=True)
class PKCEPair:
    """Verifier, challenge and anti-CSRF state for one login attempt."""

    code_verifier: str = field(repr=False)
    code_challenge: str
    state: str
    code_challenge_method: str = CODE_CHALLENGE_METHOD


def generate_code_verifier(length: int = DEFAULT_VERIFIER_LENGTH) -> str:
    """Generate a random URL-safe code verifier.

    Args:
        length: Verifier length, 43 to 128 characters.

    Raises:
        ValueError: If length is outside 43..128.
    """
    if not MIN_VERIFIER_LENGTH <= length <= MAX_VERIFIER_LENGTH:
        raise ValueError(
            f"code verifier length must be between {MIN_VERIFIER_LENGTH} "
            f"and {MAX_VERIFIER_LENGTH}"
        )
    # token_urlsafe yields ~1.3 chars per byte, trim to the exact length
    return secrets.token_urlsafe(length)[:length]


def derive_code_challenge(verifier: str) -> str:
    """S256 challenge: base64url(sha256(verifier)) without padding."""
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def verify_code_challenge(verifier: str, challenge: str) -> bool:
    """Check a verifier against a previously derived S256 challenge."""
    return hmac.compare_digest(derive_code_challenge(verifier), challenge)


def generate_state() -> str:
    """Generate a random anti-CSRF state value."""
    return secrets.token_urlsafe(32)


def generate_pkce_pair() -> PKCEPair:
    """Generate a complete PKCE triple for a new login attempt."""
    verifier = generate_code_verifier()
    return PKCEPair(
        code_verifier=verifier,
        code_challenge=derive_code_challenge(verifier),
        state=generate_state(),
    )
