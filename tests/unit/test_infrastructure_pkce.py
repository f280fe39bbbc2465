"""Unit tests for PKCE helpers (RFC 7636)."""

import re

import pytest

from src.infrastructure.security.pkce import (
    CODE_CHALLENGE_METHOD,
    derive_code_challenge,
    generate_code_verifier,
    generate_pkce_pair,
    generate_state,
    verify_code_challenge,
)

UNRESERVED = re.compile(r"^[A-Za-z0-9\-._~]+$")


@pytest.mark.unit
class TestCodeVerifier:
    """Test verifier generation."""

    def test_default_length(self):
        verifier = generate_code_verifier()

        assert len(verifier) == 64
        assert UNRESERVED.match(verifier)

    @pytest.mark.parametrize("length", [43, 128])
    def test_boundary_lengths(self, length):
        assert len(generate_code_verifier(length)) == length

    @pytest.mark.parametrize("length", [42, 129])
    def test_out_of_range_lengths_rejected(self, length):
        with pytest.raises(ValueError, match="between 43 and 128"):
            generate_code_verifier(length)

    def test_verifiers_are_random(self):
        assert generate_code_verifier() != generate_code_verifier()


@pytest.mark.unit
class TestCodeChallenge:
    """Test S256 challenge derivation."""

    def test_rfc7636_appendix_b_vector(self):
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        assert (
            derive_code_challenge(verifier)
            == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"
        )

    def test_challenge_has_no_padding(self):
        challenge = derive_code_challenge(generate_code_verifier())

        assert "=" not in challenge
        assert len(challenge) == 43

    def test_verify_matching_pair(self):
        verifier = generate_code_verifier()

        assert verify_code_challenge(verifier, derive_code_challenge(verifier))

    def test_verify_rejects_other_verifier(self):
        challenge = derive_code_challenge(generate_code_verifier())

        assert verify_code_challenge(generate_code_verifier(), challenge) is False


@pytest.mark.unit
class TestPKCEPair:
    """Test the full triple."""

    def test_pair_is_consistent(self):
        pair = generate_pkce_pair()

        assert pair.code_challenge == derive_code_challenge(pair.code_verifier)
        assert pair.code_challenge_method == CODE_CHALLENGE_METHOD
        assert pair.state

    def test_verifier_hidden_from_repr(self):
        pair = generate_pkce_pair()

        assert pair.code_verifier not in repr(pair)

    def test_state_values_are_random(self):
        assert generate_state() != generate_state()
