"""
Unit tests for the ES256 binding and signature format.
"""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from service_tokens.app.signing import ES256Binding, ES256Signature, sign_es256, verify_es256
from service_tokens.app.tokens.claims import StandardClaims
from shared.errors import InvalidSignatureError, SigningError
from shared.test_helpers import (
    EXAMPLE_EC_PRIVATE_PEM,
    EXAMPLE_EC_PUBLIC_PEM,
    EXAMPLE_ES256_TOKEN,
    RFC7515_CLAIMS,
    RFC7515_EC,
    RFC7515_ES256_TOKEN,
    b64url_to_int,
    load_private_key,
    load_public_key,
    rfc7515_ec_private_key,
    rfc7515_ec_public_key,
)


class TestES256:
    """Test cases for ES256 signing and verification."""

    def test_verify_rfc7515_token(self):
        """Test the RFC 7515 appendix A.3 token verifies."""
        claims = verify_es256(rfc7515_ec_public_key(), RFC7515_ES256_TOKEN)
        assert claims == RFC7515_CLAIMS

    def test_verify_example_token(self):
        """Test the example token verifies under its PEM public key."""
        public_key = load_public_key(EXAMPLE_EC_PUBLIC_PEM)

        claims = verify_es256(public_key, EXAMPLE_ES256_TOKEN, StandardClaims)

        assert claims.subject == "jdoe@example.com"

    def test_derived_key_matches_published_point(self):
        """Test the RFC private scalar derives the published public point."""
        numbers = rfc7515_ec_private_key().public_key().public_numbers()
        assert numbers.x == b64url_to_int(RFC7515_EC["x"])
        assert numbers.y == b64url_to_int(RFC7515_EC["y"])

    def test_round_trip_randomized(self):
        """Test two signatures over the same claims differ and both verify."""
        private_key = load_private_key(EXAMPLE_EC_PRIVATE_PEM)
        public_key = load_public_key(EXAMPLE_EC_PUBLIC_PEM)
        claims = StandardClaims(subject="jdoe@example.com")

        first = sign_es256(private_key, claims)
        second = sign_es256(private_key, claims)

        assert first != second
        assert first.rsplit(".", 1)[0] == second.rsplit(".", 1)[0]
        assert verify_es256(public_key, first, StandardClaims) == claims
        assert verify_es256(public_key, second, StandardClaims) == claims

    def test_signature_is_fixed_width(self):
        """Test signatures are always 64 bytes."""
        binding = ES256Binding(rfc7515_ec_private_key())
        for _ in range(10):
            assert len(binding.sign(b"data")) == 64

    def test_wrong_length_signature_rejected(self):
        """Test a DER or truncated signature is rejected."""
        private_key = rfc7515_ec_private_key()
        binding = ES256Binding(private_key)
        signature = binding.sign(b"data")

        assert binding.verify(b"data", signature) is True
        assert binding.verify(b"data", signature[:-1]) is False
        assert binding.verify(b"data", ES256Signature.from_bytes(signature).to_der()) is False

    def test_wrong_key(self):
        """Test a token fails under an unrelated P-256 key."""
        with pytest.raises(InvalidSignatureError):
            verify_es256(rfc7515_ec_public_key(), EXAMPLE_ES256_TOKEN)

    def test_public_key_cannot_sign(self):
        """Test signing with only a public key is a SigningError."""
        with pytest.raises(SigningError):
            sign_es256(rfc7515_ec_public_key(), {"sub": "x"})

    def test_rejects_other_curves(self):
        """Test keys on curves other than P-256 are rejected."""
        with pytest.raises(ValueError):
            ES256Binding(ec.generate_private_key(ec.SECP384R1()))

    def test_rejects_non_ec_key(self):
        """Test constructing with a secret is a programming error."""
        with pytest.raises(TypeError):
            ES256Binding(b"my secret key")


class TestES256Signature:
    """Test cases for the fixed-width signature value."""

    def test_bytes_round_trip(self):
        """Test r and s occupy 32 big-endian bytes each."""
        data = bytes(range(64))
        signature = ES256Signature.from_bytes(data)

        assert signature.r == int.from_bytes(data[:32], "big")
        assert signature.s == int.from_bytes(data[32:], "big")
        assert signature.to_bytes() == data

    def test_small_values_are_zero_padded(self):
        """Test short scalars are left-padded to full width."""
        signature = ES256Signature(r=1, s=2)
        assert signature.to_bytes() == b"\x00" * 31 + b"\x01" + b"\x00" * 31 + b"\x02"

    def test_der_round_trip(self):
        """Test conversion to and from DER keeps r and s."""
        signature = ES256Signature(r=12345, s=67890)
        assert ES256Signature.from_der(signature.to_der()) == signature

    @pytest.mark.parametrize("size", [0, 63, 65, 72])
    def test_wrong_length(self, size):
        """Test anything but 64 bytes is rejected."""
        with pytest.raises(ValueError):
            ES256Signature.from_bytes(b"\x01" * size)

    def test_scalar_too_large(self):
        """Test scalars wider than 32 bytes are rejected."""
        with pytest.raises(ValueError):
            ES256Signature(r=1 << 256, s=1)
