"""
Unit tests for the HS256 binding.
"""

import pytest

from service_tokens.app.signing import HS256Binding, sign_hs256, verify_hs256
from service_tokens.app.tokens.claims import StandardClaims
from service_tokens.app.tokens.segments import b64url_decode
from shared.errors import InvalidSignatureError, MalformedTokenError
from shared.test_helpers import (
    EXAMPLE_HS256_TOKEN,
    EXAMPLE_SECRET,
    RFC7515_CLAIMS,
    RFC7515_HS256_KEY,
    RFC7515_HS256_TOKEN,
)


class TestHS256:
    """Test cases for HS256 signing and verification."""

    def test_verify_rfc7515_token(self):
        """Test the RFC 7515 appendix A.1 token verifies."""
        claims = verify_hs256(RFC7515_HS256_KEY, RFC7515_HS256_TOKEN)
        assert claims == RFC7515_CLAIMS

    def test_sign_rfc7515_claims(self):
        """Test signing the RFC claims gives the known compact token."""
        token = sign_hs256(RFC7515_HS256_KEY, {
            "exp": 1300819380,
            "http://example.com/is_root": True,
            "iss": "joe",
        })

        assert token == (
            "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9"
            ".eyJleHAiOjEzMDA4MTkzODAsImh0dHA6Ly9leGFtcGxlLmNvbS9pc19yb290Ijp0cnVlLCJpc3MiOiJqb2UifQ"
            ".LGyv4nF987S4V9z9qm-803XzhHTFe0o82-JsLGEZCjQ"
        )
        assert verify_hs256(RFC7515_HS256_KEY, token) == RFC7515_CLAIMS

    def test_sign_standard_claims(self):
        """Test the "my secret key" example token, segment by segment."""
        token = sign_hs256(EXAMPLE_SECRET, StandardClaims(subject="jdoe@example.com"))

        header, claims, _ = token.split(".")
        assert b64url_decode(header) == b'{"typ":"JWT","alg":"HS256"}'
        assert b64url_decode(claims) == b'{"sub":"jdoe@example.com"}'
        assert token == EXAMPLE_HS256_TOKEN

    def test_verify_standard_claims(self):
        """Test verifying the example token into StandardClaims."""
        claims = verify_hs256(EXAMPLE_SECRET, EXAMPLE_HS256_TOKEN, StandardClaims)

        assert claims.subject == "jdoe@example.com"
        assert claims == StandardClaims(subject="jdoe@example.com")

    def test_secret_as_text(self):
        """Test a str secret is the same as its UTF-8 bytes."""
        assert sign_hs256("my secret key", {"a": 1}) == sign_hs256(b"my secret key", {"a": 1})

    def test_wrong_secret(self):
        """Test a different secret fails verification."""
        with pytest.raises(InvalidSignatureError):
            verify_hs256(b"not my secret key", EXAMPLE_HS256_TOKEN)

    def test_deterministic(self):
        """Test HMAC signing is deterministic."""
        binding = HS256Binding(EXAMPLE_SECRET)
        assert binding.sign(b"data") == binding.sign(b"data")
        assert len(binding.sign(b"data")) == binding.signature_size == 32

    def test_wrong_length_signature_rejected(self):
        """Test short or long signatures fail without comparing digests."""
        binding = HS256Binding(EXAMPLE_SECRET)
        signature = binding.sign(b"data")

        assert binding.verify(b"data", signature) is True
        assert binding.verify(b"data", signature[:-1]) is False
        assert binding.verify(b"data", signature + b"\x00") is False
        assert binding.verify(b"data", b"") is False

    def test_truncated_token(self):
        """Test dropping the signature segment is malformed."""
        header_and_claims = EXAMPLE_HS256_TOKEN.rsplit(".", 1)[0]

        with pytest.raises(MalformedTokenError):
            verify_hs256(EXAMPLE_SECRET, header_and_claims)

    def test_empty_signature(self):
        """Test an empty signature segment is an invalid signature."""
        header_and_claims = EXAMPLE_HS256_TOKEN.rsplit(".", 1)[0]

        with pytest.raises(InvalidSignatureError):
            verify_hs256(EXAMPLE_SECRET, header_and_claims + ".")
