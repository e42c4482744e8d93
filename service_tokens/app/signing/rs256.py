"""
RS256 (RSASSA-PKCS1-v1_5 with SHA-256) binding.
"""

from typing import Any, Optional, Type, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from shared.errors import SigningError
from ..tokens import engine
from .base import SigningBinding

RSAKey = Union[rsa.RSAPrivateKey, rsa.RSAPublicKey]


class RS256Binding(SigningBinding):
    """RSA PKCS#1 v1.5 signatures over SHA-256.

    Accepts a private key (sign and verify) or a public key (verify only).
    """

    algorithm = "RS256"

    def __init__(self, key: RSAKey):
        if isinstance(key, rsa.RSAPrivateKey):
            self._private_key: Optional[rsa.RSAPrivateKey] = key
            self._public_key = key.public_key()
        elif isinstance(key, rsa.RSAPublicKey):
            self._private_key = None
            self._public_key = key
        else:
            raise TypeError(f"RS256 requires an RSA key, got {type(key).__name__}")

    @property
    def signature_size(self) -> int:
        return (self._public_key.key_size + 7) // 8

    def sign(self, message: bytes) -> bytes:
        if self._private_key is None:
            raise SigningError("RS256 signing requires an RSA private key")
        return self._private_key.sign(message, padding.PKCS1v15(), hashes.SHA256())

    def verify(self, message: bytes, signature: bytes) -> bool:
        if len(signature) != self.signature_size:
            return False
        try:
            self._public_key.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature:
            return False
        return True


def sign_rs256(private_key: rsa.RSAPrivateKey, claims: Any) -> str:
    """Return an RS256-signed token carrying ``claims``."""
    return engine.encode(RS256Binding(private_key), claims)


def verify_rs256(
    public_key: RSAKey,
    token: Union[str, bytes],
    claims_type: Optional[Type[Any]] = None,
) -> Any:
    """Verify an RS256 token and return its claims."""
    return engine.decode_and_verify(RS256Binding(public_key), token, claims_type)
