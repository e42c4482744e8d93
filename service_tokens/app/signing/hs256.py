"""
HS256 (HMAC with SHA-256) binding.

HS256 authenticates, it does not encrypt: anyone can read the claims of an
HS256 token. Whoever holds the secret can mint tokens indistinguishable from
yours, so use a long random secret and share it only with verifiers.
"""

import hashlib
import hmac
from typing import Any, Optional, Type, Union

from ..tokens import engine
from .base import SigningBinding


class HS256Binding(SigningBinding):
    """HMAC-SHA256 over a shared secret."""

    algorithm = "HS256"

    def __init__(self, secret: Union[bytes, str]):
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        self._secret = secret

    @property
    def signature_size(self) -> int:
        return hashlib.sha256().digest_size

    def sign(self, message: bytes) -> bytes:
        return hmac.new(self._secret, message, hashlib.sha256).digest()

    def verify(self, message: bytes, signature: bytes) -> bool:
        if len(signature) != self.signature_size:
            return False
        return hmac.compare_digest(self.sign(message), signature)


def sign_hs256(secret: Union[bytes, str], claims: Any) -> str:
    """Return an HS256-signed token carrying ``claims``.

    Fails only if ``claims`` cannot be serialized to JSON.
    """
    return engine.encode(HS256Binding(secret), claims)


def verify_hs256(
    secret: Union[bytes, str],
    token: Union[str, bytes],
    claims_type: Optional[Type[Any]] = None,
) -> Any:
    """Verify an HS256 token and return its claims.

    Raises InvalidSignatureError if the token was signed with another secret,
    with another algorithm, or was altered.
    """
    return engine.decode_and_verify(HS256Binding(secret), token, claims_type)
