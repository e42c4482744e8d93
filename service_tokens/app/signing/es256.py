"""
ES256 (ECDSA on P-256 with SHA-256) binding.

ECDSA signatures are randomized: signing the same claims twice gives two
different, equally valid tokens.
"""

from dataclasses import dataclass
from typing import Any, Optional, Type, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from shared.errors import SigningError
from ..tokens import engine
from .base import SigningBinding

ECKey = Union[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey]

# P-256 coordinates and scalars are 32 bytes wide.
COORDINATE_SIZE = 32


@dataclass(frozen=True)
class ES256Signature:
    """Fixed-width ES256 signature: r and s, each 32 bytes big-endian."""

    r: int
    s: int

    SIZE = 2 * COORDINATE_SIZE

    def __post_init__(self):
        limit = 1 << (8 * COORDINATE_SIZE)
        if not (0 <= self.r < limit and 0 <= self.s < limit):
            raise ValueError("ES256 signature scalars must fit in 32 bytes")

    @classmethod
    def from_bytes(cls, data: bytes) -> "ES256Signature":
        if len(data) != cls.SIZE:
            raise ValueError(f"ES256 signature must be {cls.SIZE} bytes, got {len(data)}")
        return cls(
            r=int.from_bytes(data[:COORDINATE_SIZE], "big"),
            s=int.from_bytes(data[COORDINATE_SIZE:], "big"),
        )

    @classmethod
    def from_der(cls, der: bytes) -> "ES256Signature":
        r, s = decode_dss_signature(der)
        return cls(r=r, s=s)

    def to_bytes(self) -> bytes:
        return self.r.to_bytes(COORDINATE_SIZE, "big") + self.s.to_bytes(COORDINATE_SIZE, "big")

    def to_der(self) -> bytes:
        return encode_dss_signature(self.r, self.s)


class ES256Binding(SigningBinding):
    """ECDSA P-256 signatures over SHA-256.

    Accepts a private key (sign and verify) or a public key (verify only).
    Keys on any curve other than P-256 are rejected.
    """

    algorithm = "ES256"

    def __init__(self, key: ECKey):
        if isinstance(key, ec.EllipticCurvePrivateKey):
            self._private_key: Optional[ec.EllipticCurvePrivateKey] = key
            self._public_key = key.public_key()
        elif isinstance(key, ec.EllipticCurvePublicKey):
            self._private_key = None
            self._public_key = key
        else:
            raise TypeError(f"ES256 requires an EC key, got {type(key).__name__}")

        if not isinstance(self._public_key.curve, ec.SECP256R1):
            raise ValueError(f"ES256 requires a P-256 key, got {self._public_key.curve.name}")

    @property
    def signature_size(self) -> int:
        return ES256Signature.SIZE

    def sign(self, message: bytes) -> bytes:
        if self._private_key is None:
            raise SigningError("ES256 signing requires an EC private key")
        der = self._private_key.sign(message, ec.ECDSA(hashes.SHA256()))
        return ES256Signature.from_der(der).to_bytes()

    def verify(self, message: bytes, signature: bytes) -> bool:
        if len(signature) != self.signature_size:
            return False
        der = ES256Signature.from_bytes(signature).to_der()
        try:
            self._public_key.verify(der, message, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True


def sign_es256(private_key: ec.EllipticCurvePrivateKey, claims: Any) -> str:
    """Return an ES256-signed token carrying ``claims``."""
    return engine.encode(ES256Binding(private_key), claims)


def verify_es256(
    public_key: ECKey,
    token: Union[str, bytes],
    claims_type: Optional[Type[Any]] = None,
) -> Any:
    """Verify an ES256 token and return its claims."""
    return engine.decode_and_verify(ES256Binding(public_key), token, claims_type)
