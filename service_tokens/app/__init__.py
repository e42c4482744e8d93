"""
Token service package.

Issues and verifies compact signed JSON Web Tokens. Only HS256, RS256 and
ES256 are supported, the ``none`` algorithm is not, and a token's header can
never choose the verification algorithm: you pick the algorithm by calling
the matching function.

- app.tokens: Segment codec, header model, token engine, claims validators.
- app.signing: HS256 / RS256 / ES256 bindings and the sign_*/verify_* helpers.
- app.validation: Request-facing TokenValidator with logging and clock.

Design notes:
- The codec, engine and bindings are pure and never log; logging and clock
  reads live in app.validation only.
- Key material arrives already parsed; PEM/DER loading is the caller's job.
"""

from shared.errors import (
    AlgorithmMismatchError,
    ExpiredTokenError,
    InvalidSignatureError,
    JWTError,
    MalformedHeaderError,
    MalformedTokenError,
    SerializationError,
    SigningError,
    TokenError,
)
from .signing import (
    ES256Binding,
    ES256Signature,
    HS256Binding,
    RS256Binding,
    SigningBinding,
    sign_es256,
    sign_hs256,
    sign_rs256,
    verify_es256,
    verify_hs256,
    verify_rs256,
)
from .tokens.claims import StandardClaims, verify_expiration_time, verify_not_before
from .tokens.engine import decode_and_verify, encode
from .tokens.header import Header

__all__ = [
    "AlgorithmMismatchError",
    "ExpiredTokenError",
    "InvalidSignatureError",
    "JWTError",
    "MalformedHeaderError",
    "MalformedTokenError",
    "SerializationError",
    "SigningError",
    "TokenError",
    "ES256Binding",
    "ES256Signature",
    "HS256Binding",
    "RS256Binding",
    "SigningBinding",
    "sign_es256",
    "sign_hs256",
    "sign_rs256",
    "verify_es256",
    "verify_hs256",
    "verify_rs256",
    "StandardClaims",
    "verify_expiration_time",
    "verify_not_before",
    "decode_and_verify",
    "encode",
    "Header",
]
