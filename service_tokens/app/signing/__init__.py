"""
Algorithm bindings.

One binding per supported algorithm. Pick the algorithm by picking the
binding (or the matching ``sign_*`` / ``verify_*`` function); the token
header is only ever compared against the binding's fixed name.
"""

from .base import SigningBinding
from .es256 import ES256Binding, ES256Signature, sign_es256, verify_es256
from .hs256 import HS256Binding, sign_hs256, verify_hs256
from .rs256 import RS256Binding, sign_rs256, verify_rs256

__all__ = [
    "SigningBinding",
    "HS256Binding",
    "RS256Binding",
    "ES256Binding",
    "ES256Signature",
    "sign_hs256",
    "verify_hs256",
    "sign_rs256",
    "verify_rs256",
    "sign_es256",
    "verify_es256",
]
