"""
Token validation package.

Provides the request-facing TokenValidator used to check tokens presented by
clients. Typical responsibilities include:

- Stripping the ``Bearer`` prefix from Authorization header values.
- Verifying the signature with the configured algorithm binding.
- Checking expiry and not-before against an injectable clock.
- Issuing short-lived tokens with ``iat``/``nbf``/``exp`` stamped on.

The codec underneath never logs; this package is where verification
outcomes are logged.
"""

from .token_validator import (
    TokenIssueResponse,
    TokenValidator,
    TokenVerificationRequest,
    TokenVerificationResponse,
)

__all__ = [
    "TokenIssueResponse",
    "TokenValidator",
    "TokenVerificationRequest",
    "TokenVerificationResponse",
]
