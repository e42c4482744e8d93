"""
Shared error handling for the token service.

Every failure raised by the token codec, the signing bindings and the claims
validator derives from :class:`TokenError`. Callers should treat malformed
tokens, bad signatures and serialization failures alike as "reject the
request"; the distinct classes exist for tests and diagnostics.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class TokenError(Exception):
    """Base exception for token errors."""

    default_code = "TOKEN_ERROR"
    default_message = "Token error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None,
    ):
        self.code = code or self.default_code
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details,
        )


JWTError = TokenError


class MalformedTokenError(TokenError):
    """The token is not three well-formed base64url segments."""

    default_code = "MALFORMED_TOKEN"
    default_message = "Malformed token"


class InvalidSignatureError(TokenError):
    """Umbrella for wrong algorithm, wrong signature length and bad signature."""

    default_code = "INVALID_SIGNATURE"
    default_message = "Invalid signature"


class AlgorithmMismatchError(InvalidSignatureError):
    """Header algorithm differs from the binding's.

    Only raised when a caller opts into distinguishing this case; the default
    path raises a plain :class:`InvalidSignatureError`.
    """

    default_message = "Invalid signature: algorithm mismatch"


class SerializationError(TokenError):
    """JSON encoding or decoding of a header or claims failed."""

    default_code = "SERIALIZATION_ERROR"
    default_message = "Serialization failed"


class MalformedHeaderError(MalformedTokenError, SerializationError):
    """The header segment does not decode to a JSON header object."""

    default_code = "MALFORMED_HEADER"
    default_message = "Malformed token header"


class SigningError(TokenError):
    """The signing primitive could not produce a signature."""

    default_code = "SIGNING_FAILURE"
    default_message = "Signing failed"


class ExpiredTokenError(TokenError):
    """Time-based claim validation failed (expired or not yet valid)."""

    default_code = "EXPIRED_TOKEN"
    default_message = "Expired token"


class AuthenticationError(TokenError):
    """Authentication-related errors."""

    default_code = "AUTHENTICATION_ERROR"
    default_message = "Authentication failed"
