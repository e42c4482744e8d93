"""
Token validation service.

Wraps the token engine for request handling: strips the bearer prefix,
verifies the signature, checks the time-based claims against a clock and
logs the outcome. This is the only layer that reads a clock or logs.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional
from pydantic import BaseModel

from shared.config import BaseConfig
from shared.errors import AuthenticationError, TokenError
from shared.logging import get_logger, set_subject_context
from ..signing import HS256Binding, SigningBinding
from ..tokens import engine
from ..tokens.claims import verify_expiration_time, verify_not_before

BEARER_PREFIX = "Bearer "

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenVerificationRequest(BaseModel):
    """Request model for token verification."""
    token: str


class TokenVerificationResponse(BaseModel):
    """Response model for token verification."""
    valid: bool
    claims: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    code: Optional[str] = None


class TokenIssueResponse(BaseModel):
    """Response model for token issuance."""
    access_token: str
    expires_in: int
    algorithm: str
    token_type: str = "Bearer"


class TokenValidator:
    """Token validation service bound to one signing algorithm."""

    def __init__(
        self,
        binding: SigningBinding,
        *,
        clock: Optional[Clock] = None,
        settings: Optional[BaseConfig] = None,
    ):
        self.binding = binding
        self.clock = clock or utc_now
        self.settings = settings or BaseConfig()
        self.logger = get_logger("tokens.validator")

    @classmethod
    def from_settings(cls, settings: BaseConfig, *, clock: Optional[Clock] = None) -> "TokenValidator":
        """Build an HS256 validator from the configured shared secret."""
        if settings.hs256_secret is None:
            raise ValueError("JWT_HS256_SECRET is not configured")

        binding = HS256Binding(settings.hs256_secret.get_secret_value())
        return cls(binding, clock=clock, settings=settings)

    def _strip_prefix(self, token: str) -> str:
        if self.settings.strip_bearer_prefix and token.startswith(BEARER_PREFIX):
            return token[len(BEARER_PREFIX):]
        return token

    def verify_token(self, token: str) -> TokenVerificationResponse:
        """Verify a token's signature and time-based claims."""
        token = self._strip_prefix(token)

        try:
            claims = engine.decode_and_verify(
                self.binding,
                token,
                Dict[str, Any],
                distinguish_algorithm_mismatch=self.settings.debug_algorithm_errors,
            )

            now = self.clock()
            if self.settings.verify_expiration and "exp" in claims:
                verify_expiration_time(claims, now)
            if self.settings.verify_not_before:
                verify_not_before(claims, now)

        except TokenError as e:
            self.logger.warning(
                "Token verification failed",
                algorithm=self.binding.algorithm,
                code=e.code,
                error=e.message,
            )
            return TokenVerificationResponse(
                valid=False,
                error=e.message,
                code=e.code,
            )

        set_subject_context(claims.get("sub"))
        self.logger.info(
            "Token verified successfully",
            algorithm=self.binding.algorithm,
            sub=claims.get("sub"),
        )

        return TokenVerificationResponse(
            valid=True,
            claims=claims
        )

    def extract_claims(self, token: str) -> Dict[str, Any]:
        """Extract claims from a valid token."""
        response = self.verify_token(token)

        if not response.valid:
            raise AuthenticationError(
                f"Invalid token: {response.error}",
                details={"token_error": response.code}
            )

        return response.claims

    def get_subject_info(self, token: str) -> Dict[str, Any]:
        """Get the registered claims of a valid token."""
        claims = self.extract_claims(token)

        return {
            "subject": claims.get("sub"),
            "issuer": claims.get("iss"),
            "audience": claims.get("aud"),
            "expires_at": claims.get("exp"),
            "issued_at": claims.get("iat"),
            "token_id": claims.get("jti"),
        }

    def issue_token(self, claims: Dict[str, Any], *, ttl_seconds: Optional[int] = None) -> TokenIssueResponse:
        """Stamp iat/nbf/exp from the clock onto ``claims`` and sign them."""
        expires_in = ttl_seconds if ttl_seconds is not None else self.settings.default_ttl_seconds
        issued_at = int(self.clock().timestamp())

        payload = dict(claims)
        payload["iat"] = issued_at
        payload.setdefault("nbf", issued_at)
        payload["exp"] = issued_at + expires_in

        access_token = engine.encode(self.binding, payload)

        self.logger.info(
            "Token issued",
            algorithm=self.binding.algorithm,
            sub=payload.get("sub"),
            expires_in=expires_in,
        )

        return TokenIssueResponse(
            access_token=access_token,
            expires_in=expires_in,
            algorithm=self.binding.algorithm,
        )
