"""
Registered claims and time-based claim validation.

:class:`StandardClaims` is only a convenience: the token engine accepts any
JSON-serializable claims value. To add claims of your own, subclass it and
pydantic merges the fields into one JSON object::

    class CustomClaims(StandardClaims):
        my_cool_claim: str

    CustomClaims(subject="john@example.com", my_cool_claim="asdf")
    # {"sub":"john@example.com","my_cool_claim":"asdf"}

The validators never read a clock. Pass the current instant explicitly; to
tolerate clock skew, shift ``now`` yourself.
"""

import math
from datetime import datetime, timezone
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from shared.errors import ExpiredTokenError, SerializationError

Instant = Union[datetime, int, float]

# Registered claims dropped from JSON while at their zero value.
_OMIT_WHEN_EMPTY = {
    "issuer": "iss",
    "subject": "sub",
    "audience": "aud",
    "expiration_time": "exp",
    "not_before": "nbf",
    "issued_at": "iat",
    "id": "jti",
}


class StandardClaims(BaseModel):
    """The claims registered by RFC 7519.

    None of these carry special meaning to the token engine. Times are whole
    seconds since the Unix epoch; populate them from ``int(dt.timestamp())``,
    never from a nanosecond or millisecond clock.
    """

    model_config = ConfigDict(populate_by_name=True)

    issuer: str = Field(default="", alias="iss")
    subject: str = Field(default="", alias="sub")
    audience: str = Field(default="", alias="aud")
    expiration_time: int = Field(default=0, alias="exp")
    not_before: int = Field(default=0, alias="nbf")
    issued_at: int = Field(default=0, alias="iat")
    id: str = Field(default="", alias="jti")

    @model_serializer(mode="wrap")
    def _omit_empty_registered_claims(self, handler):
        data = handler(self)
        for name, alias in _OMIT_WHEN_EMPTY.items():
            if not getattr(self, name):
                data.pop(name, None)
                data.pop(alias, None)
        return data

    def verify_expiration_time(self, now: Instant) -> None:
        verify_expiration_time(self, now)

    def verify_not_before(self, now: Instant) -> None:
        verify_not_before(self, now)


def _to_epoch_seconds(now: Instant) -> float:
    if isinstance(now, datetime):
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.timestamp()
    return float(now)


def _claim_seconds(claims: Union[StandardClaims, Mapping[str, Any]], field: str, alias: str) -> int:
    if isinstance(claims, StandardClaims):
        return getattr(claims, field)
    value = claims.get(alias) or 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SerializationError(f'"{alias}" claim must be a number of seconds')
    # Whole seconds only; 1e400 parses to infinity.
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise SerializationError(
            f'"{alias}" claim must be a whole number of seconds',
            details={alias: repr(value)},
        )
    return int(value)


def verify_expiration_time(claims: Union[StandardClaims, Mapping[str, Any]], now: Instant) -> None:
    """Raise ExpiredTokenError if ``now`` is strictly after ``exp``.

    A token is still valid at exactly ``exp``. A missing ``exp`` is read as
    the Unix epoch, so such a token is always expired.
    """
    expiration_time = _claim_seconds(claims, "expiration_time", "exp")
    if _to_epoch_seconds(now) > expiration_time:
        raise ExpiredTokenError(
            "Token is expired",
            details={"exp": expiration_time},
        )


def verify_not_before(claims: Union[StandardClaims, Mapping[str, Any]], now: Instant) -> None:
    """Raise ExpiredTokenError if ``now`` is strictly before ``nbf``.

    A token is already valid at exactly ``nbf``.
    """
    not_before = _claim_seconds(claims, "not_before", "nbf")
    if _to_epoch_seconds(now) < not_before:
        raise ExpiredTokenError(
            "Token is not yet valid",
            details={"nbf": not_before},
        )
