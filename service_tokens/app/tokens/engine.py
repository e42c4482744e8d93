"""
Token engine: encode and decode-and-verify pipelines.

Both pipelines are one-shot and stateless. Decoding always runs
``parse -> check algorithm -> verify signature -> deserialize claims`` and
claims are never decoded before the signature has been verified.
"""

from typing import Any, Optional, Type, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, from_json, to_json

from shared.errors import (
    AlgorithmMismatchError,
    InvalidSignatureError,
    SerializationError,
    SigningError,
    TokenError,
)
from ..signing.base import SigningBinding
from .header import Header
from .segments import b64url_decode, b64url_encode, join_segments, split_token


def serialize_claims(claims: Any) -> bytes:
    """Serialize claims to compact JSON using their pydantic field aliases.

    NaN and infinity have no JSON representation and are rejected.
    """
    try:
        data = to_json(claims, by_alias=True)
        from_json(data, allow_inf_nan=False)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise SerializationError(
            "Claims are not JSON-serializable",
            details={"claims_type": type(claims).__name__},
        ) from exc
    return data


def deserialize_claims(data: bytes, claims_type: Optional[Type[Any]] = None) -> Any:
    """Parse claims JSON, into ``claims_type`` when one is given.

    Only RFC 8259 JSON is accepted: ``NaN`` and ``Infinity`` literals fail.
    """
    try:
        claims = from_json(data, allow_inf_nan=False)
        if claims_type is None:
            return claims
        return TypeAdapter(claims_type).validate_json(data)
    except (ValidationError, ValueError) as exc:
        raise SerializationError(
            "Token claims could not be deserialized",
            details={"claims_type": getattr(claims_type, "__name__", "json")},
        ) from exc


def encode(binding: SigningBinding, claims: Any) -> str:
    """Sign ``claims`` with ``binding`` and return the token."""
    header = Header.for_algorithm(binding.algorithm)
    signing_input = join_segments(
        b64url_encode(header.to_json()),
        b64url_encode(serialize_claims(claims)),
    )

    try:
        signature = binding.sign(signing_input.encode("ascii"))
    except TokenError:
        raise
    except Exception as exc:
        raise SigningError(
            f"{binding.algorithm} signing failed: {exc}",
            details={"algorithm": binding.algorithm},
        ) from exc

    return join_segments(signing_input, b64url_encode(signature))


def decode_and_verify(
    binding: SigningBinding,
    token: Union[str, bytes],
    claims_type: Optional[Type[Any]] = None,
    *,
    distinguish_algorithm_mismatch: bool = False,
) -> Any:
    """Verify ``token`` with ``binding`` and return its claims.

    A header naming any algorithm other than ``binding.algorithm`` fails
    exactly like a bad signature. ``distinguish_algorithm_mismatch`` raises
    AlgorithmMismatchError (still an InvalidSignatureError) instead; it is
    meant for debugging only.
    """
    segments = split_token(token)

    header = Header.from_json(b64url_decode(segments.header))
    if header.algorithm != binding.algorithm:
        if distinguish_algorithm_mismatch:
            raise AlgorithmMismatchError(
                details={"expected": binding.algorithm, "actual": header.algorithm},
            )
        raise InvalidSignatureError()

    signature = b64url_decode(segments.signature)
    if not binding.verify(segments.signing_input, signature):
        raise InvalidSignatureError()

    return deserialize_claims(b64url_decode(segments.claims), claims_type)
