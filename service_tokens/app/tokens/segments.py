"""
Segment codec for the three-part token wire format.

Knows nothing about cryptography: it only splits a token into its
``header.claims.signature`` segments and converts between raw bytes and
unpadded base64url text.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Union

from shared.errors import MalformedTokenError

SEPARATOR = b"."

_B64URL_SEGMENT = re.compile(rb"[A-Za-z0-9_-]*")


@dataclass(frozen=True)
class TokenSegments:
    """The three still-encoded segments of a token."""

    header: bytes
    claims: bytes
    signature: bytes

    @property
    def signing_input(self) -> bytes:
        """Exactly the bytes covered by the signature: header "." claims."""
        return self.header + SEPARATOR + self.claims


def b64url_encode(data: bytes) -> str:
    """Base64url-encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: Union[str, bytes]) -> bytes:
    """Strictly decode an unpadded base64url segment.

    Rejects padding, whitespace, characters outside the URL-safe alphabet and
    non-canonical encodings (non-zero trailing bits), so distinct segments
    never decode to the same bytes.
    """
    if isinstance(segment, str):
        try:
            segment = segment.encode("ascii")
        except UnicodeEncodeError as exc:
            raise MalformedTokenError("Segment is not valid base64url") from exc

    if not _B64URL_SEGMENT.fullmatch(segment):
        raise MalformedTokenError("Segment is not valid base64url")

    padded = segment + b"=" * (-len(segment) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("Segment is not valid base64url") from exc

    if b64url_encode(decoded).encode("ascii") != segment:
        raise MalformedTokenError("Segment is not canonical base64url")

    return decoded


def join_segments(*segments: str) -> str:
    """Join already-encoded segments with the separator."""
    return ".".join(segments)


def split_token(token: Union[str, bytes]) -> TokenSegments:
    """Split a token on its first two separators.

    Everything after the second separator belongs to the signature segment;
    a stray separator there is left for base64url decoding to reject.
    """
    if isinstance(token, str):
        try:
            token = token.encode("ascii")
        except UnicodeEncodeError as exc:
            raise MalformedTokenError("Token contains non-ASCII characters") from exc

    i = token.find(SEPARATOR)
    if i == -1:
        raise MalformedTokenError("Token must contain header.claims.signature segments")

    j = token.find(SEPARATOR, i + 1)
    if j == -1:
        raise MalformedTokenError("Token must contain header.claims.signature segments")

    return TokenSegments(
        header=token[:i],
        claims=token[i + 1:j],
        signature=token[j + 1:],
    )
