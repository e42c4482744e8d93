"""
Token header model.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared.errors import MalformedHeaderError

HEADER_TYPE_JWT = "JWT"


class Header(BaseModel):
    """The fixed two-field token header.

    Serializes as exactly ``{"typ":"JWT","alg":"<ALG>"}``. When parsing,
    unknown fields are ignored and a missing ``typ`` or ``alg`` reads as the
    empty string; an empty ``alg`` never matches any binding.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    type: str = Field(default="", alias="typ", strict=True)
    algorithm: str = Field(default="", alias="alg", strict=True)

    @classmethod
    def for_algorithm(cls, algorithm: str) -> "Header":
        return cls(type=HEADER_TYPE_JWT, algorithm=algorithm)

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_json(cls, data: bytes) -> "Header":
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise MalformedHeaderError(
                "Token header is not a valid JSON header",
                details={"errors": exc.error_count()},
            ) from exc
