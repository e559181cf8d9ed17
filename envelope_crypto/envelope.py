"""
Envelope
========
The only artifact that is ever stored or sent:

    {"nonce": "<base64>", "data": "<base64>"}

nonce decodes to the algorithm's nonce (12 bytes for both shipped
algorithms); data decodes to ciphertext || tag. Both fields use the
standard RFC 4648 alphabet with padding. Field names and encoding are a
wire contract and do not change without versioning.
"""

import base64
import binascii
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import DecodeError


def b64encode(raw: bytes) -> str:
    """Standard, padded base64 as text."""
    return base64.b64encode(raw).decode("ascii")


def b64decode(text: str) -> bytes:
    """
    Strict inverse of b64encode.
    Raises DecodeError on non-alphabet characters, bad padding,
    non-zero trailing bits, non-ASCII input or a non-str argument.
    """
    if not isinstance(text, str):
        raise DecodeError("Base64 field must be text.")
    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Field is not valid base64.") from exc
    # unused trailing bits must be zero, so each byte string has one spelling
    if b64encode(raw) != text:
        raise DecodeError("Field is not canonical base64.")
    return raw


class Envelope(BaseModel):
    """Immutable nonce + sealed data pair, both base64 text."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    nonce: str
    data: str

    @classmethod
    def seal(cls, nonce: bytes, sealed: bytes) -> "Envelope":
        """Build an envelope from raw nonce and ciphertext||tag bytes."""
        return cls(nonce=b64encode(nonce), data=b64encode(sealed))

    def raw_nonce(self) -> bytes:
        return b64decode(self.nonce)

    def raw_data(self) -> bytes:
        return b64decode(self.data)

    # ── wire form ────────────────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return self.model_dump()

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "Envelope":
        try:
            return cls.model_validate(dict(obj))
        except ValidationError as exc:
            raise DecodeError("Malformed envelope.") from exc

    @classmethod
    def from_json(cls, text) -> "Envelope":
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise DecodeError("Malformed envelope JSON.") from exc

    @classmethod
    def coerce(cls, obj) -> "Envelope":
        """Accept an Envelope, a {nonce, data} mapping or its JSON text."""
        if isinstance(obj, cls):
            return obj
        if isinstance(obj, Mapping):
            return cls.from_dict(obj)
        if isinstance(obj, (str, bytes, bytearray)):
            return cls.from_json(obj)
        raise DecodeError(f"Cannot read an envelope from {type(obj).__name__}.")
