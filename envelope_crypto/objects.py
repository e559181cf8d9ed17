"""
Object Codec
============
Structured values through the AEAD Codec: value -> compact JSON ->
Envelope, and back.

The shape T is any type pydantic can validate: builtin containers,
BaseModel subclasses, dataclasses, TypedDicts. With the default shape
(Any) the recovered value is plain JSON data: dicts, lists, str, int,
float, bool, None. Under that shape only such plain data is accepted;
bytes, tuples, sets, dates and non-str keys raise SerializationError
rather than coming back changed. Non-finite floats are refused under
every shape.
"""

import json
import logging
import math
from typing import Any, Generic, Mapping, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from .aead import AEADCodec
from .envelope import Envelope
from .errors import DeserializationError, SerializationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_JSON_SCALARS = (str, int, float, bool, type(None))


def _check_plain(value):
    """Reject anything json.dumps would write in a different shape."""
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError(f"JSON object keys must be str, not {type(k).__name__}.")
            _check_plain(v)
    elif isinstance(value, list):
        for item in value:
            _check_plain(item)
    elif isinstance(value, float):
        _check_finite(value)
    elif not isinstance(value, _JSON_SCALARS):
        raise TypeError(f"{type(value).__name__} has no JSON form.")


def _check_finite(value):
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("NaN and Infinity have no JSON form.")
    elif isinstance(value, dict):
        for item in value.values():
            _check_finite(item)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            _check_finite(item)


class ObjectCodec(Generic[T]):
    """Encrypts values of shape T to Envelopes and back."""

    def __init__(self, codec: AEADCodec = None, shape: Any = Any):
        self._codec   = codec if codec is not None else AEADCodec()
        self._shape   = shape
        self._adapter = TypeAdapter(shape)

    @property
    def codec(self) -> AEADCodec:
        return self._codec

    def dumps(self, value: T) -> str:
        """Canonical JSON text for value. Raises SerializationError."""
        try:
            if self._shape is Any:
                _check_plain(value)
                plain = value
            else:
                # pydantic writes non-finite floats as null in json mode
                _check_finite(self._adapter.dump_python(value))
                plain = self._adapter.dump_python(value, mode="json")
            return json.dumps(plain, separators=(",", ":"),
                              ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Cannot serialize {type(value).__name__} as JSON."
            ) from exc

    def loads(self, text: str, shape: Any = None) -> T:
        """Parse JSON text into shape. Raises DeserializationError."""
        if shape is None:
            shape, adapter = self._shape, self._adapter
        else:
            adapter = TypeAdapter(shape)
        try:
            return adapter.validate_json(text)
        except ValidationError as exc:
            raise DeserializationError(
                f"Decrypted text does not match {shape!r}."
            ) from exc

    def encrypt_obj(self, key: bytes, value: T) -> Envelope:
        text = self.dumps(value)
        logger.debug("Serialized %s to %d chars", type(value).__name__, len(text))
        return self._codec.encrypt(key, text)

    def decrypt_obj(self, key: bytes, envelope: Union[Envelope, Mapping],
                    shape: Any = None) -> T:
        """
        Decrypt and rebuild a value. Raises everything AEADCodec.decrypt
        can, plus DeserializationError.
        """
        return self.loads(self._codec.decrypt(key, envelope), shape)
