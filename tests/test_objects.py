from dataclasses import dataclass
from datetime import date
from typing import Any

import pytest
from pydantic import BaseModel

from envelope_crypto import (AEADCodec, ObjectCodec, AuthenticationError,
                             DeserializationError, SerializationError)

from conftest import KEY32, SHORT


class Point(BaseModel):
    x: int
    y: int


@dataclass
class Tagged:
    name: str
    tags: list[str]


def test_object_roundtrip_short_key(obj_codec):
    env = obj_codec.encrypt_obj(SHORT, {"x": 1, "y": 2})
    assert obj_codec.decrypt_obj(SHORT, env) == {"x": 1, "y": 2}

@pytest.mark.parametrize("value", [
    None, True, 0, -7, 3.5, "text", [], {}, [1, "two", None, {"three": [3.0]}],
    {"nested": {"deep": {"list": [1, 2, 3]}}, "unicode": "漢字"},
])
def test_plain_json_values(obj_codec, value):
    assert obj_codec.decrypt_obj(KEY32, obj_codec.encrypt_obj(KEY32, value)) == value

def test_model_shape(codec):
    points = ObjectCodec(codec, shape=Point)
    env = points.encrypt_obj(SHORT, Point(x=1, y=2))
    assert points.decrypt_obj(SHORT, env) == Point(x=1, y=2)

def test_dataclass_shape(codec):
    tagged = ObjectCodec(codec, shape=Tagged)
    value = Tagged(name="n", tags=["a", "b"])
    assert tagged.decrypt_obj(KEY32, tagged.encrypt_obj(KEY32, value)) == value

def test_per_call_shape(obj_codec):
    env = obj_codec.encrypt_obj(SHORT, {"x": 1, "y": 2})
    assert obj_codec.decrypt_obj(SHORT, env, shape=Point) == Point(x=1, y=2)

def test_generic_container_shape(codec):
    ints = ObjectCodec(codec, shape=list[int])
    assert ints.decrypt_obj(KEY32, ints.encrypt_obj(KEY32, [3, 1, 2])) == [3, 1, 2]

def test_canonical_json_is_compact(obj_codec):
    assert obj_codec.dumps({"x": 1, "y": [1, 2]}) == '{"x":1,"y":[1,2]}'
    assert obj_codec.dumps("漢") == '"漢"'


# ── failures ──────────────────────────────────────────────────────────────────
def test_unserializable_value(obj_codec):
    with pytest.raises(SerializationError):
        obj_codec.encrypt_obj(KEY32, {"obj": object()})

def test_shape_mismatch(obj_codec):
    env = obj_codec.encrypt_obj(KEY32, {"x": "one"})
    with pytest.raises(DeserializationError):
        obj_codec.decrypt_obj(KEY32, env, shape=Point)

def test_missing_field(obj_codec):
    env = obj_codec.encrypt_obj(KEY32, {"x": 1})
    with pytest.raises(DeserializationError):
        obj_codec.decrypt_obj(KEY32, env, shape=Point)

def test_malformed_json(codec, obj_codec):
    env = codec.encrypt(KEY32, "{not json")
    with pytest.raises(DeserializationError):
        obj_codec.decrypt_obj(KEY32, env)

def test_decrypt_errors_pass_through(obj_codec):
    env = obj_codec.encrypt_obj(KEY32, {"x": 1, "y": 2})
    with pytest.raises(AuthenticationError):
        obj_codec.decrypt_obj(SHORT, env)

def test_default_codec_is_chacha():
    assert ObjectCodec(shape=Any).codec.algorithm.name == "chacha20-poly1305"

def test_aes_backed_object_codec():
    aes = ObjectCodec(AEADCodec("aes-256-gcm"))
    assert aes.decrypt_obj(SHORT, aes.encrypt_obj(SHORT, {"x": 1, "y": 2})) == {"x": 1, "y": 2}


# ── values with no faithful JSON form ─────────────────────────────────────────
class Reading(BaseModel):
    value: float


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_floats_rejected(obj_codec, bad):
    with pytest.raises(SerializationError):
        obj_codec.encrypt_obj(KEY32, {"x": bad})
    with pytest.raises(SerializationError):
        obj_codec.encrypt_obj(KEY32, [1.0, [bad]])

@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_floats_rejected_for_typed_shapes(codec, bad):
    with pytest.raises(SerializationError):
        ObjectCodec(codec, shape=Reading).encrypt_obj(KEY32, Reading(value=bad))
    with pytest.raises(SerializationError):
        ObjectCodec(codec, shape=dict[str, float]).encrypt_obj(KEY32, {"x": bad})

@pytest.mark.parametrize("value", [
    b"raw", (1, 2), {1, 2}, date(2020, 1, 2), {1: "one"}, {"nested": [b"raw"]},
])
def test_values_json_would_reshape_are_rejected(obj_codec, value):
    with pytest.raises(SerializationError):
        obj_codec.encrypt_obj(KEY32, value)

def test_typed_shape_still_converts_declared_types(codec):
    dates = ObjectCodec(codec, shape=list[date])
    env = dates.encrypt_obj(KEY32, [date(2020, 1, 2)])
    assert dates.decrypt_obj(KEY32, env) == [date(2020, 1, 2)]
