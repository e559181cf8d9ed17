import pytest

from envelope_crypto import AEADCodec, ObjectCodec

KEY32 = b"foobarfoobar1234foobarfoobar1234"
SHORT = b"foobar"


@pytest.fixture
def codec():
    return AEADCodec()


@pytest.fixture
def obj_codec(codec):
    return ObjectCodec(codec)
