"""
envelope_crypto
===============
Symmetric authenticated encryption of strings and structured values into
a transport-safe envelope:

    {"nonce": "<base64>", "data": "<base64>"}

Layers:
    AEADCodec    — text   <-> Envelope  (ChaCha20-Poly1305 or AES-256-GCM)
    ObjectCodec  — value  <-> JSON <-> AEADCodec
    SecureRandom — process-wide OS entropy, used only for nonces

Quick use:

    >>> from envelope_crypto import encrypt, decrypt
    >>> env = encrypt(b"foobar", "123456789abcdef0")
    >>> decrypt(b"foobar", env)
    '123456789abcdef0'

License: Apache 2.0
"""

__version__ = "1.0.0"

import threading

from .errors        import (EnvelopeCryptoError, KeyMaterialError, RandomSourceError,
                            DecodeError, AuthenticationError, EncodingError,
                            SerializationError, DeserializationError)
from .random_source import SecureRandom, default_random
from .envelope      import Envelope, b64encode, b64decode
from .aead          import AEADCodec, Algorithm, ALGORITHMS, CHACHA20_POLY1305, AES_256_GCM
from .objects       import ObjectCodec
from .config        import CodecSettings, load_settings

__all__ = [
    "EnvelopeCryptoError",
    "KeyMaterialError",
    "RandomSourceError",
    "DecodeError",
    "AuthenticationError",
    "EncodingError",
    "SerializationError",
    "DeserializationError",
    "SecureRandom",
    "default_random",
    "Envelope",
    "b64encode",
    "b64decode",
    "AEADCodec",
    "Algorithm",
    "ALGORITHMS",
    "CHACHA20_POLY1305",
    "AES_256_GCM",
    "ObjectCodec",
    "CodecSettings",
    "load_settings",
    "encrypt",
    "decrypt",
    "encrypt_obj",
    "decrypt_obj",
]

_default_codec = None
_codec_lock    = threading.Lock()


def _object_codec() -> ObjectCodec:
    global _default_codec
    if _default_codec is None:
        with _codec_lock:
            if _default_codec is None:
                _default_codec = ObjectCodec(AEADCodec.from_settings(CodecSettings()))
    return _default_codec


def encrypt(key: bytes, plaintext: str) -> Envelope:
    return _object_codec().codec.encrypt(key, plaintext)


def decrypt(key: bytes, envelope) -> str:
    return _object_codec().codec.decrypt(key, envelope)


def encrypt_obj(key: bytes, value) -> Envelope:
    return _object_codec().encrypt_obj(key, value)


def decrypt_obj(key: bytes, envelope, shape=None):
    return _object_codec().decrypt_obj(key, envelope, shape)
