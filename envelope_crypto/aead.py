"""
AEAD Codec
==========
Authenticated encryption of text into an Envelope.

Default algorithm: ChaCha20-Poly1305 (RFC 8439, IETF variant).
Substitute:        AES-256-GCM, same size parameters.

Key:   256-bit (32 bytes)
Nonce:  96-bit (12 bytes), fresh from the random source on every call
Tag:   128-bit (16 bytes)

Envelope.data is ciphertext || tag; Envelope.nonce is the nonce.
Associated data is always empty.

Short keys are right-padded with zero bytes by default. That keeps old
callers with short passphrase-style keys working but leaves the key with
less entropy than its length suggests; set short_keys="reject" to refuse
them. Keys longer than 32 bytes are always refused.

Dependencies: cryptography >= 41.0
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from .envelope import Envelope
from .errors import AuthenticationError, DecodeError, EncodingError, KeyMaterialError
from .random_source import SecureRandom, default_random

logger = logging.getLogger(__name__)

ASSOCIATED_DATA = b""
SHORT_KEY_POLICIES = ("pad", "reject")


@dataclass(frozen=True)
class Algorithm:
    name:       str
    key_size:   int
    nonce_size: int
    tag_size:   int
    cipher:     type


CHACHA20_POLY1305 = Algorithm("chacha20-poly1305", 32, 12, 16, ChaCha20Poly1305)
AES_256_GCM       = Algorithm("aes-256-gcm",       32, 12, 16, AESGCM)

ALGORITHMS = {a.name: a for a in (CHACHA20_POLY1305, AES_256_GCM)}


def get_algorithm(name: str) -> Algorithm:
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise ValueError(
            f"Unknown algorithm {name!r}. Choose one of: {', '.join(ALGORITHMS)}."
        ) from None


class AEADCodec:
    """Encrypts text to an Envelope and back."""

    def __init__(self, algorithm: Union[str, Algorithm] = CHACHA20_POLY1305.name,
                 random: SecureRandom = None, short_keys: str = "pad"):
        if isinstance(algorithm, str):
            algorithm = get_algorithm(algorithm)
        if short_keys not in SHORT_KEY_POLICIES:
            raise ValueError(f"short_keys must be one of {SHORT_KEY_POLICIES}.")
        self._algorithm  = algorithm
        self._random     = random if random is not None else default_random()
        self._short_keys = short_keys

    @classmethod
    def from_settings(cls, settings, random: SecureRandom = None) -> "AEADCodec":
        return cls(settings.algorithm, random=random, short_keys=settings.short_keys)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def short_keys(self) -> str:
        return self._short_keys

    # ── key handling ─────────────────────────────────────────────────────────
    def prepare_key(self, key: bytes) -> bytes:
        """
        Turn caller key bytes into exactly key_size bytes.
        Raises KeyMaterialError for empty, oversized, non-bytes or
        (under the "reject" policy) short keys.
        """
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise KeyMaterialError("Key must be bytes.")
        key  = bytes(key)
        size = self._algorithm.key_size
        if not key:
            raise KeyMaterialError("Key must not be empty.")
        if len(key) > size:
            raise KeyMaterialError(f"Key is longer than {size} bytes.")
        if len(key) < size:
            if self._short_keys == "reject":
                raise KeyMaterialError(f"Key is shorter than {size} bytes.")
            key = key.ljust(size, b"\x00")
        return key

    def _cipher(self, key: bytes):
        key = self.prepare_key(key)
        try:
            return self._algorithm.cipher(key)
        except ValueError as exc:
            raise KeyMaterialError("Cipher rejected the key.") from exc

    # ── encrypt / decrypt ────────────────────────────────────────────────────
    def encrypt(self, key: bytes, plaintext: str) -> Envelope:
        """
        Seal plaintext under key with a fresh random nonce.
        Two calls with the same inputs give different envelopes.
        """
        if not isinstance(plaintext, str):
            raise TypeError("Plaintext must be str.")
        try:
            data = plaintext.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError("Plaintext is not encodable as UTF-8.") from exc

        cipher = self._cipher(key)
        nonce  = self._random.token_bytes(self._algorithm.nonce_size)
        sealed = cipher.encrypt(nonce, data, ASSOCIATED_DATA)
        logger.debug("Sealed %d bytes with %s", len(data), self._algorithm.name)
        return Envelope.seal(nonce, sealed)

    def decrypt(self, key: bytes, envelope: Union[Envelope, Mapping]) -> str:
        """
        Open an envelope and return the original text.
        Raises AuthenticationError when the tag does not verify, with no
        hint whether the key, the nonce or the data was wrong.
        """
        envelope = Envelope.coerce(envelope)
        nonce    = envelope.raw_nonce()
        sealed   = envelope.raw_data()
        if len(nonce) != self._algorithm.nonce_size:
            raise DecodeError(
                f"Nonce must be {self._algorithm.nonce_size} bytes, got {len(nonce)}."
            )
        if len(sealed) < self._algorithm.tag_size:
            raise DecodeError("Data is shorter than the authentication tag.")

        cipher = self._cipher(key)
        try:
            data = cipher.decrypt(nonce, sealed, ASSOCIATED_DATA)
        except InvalidTag:
            raise AuthenticationError() from None
        logger.debug("Opened %d bytes with %s", len(data), self._algorithm.name)

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError("Decrypted data is not valid UTF-8.") from exc

    def __repr__(self):
        return f"AEADCodec({self._algorithm.name}, short_keys={self._short_keys})"
