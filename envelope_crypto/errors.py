"""
Error taxonomy
==============
Every failure the codecs raise derives from EnvelopeCryptoError, so a
caller can catch the whole family in one place and report a plain
"cannot encrypt / cannot decrypt".

Most classes also subclass the builtin they most resemble (ValueError,
RuntimeError) so generic handlers keep working.
"""


class EnvelopeCryptoError(Exception):
    """Base class for all envelope_crypto failures."""


class KeyMaterialError(EnvelopeCryptoError, ValueError):
    """Key bytes cannot be turned into a valid cipher key."""


class RandomSourceError(EnvelopeCryptoError, RuntimeError):
    """The OS entropy source failed. Fatal, never retried."""


class DecodeError(EnvelopeCryptoError, ValueError):
    """Envelope fields are not valid base64 or the envelope is malformed."""


class AuthenticationError(EnvelopeCryptoError):
    """
    Tag verification failed.

    Raised for a wrong key, tampered ciphertext and a corrupted nonce
    alike. The message is always the same.
    """

    MESSAGE = "cannot decrypt: authentication failed"

    def __init__(self, *_):
        super().__init__(self.MESSAGE)


class EncodingError(EnvelopeCryptoError, ValueError):
    """Text could not be converted to or from UTF-8."""


class SerializationError(EnvelopeCryptoError, ValueError):
    """A value could not be written as JSON."""


class DeserializationError(EnvelopeCryptoError, ValueError):
    """Recovered text is not JSON of the expected shape."""
