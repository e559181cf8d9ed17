"""
Random source
=============
Nonce entropy for the codecs, read from the operating system CSPRNG.

One SecureRandom is shared by the whole process. It is created on first
use, never reseeded and never torn down. os.urandom is safe to call from
many threads at once, so no lock is held while bytes are drawn; the only
lock guards the one-time construction of the shared instance.
"""

import os
import logging
import threading

from .errors import RandomSourceError

logger = logging.getLogger(__name__)


class SecureRandom:
    """Thread-safe provider of cryptographically secure random bytes."""

    def token_bytes(self, n: int) -> bytes:
        """Return exactly n random bytes or raise RandomSourceError."""
        if not isinstance(n, int) or isinstance(n, bool) or n <= 0:
            raise ValueError("n must be a positive int.")
        try:
            raw = os.urandom(n)
        except (OSError, NotImplementedError) as exc:
            raise RandomSourceError("OS random source failed.") from exc
        if len(raw) != n:
            raise RandomSourceError(
                f"OS random source returned {len(raw)} bytes, wanted {n}."
            )
        return raw

    def __repr__(self):
        return "SecureRandom(os.urandom)"


_default = None
_default_lock = threading.Lock()


def default_random() -> SecureRandom:
    """Return the process-wide SecureRandom, creating it on first call."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = SecureRandom()
                logger.debug("Process random source initialised: %r", _default)
    return _default
