"""
envelope_crypto — Live Demo
===========================
Run:  python examples/demo_envelope.py

Encrypts text and a structured value with both algorithms, prints the
envelope wire form and timings, then shows tampering being caught.
"""

import logging
import time

from envelope_crypto import (AEADCodec, ObjectCodec, Envelope, AuthenticationError,
                             KeyMaterialError, b64decode, b64encode)

LINE = "═" * 70
KEY  = b"foobarfoobar1234foobarfoobar1234"
MSG  = "123456789abcdef0"

def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")


def main():
    logging.basicConfig(level=logging.INFO, format=" %(message)s")

    print(f"\n{LINE}")
    print("  envelope_crypto — AEAD envelope demo")
    print(LINE)
    print(f"  Message: {MSG}\n")

    # ── text, both algorithms ─────────────────────────────────────────────────
    for name in ("chacha20-poly1305", "aes-256-gcm"):
        header(f"TEXT — {name}")
        codec = AEADCodec(name)
        t0  = time.perf_counter()
        env = codec.encrypt(KEY, MSG)
        pt  = codec.decrypt(KEY, env)
        elapsed = time.perf_counter() - t0
        ok("Envelope",   env.to_json())
        ok("Data size",  f"{len(b64decode(env.data))} bytes (plaintext + tag=16)")
        ok("Round-trip", f"{elapsed*1000:.2f} ms")
        ok("Decrypted",  pt)

    # ── short key ─────────────────────────────────────────────────────────────
    header("SHORT KEY — zero padded")
    codec = AEADCodec()
    env = codec.encrypt(b"foobar", MSG)
    ok("Decrypted with b'foobar'", codec.decrypt(b"foobar", env))
    try:
        AEADCodec(short_keys="reject").encrypt(b"foobar", MSG)
    except KeyMaterialError as e:
        ok("Rejected under short_keys='reject'", str(e))

    # ── objects ───────────────────────────────────────────────────────────────
    header("OBJECT — JSON through the AEAD codec")
    objects = ObjectCodec(codec)
    env = objects.encrypt_obj(b"foobar", {"x": 1, "y": 2})
    ok("Envelope",  env.to_json())
    ok("Decrypted", objects.decrypt_obj(b"foobar", env))

    # ── tampering ─────────────────────────────────────────────────────────────
    header("TAMPER — flipped bit in data")
    env = codec.encrypt(KEY, MSG)
    raw = bytearray(b64decode(env.data))
    raw[0] ^= 0x01
    bad = Envelope(nonce=env.nonce, data=b64encode(bytes(raw)))
    try:
        codec.decrypt(KEY, bad)
        print("  ✗  Tampered envelope opened!")
    except AuthenticationError as e:
        ok("Rejected", str(e))
    try:
        codec.decrypt(b"wrong key", env)
    except AuthenticationError as e:
        ok("Wrong key rejected", str(e))

    print(f"\n{LINE}\n")


if __name__ == "__main__":
    main()
