"""Hex digest boundary: tool output such as ``sha256sum`` prints hex."""
from __future__ import annotations

import string

from .babble import encode
from .errors import MalformedInput

_HEXDIGITS = frozenset(string.hexdigits)


def decode_hex(text: str) -> bytes:
    """Strict hex to bytes. Odd length or non-hex characters are malformed."""
    t = text.strip()
    if len(t) % 2:
        raise MalformedInput(f"odd-length hex digest: {t!r}")
    bad = [ch for ch in t if ch not in _HEXDIGITS]
    if bad:
        raise MalformedInput(f"non-hex character {bad[0]!r} in digest: {t!r}")
    return bytes.fromhex(t)


def encode_hex(text: str) -> str:
    """Bubble Babble encoding of a hex digest string."""
    return encode(decode_hex(text))
