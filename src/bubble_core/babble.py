"""Bubble Babble encoder and decoder."""
from __future__ import annotations

from .errors import ChecksumMismatch, MalformedInput
from .protocol import (
    CHECKSUM_CONSONANT,
    CHECKSUM_MODULUS,
    CHECKSUM_SEED,
    CONSONANTS,
    DELIMITER,
    FINAL_LEN,
    MIN_ENCODED_LEN,
    PAIR_LEN,
    SEPARATOR,
    VOWELS,
)


def _next_checksum(c: int, b1: int, b2: int) -> int:
    return (c * 5 + b1 * 7 + b2) % CHECKSUM_MODULUS


def _odd_group(b: int, c: int) -> str:
    """Encode one byte as V C V, offsetting both vowels by the checksum."""
    return (
        VOWELS[((b >> 6) + c) % 6]
        + CONSONANTS[(b >> 2) & 15]
        + VOWELS[((b & 3) + c // 6) % 6]
    )


def encode(digest: bytes) -> str:
    """Encode bytes as a Bubble Babble string, e.g. ``b""`` -> ``"xexax"``."""
    if not isinstance(digest, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes, got {type(digest).__name__}")
    data = bytes(digest)

    c = CHECKSUM_SEED
    parts = [DELIMITER]
    for i in range(0, len(data) - 1, 2):
        b1, b2 = data[i], data[i + 1]
        parts.append(_odd_group(b1, c))
        parts.append(CONSONANTS[b2 >> 4] + SEPARATOR + CONSONANTS[b2 & 15])
        c = _next_checksum(c, b1, b2)

    if len(data) % 2:
        parts.append(_odd_group(data[-1], c))
    else:
        parts.append(VOWELS[c % 6] + CONSONANTS[CHECKSUM_CONSONANT] + VOWELS[c // 6])
    parts.append(DELIMITER)
    return "".join(parts)


def _index(alphabet: str, ch: str, pos: int, what: str) -> int:
    idx = alphabet.find(ch)
    if idx < 0:
        raise MalformedInput(f"expected {what} at offset {pos}, found {ch!r}")
    return idx


def _vowel(s: str, pos: int) -> int:
    return _index(VOWELS, s[pos], pos, "vowel")


def _data_consonant(s: str, pos: int) -> int:
    idx = _index(CONSONANTS, s[pos], pos, "consonant")
    if idx == CHECKSUM_CONSONANT:
        raise MalformedInput(f"checksum marker {s[pos]!r} inside data at offset {pos}")
    return idx


def _decode_odd_group(s: str, pos: int, c: int) -> int:
    """Invert ``_odd_group`` for the three characters at ``pos``."""
    high = (_vowel(s, pos) - c % 6) % 6
    mid = _data_consonant(s, pos + 1)
    low = (_vowel(s, pos + 2) - c // 6) % 6
    if high > 3 or low > 3:
        raise ChecksumMismatch(f"checksum mismatch in group at offset {pos}")
    return (high << 6) | (mid << 2) | low


def decode(s: str) -> bytes:
    """Decode a Bubble Babble string back to bytes, validating the checksum.

    Raises ``MalformedInput`` when the string does not parse and
    ``ChecksumMismatch`` when it parses but fails the embedded checksum.
    """
    if not isinstance(s, str):
        raise MalformedInput(f"expected str, got {type(s).__name__}")
    if len(s) < MIN_ENCODED_LEN or s[0] != DELIMITER or s[-1] != DELIMITER:
        raise MalformedInput(f"missing {DELIMITER!r} delimiters: {s!r}")
    if (len(s) - MIN_ENCODED_LEN) % PAIR_LEN:
        raise MalformedInput(f"bad length {len(s)}: {s!r}")

    out = bytearray()
    c = CHECKSUM_SEED
    final = len(s) - 1 - FINAL_LEN
    for pos in range(1, final, PAIR_LEN):
        if s[pos + 4] != SEPARATOR:
            raise MalformedInput(f"expected {SEPARATOR!r} at offset {pos + 4}")
        b1 = _decode_odd_group(s, pos, c)
        b2 = (_data_consonant(s, pos + 3) << 4) | _data_consonant(s, pos + 5)
        out += bytes((b1, b2))
        c = _next_checksum(c, b1, b2)

    if s[final + 1] == DELIMITER:
        # checksum-only group
        if _vowel(s, final) != c % 6 or _vowel(s, final + 2) != c // 6:
            raise ChecksumMismatch("final checksum does not match decoded data")
    else:
        out.append(_decode_odd_group(s, final, c))
    return bytes(out)


def is_valid(s: str) -> bool:
    """True if ``s`` decodes cleanly."""
    try:
        decode(s)
    except (MalformedInput, ChecksumMismatch):
        return False
    return True
