from __future__ import annotations

import hashlib
import sys
from pathlib import Path
from typing import Callable

from .const import CHUNK_SIZE, DEFAULT_ALGORITHM

DigestFn = Callable[[Path], bytes]


def check_algorithm(algorithm: str) -> str:
    name = algorithm.lower()
    # Listed names can still be refused by the OpenSSL build at runtime.
    try:
        hashlib.new(name)
    except (ValueError, TypeError):
        raise ValueError(f"unsupported digest algorithm: {algorithm}")
    return name


def file_digest(path: Path | str, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """Raw digest of a file; ``-`` reads standard input."""
    h = hashlib.new(algorithm)
    if str(path) == "-":
        f = sys.stdin.buffer
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            h.update(chunk)
    else:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                h.update(chunk)
    # shake_* digests need an explicit length
    if algorithm.lower().startswith("shake_"):
        return h.digest(32 if algorithm.lower() == "shake_128" else 64)
    return h.digest()


def digest_fn(algorithm: str = DEFAULT_ALGORITHM) -> DigestFn:
    """Digest provider for ``verify``, bound to one algorithm."""
    algorithm = check_algorithm(algorithm)

    def _digest(path: Path) -> bytes:
        return file_digest(path, algorithm)

    return _digest
