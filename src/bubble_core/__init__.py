"""Bubble Babble core - encoding, decoding and the hex boundary."""
from .babble import decode, encode, is_valid
from .errors import BubbleBabbleError, ChecksumMismatch, MalformedInput
from .hexdigest import decode_hex, encode_hex

__all__ = [
    "encode",
    "decode",
    "is_valid",
    "decode_hex",
    "encode_hex",
    "BubbleBabbleError",
    "MalformedInput",
    "ChecksumMismatch",
]
