"""Manifest lines: ``<bubble babble>  <filename>`` or ``<bubble babble> *<filename>``."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from bubble_core.errors import MalformedInput
from bubble_core.protocol import DELIMITER

logger = logging.getLogger(__name__)

# Encoded field is matched loosely here; exact comparison happens in verify.
# Separator is one blank then " " (text) or "*" (binary); the rest is the filename.
_LINE_RE = re.compile(rf"^({DELIMITER}[a-z-]*{DELIMITER})[ \t]([ *])(.+)$")


@dataclass(frozen=True)
class ManifestEntry:
    expected: str
    filename: str
    binary: bool = False
    lineno: int = 0


@dataclass(frozen=True)
class ManifestLineError:
    lineno: int
    line: str
    message: str


def parse_line(line: str, lineno: int = 0) -> ManifestEntry:
    """Parse one manifest line. Only the mode character after the blank is stripped."""
    text = line.rstrip("\r\n")
    m = _LINE_RE.match(text)
    if m is None:
        raise MalformedInput(
            f"improperly formatted Bubble Babble checksum line: {text!r}",
            lineno=lineno or None,
            line=text,
        )
    expected, star, filename = m.groups()
    return ManifestEntry(expected=expected, filename=filename, binary=star == "*", lineno=lineno)


def parse_manifest(lines: Iterable[str]) -> tuple[list[ManifestEntry], list[ManifestLineError]]:
    """Parse every line. Blank or malformed lines are returned as errors, never skipped."""
    entries: list[ManifestEntry] = []
    errors: list[ManifestLineError] = []
    for lineno, line in enumerate(lines, start=1):
        try:
            entries.append(parse_line(line, lineno))
        except MalformedInput as e:
            logger.warning("%s", e)
            errors.append(ManifestLineError(lineno=lineno, line=e.line or "", message=str(e)))
    return entries, errors


def format_entry(encoded: str, filename: str, binary: bool = False) -> str:
    """Inverse of ``parse_line`` (without the newline)."""
    return f"{encoded} {'*' if binary else ' '}{filename}"
