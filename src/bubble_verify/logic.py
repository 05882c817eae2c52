from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from bubble_core.babble import encode
from bubble_core.errors import BubbleBabbleError

from .const import ERRORS
from .digest import DigestFn
from .manifest import ManifestEntry, ManifestLineError, parse_manifest

logger = logging.getLogger(__name__)

OK = "OK"
FAILED = "FAILED"
MISSING = "MISSING"


class FileMissing(BubbleBabbleError):
    """Manifest entry names a file that does not exist."""

    code = "E_FILE_MISSING"


class DigestSourceError(BubbleBabbleError):
    """The digest provider could not read or hash an existing file."""

    code = "E_DIGEST_SOURCE"


@dataclass(frozen=True)
class EntryResult:
    filename: str
    status: str
    reason: BubbleBabbleError | None = None
    computed: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == OK

    def line(self) -> str:
        # Unreadable files share the MISSING wording; the reason stays in as_dict().
        if self.status == MISSING:
            return f"{self.filename}: No such file"
        return f"{self.filename}: {self.status}"


@dataclass
class Report:
    results: list[EntryResult]
    parse_errors: list[ManifestLineError] = field(default_factory=list)

    @property
    def status(self) -> int:
        return 0 if self.passed else 1

    @property
    def passed(self) -> bool:
        return not self.parse_errors and all(r.ok for r in self.results)

    def count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    def lines(self) -> Iterator[str]:
        for r in self.results:
            yield r.line()

    def as_dict(self) -> dict:
        errors = []
        for e in self.parse_errors:
            errors.append({"code":"E_MALFORMED_INPUT","message":ERRORS["E_MALFORMED_INPUT"],"line":e.lineno,"detail":e.line})
        for r in self.results:
            if r.status == FAILED:
                errors.append({"code":"E_HASH_MISMATCH","message":ERRORS["E_HASH_MISMATCH"],"path":r.filename,"computed":r.computed})
            elif r.status == MISSING:
                code = r.reason.code if r.reason is not None else FileMissing.code
                errors.append({"code":code,"message":ERRORS[code],"path":r.filename,"detail":str(r.reason)})
        return {"status":"PASS" if not errors else "FAIL","error_count":len(errors),"errors":errors}


def _check_entry(entry: ManifestEntry, digest_fn: DigestFn, root: Path) -> EntryResult:
    p = root / entry.filename
    if not p.is_file():
        logger.debug("%s: missing", entry.filename)
        return EntryResult(entry.filename, MISSING, FileMissing(f"{entry.filename}: No such file"))

    try:
        raw = digest_fn(p)
    except Exception as e:
        # Provider failures are per-entry; the batch carries on.
        logger.warning("%s: digest failed: %s", entry.filename, e)
        return EntryResult(entry.filename, MISSING, DigestSourceError(f"{entry.filename}: {e}"))

    computed = encode(raw)
    status = OK if computed == entry.expected else FAILED
    logger.debug("%s: %s", entry.filename, status)
    return EntryResult(entry.filename, status, computed=computed)


def verify(
    manifest: Sequence[ManifestEntry],
    digest_fn: DigestFn,
    root: Path | None = None,
    jobs: int = 1,
) -> Report:
    """Check every entry against a fresh digest. Results keep manifest order."""
    root = Path.cwd() if root is None else Path(root)
    if jobs > 1 and len(manifest) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            results = list(ex.map(lambda e: _check_entry(e, digest_fn, root), manifest))
    else:
        results = [_check_entry(e, digest_fn, root) for e in manifest]
    return Report(results)


def read_manifest(path: Path | str) -> Iterable[str]:
    """Manifest lines split on newlines only.

    Each line is decoded as UTF-8 with ``surrogateescape`` so filenames that are
    not valid UTF-8 still reach the filesystem lookup unchanged.
    """
    data = sys.stdin.buffer.read() if str(path) == "-" else Path(path).read_bytes()
    chunks = data.split(b"\n")
    if chunks[-1] == b"":
        chunks.pop()
    return [c.decode("utf-8", "surrogateescape") for c in chunks]


def check_manifest(
    path: Path | str,
    digest_fn: DigestFn,
    root: Path | None = None,
    jobs: int = 1,
) -> Report:
    """Parse a manifest file (``-`` for stdin) and verify it."""
    entries, parse_errors = parse_manifest(read_manifest(path))
    report = verify(entries, digest_fn, root=root, jobs=jobs)
    report.parse_errors = parse_errors
    return report
