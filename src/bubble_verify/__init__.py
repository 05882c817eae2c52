"""Bubble Babble manifest verification."""
from .logic import DigestSourceError, EntryResult, FileMissing, Report, check_manifest, verify
from .manifest import ManifestEntry, ManifestLineError, format_entry, parse_line, parse_manifest

__all__ = [
    "verify",
    "check_manifest",
    "Report",
    "EntryResult",
    "FileMissing",
    "DigestSourceError",
    "ManifestEntry",
    "ManifestLineError",
    "parse_line",
    "parse_manifest",
    "format_entry",
]
