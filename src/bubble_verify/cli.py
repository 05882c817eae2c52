import json
import logging
from pathlib import Path
import click
from bubble_core import BubbleBabbleError, decode, encode, encode_hex
from .const import DEFAULT_ALGORITHM, DEFAULT_JOBS, ENV_ALGORITHM, ENV_JOBS
from .digest import check_algorithm, digest_fn, file_digest
from .logic import FAILED, MISSING, check_manifest
from .manifest import format_entry

def _algorithm(ctx, param, value):
    try:
        return check_algorithm(value)
    except ValueError as e:
        raise click.BadParameter(str(e))

algorithm_option = click.option(
    "-a", "--algorithm", default=DEFAULT_ALGORITHM, show_default=True, envvar=ENV_ALGORITHM,
    callback=_algorithm, help="hashlib digest algorithm",
)

def _fatal(e: Exception):
    # Fail closed with a single-line reason.
    click.echo(f"FATAL: {e}", err=True)
    raise SystemExit(1)

def _raw(text: str) -> bytes:
    # Filenames that were not valid UTF-8 go back out as their original bytes.
    return text.encode("utf-8", "surrogateescape")

def _plural(n: int, one: str, many: str) -> str:
    return f"{n} {one if n == 1 else many}"

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
def main(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

@main.command("encode")
@click.argument("digests", nargs=-1, required=True)
def encode_cmd(digests):
    """Encode hex digests as Bubble Babble."""
    for d in digests:
        try:
            click.echo(encode_hex(d))
        except BubbleBabbleError as e:
            _fatal(e)

@main.command("decode")
@click.argument("strings", nargs=-1, required=True)
def decode_cmd(strings):
    """Decode Bubble Babble strings to hex."""
    for s in strings:
        try:
            click.echo(decode(s).hex())
        except BubbleBabbleError as e:
            _fatal(e)

@main.command("hash")
@algorithm_option
@click.option("-b", "--binary", is_flag=True, help="Mark entries as binary (*)")
@click.argument("files", nargs=-1, required=True)
def hash_cmd(algorithm: str, binary: bool, files):
    """Print manifest lines for FILES (- for stdin)."""
    bad = 0
    for name in files:
        try:
            raw = file_digest(name, algorithm)
        except OSError as e:
            click.echo(f"bubblesum: {name}: {e.strerror or e}", err=True)
            bad += 1
            continue
        click.echo(_raw(format_entry(encode(raw), name, binary)))
    if bad:
        raise SystemExit(1)

@main.command("check")
@algorithm_option
@click.option("-j", "--jobs", type=click.IntRange(min=1), default=DEFAULT_JOBS, show_default=True,
              envvar=ENV_JOBS, help="Files hashed in parallel")
@click.option("-q", "--quiet", is_flag=True, help="Do not print OK for each verified file")
@click.option("-s", "--status", "status_only", is_flag=True, help="Print nothing; exit status only")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary instead of lines")
@click.argument("manifest", type=click.Path(allow_dash=True, path_type=Path))
def check_cmd(algorithm: str, jobs: int, quiet: bool, status_only: bool, as_json: bool, manifest: Path):
    """Verify files listed in MANIFEST (- for stdin)."""
    try:
        report = check_manifest(manifest, digest_fn(algorithm), jobs=jobs)
    except OSError as e:
        _fatal(e)

    if as_json:
        click.echo(_raw(json.dumps(report.as_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)))
    elif not status_only:
        for r, line in zip(report.results, report.lines()):
            if quiet and r.ok:
                continue
            click.echo(_raw(line))

        n_missing = report.count(MISSING)
        n_failed = report.count(FAILED)
        n_bad_lines = len(report.parse_errors)
        if n_missing:
            click.echo(f"WARNING: {_plural(n_missing, 'listed file', 'listed files')} could not be read", err=True)
        if n_failed:
            click.echo(f"WARNING: {_plural(n_failed, 'computed checksum', 'computed checksums')} did NOT match", err=True)
        if n_bad_lines:
            click.echo(f"WARNING: {_plural(n_bad_lines, 'line is', 'lines are')} improperly formatted", err=True)

    raise SystemExit(report.status)

if __name__ == "__main__":
    main()
