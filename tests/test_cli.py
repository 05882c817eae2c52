import json
import subprocess
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
CLI = f'"{sys.executable}" -m bubble_verify.cli'

def run(cmd, cwd):
    return subprocess.run(cmd, cwd=cwd, shell=True, check=False, capture_output=True, text=True)

def test_encode_decode(tmp_path):
    r = run(f"{CLI} encode '' 31323334353637383930", cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert r.stdout.splitlines() == ["xexax", "xesef-disof-gytuf-katof-movif-baxux"]

    r = run(f"{CLI} decode xaxax", cwd=tmp_path)
    assert r.returncode != 0
    assert r.stderr.startswith("FATAL:")

    r = run(f"{CLI} decode xigak-nyryk-humil-bosek-sonax xexax", cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert r.stdout.splitlines() == [b"Pineapple".hex(), ""]

def test_encode_bad_hex(tmp_path):
    r = run(f"{CLI} encode abc", cwd=tmp_path)
    assert r.returncode == 1
    assert "odd-length" in r.stderr

def test_hash_then_check(tmp_path):
    (tmp_path / "a.bin").write_bytes(b"alpha")
    (tmp_path / "b.bin").write_bytes(b"bravo")
    r = run(f"{CLI} hash --binary a.bin b.bin", cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    lines = r.stdout.splitlines()
    assert lines[0].endswith(" *a.bin")
    (tmp_path / "SUMS").write_text(r.stdout, encoding="utf-8")

    r = run(f"{CLI} check SUMS", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    assert r.stdout.splitlines() == ["a.bin: OK", "b.bin: OK"]

    r = run(f"{CLI} check --quiet SUMS", cwd=tmp_path)
    assert r.returncode == 0
    assert r.stdout == ""

    # Corrupt and ensure failure
    r = run(f'"{sys.executable}" "{REPO / "scripts" / "corrupt_one_char.py"}" SUMS', cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    r = run(f"{CLI} check SUMS", cwd=tmp_path)
    assert r.returncode != 0
    assert r.stdout.splitlines() == ["a.bin: FAILED", "b.bin: OK"]
    assert "1 computed checksum did NOT match" in r.stderr

def test_check_missing_and_malformed(tmp_path):
    (tmp_path / "a.bin").write_bytes(b"alpha")
    r = run(f"{CLI} hash a.bin", cwd=tmp_path)
    (tmp_path / "SUMS").write_text(r.stdout + "junk\nxexax  gone.bin\n", encoding="utf-8")

    r = run(f"{CLI} check SUMS", cwd=tmp_path)
    assert r.returncode == 1
    assert r.stdout.splitlines() == ["a.bin: OK", "gone.bin: No such file"]
    assert "1 listed file could not be read" in r.stderr
    assert "1 line is improperly formatted" in r.stderr

    r = run(f"{CLI} check --status SUMS", cwd=tmp_path)
    assert r.returncode == 1
    assert r.stdout == ""

    r = run(f"{CLI} check --json SUMS", cwd=tmp_path)
    assert r.returncode == 1
    summary = json.loads(r.stdout)
    assert summary["status"] == "FAIL"
    assert [e["code"] for e in summary["errors"]] == ["E_MALFORMED_INPUT", "E_FILE_MISSING"]

def test_check_algorithm_and_jobs_from_env(tmp_path):
    for i in range(5):
        (tmp_path / f"f{i}").write_text(str(i), encoding="utf-8")
    names = " ".join(f"f{i}" for i in range(5))
    r = run(f"{CLI} hash -a md5 {names} > SUMS", cwd=tmp_path)
    assert r.returncode == 0, r.stderr

    r = run(f"BUBBLESUM_ALGORITHM=md5 BUBBLESUM_JOBS=3 {CLI} check SUMS", cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert r.stdout.splitlines() == [f"f{i}: OK" for i in range(5)]

    r = run(f"{CLI} check SUMS", cwd=tmp_path)
    assert r.returncode == 1

def test_check_stdin_and_bad_args(tmp_path):
    (tmp_path / "a").write_bytes(b"")
    r = run(f"{CLI} hash a | {CLI} check -", cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert r.stdout.strip() == "a: OK"

    r = run(f"{CLI} check -a no-such-hash -", cwd=tmp_path)
    assert r.returncode == 2

    r = run(f"{CLI} check nope.sums", cwd=tmp_path)
    assert r.returncode == 1
    assert r.stderr.startswith("FATAL:")
