import sys
from pathlib import Path

def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_char.py <manifest>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    lines = p.read_text(encoding="utf-8").splitlines(keepends=True)
    if not lines or len(lines[0]) < 12:
        print("Manifest too small to corrupt safely.")
        raise SystemExit(2)

    # Swap the low-nibble consonant of the first byte pair ("xesef-d..." -> "xesef-f...").
    # Offset 6 is past the leading delimiter (1) and the V C V C - of the first group (5).
    idx = 6
    line = lines[0]
    repl = "f" if line[idx] != "f" else "d"
    lines[0] = line[:idx] + repl + line[idx + 1:]
    p.write_text("".join(lines), encoding="utf-8")
    print(f"Corrupted 1 character at offset {idx} in {p}")

if __name__ == "__main__":
    main()
