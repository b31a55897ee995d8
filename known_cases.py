"""Run the SHA-256 known-answer vectors.

Vectors are read from `data/known_vectors.yaml`. Each message is hashed and
compared word by word with its published digest; the number of mismatches is
the exit status.

Usage:
    python known_cases.py
    python known_cases.py --strategy unrolled
    python known_cases.py --big            # also hash the 1 GiB repeated block
    python known_cases.py --vectors other.yaml
"""

from __future__ import annotations

import argparse
import os
from typing import Dict, List, Tuple

import yaml

from compress import COMPRESSORS, Compressor, State, compress64
from sha256 import compare, digest, digest_repeated_block
from sha256_cli import format_digest


DEFAULT_VECTORS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "known_vectors.yaml")


def _parse_words(words: List[str]) -> State:
    return tuple(int(w, 16) for w in words)


def load_vectors(path: str = DEFAULT_VECTORS) -> Tuple[List[Tuple[bytes, State]], Dict]:
    """Load the vector file.

    Returns
    -------
    (cases, big) : tuple
        `cases` is a list of `(message_bytes, digest_words)` pairs; `big`
        holds `block` (bytes), `repetitions` (int) and `digest` (words).
    """
    with open(path, "r") as f:
        raw = yaml.safe_load(f)

    cases = [
        (entry["message"].encode("utf-8"), _parse_words(entry["digest"]))
        for entry in raw.get("messages", [])
    ]

    big = {}
    if raw.get("big"):
        big = {
            "block": raw["big"]["block"].encode("utf-8"),
            "repetitions": int(raw["big"]["repetitions"]),
            "digest": _parse_words(raw["big"]["digest"]),
        }

    return cases, big


def run_known_cases(
    cases: List[Tuple[bytes, State]],
    compressor: Compressor = compress64,
) -> int:
    """Hash every case and return the number of wrong digests."""
    print("-- Testing common known cases")
    errors = 0
    for message, expected in cases:
        print(message.decode("utf-8"))
        result = digest(message, compressor=compressor)
        print(format_digest(result))
        if not compare(result, expected):
            print("[FAIL] Answer not correct")
            errors += 1
    return errors


def run_big_case(big: Dict, compressor: Compressor = compress64) -> int:
    """Hash the repeated-block case; return 0 on success, 1 on mismatch."""
    print(f"-- Testing big string {big['repetitions']} times")
    result = digest_repeated_block(big["block"], big["repetitions"], compressor=compressor)
    print(format_digest(result))
    if not compare(result, big["digest"]):
        print("[FAIL] Answer not correct")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check SHA-256 against known vectors")
    parser.add_argument(
        "--vectors",
        type=str,
        default=DEFAULT_VECTORS,
        help="YAML vector file (default: data/known_vectors.yaml)",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=sorted(COMPRESSORS),
        default="loop",
        help="Compression loop implementation (default: loop)",
    )
    parser.add_argument(
        "--big",
        action="store_true",
        help="Also run the repeated-block case (slow in pure Python)",
    )
    args = parser.parse_args(argv)

    compressor = COMPRESSORS[args.strategy]
    cases, big = load_vectors(args.vectors)

    errors = run_known_cases(cases, compressor)
    if args.big and big:
        errors += run_big_case(big, compressor)

    if errors == 0:
        print("[OK] All known cases passed!")
    else:
        print(f"[FAIL] {errors} known cases failed")
    return errors


if __name__ == "__main__":
    raise SystemExit(main())
