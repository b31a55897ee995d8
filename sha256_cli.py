"""Command-line front end for the SHA-256 digest.

Usage:
    python sha256_cli.py "message"
    python sha256_cli.py -f path/to/file
    python sha256_cli.py --strategy unrolled "message"
    python sha256_cli.py --trace "message"

Without `-f`, the argument is interpreted as a UTF-8 string and hashed. With
`-f`, the raw bytes of the named file are hashed. The lowercase hex digest is
printed to stdout. `--trace` also prints every block as it is fed to the
compression function.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Sequence

from compress import COMPRESSORS
from padding import BLOCK_BITS, BLOCK_BYTES, BLOCK_WORDS
from sha256 import digest, iter_blocks


def format_digest(words: Sequence[int]) -> str:
    """Return the lowercase hex form of a digest (8 big-endian words)."""
    return "".join(f"{w:08x}" for w in words)


def format_block(
    block: Sequence[int], bytes_used: int, exhausted: bool, length_bits: int
) -> List[str]:
    """Describe one block word by word.

    `exhausted` tells whether the message ran out while building this block.
    Lines are tagged `--` for words carrying message bytes or the `1` bit,
    `-z` for zero fill and `-#` for the two length words.
    """
    padded = exhausted and bytes_used < BLOCK_BYTES
    marker = padded and (bytes_used > 0 or length_bits % BLOCK_BITS == 0)
    data_words = -(-(bytes_used + int(marker)) // 4)
    has_length = padded and data_words <= BLOCK_WORDS - 2

    lines = []
    for i, word in enumerate(block):
        if i < data_words:
            tag = "--"
        elif has_length and i >= BLOCK_WORDS - 2:
            tag = "-#"
        else:
            tag = "-z"
        lines.append(f"{tag} {word:08x}")
    return lines


def _trace(data: bytes) -> None:
    length_bits = len(data) * 8
    remaining = len(data)
    for idx, (block, bytes_used) in enumerate(iter_blocks(data, len(data))):
        remaining -= bytes_used
        print(f"Block {idx} ({bytes_used} message bytes):")
        for line in format_block(block, bytes_used, remaining == 0, length_bits):
            print(f"  {line}")
    print(f"Message length: {length_bits} bits")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print the SHA-256 digest of a string or a file"
    )
    parser.add_argument(
        "message",
        nargs="?",
        help="Message to hash (UTF-8 encoded)",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="Hash the raw bytes of this file instead",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=sorted(COMPRESSORS),
        default="loop",
        help="Compression loop implementation (default: loop)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print every block before it is compressed",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if (args.file is None) == (args.message is None):
        parser.print_usage(sys.stderr)
        sys.stderr.write("error: give either a message or -f path/to/file\n")
        return 1

    if args.file is not None:
        try:
            with open(args.file, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
            return 1
    else:
        data = args.message.encode("utf-8")

    if args.trace:
        _trace(data)

    print(format_digest(digest(data, compressor=COMPRESSORS[args.strategy])))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
