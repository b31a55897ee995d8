"""Measure SHA-256 compression throughput on a repeated 64-byte block.

The block from the big known-answer case is folded into the hash state
`--reps` times, then the padding block is applied, once per strategy.

Usage:
    python bench.py                      # 4096 repetitions, both strategies
    python bench.py --reps 65536 --strategy unrolled
    python bench.py --full               # 2**24 repetitions, checks the known digest
    python bench.py --output data/bench.yaml
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from typing import Dict, List

import yaml

from compress import COMPRESSORS
from known_cases import DEFAULT_VECTORS, load_vectors
from padding import BLOCK_BYTES
from sha256 import compare, digest_repeated_block
from sha256_cli import format_digest


def run_benchmark(block: bytes, repetitions: int, strategy: str) -> Dict:
    """Hash `block` repeated `repetitions` times and time it."""
    compressor = COMPRESSORS[strategy]

    start_time = time.perf_counter()
    result = digest_repeated_block(block, repetitions, compressor=compressor)
    elapsed = time.perf_counter() - start_time

    blocks = repetitions + 1
    return {
        "strategy": strategy,
        "repetitions": repetitions,
        "blocks": blocks,
        "seconds": round(elapsed, 6),
        "blocks_per_second": round(blocks / elapsed, 1) if elapsed > 0 else None,
        "mib_per_second": round(repetitions * BLOCK_BYTES / elapsed / (1 << 20), 3) if elapsed > 0 else None,
        "digest_hex": format_digest(result),
        "_digest": result,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark SHA-256 compression on a repeated 64-byte block"
    )
    parser.add_argument(
        "--reps",
        type=int,
        default=4096,
        help="Number of times the block is repeated (default: 4096)",
    )
    parser.add_argument(
        "--full",
        action="store_true",
        help="Use the full repetition count from the vector file and check its digest",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=sorted(COMPRESSORS) + ["all"],
        default="all",
        help="Compression loop implementation to time (default: all)",
    )
    parser.add_argument(
        "--vectors",
        type=str,
        default=DEFAULT_VECTORS,
        help="YAML vector file providing the block (default: data/known_vectors.yaml)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the results to this YAML file",
    )
    args = parser.parse_args(argv)

    _, big = load_vectors(args.vectors)
    if not big:
        print(f"ERROR: No repeated-block case in {args.vectors}")
        return 1

    repetitions = big["repetitions"] if args.full else args.reps
    if repetitions < 0:
        print(f"ERROR: Repetitions must be non-negative (got {repetitions})")
        return 1

    strategies = sorted(COMPRESSORS) if args.strategy == "all" else [args.strategy]

    print(f"Block: {big['block'].decode('utf-8')}")
    print(f"Repetitions: {repetitions:,} ({repetitions * BLOCK_BYTES:,} bytes)")

    results: List[Dict] = []
    failures = 0
    for strategy in strategies:
        print(f"Processing with '{strategy}'...")
        entry = run_benchmark(big["block"], repetitions, strategy)
        result = entry.pop("_digest")

        if args.full:
            entry["matches_known"] = compare(result, big["digest"])
            if not entry["matches_known"]:
                failures += 1

        print(f"  {entry['digest_hex']}")
        print(f"  {entry['seconds']:.3f} s, {entry['blocks_per_second']} blocks/s, {entry['mib_per_second']} MiB/s")
        results.append(entry)

    if len({entry["digest_hex"] for entry in results}) > 1:
        sys.stderr.write("Strategies disagree on the digest\n")
        failures += 1

    if args.output:
        out_dir = os.path.dirname(args.output)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(args.output, "w") as f:
            yaml.dump({"benchmarks": results}, f, default_flow_style=False, sort_keys=False)
        print(f"Done! Saved {len(results)} results to {args.output}")

    if failures:
        sys.stderr.write(f"{failures} digest checks failed\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
