#!/usr/bin/env python3
"""
Plot the chunk-size distribution of one or more CDC algorithms.

Every algorithm chunks the same input (seeded random bytes, or a file given
with --input); each chunk's length is plotted against its index together with
the configured min/avg/max lines.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

try:
    from cdcplot.chunkers import default_registry
    from cdcplot.config import (
        DEFAULT_AVG_SIZE,
        DEFAULT_INPUT_SIZE,
        DEFAULT_MAX_SIZE,
        DEFAULT_MIN_SIZE,
        DEFAULT_SEED,
        ChunkerConfig,
        default_output_path,
    )
    from cdcplot.errors import CdcPlotError
    from cdcplot.inputs import random_input, read_input
    from cdcplot.render import chart_chunk_sizes
    from cdcplot.sampler import sample_all
    from cdcplot.series import build_chunk_series, summarize_chunk_series
except ModuleNotFoundError as error:
    raise SystemExit(
        "Missing Python plotting dependencies. Install with: "
        "python3 -m pip install matplotlib pandas numpy"
    ) from error

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def parse_key(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"key must be hex: {error}") from error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plot chunk sizes produced by CDC algorithms.")
    parser.add_argument("algorithms", nargs="*", help="Algorithms to compare (default: all registered)")
    parser.add_argument("--size", type=int, default=None, help=f"Data size in bytes (default: {DEFAULT_INPUT_SIZE} for random input, whole file with --input)")
    parser.add_argument("--min", dest="min_size", type=int, default=DEFAULT_MIN_SIZE, help="Minimum chunk size in bytes")
    parser.add_argument("--avg", dest="avg_size", type=int, default=DEFAULT_AVG_SIZE, help="Average chunk size in bytes")
    parser.add_argument("--max", dest="max_size", type=int, default=DEFAULT_MAX_SIZE, help="Maximum chunk size in bytes")
    parser.add_argument("--key", type=parse_key, default=None, help="Hex keying material for keyed algorithms")
    parser.add_argument("--output", type=Path, default=None, help="Output PNG path (default: cdc-min<min>-avg<avg>-max<max>.png)")
    parser.add_argument("--input", type=Path, default=None, help="Chunk this file instead of random data")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Seed for random input")
    parser.add_argument("--jobs", type=int, default=1, help="Sample algorithms in this many processes")
    parser.add_argument("--summary", type=Path, default=None, help="Write per-algorithm statistics to this CSV")
    parser.add_argument("--list", action="store_true", help="List registered algorithms and exit")
    parser.add_argument("--verbose", action="store_true", help="Log progress")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format=LOG_FORMAT)

    registry = default_registry()
    if args.list:
        for name in registry.names():
            print(name)
        return

    config = ChunkerConfig(args.min_size, args.avg_size, args.max_size, args.key)
    algorithms = args.algorithms or registry.names()
    output_path = args.output or default_output_path(config)

    try:
        if args.input is not None:
            data = read_input(args.input, args.size)
        else:
            data = random_input(DEFAULT_INPUT_SIZE if args.size is None else args.size, args.seed)
    except (OSError, ValueError) as error:
        raise SystemExit(f"Cannot read input: {error}") from error

    try:
        samples = sample_all(data, algorithms, config, jobs=args.jobs)
    except CdcPlotError as error:
        raise SystemExit(f"Error generating chunks: {error}") from error

    for name, lengths in samples.items():
        print(f"{name}: {len(lengths)} chunks")

    if args.summary is not None:
        try:
            args.summary.parent.mkdir(parents=True, exist_ok=True)
            summarize_chunk_series(samples, config).to_csv(args.summary, index=False)
        except (OSError, ValueError) as error:
            raise SystemExit(f"Failed to save {args.summary}: {error}") from error
        print(f"Saved: {args.summary}")

    series = {name: build_chunk_series(lengths) for name, lengths in samples.items()}
    longest = max((len(lengths) for lengths in samples.values()), default=0)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        chart_chunk_sizes(series, config, output_path, longest)
    except (OSError, ValueError) as error:
        raise SystemExit(f"Failed to save plot: {error}") from error
    print(f"Saved: {output_path}")


if __name__ == "__main__":
    main()
