#!/usr/bin/env python3
"""
Generate bar charts from chunker benchmark output.

Usage: go test -bench . | cdcplot-bench
"""

from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import TextIO

try:
    from cdcplot.benchmarks import parse_lines, records_frame
    from cdcplot.render import chart_bars
    from cdcplot.series import METRICS, build_benchmark_series
except ModuleNotFoundError as error:
    raise SystemExit(
        "Missing Python plotting dependencies. Install with: "
        "python3 -m pip install matplotlib pandas numpy"
    ) from error

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def lenient_stdin() -> TextIO:
    """stdin decoded as UTF-8, dropping undecodable bytes like the --input path does."""
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="ignore")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Plot ns/op, throughput and chunk counts from benchmark output.")
    parser.add_argument("--input", type=Path, default=None, help="Benchmark output file (default: stdin)")
    parser.add_argument("--output-dir", type=Path, default=Path("."), help="Directory for generated chart PNG files")
    parser.add_argument("--summary", type=Path, default=None, help="Write parsed records to this CSV")
    parser.add_argument("--verbose", action="store_true", help="Log progress")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format=LOG_FORMAT)
    logger = logging.getLogger("cdcplot.plot_benchmarks")

    if args.input is None:
        records = parse_lines(lenient_stdin())
    else:
        try:
            with args.input.open(encoding="utf-8", errors="ignore") as fh:
                records = parse_lines(fh)
        except OSError as error:
            raise SystemExit(f"Cannot read {args.input}: {error}") from error

    if not records:
        print("No valid benchmark lines found.")
        return
    logger.info("parsed %d benchmark records", len(records))

    args.output_dir.mkdir(parents=True, exist_ok=True)
    if args.summary is not None:
        try:
            args.summary.parent.mkdir(parents=True, exist_ok=True)
            records_frame(records).to_csv(args.summary, index=False)
        except (OSError, ValueError) as error:
            raise SystemExit(f"Failed to save {args.summary}: {error}") from error

    written = []
    for key, metric in METRICS.items():
        labels, values = build_benchmark_series(records, key)
        output_path = args.output_dir / metric.filename
        try:
            chart_bars(labels, values, metric.title, metric.ylabel, output_path)
        except (OSError, ValueError) as error:
            raise SystemExit(f"Failed to save {output_path}: {error}") from error
        written.append(metric.filename)

    print(f"Generated: {', '.join(written)}")


if __name__ == "__main__":
    main()
