"""
Parse ``go test -bench`` style chunker benchmark lines.

A line looks like::

    Benchmark_FastCDC-14   1000   345 ns/op   120.5 MB/s   83 chunks

The iteration count is discarded; the ``ns/op`` unit is optional.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Iterable

import pandas as pd

LINE_RE = re.compile(
    r"^Benchmark_(?P<name>\S+)\s+\d+\s+"
    r"(?P<ns_per_op>\d+)(?:\s+ns/op)?\s+"
    r"(?P<throughput>[\d.]+)\s+MB/s\s+"
    r"(?P<chunks>\d+)\s+chunks"
)
RUN_COUNT_SUFFIX_RE = re.compile(r"-\d+$")

COLUMNS = ["name", "label", "ns_per_op", "throughput", "chunks"]


@dataclass(frozen=True)
class BenchmarkRecord:
    name: str
    ns_per_op: float
    throughput: float
    chunks: float


def parse_line(line: str) -> BenchmarkRecord | None:
    match = LINE_RE.match(line.strip())
    if not match:
        return None
    try:
        return BenchmarkRecord(
            name=match.group("name"),
            ns_per_op=float(match.group("ns_per_op")),
            throughput=float(match.group("throughput")),
            chunks=float(match.group("chunks")),
        )
    except ValueError:
        # "1.2.3 MB/s" matches the shape but is not a number
        return None


def parse_lines(lines: Iterable[str]) -> list[BenchmarkRecord]:
    records: list[BenchmarkRecord] = []
    for line in lines:
        record = parse_line(line)
        if record is not None:
            records.append(record)
    return records


def display_label(name: str) -> str:
    """Drop the ``-<GOMAXPROCS>`` suffix the benchmark harness appends."""
    return RUN_COUNT_SUFFIX_RE.sub("", name)


def records_frame(records: Iterable[BenchmarkRecord]) -> pd.DataFrame:
    rows = [{**asdict(record), "label": display_label(record.name)} for record in records]
    return pd.DataFrame(rows, columns=COLUMNS)
