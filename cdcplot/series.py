"""Turn chunk lengths and benchmark records into the series the charts draw."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np
import pandas as pd

from cdcplot.benchmarks import BenchmarkRecord, records_frame
from cdcplot.config import ChunkerConfig


@dataclass(frozen=True)
class PlotSeries:
    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return len(self.x)

    def points(self) -> list[tuple[int, int]]:
        return [(int(x), int(y)) for x, y in zip(self.x, self.y)]


@dataclass(frozen=True)
class Metric:
    column: str
    title: str
    ylabel: str
    filename: str


METRICS: dict[str, Metric] = {
    "latency": Metric("ns_per_op", "Benchmark ns/op", "ns/op", "ns_per_op.png"),
    "throughput": Metric("throughput", "Benchmark Throughput", "MB/s", "throughput.png"),
    "chunk_count": Metric("chunks", "Benchmark Chunk Count", "Chunks", "chunks.png"),
}


def build_chunk_series(lengths: Sequence[int]) -> PlotSeries:
    """Drop zero-length entries; x keeps each survivor's position in the raw sequence."""
    values = np.asarray(lengths, dtype=np.int64)
    index = np.flatnonzero(values)
    return PlotSeries(x=index, y=values[index])


def build_bound_series(value: int, count: int) -> PlotSeries:
    return build_chunk_series([value] * count)


def build_benchmark_series(
    records: Sequence[BenchmarkRecord], metric: str
) -> tuple[list[str], list[float]]:
    try:
        column = METRICS[metric].column
    except KeyError:
        raise ValueError(f"Unknown metric {metric!r}; expected one of {', '.join(METRICS)}") from None
    frame = records_frame(records).sort_values(column, kind="stable")
    return frame["label"].tolist(), frame[column].astype(float).tolist()


def summarize_chunk_series(
    series_by_algorithm: Mapping[str, Sequence[int]], config: ChunkerConfig
) -> pd.DataFrame:
    rows = []
    for algorithm, lengths in series_by_algorithm.items():
        sizes = pd.Series([n for n in lengths if n], dtype=float)
        rows.append(
            {
                "algorithm": algorithm,
                "chunks": len(sizes),
                "total_bytes": int(sizes.sum()),
                "mean": sizes.mean(),
                "median": sizes.median(),
                "std": sizes.std(ddof=0),
                "min": sizes.min(),
                "max": sizes.max(),
                "at_max_share": float((sizes == config.max_size).mean()) if len(sizes) else float("nan"),
            }
        )
    return pd.DataFrame(
        rows,
        columns=["algorithm", "chunks", "total_bytes", "mean", "median", "std", "min", "max", "at_max_share"],
    )
