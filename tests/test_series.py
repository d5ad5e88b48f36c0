from __future__ import annotations

import math

import numpy as np
import pytest

from cdcplot.benchmarks import BenchmarkRecord
from cdcplot.config import ChunkerConfig
from cdcplot.series import (
    METRICS,
    build_benchmark_series,
    build_bound_series,
    build_chunk_series,
    summarize_chunk_series,
)


class TestChunkSeries:
    def test_drops_zeros_and_keeps_positions(self):
        series = build_chunk_series([5, 0, 7, 0, 0, 9])
        assert series.points() == [(0, 5), (2, 7), (5, 9)]

    def test_indices_strictly_increase(self):
        lengths = [0, 3, 3, 0, 1, 0, 8, 8, 0]
        series = build_chunk_series(lengths)
        assert np.all(np.diff(series.x) > 0)
        assert 0 not in series.y.tolist()
        assert [lengths[i] for i in series.x] == series.y.tolist()

    def test_empty(self):
        assert len(build_chunk_series([])) == 0
        assert len(build_chunk_series([0, 0])) == 0

    def test_does_not_touch_input(self):
        lengths = [1, 0, 2]
        build_chunk_series(lengths)
        assert lengths == [1, 0, 2]

    def test_bound_series(self):
        assert build_bound_series(64, 3).points() == [(0, 64), (1, 64), (2, 64)]
        assert len(build_bound_series(64, 0)) == 0


def record(name: str, ns: float, mbs: float, chunks: float) -> BenchmarkRecord:
    return BenchmarkRecord(name=name, ns_per_op=ns, throughput=mbs, chunks=chunks)


RECORDS = [
    record("FastCDC-14", 300, 900.5, 12),
    record("UltraCDC-14", 100, 1200.0, 15),
    record("JC-14", 300, 800.0, 12),
    record("RollSum-14", 200, 950.0, 9),
]


class TestBenchmarkSeries:
    def test_latency(self):
        labels, values = build_benchmark_series(RECORDS, "latency")
        assert labels == ["UltraCDC", "RollSum", "FastCDC", "JC"]
        assert values == [100.0, 200.0, 300.0, 300.0]

    def test_throughput(self):
        labels, values = build_benchmark_series(RECORDS, "throughput")
        assert labels == ["JC", "FastCDC", "RollSum", "UltraCDC"]
        assert values == [800.0, 900.5, 950.0, 1200.0]

    def test_chunk_count_ties_keep_input_order(self):
        labels, values = build_benchmark_series(RECORDS, "chunk_count")
        assert labels == ["RollSum", "FastCDC", "JC", "UltraCDC"]
        assert values == [9.0, 12.0, 12.0, 15.0]

    @pytest.mark.parametrize("metric", list(METRICS))
    def test_sorted_permutation(self, metric):
        column = METRICS[metric].column
        labels, values = build_benchmark_series(RECORDS, metric)
        assert values == sorted(values)
        assert sorted(values) == sorted(float(getattr(r, column)) for r in RECORDS)
        assert len(labels) == len(RECORDS)

    def test_label_stripping_leaves_records_alone(self):
        build_benchmark_series(RECORDS, "latency")
        assert RECORDS[0].name == "FastCDC-14"

    def test_suffix_does_not_affect_order(self):
        records = [record("B-2", 5, 1, 1), record("A-10", 5, 1, 1), record("C-1", 1, 1, 1)]
        labels, _ = build_benchmark_series(records, "latency")
        assert labels == ["C", "B", "A"]

    def test_empty(self):
        assert build_benchmark_series([], "throughput") == ([], [])

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            build_benchmark_series(RECORDS, "memory")


def test_summarize_chunk_series():
    config = ChunkerConfig(min_size=10, avg_size=20, max_size=30)
    summary = summarize_chunk_series({"a": [10, 30, 20, 0], "b": []}, config)
    assert summary["algorithm"].tolist() == ["a", "b"]
    a = summary.iloc[0]
    assert a["chunks"] == 3
    assert a["total_bytes"] == 60
    assert a["mean"] == 20.0
    assert a["min"] == 10.0
    assert a["max"] == 30.0
    assert a["at_max_share"] == pytest.approx(1 / 3)
    b = summary.iloc[1]
    assert b["chunks"] == 0
    assert math.isnan(b["mean"])
