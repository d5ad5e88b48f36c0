from __future__ import annotations

from cdcplot.config import ChunkerConfig
from cdcplot.render import chart_bars, chart_chunk_sizes
from cdcplot.series import build_bound_series, build_chunk_series

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_chunk_chart(tmp_path):
    config = ChunkerConfig(min_size=10, avg_size=20, max_size=30)
    series = {
        "fixed": build_chunk_series([20, 20, 20, 5]),
        "odd": build_chunk_series([12, 0, 29, 30, 1]),
    }
    output = tmp_path / "chunks.png"
    chart_chunk_sizes(series, config, output)
    assert output.read_bytes().startswith(PNG_MAGIC)


def test_chunk_chart_without_series(tmp_path):
    output = tmp_path / "empty.png"
    chart_chunk_sizes({}, ChunkerConfig(), output)
    assert output.exists()


def test_bar_chart(tmp_path):
    output = tmp_path / "bars.png"
    chart_bars(["JC", "FastCDC"], [1.5, 3.0], "Benchmark ns/op", "ns/op", output)
    assert output.read_bytes().startswith(PNG_MAGIC)


def record_bound_lengths(monkeypatch) -> list[int]:
    counts: list[int] = []

    def recording(value, count):
        counts.append(count)
        return build_bound_series(value, count)

    monkeypatch.setattr("cdcplot.render.build_bound_series", recording)
    return counts


def test_bound_lines_span_raw_length(tmp_path, monkeypatch):
    counts = record_bound_lengths(monkeypatch)
    lengths = [20, 20, 0]
    chart_chunk_sizes({"a": build_chunk_series(lengths)}, ChunkerConfig(10, 20, 30), tmp_path / "c.png", len(lengths))
    assert counts == [3, 3, 3]


def test_bound_lines_default_to_last_point(tmp_path, monkeypatch):
    counts = record_bound_lengths(monkeypatch)
    chart_chunk_sizes({"a": build_chunk_series([20, 20, 0])}, ChunkerConfig(10, 20, 30), tmp_path / "c.png")
    assert counts == [2, 2, 2]
