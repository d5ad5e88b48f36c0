"""Sample and chart the chunk-size behaviour of content-defined chunking algorithms."""

from cdcplot.benchmarks import BenchmarkRecord, parse_line, parse_lines
from cdcplot.chunkers import Chunker, ChunkerRegistry, default_registry
from cdcplot.config import ChunkerConfig
from cdcplot.errors import CdcPlotError, ChunkBoundsViolation, ChunkerInitError, UnknownAlgorithm
from cdcplot.sampler import sample, sample_all
from cdcplot.series import PlotSeries, build_benchmark_series, build_chunk_series

__all__ = [
    "BenchmarkRecord",
    "CdcPlotError",
    "ChunkBoundsViolation",
    "Chunker",
    "ChunkerConfig",
    "ChunkerInitError",
    "ChunkerRegistry",
    "PlotSeries",
    "UnknownAlgorithm",
    "build_benchmark_series",
    "build_chunk_series",
    "default_registry",
    "parse_line",
    "parse_lines",
    "sample",
    "sample_all",
]
