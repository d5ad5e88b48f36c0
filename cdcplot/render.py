"""matplotlib charts for chunk-size distributions and benchmark results."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from cdcplot.config import ChunkerConfig  # noqa: E402
from cdcplot.series import PlotSeries, build_bound_series  # noqa: E402

BOUND_COLORS = {"min": "#ff0000", "max": "#ff0000", "avg": "#00ff00"}
BAR_COLOR = "#0080ff"
POINT_SIZE = 0.5


def chart_chunk_sizes(
    series_by_algorithm: Mapping[str, PlotSeries],
    config: ChunkerConfig,
    output_path: Path,
    raw_length: int | None = None,
) -> None:
    """Scatter every series with min/avg/max lines spanning ``raw_length`` points.

    ``raw_length`` is the longest unfiltered length sequence; dropped zero
    entries still count towards it. Without it the span ends at the last
    plotted index.
    """
    palette = matplotlib.colormaps["tab10"]
    fig, axis = plt.subplots(figsize=(6, 4))

    longest = 0
    for index, (algorithm, series) in enumerate(series_by_algorithm.items()):
        if len(series):
            longest = max(longest, int(series.x[-1]) + 1)
        axis.scatter(
            series.x,
            series.y,
            s=POINT_SIZE,
            color=palette(index % palette.N),
            label=algorithm,
            rasterized=True,
        )

    if raw_length is not None:
        longest = max(longest, raw_length)
    bounds = {"min": config.min_size, "max": config.max_size, "avg": config.avg_size}
    for name, value in bounds.items():
        line = build_bound_series(value, longest)
        axis.plot(line.x, line.y, color=BOUND_COLORS[name], linewidth=0.6 if name == "avg" else 0.8)

    axis.set_title(config.describe())
    axis.set_xlabel("Index")
    axis.set_ylabel("Size")
    axis.grid(alpha=0.25)
    if series_by_algorithm:
        axis.legend(loc="upper right", markerscale=8, fontsize=7, borderpad=0.3)
    fig.tight_layout()
    fig.savefig(output_path, dpi=180)
    plt.close(fig)


def chart_bars(
    labels: Sequence[str],
    values: Sequence[float],
    title: str,
    ylabel: str,
    output_path: Path,
) -> None:
    fig, axis = plt.subplots(figsize=(16, 6))
    positions = range(len(values))
    axis.bar(positions, values, width=0.6, color=BAR_COLOR, linewidth=0)
    axis.set_xticks(list(positions), list(labels), rotation=45, ha="right", fontsize=8)
    axis.set_title(title)
    axis.set_ylabel(ylabel)
    axis.grid(axis="y", alpha=0.25)
    fig.tight_layout()
    fig.savefig(output_path, dpi=180)
    plt.close(fig)
