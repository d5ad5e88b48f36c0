"""Input bytes for a chunking run: seeded random data or the contents of a file."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from cdcplot.config import DEFAULT_SEED


def random_input(size: int, seed: int = DEFAULT_SEED) -> bytes:
    if size < 0:
        raise ValueError(f"input size must not be negative, got {size}")
    return np.random.default_rng(seed).bytes(size)


def read_input(path: Path, size: int | None = None) -> bytes:
    with path.open("rb") as fh:
        return fh.read() if size is None else fh.read(size)
