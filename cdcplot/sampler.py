"""Drive a chunker over an input and record the length of every chunk it emits."""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Sequence

from cdcplot.chunkers import ChunkerRegistry, default_registry
from cdcplot.config import ChunkerConfig
from cdcplot.errors import ChunkBoundsViolation

logger = logging.getLogger(__name__)


def sample(
    data: bytes,
    algorithm: str,
    config: ChunkerConfig,
    registry: ChunkerRegistry | None = None,
) -> list[int]:
    """
    Return the chunk lengths ``algorithm`` produces for ``data``, in stream order.

    Every chunk must fit ``[min, max]`` except the one flagged end-of-stream,
    which may be shorter than ``min``. Any violation raises
    ``ChunkBoundsViolation``: the algorithm is broken, not the input.
    """
    registry = registry or default_registry()
    chunker = registry.create(algorithm, data, config)
    if not data:
        return []

    lengths: list[int] = []
    while True:
        chunk, end_of_stream = chunker.next_chunk()
        length = len(chunk)
        too_short = length < config.min_size and not end_of_stream
        if too_short or length > config.max_size:
            raise ChunkBoundsViolation(algorithm, len(lengths), length, config.min_size, config.max_size)
        lengths.append(length)
        if end_of_stream:
            break

    logger.info("%s: %d chunks over %d bytes", algorithm, len(lengths), len(data))
    return lengths


def _sample_default(data: bytes, algorithm: str, config: ChunkerConfig) -> list[int]:
    return sample(data, algorithm, config)


def sample_all(
    data: bytes,
    algorithms: Sequence[str],
    config: ChunkerConfig,
    registry: ChunkerRegistry | None = None,
    jobs: int = 1,
) -> dict[str, list[int]]:
    """Sample each algorithm independently; results keep the requested order.

    With ``jobs > 1`` the runs fan out over a process pool. Only the default
    registry can be shipped to worker processes, so a custom registry always
    runs inline.
    """
    if jobs <= 1 or registry is not None or len(algorithms) <= 1:
        return {name: sample(data, name, config, registry) for name in algorithms}

    # resolve up front so an unknown name fails before any work starts
    default = default_registry()
    for name in algorithms:
        default.resolve(name)

    with ProcessPoolExecutor(max_workers=min(jobs, len(algorithms))) as pool:
        futures = {name: pool.submit(_sample_default, data, name, config) for name in algorithms}
        return {name: futures[name].result() for name in algorithms}
