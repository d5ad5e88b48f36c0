from __future__ import annotations

from typing import Iterable

import pytest

from cdcplot.chunkers import Chunker, ChunkerRegistry
from cdcplot.config import ChunkerConfig
from cdcplot.inputs import random_input


class FixedSizeChunker(Chunker):
    """Cuts every ``avg_size`` bytes; the remainder becomes the terminal chunk."""

    name = "fixed"

    def cut(self, start: int, limit: int) -> int:
        return min(start + self.config.avg_size, limit)


class ScriptedChunker:
    """Replays a fixed list of ``(chunk, end_of_stream)`` results."""

    def __init__(self, results: Iterable[tuple[bytes, bool]]) -> None:
        self._results = iter(results)

    def next_chunk(self) -> tuple[bytes, bool]:
        return next(self._results)


def scripted(*results: tuple[bytes, bool]) -> ChunkerRegistry:
    return ChunkerRegistry({"scripted": lambda data, config: ScriptedChunker(results)})


@pytest.fixture
def small_config() -> ChunkerConfig:
    return ChunkerConfig(min_size=64, avg_size=256, max_size=1024)


@pytest.fixture(scope="session")
def random_data() -> bytes:
    return random_input(200_000, seed=1)


@pytest.fixture
def fixed_registry() -> ChunkerRegistry:
    return ChunkerRegistry({FixedSizeChunker.name: FixedSizeChunker})
