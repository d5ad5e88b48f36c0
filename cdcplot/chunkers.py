"""
Built-in content-defined chunkers and the registry that names them.

Every chunker hands out consecutive slices of its input through
``next_chunk()``, which returns ``(chunk, end_of_stream)``. The chunk that
reaches the end of the input is the one flagged ``end_of_stream``; asking
again after that returns ``(b"", True)``.
"""

from __future__ import annotations

import math
from typing import Callable, Iterator

import numpy as np

from cdcplot.config import ChunkerConfig
from cdcplot.errors import ChunkerInitError, UnknownAlgorithm
from cdcplot.gear import boundary_positions, first_in, gear_table, last_in, top_bits_mask

NORMALIZATION_LEVEL = 2


class Chunker:
    name = "chunker"

    def __init__(self, data: bytes, config: ChunkerConfig) -> None:
        check_bounds(config)
        if config.key is not None and not isinstance(config.key, (bytes, bytearray)):
            raise ChunkerInitError(f"{self.name}: key must be bytes, got {type(config.key).__name__}")
        self.data = bytes(data)
        self.config = config
        self._offset = 0
        self._finished = False

    @property
    def min_size(self) -> int:
        return self.config.min_size

    @property
    def max_size(self) -> int:
        return self.config.max_size

    def next_chunk(self) -> tuple[bytes, bool]:
        if self._finished or self._offset >= len(self.data):
            self._finished = True
            return b"", True
        start = self._offset
        if len(self.data) - start <= self.min_size:
            end = len(self.data)
        else:
            end = self.cut(start, min(len(self.data), start + self.max_size))
        self._offset = end
        self._finished = end >= len(self.data)
        return self.data[start:end], self._finished

    def __iter__(self) -> Iterator[bytes]:
        while not self._finished:
            chunk, _ = self.next_chunk()
            if chunk:
                yield chunk

    def cut(self, start: int, limit: int) -> int:
        """Return the end offset of the chunk starting at ``start``; never past ``limit``."""
        raise NotImplementedError


def check_bounds(config: ChunkerConfig) -> None:
    lo, avg, hi = config.min_size, config.avg_size, config.max_size
    if not all(isinstance(v, int) for v in (lo, avg, hi)):
        raise ChunkerInitError(f"chunk sizes must be integers ({config.describe()})")
    if lo <= 0:
        raise ChunkerInitError(f"min size must be positive ({config.describe()})")
    if not lo <= avg <= hi:
        raise ChunkerInitError(f"expected min <= avg <= max ({config.describe()})")
    if lo == hi:
        raise ChunkerInitError(f"min and max must differ ({config.describe()})")


def _first_end(positions: np.ndarray, lo: int, hi: int) -> int | None:
    # positions are offsets of the last byte in a chunk; ends are one past them
    found = first_in(positions, lo - 1, hi - 1)
    return None if found is None else found + 1


def _last_end(positions: np.ndarray, lo: int, hi: int) -> int | None:
    found = last_in(positions, lo - 1, hi - 1)
    return None if found is None else found + 1


class FastCDC(Chunker):
    """Gear hash with normalized chunking.

    Between ``min`` and ``avg`` a boundary needs a mask with more bits set
    than the average size implies, past ``avg`` it needs fewer, which pulls
    chunk lengths towards the average.
    """

    name = "fastcdc"

    def __init__(self, data: bytes, config: ChunkerConfig) -> None:
        super().__init__(data, config)
        bits = max(1, round(math.log2(config.avg_size)))
        self.mask_small = top_bits_mask(bits + NORMALIZATION_LEVEL)
        self.mask_large = top_bits_mask(bits - NORMALIZATION_LEVEL)
        self.small_cuts, self.large_cuts = boundary_positions(
            self.data,
            self.table(),
            [
                lambda h: (h & self.mask_small) == 0,
                lambda h: (h & self.mask_large) == 0,
            ],
        )

    def table(self) -> np.ndarray:
        return gear_table()

    def cut(self, start: int, limit: int) -> int:
        barrier = min(limit, start + self.config.avg_size)
        end = _first_end(self.small_cuts, start + self.min_size, barrier)
        if end is None:
            end = _first_end(self.large_cuts, barrier, limit)
        return limit if end is None else end


class KeyedFastCDC(FastCDC):
    name = "keyed-fastcdc"

    def table(self) -> np.ndarray:
        return gear_table(self.config.key)


class RollsumChunker(Chunker):
    """Exponential chunker: any position past ``min`` is a boundary with probability 1/(avg - min)."""

    name = "rollsum"

    def __init__(self, data: bytes, config: ChunkerConfig) -> None:
        super().__init__(data, config)
        self.threshold = np.uint64(2**32 // max(1, config.avg_size - config.min_size))
        (self.cuts,) = boundary_positions(
            self.data,
            gear_table(),
            [lambda h: (h >> np.uint64(32)) < self.threshold],
        )

    def cut(self, start: int, limit: int) -> int:
        end = _first_end(self.cuts, start + self.min_size, limit)
        return limit if end is None else end


class TTTDChunker(Chunker):
    """Two-threshold two-divisor chunker.

    A backup divisor half the size of the main one records fallback
    boundaries; when the main divisor finds nothing before ``max`` the last
    backup boundary is used instead of a hard cut.
    """

    name = "tttd"

    def __init__(self, data: bytes, config: ChunkerConfig) -> None:
        super().__init__(data, config)
        self.main_divisor = max(1, config.avg_size - config.min_size)
        self.backup_divisor = max(1, self.main_divisor // 2)
        main = np.uint64(self.main_divisor)
        backup = np.uint64(self.backup_divisor)
        self.main_cuts, self.backup_cuts = boundary_positions(
            self.data,
            gear_table(),
            [
                lambda h: (h >> np.uint64(32)) % main == main - np.uint64(1),
                lambda h: (h >> np.uint64(32)) % backup == backup - np.uint64(1),
            ],
        )

    def cut(self, start: int, limit: int) -> int:
        lo = start + self.min_size
        end = _first_end(self.main_cuts, lo, limit)
        if end is not None:
            return end
        if limit == len(self.data):
            return limit
        end = _last_end(self.backup_cuts, lo, limit)
        return limit if end is None else end


ChunkerFactory = Callable[[bytes, ChunkerConfig], Chunker]


class ChunkerRegistry:
    """Explicit name -> factory mapping for chunking algorithms."""

    def __init__(self, factories: dict[str, ChunkerFactory] | None = None) -> None:
        self._factories: dict[str, ChunkerFactory] = dict(factories or {})

    def register(self, name: str, factory: ChunkerFactory) -> None:
        if name in self._factories:
            raise ValueError(f"algorithm {name!r} is already registered")
        self._factories[name] = factory

    def names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def resolve(self, name: str) -> ChunkerFactory:
        try:
            return self._factories[name]
        except KeyError:
            raise UnknownAlgorithm(name, self.names()) from None

    def create(self, name: str, data: bytes, config: ChunkerConfig) -> Chunker:
        factory = self.resolve(name)
        try:
            return factory(data, config)
        except ChunkerInitError:
            raise
        except ValueError as error:
            raise ChunkerInitError(f"{name}: {error}") from error


def default_registry() -> ChunkerRegistry:
    return ChunkerRegistry(
        {
            FastCDC.name: FastCDC,
            KeyedFastCDC.name: KeyedFastCDC,
            RollsumChunker.name: RollsumChunker,
            TTTDChunker.name: TTTDChunker,
        }
    )
