"""Errors raised while sampling chunkers."""

from __future__ import annotations


class CdcPlotError(Exception):
    pass


class UnknownAlgorithm(CdcPlotError):
    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unknown chunking algorithm {name!r}; known: {', '.join(known) or 'none'}")


class ChunkerInitError(CdcPlotError):
    pass


class ChunkBoundsViolation(CdcPlotError):
    def __init__(self, algorithm: str, index: int, length: int, min_size: int, max_size: int) -> None:
        self.algorithm = algorithm
        self.index = index
        self.length = length
        self.min_size = min_size
        self.max_size = max_size
        super().__init__(
            f"{algorithm}: chunk #{index} has length {length}, outside [{min_size}, {max_size}]"
        )
