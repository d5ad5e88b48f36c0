"""Chunker size bounds and the defaults the command-line tools start from."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

KIB = 1024
MIB = 1024 * KIB

DEFAULT_MIN_SIZE = 2 * KIB
DEFAULT_AVG_SIZE = 8 * KIB
DEFAULT_MAX_SIZE = 64 * KIB
DEFAULT_INPUT_SIZE = 64 * MIB
DEFAULT_SEED = 0


@dataclass(frozen=True)
class ChunkerConfig:
    min_size: int = DEFAULT_MIN_SIZE
    avg_size: int = DEFAULT_AVG_SIZE
    max_size: int = DEFAULT_MAX_SIZE
    key: bytes | None = None

    def describe(self) -> str:
        return f"min={self.min_size}, avg={self.avg_size}, max={self.max_size}"


def default_output_path(config: ChunkerConfig) -> Path:
    """Same bounds always map to the same file, so reruns overwrite it."""
    return Path(f"cdc-min{config.min_size}-avg{config.avg_size}-max{config.max_size}.png")
