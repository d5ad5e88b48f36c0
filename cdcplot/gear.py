"""
Gear rolling-hash fingerprints computed with numpy.

A gear fingerprint at position ``i`` is ``sum(table[data[i - j]] << j)`` over
the last 64 bytes, modulo 2**64. Older bytes are shifted out, so the value
depends only on the trailing window and can be computed for every position at
once instead of byte by byte.
"""

from __future__ import annotations

import hashlib
from typing import Callable, Sequence

import numpy as np

WINDOW = 64
GEAR_SEED = 0x6765617254424C  # fixed so every run sees the same table
BLOCK_SIZE = 4 * 1024 * 1024

Predicate = Callable[[np.ndarray], np.ndarray]


def gear_table(key: bytes | None = None) -> np.ndarray:
    if key:
        seed = int.from_bytes(hashlib.blake2b(key, digest_size=16).digest(), "big")
    else:
        seed = GEAR_SEED
    rng = np.random.default_rng(seed)
    return rng.integers(0, np.iinfo(np.uint64).max, size=256, dtype=np.uint64, endpoint=True)


def fingerprints(data: bytes, table: np.ndarray) -> np.ndarray:
    values = table[np.frombuffer(data, dtype=np.uint8)]
    hashes = values.copy()
    for shift in range(1, min(WINDOW, len(values))):
        hashes[shift:] += values[:-shift] << np.uint64(shift)
    return hashes


def top_bits_mask(bits: int) -> np.uint64:
    bits = min(max(bits, 1), 63)
    return np.uint64(((1 << bits) - 1) << (64 - bits))


def boundary_positions(
    data: bytes,
    table: np.ndarray,
    predicates: Sequence[Predicate],
    block_size: int = BLOCK_SIZE,
) -> list[np.ndarray]:
    """Return, per predicate, the sorted byte offsets whose fingerprint satisfies it.

    The input is hashed in blocks, each prefixed with the previous block's
    last ``WINDOW - 1`` bytes so fingerprints match a single full pass.
    """
    found: list[list[np.ndarray]] = [[] for _ in predicates]
    for start in range(0, len(data), block_size):
        context = min(start, WINDOW - 1)
        hashes = fingerprints(data[start - context:start + block_size], table)[context:]
        for collected, predicate in zip(found, predicates):
            collected.append(np.flatnonzero(predicate(hashes)) + start)
    return [
        np.concatenate(parts) if parts else np.empty(0, dtype=np.int64)
        for parts in found
    ]


def first_in(positions: np.ndarray, lo: int, hi: int) -> int | None:
    index = int(np.searchsorted(positions, lo, side="left"))
    if index < len(positions) and positions[index] < hi:
        return int(positions[index])
    return None


def last_in(positions: np.ndarray, lo: int, hi: int) -> int | None:
    index = int(np.searchsorted(positions, hi, side="left")) - 1
    if index >= 0 and positions[index] >= lo:
        return int(positions[index])
    return None
