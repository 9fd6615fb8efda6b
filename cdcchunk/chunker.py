"""Exponential chunking driven by an external rolling hash."""

from __future__ import annotations

import math
from collections import Counter

_MASK32 = 0xFFFFFFFF


def _avg_len(target_len: int, min_len: int, max_len: int) -> float:
    if target_len <= 0:
        return float(min_len)
    z = (max_len - min_len) / target_len
    return min_len + target_len * (1.0 - math.exp(-z))


def get_target_len(avg_len: int, min_len: int, max_len: int) -> float:
    """Find by bisection the target length that gives average chunk length ``avg_len``."""
    x0, x1 = 0.0, float(1 << 32)
    while x1 - x0 > 0.5:
        x = (x0 + x1) / 2.0
        avg = min_len + x * (1.0 - math.exp(-((max_len - min_len) / x)))
        if avg < avg_len:
            x0 = x
        else:
            x1 = x
    return x0


class Chunker:
    """Decides chunk boundaries from hash values, giving exponentially distributed sizes.

    Sizes fall between ``min_len`` and ``max_len``; ``blocks`` counts each
    recorded ``(hash, length)`` pair.
    """

    def __init__(self, target_len: int, min_len: int, max_len: int) -> None:
        if min_len >= max_len:
            raise ValueError("min_len must be less than max_len")
        self.target_len = target_len
        self.min_len = min_len
        self.max_len = max_len
        self.avg_len = _avg_len(target_len, min_len, max_len)
        prob = math.floor((1 << 32) / target_len) if target_len > 0 else _MASK32
        self.prob = min(max(prob, 0), _MASK32)
        self.block_len = 0
        self.blocks: Counter[tuple[int, int]] = Counter()

    @classmethod
    def from_avg(cls, avg_len: int, min_len: int, max_len: int) -> Chunker:
        """Build a chunker whose average chunk length is ``avg_len``."""
        target_len = math.floor(get_target_len(avg_len, min_len, max_len) + 0.5)
        return cls(target_len, min_len, max_len)

    def is_block(self, r: int) -> bool:
        """Count one more byte and report whether hash ``r`` ends a chunk here."""
        self.block_len += 1
        return self.block_len >= self.min_len and (
            r < self.prob or self.block_len >= self.max_len
        )

    def add_block(self, h: int) -> None:
        """Record a finished chunk with hash ``h`` and start a new one."""
        self.blocks[(h, self.block_len)] += 1
        self.block_len = 0