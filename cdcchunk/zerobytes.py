"""Scans for runs of zero bytes."""

from __future__ import annotations

from itertools import groupby

_ZERO_BLOCK = bytes(4096)


def all_zero(b: bytes | bytearray | memoryview) -> bool:
    """Return True if every byte in ``b`` is zero. Empty input counts as zero."""
    return not any(b)


def all_zero_fast(b: bytes | bytearray | memoryview) -> bool:
    """Return True if every byte in ``b`` is zero, comparing whole blocks at a time."""
    view = memoryview(b).cast("B")
    block = len(_ZERO_BLOCK)
    for offset in range(0, len(view), block):
        piece = view[offset:offset + block]
        if piece != _ZERO_BLOCK[:len(piece)]:
            return False
    return True


def longest_zero_span(b: bytes | bytearray | memoryview) -> tuple[int, int]:
    """Return ``(start, length)`` of the first longest run of zero bytes.

    Returns ``(0, 0)`` when there are no zero bytes.
    """
    best_start, best_len = 0, 0
    position = 0
    for value, run in groupby(bytes(b)):
        length = sum(1 for _ in run)
        if value == 0 and length > best_len:
            best_start, best_len = position, length
        position += length
    return best_start, best_len


def longest_zero_span_chunked(b: bytes | bytearray | memoryview) -> tuple[int, int]:
    """Same result as :func:`longest_zero_span`, extending zero runs in blocks."""
    data = bytes(b)
    n = len(data)
    best_start, best_len = 0, 0
    i = 0
    while i < n:
        start = data.find(0, i)
        if start < 0:
            break
        end = start
        while end < n:
            remaining = n - end
            size = 64 if remaining >= 64 else 16 if remaining >= 16 else 1
            chunk = data[end:end + size]
            if all_zero_fast(chunk):
                end += size
                continue
            end += len(chunk) - len(chunk.lstrip(b"\x00"))
            break
        length = end - start
        if length > best_len:
            best_start, best_len = start, length
        i = end + 1
    return best_start, best_len