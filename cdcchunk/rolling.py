"""Rolling hashes for content-defined chunking."""

from __future__ import annotations

from collections import deque

from .fastcdc_plakar import GEAR_TABLE

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1

_FNV_PRIME = 16777619
_FNV_OFFSET_BASIS = 2166136261


def _check_byte(b: int) -> int:
    if not 0 <= b <= 255:
        raise ValueError(f"byte value out of range: {b}")
    return b


def _check_window(window_size: int) -> int:
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")
    return window_size


class RollingHash:
    """A 32-bit linear congruential sequence."""

    def __init__(self, seed: int) -> None:
        self.value = seed & _MASK32
        self.a = 1664525
        self.c = 1013904223
        self.m = _MASK32

    def next(self) -> int:
        """Advance one step and return the new value."""
        self.value = (self.a * self.value + self.c) & self.m
        return self.value

    def skip(self, n: int) -> int:
        """Jump the state ahead by ``n`` positions and return the new value.

        Uses 32-bit arithmetic throughout, including the division in the
        closed form of the increment sum.
        """
        a, c, m = self.a, self.c, self.m
        an = pow(a, n, 1 << 32) & m if n > 0 else 1
        increment = (c * (((an - 1) & _MASK32) // (a - 1))) & _MASK32
        self.value = (((an * self.value) & m) + increment) & m
        return self.value


class RabinKarp:
    """Windowed polynomial rolling hash, 64 bits wide."""

    prime = 16777619

    def __init__(self, window_size: int) -> None:
        self.size = _check_window(window_size)
        self.window: deque[int] = deque()
        self.hash = 0
        self.pow = pow(self.prime, window_size - 1, 1 << 64)

    def roll(self, b: int) -> int:
        """Push byte ``b`` into the window, dropping the oldest when full."""
        _check_byte(b)
        if len(self.window) == self.size:
            oldest = self.window.popleft()
            self.hash = (self.hash - oldest * self.pow) & _MASK64
        self.hash = (self.hash * self.prime + b) & _MASK64
        self.window.append(b)
        return self.hash


class GearHash:
    """Gear hash as used by FastCDC, with the fixed gear table."""

    def __init__(self, window_size: int) -> None:
        self.size = _check_window(window_size)
        self.window: deque[int] = deque(maxlen=window_size)
        self.hash = 0
        # The table must stay fixed so both ends of a sync agree on cuts.
        self.table: tuple[int, ...] = GEAR_TABLE

    def roll(self, b: int) -> int:
        """Shift in byte ``b`` and return the new hash."""
        _check_byte(b)
        self.window.append(b)
        self.hash = ((self.hash << 1) + self.table[b]) & _MASK64
        return self.hash


class Buzhash:
    """Cyclic-polynomial (buzhash) rolling hash, 32 bits wide.

    The default table is all zeros; assign ``table`` to use another.
    """

    def __init__(self, window_size: int) -> None:
        self.size = _check_window(window_size)
        self.window: deque[int] = deque()
        self.hash = 0
        self.table: tuple[int, ...] = (0,) * 256

    def roll(self, b: int) -> int:
        """Push byte ``b`` into the window and return the new hash.

        Until the window is full the hash is just the table entry of ``b``.
        """
        _check_byte(b)
        h = 0
        if len(self.window) == self.size:
            oldest = self.window.popleft()
            h = self.hash
            h = ((h << 1) | (h >> 31)) & _MASK32
            h ^= self.table[oldest]
        self.window.append(b)
        h ^= self.table[b]
        self.hash = h & _MASK32
        return self.hash


class FNVRollingHash:
    """Running FNV-1a hash, 32 bits wide."""

    def __init__(self) -> None:
        self.hash = _FNV_OFFSET_BASIS

    def update(self, b: int) -> int:
        """Mix in byte ``b`` and return the new hash."""
        _check_byte(b)
        self.hash = ((self.hash ^ b) * _FNV_PRIME) & _MASK32
        return self.hash

    def reset(self) -> None:
        """Return to the initial state."""
        self.hash = _FNV_OFFSET_BASIS

    def current(self) -> int:
        """Return the current hash."""
        return self.hash