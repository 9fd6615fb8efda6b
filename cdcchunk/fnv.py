"""Content-defined chunking with an FNV-1a hash.

The hash runs from the start of each chunk; a cut falls after the first
byte past the minimum size at which the low bits of the hash are all zero.
"""

from __future__ import annotations

import math

from .config import CDCConfig, Cutpointer, TargetSizeError

_FNV_PRIME = 16777619
_FNV_OFFSET_BASIS = 2166136261
_MASK32 = 0xFFFFFFFF
_ONE_GB = 1024 * 1024 * 1024


def default_fnvcdc_options() -> CDCConfig:
    """Return a fresh copy of the default sizes for this chunker."""
    return CDCConfig(min_size=2 * 1024, target_size=10 * 1024, max_size=64 * 1024)


def _zero_bits_for(cfg: CDCConfig) -> int:
    span = cfg.target_size - cfg.min_size
    if span <= 0:
        raise ValueError("target_size must be greater than min_size")
    # Round to nearest.
    return int(0.5 + math.log2(span))


class FNVCDC(Cutpointer):
    """FNV-1a based chunker."""

    name = "fnv1a-rolling-cdc"

    def __init__(self, opts: CDCConfig | None = None) -> None:
        self.opts = opts if opts is not None else default_fnvcdc_options()
        self.num_bits_zero_at_cut = _zero_bits_for(self.opts)

    def set_config(self, cfg: CDCConfig) -> None:
        """Replace the configuration and recompute the number of zero bits at a cut."""
        self.opts = cfg
        self.num_bits_zero_at_cut = _zero_bits_for(cfg)

    def validate(self, options: CDCConfig) -> None:
        """Raise TargetSizeError if the target size is out of range."""
        if options.target_size < 64 or options.target_size > _ONE_GB:
            raise TargetSizeError()

    def algorithm(self, options: CDCConfig, data: bytes, n: int) -> int:
        """Return the end of the first chunk in ``data[:n]``; never more than ``n``.

        Raises ValueError when ``n`` exceeds ``len(data)``.
        """
        self._require_n(data, n)
        min_size = options.min_size
        if n <= min_size:
            return n
        if n >= options.max_size:
            n = options.max_size

        mask = ((1 << self.num_bits_zero_at_cut) - 1) & _MASK32
        hash_ = _FNV_OFFSET_BASIS
        for i, byte in enumerate(bytes(data[:n])):
            hash_ = ((hash_ ^ byte) * _FNV_PRIME) & _MASK32
            if i >= min_size and not hash_ & mask:
                return i + 1
        return n

    def cutpoints(self, data: bytes, max_points: int) -> list[int]:
        """Return cumulative cut points over ``data``.

        When ``max_points`` is positive at most that many are returned;
        otherwise the last cut point is ``len(data)``.
        """
        cuts: list[int] = []
        offset = 0
        view = memoryview(data)
        while len(view) > 0:
            cut = self.algorithm(self.opts, view, len(view))
            offset += cut
            cuts.append(offset)
            view = view[cut:]
            if max_points > 0 and len(cuts) >= max_points:
                break
        return cuts