"""UltraCDC content-defined chunking.

Cut points come from the Hamming distance between a sliding 8-byte window
and the pattern ``0xAA`` repeated, with a separate cut for long runs of
repeated 8-byte blocks (low-entropy data).
"""

from __future__ import annotations

from .config import CDCConfig, Cutpointer, validate_sizes

# Mask used before the target (normal) size is reached.
_MASK_S = 0x2F  # 0b101111
# Mask used after the target size: two fewer bits, so easier to match.
_MASK_L = 0x2C  # 0b101100
# Number of identical consecutive 8-byte windows that forces a cut.
_LOW_ENTROPY_THRESHOLD = 64
_PATTERN = 0xAA
_WINDOW = 8

HAMMING_DISTANCE_TO_0XAA: tuple[int, ...] = tuple(
    bin(value ^ _PATTERN).count("1") for value in range(256)
)


def default_ultracdc_options() -> CDCConfig:
    """Return a fresh copy of the default UltraCDC sizes."""
    return CDCConfig(min_size=2 * 1024, target_size=10 * 1024, max_size=64 * 1024)


def _find_cut(buf: bytes, min_size: int, normal: int, end: int) -> int:
    """Scan ``buf`` from ``min_size`` and return the first cut point, or ``end``."""
    table = HAMMING_DISTANCE_TO_0XAA
    out_win = buf[min_size:min_size + _WINDOW]
    dist = sum(table[value] for value in out_win)
    mask = _MASK_S
    low_entropy = 0

    for i in range(min_size + _WINDOW, end - _WINDOW + 1, _WINDOW):
        if i >= normal:
            mask = _MASK_L
        in_win = buf[i:i + _WINDOW]
        if in_win == out_win:
            low_entropy += 1
            if low_entropy >= _LOW_ENTROPY_THRESHOLD:
                return i + _WINDOW
            continue
        low_entropy = 0
        for j, (in_byte, out_byte) in enumerate(zip(in_win, out_win)):
            if not dist & mask:
                return i + j
            dist += table[in_byte] - table[out_byte]
        out_win = in_win
    return end


class UltraCDC(Cutpointer):
    """UltraCDC chunker."""

    name = "ultracdc"

    def __init__(self, opts: CDCConfig | None = None) -> None:
        self.opts = opts if opts is not None else default_ultracdc_options()

    def validate(self, options: CDCConfig) -> None:
        """Raise a CDCConfigError subclass if ``options`` is out of range."""
        validate_sizes(options)

    def algorithm(self, options: CDCConfig, data: bytes, n: int) -> int:
        """Return the end of the first chunk in ``data[:n]``; never more than ``n``."""
        self._require_n(data, n)
        min_size = max(options.min_size, _WINDOW)
        normal = options.target_size

        if n <= min_size + _WINDOW:
            return n
        if n >= options.max_size:
            n = options.max_size
        elif n <= normal:
            normal = n
        return _find_cut(bytes(data[:n]), min_size, normal, n)

    def cutpoints(self, data: bytes, max_points: int) -> list[int]:
        """Return cumulative cut points over ``data``.

        When ``max_points`` is positive at most that many are returned;
        otherwise the last cut point is ``len(data)``.
        """
        opts = self.opts
        if opts.min_size <= 0:
            raise ValueError("MinSize must be positive")

        cuts: list[int] = []
        offset = 0
        view = memoryview(data).cast("B") if not isinstance(data, memoryview) else data
        while True:
            end = min(opts.max_size, len(view))
            if end <= opts.min_size:
                # The very last chunk may be shorter than the minimum.
                offset += end
                cuts.append(offset)
                return cuts
            normal = end if end <= opts.target_size else opts.target_size
            cut = _find_cut(bytes(view[:end]), opts.min_size, normal, end)
            offset += cut
            cuts.append(offset)
            view = view[cut:]
            if len(view) == 0 or (max_points > 0 and len(cuts) >= max_points):
                return cuts