"""Content-defined chunking with a Rabin-Karp rolling hash."""

from __future__ import annotations

from .config import CDCConfig, Cutpointer, validate_sizes

_MASK32 = 0xFFFFFFFF
_MULT = 0x08104225
_MIN_WINDOW = 4
_MAX_WINDOW = 128


def modinv(a: int, m: int) -> int:
    """Return the inverse of ``a`` modulo ``m`` by the extended Euclidean algorithm.

    Arithmetic is unsigned 32-bit, so a negative coefficient comes back in its
    two's-complement form. Raises ValueError if ``a`` is not invertible.
    """
    t, newt = 0, 1
    r, newr = m & _MASK32, a & _MASK32
    while newr:
        quotient = r // newr
        t, newt = newt, (t - quotient * newt) & _MASK32
        r, newr = newr, r - quotient * newr
    if r > 1:
        raise ValueError("a is not invertible")
    return t


def _halvings(size: int) -> int:
    """Count how many times ``size`` can be halved while above one."""
    count = 0
    while size > 1:
        count += 1
        size >>= 1
    return count


def default_rabinkarp_options() -> CDCConfig:
    """Return a fresh copy of the default sizes for this chunker."""
    return CDCConfig(min_size=2 * 1024, target_size=10 * 1024, max_size=64 * 1024)


class RabinKarpCDC(Cutpointer):
    """Chunker driven by a windowed Rabin-Karp hash."""

    name = "rabin-karp-chunker"

    def __init__(self, opts: CDCConfig | None = None) -> None:
        self._setup(opts if opts is not None else default_rabinkarp_options())

    def _setup(self, opts: CDCConfig) -> None:
        # The window grows with the logarithm of the target size.
        self.window_size = min(max(1 + _halvings(opts.target_size), _MIN_WINDOW), _MAX_WINDOW)
        self.mult = _MULT
        self.invm = modinv(_MULT, _MASK32)
        # About one match in target_size positions.
        self.mask = ((1 << (1 + _halvings(opts.target_size))) - 1) & _MASK32
        self.opts = opts

    def set_config(self, cfg: CDCConfig) -> None:
        """Replace the configuration and recompute window size and mask."""
        self._setup(cfg)

    def validate(self, options: CDCConfig) -> None:
        """Raise a CDCConfigError subclass if ``options`` is out of range."""
        validate_sizes(options)

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

        buf = bytes(data[:n])
        mult = self.mult
        mask = self.mask
        window = self.window_size

        total = 0
        multn = 1
        for byte in buf[:window]:
            total = (total * mult + byte) & _MASK32
            multn = (multn * mult) & _MASK32

        for i in range(window, n):
            total = (total - multn * buf[i - window]) & _MASK32
            total = (total * mult + buf[i]) & _MASK32
            multn = (multn * mult) & _MASK32
            if i >= min_size and not total & mask:
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
            if max_points > 0 and len(cuts) >= max_points:
                break
            view = view[cut:]
        return cuts