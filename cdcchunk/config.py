"""Chunker size configuration and the common chunker interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

_ONE_GB = 1024 * 1024 * 1024


@dataclass
class CDCConfig:
    """Minimum, target and maximum chunk sizes in bytes."""

    min_size: int
    target_size: int
    max_size: int


class CDCConfigError(ValueError):
    """A chunk size setting is out of range."""


class TargetSizeError(CDCConfigError):
    def __init__(self) -> None:
        super().__init__("TargetSize is required and must be 64B <= TargetSize <= 1GB")


class MinSizeError(CDCConfigError):
    def __init__(self) -> None:
        super().__init__(
            "MinSize is required and must be 64B <= MinSize <= 1GB && MinSize < TargetSize"
        )


class MaxSizeError(CDCConfigError):
    def __init__(self) -> None:
        super().__init__(
            "MaxSize is required and must be 64B <= MaxSize <= 1GB && MaxSize > TargetSize"
        )


def validate_sizes(options: CDCConfig) -> None:
    """Raise a CDCConfigError subclass if ``options`` is out of range."""
    if options.target_size < 64 or options.target_size > _ONE_GB:
        raise TargetSizeError()
    if (
        options.min_size < 64
        or options.min_size > _ONE_GB
        or options.min_size >= options.target_size
    ):
        raise MinSizeError()
    if (
        options.max_size < 64
        or options.max_size > _ONE_GB
        or options.max_size <= options.target_size
    ):
        raise MaxSizeError()


class Cutpointer(ABC):
    """A content-defined chunking algorithm that finds cut points in data."""

    name: str = ""
    opts: CDCConfig

    @property
    def config(self) -> CDCConfig:
        """The configuration in use."""
        return self.opts

    def set_config(self, cfg: CDCConfig) -> None:
        """Replace the configuration in use."""
        self.opts = cfg

    @abstractmethod
    def algorithm(self, options: CDCConfig, data: bytes, n: int) -> int:
        """Return the cut point (exclusive end) of the first chunk of ``data[:n]``."""

    def next_cut(self, data: bytes) -> int:
        """Return the end of the next chunk of ``data``."""
        return self.algorithm(self.opts, data, len(data))

    def cutpoints(self, data: bytes, max_points: int) -> list[int]:
        """Return cumulative cut points over ``data``.

        When ``max_points`` is positive at most that many are returned;
        otherwise the last cut point is ``len(data)``.
        """
        cuts: list[int] = []
        view = memoryview(data)
        offset = 0
        while len(view) > 0:
            cut = self.algorithm(self.opts, view, len(view))
            if cut <= 0:
                raise RuntimeError(f"{self.name or type(self).__name__} returned an empty chunk")
            offset += cut
            cuts.append(offset)
            view = view[cut:]
            if max_points > 0 and len(cuts) >= max_points:
                break
        return cuts

    @staticmethod
    def _require_n(data: bytes, n: int) -> None:
        if n > len(data):
            raise ValueError(
                f"len(data) == {len(data)} and n == {n}: n must be <= len(data)"
            )