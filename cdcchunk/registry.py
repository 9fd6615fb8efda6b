"""Choosing a chunking algorithm by identifier."""

from __future__ import annotations

from enum import IntEnum

from .config import CDCConfig, Cutpointer
from .fastcdc_plakar import FastCDCPlakar
from .fastcdc_stadia import FastCDCStadia
from .fnv import FNVCDC
from .rabin import RabinKarpCDC
from .ultracdc import UltraCDC


class CDCAlgo(IntEnum):
    """Identifiers of the available chunking algorithms."""

    ULTRA_CDC = 0
    FASTCDC_STADIA = 1
    FASTCDC_PLAKAR = 2
    FNV = 3
    RABIN_KARP = 4


_FACTORIES = {
    CDCAlgo.ULTRA_CDC: UltraCDC,
    CDCAlgo.FASTCDC_STADIA: FastCDCStadia,
    CDCAlgo.FASTCDC_PLAKAR: FastCDCPlakar,
    CDCAlgo.FNV: FNVCDC,
    CDCAlgo.RABIN_KARP: RabinKarpCDC,
}


def get_cutpointer(choice: CDCAlgo | int, cfg: CDCConfig | None = None) -> Cutpointer:
    """Return a chunker for ``choice``; ``cfg`` of None uses its defaults.

    Raises ValueError for an unknown algorithm.
    """
    try:
        algo = CDCAlgo(choice)
    except ValueError:
        raise ValueError(f"unknown CDCAlgo: {choice}") from None
    return _FACTORIES[algo](cfg)