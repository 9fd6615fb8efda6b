import hashlib
import random

import pytest

from cdcchunk.config import CDCConfig
from cdcchunk.fastcdc_plakar import FastCDCPlakar
from cdcchunk.fastcdc_stadia import FastCDCStadia
from cdcchunk.fnv import FNVCDC
from cdcchunk.rabin import RabinKarpCDC
from cdcchunk.registry import CDCAlgo, get_cutpointer
from cdcchunk.ultracdc import UltraCDC

ALGOS = list(CDCAlgo)


def _cfg():
    return CDCConfig(min_size=512, target_size=64 * 1024, max_size=128 * 1024)


def _get_cuts(data, cdc, opt):
    cuts = []
    cmap = {}
    last = 0
    view = memoryview(data)
    while len(view) > opt.min_size:
        cutpoint = cdc.algorithm(opt, view, len(view))
        assert cutpoint != 0
        last += cutpoint
        cuts.append(last)
        digest = hashlib.sha256(view[:cutpoint]).hexdigest()
        entry = cmap.setdefault(digest, [0, cutpoint])
        entry[0] += 1
        view = view[cutpoint:]
    return cuts, cmap


@pytest.mark.parametrize(
    "algo, cls",
    [
        (CDCAlgo.ULTRA_CDC, UltraCDC),
        (CDCAlgo.FASTCDC_STADIA, FastCDCStadia),
        (CDCAlgo.FASTCDC_PLAKAR, FastCDCPlakar),
        (CDCAlgo.FNV, FNVCDC),
        (CDCAlgo.RABIN_KARP, RabinKarpCDC),
    ],
)
def test_get_cutpointer_types(algo, cls):
    cfg = _cfg()
    cdc = get_cutpointer(algo, cfg)
    assert isinstance(cdc, cls)
    assert cdc.config is cfg


def test_get_cutpointer_accepts_ints_and_defaults():
    cdc = get_cutpointer(0, None)
    assert isinstance(cdc, UltraCDC)
    assert cdc.config.min_size == 2 * 1024


@pytest.mark.parametrize("bad", [5, 8, -1])
def test_unknown_algo_raises(bad):
    with pytest.raises(ValueError, match="unknown CDCAlgo"):
        get_cutpointer(bad, None)


def test_names_are_distinct():
    names = {get_cutpointer(a, _cfg()).name for a in ALGOS}
    assert len(names) == len(ALGOS)


@pytest.mark.parametrize("algo", ALGOS)
def test_changes_near_end_keep_early_chunks(algo):
    rng = random.Random(int(algo) + 1)
    data = rng.randbytes(256 * 1024)
    data2 = bytearray(data)
    data2[240_000:240_100] = rng.randbytes(100)
    data2 = bytes(data2)

    cdc = get_cutpointer(algo, _cfg())
    cfg = cdc.config
    cuts0, cmap0 = _get_cuts(data, cdc, cfg)
    cuts2, cmap2 = _get_cuts(data2, cdc, cfg)

    assert cuts0 == sorted(set(cuts0))
    assert cuts0[-1] <= len(data)
    assert cuts0[0] == cuts2[0]

    ndup = sum(1 for k in cmap2 if k in cmap0)
    bytenew = sum(size for k, (_, size) in cmap2.items() if k not in cmap0)
    assert ndup >= 1
    assert bytenew < len(data)


@pytest.mark.parametrize("algo", ALGOS)
def test_cutpoints_cover_all_data(algo):
    data = random.Random(5).randbytes(100_000)
    cuts = get_cutpointer(algo, _cfg()).cutpoints(data, 0)
    assert cuts[-1] == len(data)
    assert all(b > a for a, b in zip(cuts, cuts[1:]))