import pytest

from cdcchunk.chunker import Chunker, get_target_len
from cdcchunk.rolling import RollingHash


def test_min_must_be_less_than_max():
    with pytest.raises(ValueError):
        Chunker(1024, 8192, 8192)


def test_never_matching_hash_cuts_at_max():
    c = Chunker(1024, 64, 8192)
    results = [c.is_block(0xFFFFFFFF) for _ in range(8192)]
    assert results.index(True) == 8191
    assert results.count(True) == 1


def test_always_matching_hash_cuts_at_min():
    c = Chunker(1024, 64, 8192)
    results = [c.is_block(0) for _ in range(64)]
    assert results.index(True) == 63


def test_prob_is_the_threshold():
    c = Chunker(1024, 1, 8192)
    assert c.is_block(c.prob - 1) is True
    c.block_len = 0
    assert c.is_block(c.prob) is False


def test_add_block_records_and_resets():
    c = Chunker(1024, 2, 100)
    c.is_block(0)
    c.is_block(0)
    c.add_block(77)
    c.is_block(0)
    c.is_block(0)
    c.add_block(77)
    assert c.blocks[(77, 2)] == 2
    assert c.block_len == 0


def test_chunker_with_rolling_hash_sizes_within_bounds():
    # The source's example: target 1024, min 64, max 8192 with an LCG sequence.
    chunker = Chunker(1024, 64, 8192)
    roller = RollingHash(1)
    for _ in range(200_000):
        h = roller.next()
        if chunker.is_block(h):
            chunker.add_block(h)
    lengths = [length for (_, length) in chunker.blocks]
    assert lengths
    assert all(64 <= length <= 8192 for length in lengths)


def test_avg_len_for_nonpositive_target_is_min():
    c = Chunker(0, 64, 8192)
    assert c.avg_len == 64.0


def test_from_avg_round_trips_average():
    c = Chunker.from_avg(4096, 64, 8192)
    assert abs(c.avg_len - 4096) < 1


def test_get_target_len_is_monotonic():
    assert get_target_len(2000, 64, 8192) < get_target_len(4000, 64, 8192)