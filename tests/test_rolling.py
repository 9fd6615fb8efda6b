import pytest
from hypothesis import given, strategies as st

from cdcchunk.fastcdc_plakar import GEAR_TABLE
from cdcchunk.rolling import Buzhash, FNVRollingHash, GearHash, RabinKarp, RollingHash


def test_rolling_hash_same_seed_same_sequence():
    a = RollingHash(7)
    b = RollingHash(7)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_rolling_hash_values_are_32_bit():
    r = RollingHash(123)
    assert all(0 <= r.next() <= 0xFFFFFFFF for _ in range(100))


def test_rolling_hash_skip_zero_keeps_value():
    r = RollingHash(99)
    r.next()
    before = r.value
    assert r.skip(0) == before


@given(st.integers(min_value=0, max_value=0xFFFFFFFF))
def test_rolling_hash_skip_one_matches_next(seed):
    a = RollingHash(seed)
    b = RollingHash(seed)
    assert a.skip(1) == b.next()


@given(
    st.integers(min_value=1, max_value=12),
    st.binary(min_size=0, max_size=30),
    st.binary(min_size=0, max_size=30),
    st.data(),
)
def test_rabin_karp_depends_only_on_window(window, prefix1, prefix2, data):
    tail = data.draw(st.binary(min_size=window, max_size=window))
    h1 = RabinKarp(window)
    h2 = RabinKarp(window)
    out1 = [h1.roll(b) for b in prefix1 + tail][-1]
    out2 = [h2.roll(b) for b in prefix2 + tail][-1]
    assert out1 == out2


def test_rabin_karp_window_is_bounded():
    rk = RabinKarp(4)
    for b in range(10):
        rk.roll(b)
    assert list(rk.window) == [6, 7, 8, 9]


@given(st.binary(min_size=0, max_size=40), st.binary(min_size=0, max_size=40), st.binary(min_size=64, max_size=64))
def test_gear_hash_forgets_bytes_older_than_64(prefix1, prefix2, tail):
    g1 = GearHash(64)
    g2 = GearHash(64)
    for b in prefix1 + tail:
        last1 = g1.roll(b)
    for b in prefix2 + tail:
        last2 = g2.roll(b)
    assert last1 == last2


def test_gear_hash_first_roll_is_table_entry():
    g = GearHash(8)
    assert g.roll(200) == GEAR_TABLE[200]


def test_buzhash_default_table_gives_zero():
    bh = Buzhash(3)
    assert [bh.roll(b) for b in b"hello world"] == [0] * 11


def test_buzhash_before_full_window_is_table_entry():
    bh = Buzhash(5)
    bh.table = tuple(range(1000, 1256))
    assert [bh.roll(b) for b in (1, 2, 3)] == [1001, 1002, 1003]


def test_buzhash_is_deterministic_and_32_bit():
    table = tuple((i * 2654435761) & 0xFFFFFFFF for i in range(256))
    a = Buzhash(4)
    b = Buzhash(4)
    a.table = table
    b.table = table
    ra = [a.roll(x) for x in b"abcdefghijklmnop"]
    rb = [b.roll(x) for x in b"abcdefghijklmnop"]
    assert ra == rb
    assert all(0 <= v <= 0xFFFFFFFF for v in ra)


def test_fnv_rolling_hash_initial_and_reset():
    h = FNVRollingHash()
    assert h.current() == 2166136261
    h.update(1)
    h.update(2)
    h.reset()
    assert h.current() == 2166136261


def test_fnv_rolling_hash_known_value():
    h = FNVRollingHash()
    assert h.update(ord("a")) == 0xE40C292C


def test_fnv_update_returns_current():
    h = FNVRollingHash()
    value = h.update(42)
    assert value == h.current()


@pytest.mark.parametrize("cls", [RabinKarp, GearHash, Buzhash])
def test_window_size_must_be_positive(cls):
    with pytest.raises(ValueError):
        cls(0)


@pytest.mark.parametrize("b", [-1, 256])
def test_roll_rejects_non_bytes(b):
    with pytest.raises(ValueError):
        RabinKarp(4).roll(b)