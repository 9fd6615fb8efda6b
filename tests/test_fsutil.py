import os
import stat

import pytest

from cdcchunk.fsutil import copy_file, dir_exists, file_exists, file_size, is_writable


def test_file_and_dir_exists(tmp_path):
    f = tmp_path / "a.txt"
    f.write_bytes(b"hello")
    assert file_exists(f) is True
    assert dir_exists(f) is False
    assert file_exists(tmp_path) is False
    assert dir_exists(tmp_path) is True
    missing = tmp_path / "missing"
    assert file_exists(missing) is False
    assert dir_exists(missing) is False


def test_file_size(tmp_path):
    f = tmp_path / "b.bin"
    payload = b"x" * 1234
    f.write_bytes(payload)
    assert file_size(f) == len(payload)


def test_file_size_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_size(tmp_path / "nope")


def test_is_writable(tmp_path):
    f = tmp_path / "c.txt"
    assert is_writable(f) is True
    f.write_text("data")
    os.chmod(f, stat.S_IRUSR | stat.S_IWUSR)
    assert is_writable(f) is True
    os.chmod(f, stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)
    try:
        assert is_writable(f) is False
    finally:
        os.chmod(f, stat.S_IRUSR | stat.S_IWUSR)


def test_copy_file(tmp_path):
    src = tmp_path / "src.bin"
    dst = tmp_path / "dst.bin"
    payload = bytes(range(256)) * 100
    src.write_bytes(payload)
    dst.write_bytes(b"old content that is longer than nothing")
    copied = copy_file(dst, src)
    assert copied == len(payload)
    assert dst.read_bytes() == payload


def test_copy_file_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_file(tmp_path / "out", tmp_path / "absent")
    assert not (tmp_path / "out").exists()