"""Small filesystem helpers."""

from __future__ import annotations

import os
import shutil


def file_exists(name: str | os.PathLike) -> bool:
    """Return True if ``name`` exists and is not a directory."""
    try:
        return not os.path.isdir(name) and os.path.exists(name) and _stat_ok(name)
    except OSError:
        return False


def _stat_ok(name: str | os.PathLike) -> bool:
    os.stat(name)
    return True


def dir_exists(name: str | os.PathLike) -> bool:
    """Return True if ``name`` exists and is a directory."""
    return os.path.isdir(name)


def file_size(name: str | os.PathLike) -> int:
    """Return the size of ``name`` in bytes; raises OSError if it cannot be read."""
    return os.stat(name).st_size


def is_writable(path: str | os.PathLike) -> bool:
    """Return True if ``path`` is not an existing file or has any write bit set."""
    if not file_exists(path):
        return True
    return os.stat(path).st_mode & 0o222 != 0


def copy_file(topath: str | os.PathLike, frompath: str | os.PathLike) -> int:
    """Copy ``frompath`` to ``topath`` and return the number of bytes copied."""
    if not file_exists(frompath):
        raise FileNotFoundError(frompath)
    with open(frompath, "rb") as src, open(topath, "wb") as dest:
        shutil.copyfileobj(src, dest)
        return dest.tell()