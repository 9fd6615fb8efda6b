"""Compare files and directory trees, mostly for checking sync results."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterator, Sequence


def _walk_files(directory: str) -> Iterator[str]:
    """Yield paths of non-directories under ``directory`` in lexical, depth-first order."""
    with os.scandir(directory) as scan:
        entries = sorted(scan, key=lambda entry: entry.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_files(entry.path)
        else:
            yield entry.path


def list_files_under_dir(
    root: str | os.PathLike,
    include_root: bool = False,
    required_suffix: str = "",
) -> list[str]:
    """List the files (not directories) under ``root``.

    Paths are relative to ``root`` unless ``include_root`` is set. When
    ``required_suffix`` is given, only paths ending in it are kept. A missing
    root gives an empty list.
    """
    root = os.fspath(root)
    if not os.path.isdir(root):
        return []
    top = os.path.normpath(root)
    prefix = top if top.endswith(os.sep) else top + os.sep
    skip = 0 if include_root else len(prefix)
    return [
        path[skip:]
        for path in _walk_files(top)
        if not required_suffix or path.endswith(required_suffix)
    ]


def string_slice_sub(as_: Sequence[str], bs: Sequence[str], aprefix: str) -> list[str]:
    """Return the items of ``as_`` not in ``bs``, in ``as_`` order, each prefixed."""
    remove = set(bs)
    return [aprefix + a for a in as_ if a not in remove]


def _format_list(items: Sequence[str]) -> str:
    return "[" + " ".join(items) + "]"


def _run_diff(args: list[str]) -> tuple[int, bytes, str | None]:
    """Run diff; return (output length, output, error text or None)."""
    try:
        proc = subprocess.run(["diff", *args], stdout=subprocess.PIPE, check=False)
    except OSError as exc:
        return 0, b"", str(exc)
    err = None if proc.returncode == 0 else f"exit status {proc.returncode}"
    return len(proc.stdout), proc.stdout, err


def compare_dirs(expected: str | os.PathLike, observed: str | os.PathLike) -> str:
    """Describe how the ``observed`` tree differs from ``expected``; empty if it does not."""
    expected = os.fspath(expected)
    observed = os.fspath(observed)
    obs = list_files_under_dir(observed)
    exp = list_files_under_dir(expected)

    if exp != obs:
        return (
            f"compareDirs difference: expected='{expected}' ({len(exp)} files); "
            f"observed='{observed}' ({len(obs)} files) had different surface tree "
            f"structure. e-o='{_format_list(string_slice_sub(exp, obs, expected + os.sep))}'; "
            f"o-e='{_format_list(string_slice_sub(obs, exp, observed + os.sep))}'"
        )

    for exp_rel, obs_rel in zip(exp, obs):
        e = expected + os.sep + exp_rel
        o = observed + os.sep + obs_rel
        n, output, err = _run_diff(["-r", "-b", "-B", o, e])
        if err is not None or n > 0:
            return (
                f"compareDirs difference in content between expected file '{e}' and "
                f"observed file '{o}': '{output.decode(errors='replace')}' "
                f"(/usr/bin/diff err='{err}')"
            )
    return ""


def compare_files(expected: str | os.PathLike, observed: str | os.PathLike) -> tuple[int, bytes]:
    """Run ``diff -b`` and return ``(length of diff output, output)``.

    When diff exits with a non-zero status (files differ, or it failed),
    the length is -1: unknown, but not zero.
    """
    expected = os.fspath(expected)
    observed = os.fspath(observed)
    n, output, err = _run_diff(["-b", observed, expected])
    if err is not None:
        print(f"CompareFiles(): error during '\ndiff {observed} {expected}\n': {err}")
        return -1, b""
    return n, output


def compare_files_diff_len(expected: str | os.PathLike, observed: str | os.PathLike) -> int:
    """Return only the diff length from :func:`compare_files`."""
    return compare_files(expected, observed)[0]


def compare_files_first_n_lines(
    n_lines: int,
    expected: str | os.PathLike,
    observed: str | os.PathLike,
) -> tuple[int, str | None]:
    """Compare the first ``n_lines`` lines of two files.

    Returns ``(0, None)`` when they agree, ``(line_number, description)`` at the
    first differing line, ``(1, reason)`` when a file is too short, and
    ``(-2, None)`` when a file cannot be read.
    """
    try:
        with open(expected, encoding="utf-8", errors="surrogateescape") as fh:
            x = fh.read()
        with open(observed, encoding="utf-8", errors="surrogateescape") as fh:
            o = fh.read()
    except OSError as exc:
        print(f"CompareFiles(): error during '\ndiff {observed} {expected}\n': {exc}")
        return -2, None

    xl = x.split("\n")
    ol = o.split("\n")
    if len(xl) < n_lines:
        return 1, "expected did not have enough lines"
    if len(ol) < n_lines:
        return 1, "observed did not have enough lines"
    for number, (xline, oline) in enumerate(zip(xl[:n_lines], ol[:n_lines]), start=1):
        if xline != oline:
            return number, (
                f"first difference on line {number}:\n ===== expected:\n\n{xline}"
                f"\n\n ===== observed:\n\n{oline}\n\n"
            )
    return 0, None