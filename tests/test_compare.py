import os

import pytest

from cdcchunk.compare import (
    compare_dirs,
    compare_files,
    compare_files_diff_len,
    compare_files_first_n_lines,
    list_files_under_dir,
    string_slice_sub,
)


def _make_tree(root, files):
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "tree"
    _make_tree(root, {"b.txt": "bee\n", "a/c.txt": "sea\n", "a/d.log": "dee\n"})
    return root


def test_list_files_relative_and_sorted(tree):
    files = list_files_under_dir(tree)
    assert files == [os.path.join("a", "c.txt"), os.path.join("a", "d.log"), "b.txt"]


def test_list_files_include_root(tree):
    relative = list_files_under_dir(tree)
    full = list_files_under_dir(tree, True, "")
    assert full == [os.path.join(str(tree), rel) for rel in relative]


def test_list_files_suffix_filter(tree):
    assert list_files_under_dir(tree, False, ".txt") == [os.path.join("a", "c.txt"), "b.txt"]


def test_list_files_missing_root(tmp_path):
    assert list_files_under_dir(tmp_path / "nope") == []


def test_string_slice_sub_keeps_order_and_prefix():
    assert string_slice_sub(["x", "y", "z"], ["y"], "p/") == ["p/x", "p/z"]
    assert string_slice_sub(["x"], ["x"], "p/") == []


def test_compare_dirs_identical(tmp_path):
    files = {"one.txt": "1\n", "sub/two.txt": "2\n"}
    _make_tree(tmp_path / "e", files)
    _make_tree(tmp_path / "o", files)
    assert compare_dirs(tmp_path / "e", tmp_path / "o") == ""


def test_compare_dirs_structure_difference(tmp_path):
    _make_tree(tmp_path / "e", {"one.txt": "1\n", "extra.txt": "x\n"})
    _make_tree(tmp_path / "o", {"one.txt": "1\n"})
    diff = compare_dirs(tmp_path / "e", tmp_path / "o")
    assert "different surface tree structure" in diff
    assert "extra.txt" in diff


def test_compare_dirs_content_difference(tmp_path):
    _make_tree(tmp_path / "e", {"one.txt": "hello\n"})
    _make_tree(tmp_path / "o", {"one.txt": "goodbye\n"})
    diff = compare_dirs(tmp_path / "e", tmp_path / "o")
    assert "difference in content" in diff
    assert "one.txt" in diff


def test_compare_files_identical_and_whitespace(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_text("x  y\n")
    b.write_text("x y\n")
    assert compare_files(a, b) == (0, b"")
    assert compare_files_diff_len(a, a) == 0


def test_compare_files_different(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_text("one\n")
    b.write_text("two\n")
    n, output = compare_files(a, b)
    assert n == -1
    assert output == b""
    assert compare_files_diff_len(a, b) == -1


def test_first_n_lines_agree(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_text("l1\nl2\nl3\n")
    b.write_text("l1\nl2\nother\n")
    assert compare_files_first_n_lines(2, a, b) == (0, None)


def test_first_n_lines_difference(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_text("l1\nl2\n")
    b.write_text("l1\nchanged\n")
    line, message = compare_files_first_n_lines(3, a, b)
    assert line == 2
    assert "first difference on line 2" in message
    assert "changed" in message


def test_first_n_lines_too_short(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_text("l1")
    b.write_text("l1\nl2\nl3\n")
    assert compare_files_first_n_lines(3, a, b) == (1, "expected did not have enough lines")
    assert compare_files_first_n_lines(3, b, a) == (1, "observed did not have enough lines")


def test_first_n_lines_missing_file(tmp_path):
    a = tmp_path / "a"
    a.write_text("l1\n")
    assert compare_files_first_n_lines(1, a, tmp_path / "missing") == (-2, None)