import os

import treehash.intern.helper as h
from treehash.component.matcher import matches, is_excluded


def test_matches_base_name_only():
    assert matches(os.path.join("some", "dir", "notes.tmp"), ["*.tmp"])
    assert not matches(os.path.join("some.tmp", "notes.txt"), ["*.tmp"])
    assert matches("sub", ["sub"])
    assert not matches("subdir", ["sub"])


def test_wildcards():
    assert matches("a1.log", ["a?.log"])
    assert not matches("a12.log", ["a?.log"])
    assert matches("anything", ["*"])
    assert matches("[draft].txt", ["[draft]*"])
    assert not matches("d.txt", ["[draft]*"])


def test_case_insensitive():
    assert matches("NOTES.TMP", ["*.tmp"])
    assert matches("Thumbs.db", ["thumbs.DB"])


def test_alternatives():
    patterns = ["*.tmp;*.bak", "build"]
    assert matches("x.tmp", patterns)
    assert matches("x.bak", patterns)
    assert matches("build", patterns)
    assert not matches("x.txt", patterns)
    assert not matches("x.txt", ["*.tmp;"])


def test_leading_blanks_of_alternatives_are_skipped():
    assert matches("x.bak", ["*.tmp; *.bak"])
    assert matches("x.tmp", ["  *.tmp"])
    assert not matches("x.txt", ["*.tmp; "])


def test_is_excluded_without_patterns():
    assert not is_excluded("notes.tmp", [])
    assert not is_excluded("notes.tmp", ())


def test_long_paths_are_never_excluded(monkeypatch):
    monkeypatch.setattr(h, "MAX_PATH", 20)
    short_path = os.path.join("d", "notes.tmp")
    long_path = os.path.join("a_rather_long_directory_name", "notes.tmp")
    assert is_excluded(short_path, ["*.tmp"])
    assert not is_excluded(long_path, ["*.tmp"])
