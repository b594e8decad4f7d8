"""Tests for hidden entry detection."""

from __future__ import annotations

from pathlib import Path

from relglob.hidden import is_hidden_entry, is_hidden_path
from relglob.walker import Entry, EntryKind


def test_hidden_entry_by_name():
    assert is_hidden_entry(".hidden")
    assert not is_hidden_entry("visible.txt")


def test_hidden_entry_ignores_parents():
    assert not is_hidden_entry("/some/.hidden/visible.txt")
    assert is_hidden_entry("/some/visible/.hidden")
    assert is_hidden_entry(Path("dir") / ".clang-format")


def test_hidden_entry_accepts_entries():
    assert is_hidden_entry(Entry(Path("/x/.git"), 1, EntryKind.DIR))
    assert not is_hidden_entry(Entry(Path("/.x/src"), 1, EntryKind.DIR))


def test_hidden_entry_without_name():
    assert not is_hidden_entry("/")
    assert is_hidden_entry(".")


def test_hidden_path():
    assert is_hidden_path("a/.hidden/h_0.txt")
    assert is_hidden_path(".hidden")
    assert not is_hidden_path("a/a0/a0_0.txt")
    assert not is_hidden_path("../a/./b.txt")
