"""Tests for the scandir-based directory walker."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from relglob.errors import TraversalError
from relglob.walker import Entry, EntryKind, ScandirWalker


def _entries(walker: ScandirWalker) -> list[Entry]:
    items = list(walker)
    assert all(isinstance(i, Entry) for i in items)
    return [i for i in items if isinstance(i, Entry)]


def test_walk_root_first_then_depth_first(tree: Path):
    entries = _entries(ScandirWalker(tree))
    assert entries[0].path == tree
    assert entries[0].depth == 0
    assert entries[0].is_dir

    rels = [e.path.relative_to(tree).as_posix() for e in entries[1:]]
    # Every directory comes before its children.
    for i, rel in enumerate(rels):
        parent = rel.rpartition("/")[0]
        if parent:
            assert parent in rels[:i]

    files = sorted(e.path.relative_to(tree).as_posix() for e in entries if e.is_file)
    assert len(files) == 10
    assert "a/a0/a0_2.md" in files


def test_walk_depths(tree: Path):
    depths = {e.path.relative_to(tree).as_posix(): e.depth for e in _entries(ScandirWalker(tree))}
    assert depths["."] == 0
    assert depths["a"] == 1
    assert depths["a/a0"] == 2
    assert depths["a/a0/a0_0.txt"] == 3


def test_walk_max_depth(tree: Path):
    entries = _entries(ScandirWalker(tree, max_depth=1))
    assert max(e.depth for e in entries) == 1
    names = sorted(e.name for e in entries if e.depth == 1)
    assert names == [".hidden", "a", "b", "some_file.txt"]


def test_skip_current_dir_prunes_subtree(tree: Path):
    walker = ScandirWalker(tree)
    seen: list[str] = []
    for item in walker:
        assert isinstance(item, Entry)
        rel = item.path.relative_to(tree).as_posix()
        seen.append(rel)
        if rel == "a":
            walker.skip_current_dir()
    assert "a" in seen
    assert not any(s.startswith("a/") for s in seen)
    assert "b/b_0.txt" in seen


def test_close_stops_walk(tree: Path):
    walker = ScandirWalker(tree)
    next(walker)
    walker.close()
    assert list(walker) == []


def test_missing_root_yields_error(tmp_path: Path):
    items = list(ScandirWalker(tmp_path / "missing"))
    assert len(items) == 1
    assert isinstance(items[0], TraversalError)
    assert "Failed to walk path" in str(items[0])


def test_file_root(tree: Path):
    items = list(ScandirWalker(tree / "some_file.txt"))
    assert len(items) == 1
    assert isinstance(items[0], Entry)
    assert items[0].kind is EntryKind.FILE


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlinks")
def test_symlinks_are_not_followed(tree: Path):
    link = tree / "link_to_a"
    try:
        link.symlink_to(tree / "a", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks")
    entries = _entries(ScandirWalker(tree))
    link_entry = next(e for e in entries if e.name == "link_to_a")
    assert link_entry.kind is EntryKind.SYMLINK
    assert not any(e.path.parent == link for e in entries)


@pytest.mark.skipif(os.name == "nt" or os.getuid() == 0, reason="needs POSIX permissions")
def test_unreadable_directory_yields_error_and_continues(tree: Path):
    locked = tree / "a" / "a1"
    locked.chmod(0)
    try:
        items = list(ScandirWalker(tree))
    finally:
        locked.chmod(stat.S_IRWXU)
    errors = [i for i in items if isinstance(i, TraversalError)]
    assert len(errors) == 1
    assert errors[0].path == locked
    assert "Missing permissions" in str(errors[0])
    names = {i.name for i in items if isinstance(i, Entry)}
    assert "a2_0.txt" in names
    assert "b_0.txt" in names


def test_unsorted_walk_yields_same_entries(tree: Path):
    sorted_paths = [e.path for e in _entries(ScandirWalker(tree))]
    unsorted_paths = [e.path for e in _entries(ScandirWalker(tree, sort=False))]
    assert sorted(unsorted_paths) == sorted(sorted_paths)
    # Depth-first holds without sorting too.
    for i, path in enumerate(unsorted_paths[1:], start=1):
        assert path.parent in unsorted_paths[:i]


def test_sorted_siblings(tree: Path):
    entries = _entries(ScandirWalker(tree, max_depth=1))
    names = [e.name for e in entries if e.depth == 1]
    assert names == sorted(names)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlinks")
def test_follow_links_enters_linked_directory(tree: Path):
    link = tree / "link_to_a"
    try:
        link.symlink_to(tree / "a", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks")
    entries = _entries(ScandirWalker(tree, follow_links=True))
    link_entry = next(e for e in entries if e.name == "link_to_a")
    assert link_entry.kind is EntryKind.DIR
    assert link / "a0" / "a0_0.txt" in [e.path for e in entries]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlinks")
def test_follow_links_stops_at_loops(tree: Path):
    loop = tree / "a" / "a0" / "up"
    try:
        loop.symlink_to(tree / "a", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks")
    items = list(ScandirWalker(tree, follow_links=True))
    errors = [i for i in items if isinstance(i, TraversalError)]
    assert [e.path for e in errors] == [loop]
    assert not any(isinstance(i, Entry) and loop in i.path.parents for i in items)
    names = {i.name for i in items if isinstance(i, Entry)}
    assert "b_0.txt" in names
