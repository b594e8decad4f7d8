"""Shared fixtures: the reference file tree used across tests."""

from __future__ import annotations

from pathlib import Path

import pytest

# Relative paths of all files in the reference tree.
TREE_FILES = [
    ".hidden/h_0.txt",
    ".hidden/h_1.txt",
    "a/a0/A0_3.txt",
    "a/a0/a0_0.txt",
    "a/a0/a0_1.txt",
    "a/a0/a0_2.md",
    "a/a1/a1_0.txt",
    "a/a2/a2_0.txt",
    "b/b_0.txt",
    "some_file.txt",
]


def make_tree(root: Path) -> Path:
    """Create the reference tree below `root/test-files` and return that directory."""
    base = root / "test-files"
    for rel in TREE_FILES:
        path = base / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{rel}\n")
    return base


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """The reference tree; returns the `test-files` directory."""
    return make_tree(tmp_path)
