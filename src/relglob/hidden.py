"""Predicates for hidden (dot-prefixed) files and directories."""

from __future__ import annotations

import os
from pathlib import PurePath


def is_hidden_entry(entry: str | os.PathLike[str]) -> bool:
    """
    Check if the final path component (file or directory name) starts with a dot,
    e.g. `.git` or `.clang-format`.

    Accepts an `Entry` as well as a plain path, so it can be passed directly to
    `filter_entry()` to avoid walking hidden directories:

        it = iter(matcher).filter_entry(lambda e: not is_hidden_entry(e))
    """
    path = PurePath(entry)
    name = path.name or str(path)
    return name.startswith(".")


def is_hidden_path(path: str | os.PathLike[str]) -> bool:
    """
    Check if any component of `path` starts with a dot. The `.` and `..`
    components do not count.
    """
    return any(
        part.startswith(".") and part not in (".", "..") for part in PurePath(path).parts
    )
