"""
Gitignore-style `filter_entry()` predicates, using pathspec.

Patterns use gitignore syntax and are relative to the directory they are
anchored at. Directory patterns end with `/`.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import pathspec

from relglob.iters import EntryPredicate
from relglob.walker import Entry

# Directories that should almost never be searched: version control and caches.
DEFAULT_IGNORES: list[str] = [
    ".git/",
    ".hg/",
    ".svn/",
    ".bzr/",
    "_darcs/",
    "__pycache__/",
    ".mypy_cache/",
    ".ruff_cache/",
    ".pytest_cache/",
    ".tox/",
    ".nox/",
    "node_modules/",
]


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Read the non-blank, non-comment lines of an ignore file, or `None` if it is
    missing, unreadable, not UTF-8, or has no patterns.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    lines = [line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]
    return lines or None


def load_ignore_file(path: str | os.PathLike[str]) -> list[str] | None:
    """Read the patterns of a `.gitignore`-style file."""
    return _read_ignore_file(Path(path))


def ignore_filter(root: str | os.PathLike[str], patterns: Iterable[str]) -> EntryPredicate:
    """
    A `filter_entry()` predicate rejecting entries that match any of the
    gitignore-style `patterns`, taken relative to `root`.

    Entries outside `root`, and `root` itself, are always accepted.
    """
    spec = pathspec.GitIgnoreSpec.from_lines(list(patterns))
    anchor = Path(root).resolve()

    def predicate(entry: Entry) -> bool:
        try:
            rel = entry.path.relative_to(anchor)
        except ValueError:
            return True
        text = rel.as_posix()
        if text == ".":
            return True
        if entry.is_dir:
            text += "/"
        return not spec.match_file(text)

    return predicate


def gitignore_filter(
    root: str | os.PathLike[str], extra: Iterable[str] = DEFAULT_IGNORES
) -> EntryPredicate:
    """
    A predicate from the `.gitignore` in `root` (if any) plus the `extra`
    patterns, which default to `DEFAULT_IGNORES`.
    """
    lines = list(extra)
    lines.extend(_read_ignore_file(Path(root) / ".gitignore") or [])
    return ignore_filter(root, lines)
