"""
The common use case: a list of globs sharing one root, plus filters.

    matchers = build_matchers(["src/**/*.py", "docs/*.md"], config_dir)
    skip = build_glob_sets([".*"], case_sensitive=False)
    drop = build_glob_sets(["**/generated/*"], case_sensitive=False)
    paths, dropped = match_paths(matchers, skip, drop)

`filter_entry` glob sets prune entries during the walk (their subtrees are
never read), and hidden entries are skipped when none are given; `filter_post`
glob sets sort the matched paths into the second list.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

from relglob.builder import Builder, Matcher
from relglob.errors import BuildError, RelglobError
from relglob.hidden import is_hidden_entry
from relglob.iters import EntryPredicate
from relglob.matcher import GlobSet
from relglob.walker import Entry

_T = TypeVar("_T")


def _build_all(globs: Sequence[str], build: Callable[[str], _T]) -> list[_T]:
    """Build every glob, raising a single `BuildError` listing all failures."""
    built: list[_T] = []
    failures: list[RelglobError] = []
    for glob in globs:
        try:
            built.append(build(glob))
        except RelglobError as e:
            failures.append(e)
    if failures:
        raise BuildError(failures)
    return built


def build_matchers(
    globs: Sequence[str],
    root: str | os.PathLike[str],
    case_sensitive: bool | None = None,
) -> list[Matcher]:
    """
    Build one `Matcher` per glob relative to `root`.

    `case_sensitive=None` matches case sensitively everywhere except on Windows.
    """
    if case_sensitive is None:
        case_sensitive = sys.platform != "win32"
    builder_case = case_sensitive
    return _build_all(globs, lambda g: Builder(g).case_sensitive(builder_case).build(root))


def build_glob_sets(globs: Sequence[str] | None, case_sensitive: bool) -> list[GlobSet] | None:
    """Build one `GlobSet` per glob. `None` is passed through."""
    if globs is None:
        return None
    return _build_all(globs, lambda g: Builder(g).case_sensitive(case_sensitive).build_glob_set())


def _matches_any(glob_sets: Sequence[GlobSet], path: str | os.PathLike[str]) -> bool:
    return any(g.is_match(path) for g in glob_sets)


def _not_hidden(entry: Entry) -> bool:
    return not is_hidden_entry(entry)


def _not_matching(glob_sets: Sequence[GlobSet]) -> EntryPredicate:
    return lambda e: not _matches_any(glob_sets, e.path)


def match_paths(
    matchers: Sequence[Matcher],
    filter_entry: Sequence[GlobSet] | None = None,
    filter_post: Sequence[GlobSet] | None = None,
) -> tuple[list[Path], list[Path]]:
    """
    Walk all `matchers` and return `(paths, filtered)`, both sorted and free of
    duplicates. Traversal errors are skipped.

    Without `filter_entry`, hidden entries are skipped; pass an empty list to
    walk everything.
    """
    predicate = _not_hidden if filter_entry is None else _not_matching(filter_entry)

    paths: list[Path] = []
    filtered: list[Path] = []
    seen: set[Path] = set()

    for matcher in matchers:
        for path in matcher.filter_entry(predicate).paths():
            if path in seen:
                continue
            seen.add(path)
            if filter_post and _matches_any(filter_post, path):
                filtered.append(path)
            else:
                paths.append(path)

    paths.sort()
    filtered.sort()
    return paths, filtered
