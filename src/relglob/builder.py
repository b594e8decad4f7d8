"""
`Builder` and `Matcher`: resolving a glob relative to a root directory.

A glob like `../../data/**/*.txt` given relative to `/path/to/config/dir` is
split into its literal prefix (`../../data`) and the glob remainder
(`**/*.txt`). The prefix is joined to the root and resolved, and only the
remainder is matched while walking, starting from the deepest directory that
is known without matching anything.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, replace
from pathlib import Path, PurePath, PurePosixPath

from relglob.errors import PatternError, RootResolutionError
from relglob.iters import EntryPredicate, IterAll, IterFilter
from relglob.matcher import Glob, GlobMatcher, GlobSet, compile_glob, compile_set, compile_single
from relglob.pattern import SEPARATOR, split_pattern
from relglob.walker import ScandirWalker

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Builder:
    """
    Builds a `Matcher` (or a plain `Glob`/`GlobSet`) for a single glob.

    Matching is case sensitive unless `case_sensitive(False)` is used. A single
    `*` never matches a path separator: `*/*.txt` does not match
    `path/to/file.txt`, use `**` to match across directory levels.

    Builders are immutable; `case_sensitive()` returns a new builder, so a
    builder can be shared and specialized freely:

        matcher = Builder("docs/**/*.md").case_sensitive(False).build(config_dir)
    """

    glob: str
    match_case: bool = True

    def case_sensitive(self, yes: bool = True) -> Builder:
        return replace(self, match_case=yes)

    def build(self, root: str | os.PathLike[str]) -> Matcher:
        """
        Build a `Matcher` for the glob relative to `root`.

        The literal leading components of the glob are joined to `root` and the
        result is resolved to an absolute directory, which is where the walk
        starts. For a glob without any wildcard, the walk starts in its parent
        directory and only the final name is matched, so a missing file gives no
        results rather than an error.

        Raises `PatternError` for absolute globs, `..` after the first wildcard,
        or invalid syntax, and `RootResolutionError` if the walk root does not
        exist or is not a directory.
        """
        glob = self.glob
        if _is_absolute(glob):
            raise PatternError(glob, "is an absolute path")

        parts = split_pattern(glob)
        prefix = list(parts.prefix)
        rest = parts.remainder
        if not rest and prefix and prefix[-1] not in ("", ".", ".."):
            rest = prefix.pop()

        # `..` below the walk root could step outside of it.
        if ".." in rest.split(SEPARATOR):
            raise PatternError(
                glob, f"pattern remainder '{rest}' contains unresolved relative path components"
            )

        walk_root = _resolve_root(Path(root), prefix)

        try:
            glob_matcher = compile_glob(rest, self.match_case)
        except PatternError as e:
            raise PatternError(glob, e.reason) from e

        log.debug("Resolved glob %r: walking %s with %r", glob, walk_root, rest)
        return Matcher(
            glob=glob,
            root=walk_root,
            rest=rest,
            matcher=glob_matcher,
            max_depth=_max_depth(rest),
        )

    def build_glob(self) -> Glob:
        """
        Build a `Glob` for filtering paths yielded by a `Matcher`. No prefix is
        resolved and absolute globs are allowed; only empty globs are rejected.
        """
        return compile_single(self.glob, self.match_case)

    def build_glob_set(self) -> GlobSet:
        """
        Build a `GlobSet` matching `[glob, **/glob]`, e.g. for blacklists where
        `*.txt` should apply at any depth. The glob must be relative.
        """
        return compile_set(self.glob, self.match_case)


@dataclass(frozen=True)
class Matcher:
    """
    A glob resolved against a root directory, ready to walk.

    Iterating creates a fresh `IterAll` each time, so the same matcher can be
    walked repeatedly; each iterator is single use.
    """

    glob: str  # As given, relative components unresolved
    root: Path  # Absolute walk root: root dir plus the literal prefix
    rest: str  # Matched against paths relative to `root`
    matcher: GlobMatcher
    max_depth: int | None = None  # None when `rest` contains `**`

    def __iter__(self) -> IterAll:
        return IterAll(self.root, ScandirWalker(self.root, self.max_depth), self.matcher)

    def filter_entry(self, predicate: EntryPredicate) -> IterFilter:
        """Shortcut for `iter(matcher).filter_entry(predicate)`."""
        return iter(self).filter_entry(predicate)

    def paths(self) -> Iterator[Path]:
        """Shortcut for `iter(matcher).paths()`: matches only, errors dropped."""
        return iter(self).paths()

    def is_match(self, path: str | os.PathLike[str]) -> bool:
        """Check a path relative to `root` against `rest`."""
        return self.matcher.is_match(path)


def _is_absolute(glob: str) -> bool:
    return PurePosixPath(glob).is_absolute() or PurePath(glob).is_absolute()


def _resolve_root(root: Path, prefix: list[str]) -> Path:
    joined = root.joinpath(*prefix)
    try:
        resolved = joined.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise RootResolutionError(joined, e) from e
    if not resolved.is_dir():
        raise RootResolutionError(joined, f"'{joined}' is not a directory")
    return resolved


def _max_depth(rest: str) -> int | None:
    if "**" in rest:
        return None
    if not rest:
        return 0
    return len(rest.split(SEPARATOR))
