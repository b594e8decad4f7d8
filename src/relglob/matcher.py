"""
Glob compilation on top of `wcmatch`.

All matching is done on `/`-separated strings, independent of the host
platform, so a glob written in a config file behaves the same everywhere.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import PurePath, PurePosixPath
from typing import Any

from wcmatch import _wcparse  # pyright: ignore[reportPrivateUsage]
from wcmatch import glob as wcglob

from relglob.errors import PatternError
from relglob.pattern import SEPARATOR, validate_glob

# `*` and `?` never match `/`, `**` spans any number of directories (including
# none), braces expand, and wildcards match dot-files like any other name.
BASE_FLAGS: int = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.DOTMATCH | wcglob.FORCEUNIX


def glob_flags(case_sensitive: bool) -> int:
    """`wcmatch` flags for the given case sensitivity."""
    return BASE_FLAGS | (wcglob.CASE if case_sensitive else wcglob.IGNORECASE)


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Render `path` with `/` separators; the current directory becomes `""`."""
    if isinstance(path, PurePath):
        text = path.as_posix()
    else:
        text = os.fspath(path)
        if os.sep != SEPARATOR:
            text = text.replace(os.sep, SEPARATOR)
    return "" if text == "." else text


@dataclass(frozen=True)
class GlobMatcher:
    """
    A compiled glob, matched against paths relative to some root.

    An empty glob matches only the empty path, i.e. the root itself.
    """

    glob: str
    case_sensitive: bool = True
    _compiled: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.glob:
            object.__setattr__(self, "_compiled", wcglob.compile(self.glob, flags=self.flags))

    @property
    def flags(self) -> int:
        return glob_flags(self.case_sensitive)

    def is_match(self, path: str | os.PathLike[str]) -> bool:
        rel = normalize_path(path)
        if self._compiled is None:
            return rel == ""
        return bool(self._compiled.match(rel))


def compile_glob(glob: str, case_sensitive: bool = True) -> GlobMatcher:
    """
    Validate and compile `glob`. Raises `PatternError` if the syntax is invalid.
    """
    if glob:
        validate_glob(glob)
    try:
        return GlobMatcher(glob, case_sensitive)
    except (ValueError, _wcparse.PatternLimitException) as e:
        raise PatternError(glob, str(e) or type(e).__name__) from e


def _is_absolute_glob(glob: str) -> bool:
    return PurePosixPath(glob).is_absolute() or PurePath(glob).is_absolute()


def _candidate(path: str | os.PathLike[str], absolute_glob: bool) -> str:
    """
    Relative globs are matched against absolute paths with the anchor removed,
    so that `**/name` matches `/any/where/name`.
    """
    text = normalize_path(path)
    if absolute_glob:
        return text
    anchor = PurePath(path).anchor
    if anchor:
        text = text[len(normalize_path(anchor)) :]
    return text.lstrip(SEPARATOR)


@dataclass(frozen=True)
class Glob:
    """
    A single glob used to filter paths produced by a walk.

    Unlike the glob given to `Builder.build()`, no path prefix is resolved.
    """

    glob: str
    matcher: GlobMatcher

    def is_match(self, path: str | os.PathLike[str]) -> bool:
        return self.matcher.is_match(_candidate(path, _is_absolute_glob(self.glob)))


@dataclass(frozen=True)
class GlobSet:
    """
    The pair of globs `[glob, **/glob]`, matching the glob at any depth.

    Handy for blacklists where only the file name or type matters.
    """

    glob: str
    matchers: tuple[GlobMatcher, ...]

    def is_match(self, path: str | os.PathLike[str]) -> bool:
        candidate = _candidate(path, absolute_glob=False)
        return any(m.is_match(candidate) for m in self.matchers)


def compile_single(glob: str, case_sensitive: bool = True) -> Glob:
    if not glob:
        raise PatternError(glob, "empty glob")
    return Glob(glob, compile_glob(glob, case_sensitive))


def compile_set(glob: str, case_sensitive: bool = True) -> GlobSet:
    if not glob:
        raise PatternError(glob, "empty glob")
    if _is_absolute_glob(glob):
        raise PatternError(glob, "is an absolute path")
    matchers = (
        compile_glob(glob, case_sensitive),
        compile_glob("**/" + glob, case_sensitive),
    )
    return GlobSet(glob, matchers)
