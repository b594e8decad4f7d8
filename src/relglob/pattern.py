"""
Splitting a glob into its literal directory prefix and the remaining glob.

This is pure string analysis on `/`-separated components: the literal prefix
is what can be joined to a root directory before walking, the remainder is
what has to be matched while walking.
"""

from __future__ import annotations

from typing import NamedTuple

from relglob.errors import PatternError

SEPARATOR = "/"

# Characters that make a path component a glob rather than a literal name.
GLOB_CHARS = frozenset("*?[]{}\\")


class PatternParts(NamedTuple):
    """A glob split into literal leading components and the glob remainder."""

    prefix: tuple[str, ...]
    remainder: str


def has_magic(text: str) -> bool:
    """True if `text` contains any glob metacharacter."""
    return any(c in GLOB_CHARS for c in text)


def split_pattern(pattern: str) -> PatternParts:
    """
    Split `pattern` at the first component containing a glob metacharacter.

    Every component before it goes into the literal prefix; that component and
    everything after it form the remainder, rejoined with `/`. A pattern
    without metacharacters is all prefix with an empty remainder.

    The split is lossless: `join_pattern(split_pattern(p)) == p`.
    """
    if not pattern:
        return PatternParts((), "")

    components = pattern.split(SEPARATOR)
    for i, part in enumerate(components):
        if has_magic(part):
            return PatternParts(tuple(components[:i]), SEPARATOR.join(components[i:]))
    return PatternParts(tuple(components), "")


def join_pattern(parts: PatternParts) -> str:
    """Inverse of `split_pattern()`."""
    if parts.remainder:
        return SEPARATOR.join((*parts.prefix, parts.remainder))
    return SEPARATOR.join(parts.prefix)


def validate_glob(glob: str) -> None:
    """
    Check bracket, brace and escape balance.

    The matching engine silently treats an unclosed `[` as a literal character,
    which hides typos in configuration files, so these are rejected up front.
    """
    brace_depth = 0
    i = 0
    n = len(glob)
    while i < n:
        c = glob[i]
        if c == "\\":
            if i + 1 >= n:
                raise PatternError(glob, "dangling '\\'")
            i += 2
            continue
        if c == "[":
            i = _skip_class(glob, i)
            continue
        if c == "{":
            brace_depth += 1
        elif c == "}":
            brace_depth -= 1
            if brace_depth < 0:
                raise PatternError(glob, "unopened alternate group; missing '{'")
        i += 1

    if brace_depth > 0:
        raise PatternError(glob, "unclosed alternate group; missing '}'")


def _skip_class(glob: str, start: int) -> int:
    """Return the index just past the `]` closing the class opened at `start`."""
    i = start + 1
    n = len(glob)
    if i < n and glob[i] in "!^":
        i += 1
    # A `]` right after the opening bracket (or negation) is a literal member.
    if i < n and glob[i] == "]":
        i += 1
    while i < n:
        c = glob[i]
        if c == "\\":
            i += 2
            continue
        if c == "]":
            return i + 1
        i += 1
    raise PatternError(glob, "unclosed character class; missing ']'")
