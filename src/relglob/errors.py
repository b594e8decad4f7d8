"""Exception types raised (or yielded) by relglob."""

from __future__ import annotations

import errno
import os
from pathlib import Path


def _upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


class RelglobError(Exception):
    """Base class for all relglob errors."""


class PatternError(RelglobError, ValueError):
    """
    The glob is not usable: invalid syntax, an absolute pattern, or relative
    path components (`..`) left inside the glob remainder.
    """

    def __init__(self, glob: str, reason: str) -> None:
        self.glob: str = glob
        self.reason: str = reason
        super().__init__(f"'{glob}': {_upper_first(reason)}")


class RootResolutionError(RelglobError):
    """The root directory (joined with the literal prefix of the glob) cannot be resolved."""

    def __init__(self, path: str | os.PathLike[str], cause: BaseException | str) -> None:
        self.path: Path = Path(path)
        self.cause: BaseException | str = cause
        super().__init__(f"Failed to resolve paths: {_upper_first(str(cause))}")


class BuildError(RelglobError):
    """One or more globs of a list failed to build. `errors` holds each failure."""

    def __init__(self, errors: list[RelglobError]) -> None:
        self.errors: list[RelglobError] = errors
        super().__init__("Failed to compile patterns: \n" + "\n".join(str(e) for e in errors))


class TraversalError(RelglobError):
    """
    A directory could not be read while walking.

    Instances are yielded as items by the matching iterators rather than raised,
    so a single unreadable directory does not end the walk.
    """

    def __init__(self, path: str | os.PathLike[str] | None, cause: OSError | None = None) -> None:
        self.path: Path | None = Path(path) if path is not None else None
        self.cause: OSError | None = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.path is None:
            return "<unknown-path>: Unknown error occurred"
        common = f"Failed to walk path {self.path}"
        if self.cause is None:
            return f"{common}: Unknown error occurred"
        if isinstance(self.cause, PermissionError):
            return f"{common}: Missing permissions to read entry: {self.cause}"
        if self.cause.errno in (errno.EINVAL, errno.EILSEQ):
            return f"{common}: Invalid data encountered: {self.cause}"
        return f"{common}: Unexpected error occurred: {self.cause}"
