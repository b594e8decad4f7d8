"""
Recursive directory walking.

The matching iterators only depend on the `Walker` protocol: something that
produces entries one at a time and can be told not to descend into the
directory it produced last. `ScandirWalker` is the filesystem implementation.
"""

from __future__ import annotations

import errno
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from relglob.errors import TraversalError


class EntryKind(str, Enum):
    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """A single filesystem entry produced by a walk."""

    path: Path
    depth: int
    kind: EntryKind

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIR

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.SYMLINK

    def __fspath__(self) -> str:
        return str(self.path)


class Walker(Protocol):
    """
    A lazy, depth-first walk yielding entries (or errors) one at a time.

    The root comes first at depth 0, and every directory comes before its
    children. `skip_current_dir()` drops the children of the directory most
    recently yielded; it must be called before the next item is pulled.
    """

    def __iter__(self) -> Iterator[Entry | TraversalError]: ...

    def __next__(self) -> Entry | TraversalError: ...

    def skip_current_dir(self) -> None: ...

    def close(self) -> None: ...


def _kind_of(dir_entry: os.DirEntry[str], follow_links: bool) -> EntryKind:
    try:
        if follow_links:
            if dir_entry.is_dir():
                return EntryKind.DIR
            if dir_entry.is_file():
                return EntryKind.FILE
        if dir_entry.is_symlink():
            return EntryKind.SYMLINK
        if dir_entry.is_dir(follow_symlinks=False):
            return EntryKind.DIR
        if dir_entry.is_file(follow_symlinks=False):
            return EntryKind.FILE
    except OSError:
        pass
    return EntryKind.OTHER


# (st_dev, st_ino) of a directory, used to detect symlink loops.
_DirKey = tuple[int, int]


class ScandirWalker:
    """
    Walk a directory tree with `os.scandir()`.

    A directory is only read when the walk moves past it, so a directory that
    is skipped is never opened. Each directory is read completely and its
    handle closed before any entry of it is yielded. Children are sorted by
    name unless `sort=False`, in which case they come in `os.scandir()` order.

    Symbolic links are reported as `EntryKind.SYMLINK` and not entered. With
    `follow_links=True` they are reported as what they point to and directories
    are entered; a link back to one of its own ancestors yields a
    `TraversalError` instead of looping.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        max_depth: int | None = None,
        follow_links: bool = False,
        sort: bool = True,
    ) -> None:
        self.root: Path = Path(root)
        self.max_depth: int | None = max_depth
        self.follow_links: bool = follow_links
        self.sort: bool = sort
        # One frame per directory being iterated, with its key when following links.
        self._stack: list[tuple[Iterator[Entry], _DirKey | None]] = []
        self._pending: Entry | None = None
        self._root_key: _DirKey | None = None
        self._started: bool = False
        self._closed: bool = False

    def __iter__(self) -> ScandirWalker:
        return self

    def __next__(self) -> Entry | TraversalError:
        if self._closed:
            raise StopIteration

        if not self._started:
            self._started = True
            return self._root_entry()

        if self._pending is not None:
            pending, self._pending = self._pending, None
            if self.max_depth is None or pending.depth < self.max_depth:
                try:
                    key = self._dir_key(pending)
                    children = self._read_dir(pending)
                except OSError as e:
                    return TraversalError(pending.path, e)
                self._stack.append((iter(children), key))

        while self._stack:
            child = next(self._stack[-1][0], None)
            if child is None:
                self._stack.pop()
                continue
            if child.is_dir:
                self._pending = child
            return child

        self._closed = True
        raise StopIteration

    def skip_current_dir(self) -> None:
        self._pending = None

    def close(self) -> None:
        self._closed = True
        self._pending = None
        self._stack.clear()

    def _root_entry(self) -> Entry | TraversalError:
        try:
            st = os.stat(self.root)
        except OSError as e:
            self._closed = True
            return TraversalError(self.root, e)
        if stat.S_ISDIR(st.st_mode):
            entry = Entry(self.root, 0, EntryKind.DIR)
            self._root_key = (st.st_dev, st.st_ino)
            self._pending = entry
            return entry
        kind = EntryKind.FILE if stat.S_ISREG(st.st_mode) else EntryKind.OTHER
        return Entry(self.root, 0, kind)

    def _dir_key(self, entry: Entry) -> _DirKey | None:
        """
        Key of a directory about to be read. Raises `OSError` (ELOOP) if it is
        one of its own ancestors.
        """
        if not self.follow_links:
            return None
        if entry.depth == 0:
            return self._root_key
        st = os.stat(entry.path)
        key = (st.st_dev, st.st_ino)
        if key in (k for _, k in self._stack):
            raise OSError(errno.ELOOP, "File system loop found", str(entry.path))
        return key

    def _read_dir(self, parent: Entry) -> list[Entry]:
        depth = parent.depth + 1
        with os.scandir(parent.path) as it:
            children = [Entry(Path(d.path), depth, _kind_of(d, self.follow_links)) for d in it]
        if self.sort:
            children.sort(key=lambda e: e.name)
        return children
