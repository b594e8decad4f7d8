"""
Iterators that walk a directory tree and yield the paths matching a glob.

Items are either an absolute `Path` (a match) or a `TraversalError` (a
directory that could not be read). Errors are yielded, not raised, so the
walk continues with the remaining entries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from relglob.errors import TraversalError
from relglob.matcher import GlobMatcher, normalize_path
from relglob.walker import Entry, Walker

log = logging.getLogger(__name__)

EntryPredicate = Callable[[Entry], bool]


class _MatchingIter:
    def __init__(self, root: Path, walker: Walker, matcher: GlobMatcher) -> None:
        self._root: Path = root
        self._walker: Walker = walker
        self._matcher: GlobMatcher = matcher

    def __iter__(self) -> Iterator[Path | TraversalError]:
        return self

    def __next__(self) -> Path | TraversalError:
        while True:
            item = next(self._walker)
            if isinstance(item, TraversalError):
                return item
            if not self._accept(item):
                if item.is_dir:
                    self._walker.skip_current_dir()
                continue
            try:
                rel = item.path.relative_to(self._root)
            except ValueError:
                # Not below the walk root, so the glob cannot match it.
                continue
            if self._matcher.is_match(normalize_path(rel)):
                return item.path

    def _accept(self, entry: Entry) -> bool:
        return True

    def paths(self) -> Iterator[Path]:
        """Yield only the matched paths, dropping traversal errors."""
        for item in self:
            if isinstance(item, TraversalError):
                log.debug("Skipping unreadable entry: %s", item)
                continue
            yield item

    def close(self) -> None:
        """Stop the walk early and release the walker."""
        self._walker.close()


class IterAll(_MatchingIter):
    """
    Iterates over all paths below the walk root without any filter.

    Use `filter_entry()` to turn it into an `IterFilter` that prunes entries
    before they are matched or descended into, e.g. to skip `.git`.
    """

    def __init__(self, root: Path, walker: Walker, matcher: GlobMatcher) -> None:
        super().__init__(root, walker, matcher)
        self._started: bool = False
        self._consumed: bool = False

    def __next__(self) -> Path | TraversalError:
        if self._consumed:
            raise RuntimeError("Iterator was handed over to filter_entry()")
        self._started = True
        return super().__next__()

    def filter_entry(self, predicate: EntryPredicate) -> IterFilter:
        """
        Hand the walk over to an `IterFilter` applying `predicate` to every entry,
        the walk root included.

        Entries for which `predicate` returns false are not matched, and if they
        are directories, not entered. Must be called once, before iteration starts;
        this iterator must not be used afterwards.
        """
        if self._consumed:
            raise RuntimeError("filter_entry() can only be called once")
        if self._started:
            raise RuntimeError("filter_entry() must be called before iteration starts")
        self._consumed = True
        return IterFilter(self._root, self._walker, self._matcher, predicate)

    def close(self) -> None:
        # After the handover the walker belongs to the `IterFilter`.
        if not self._consumed:
            super().close()


class IterFilter(_MatchingIter):
    """Iterator created by `IterAll.filter_entry()`."""

    def __init__(
        self, root: Path, walker: Walker, matcher: GlobMatcher, predicate: EntryPredicate
    ) -> None:
        super().__init__(root, walker, matcher)
        self._predicate: EntryPredicate = predicate

    def _accept(self, entry: Entry) -> bool:
        return self._predicate(entry)
