"""
Glob matching relative to a root directory.

CLI tools often take sets of files as globs, either as arguments or from a
config file. Globs in a config file are most useful relative to the file's own
location, so they resolve the same way wherever the tool is started. relglob
resolves such globs: the literal leading components are joined to the root,
and the rest is matched while walking the tree below.

Usage::

    from relglob import Builder, is_hidden_entry

    matcher = Builder("../data/**/*.txt").case_sensitive(False).build(config_dir)
    for path in matcher.filter_entry(lambda e: not is_hidden_entry(e)).paths():
        print(path)

Iterating yields `Path` objects for matches and `TraversalError` objects for
directories that could not be read; `.paths()` drops the errors.
"""

from relglob.builder import Builder, Matcher
from relglob.config import GlobsConfig, find_config_file, load_config, resolve_config
from relglob.errors import (
    BuildError,
    PatternError,
    RelglobError,
    RootResolutionError,
    TraversalError,
)
from relglob.hidden import is_hidden_entry, is_hidden_path
from relglob.ignore import DEFAULT_IGNORES, gitignore_filter, ignore_filter
from relglob.iters import IterAll, IterFilter
from relglob.matcher import Glob, GlobMatcher, GlobSet, compile_glob
from relglob.pattern import PatternParts, split_pattern
from relglob.walker import Entry, EntryKind, ScandirWalker, Walker
from relglob.wrappers import build_glob_sets, build_matchers, match_paths

__all__ = [
    "DEFAULT_IGNORES",
    "BuildError",
    "Builder",
    "Entry",
    "EntryKind",
    "Glob",
    "GlobMatcher",
    "GlobSet",
    "GlobsConfig",
    "IterAll",
    "IterFilter",
    "Matcher",
    "PatternError",
    "PatternParts",
    "RelglobError",
    "RootResolutionError",
    "ScandirWalker",
    "TraversalError",
    "Walker",
    "build_glob_sets",
    "build_matchers",
    "compile_glob",
    "find_config_file",
    "gitignore_filter",
    "ignore_filter",
    "is_hidden_entry",
    "is_hidden_path",
    "load_config",
    "match_paths",
    "resolve_config",
    "split_pattern",
]
