"""
Glob-list config files.

A config file lists globs that are resolved relative to the directory the file
lives in, independent of where the calling tool was started:

    # relglob.toml
    globs = ["../../text-files/**/*.txt", "inputs/*.md"]
    filter-entry = [".*"]
    filter-post = ["**/drafts/*"]
    case-sensitive = true

Searched as `.relglob.toml`, `relglob.toml` or `pyproject.toml [tool.relglob]`,
walking up from a start directory. JSON files with the same keys are accepted
when loaded explicitly.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, cast

from relglob.wrappers import build_glob_sets, build_matchers, match_paths

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

log = logging.getLogger(__name__)


@dataclass
class GlobsConfig:
    """
    Parsed glob-list config. `root` is the directory of the config file.
    `case_sensitive=None` means the platform default.
    """

    root: Path
    globs: list[str]
    filter_entry: list[str] | None = None
    filter_post: list[str] | None = None
    case_sensitive: bool | None = None


# Checked in this order in each directory.
_CONFIG_FILENAMES = [".relglob.toml", "relglob.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(GlobsConfig)} - {"root"}


def _read_settings(config_path: Path) -> Any | None:
    """
    The settings table of a config file: the whole document, or `[tool.relglob]`
    of a `pyproject.toml` (`None` if it has no such table).
    """
    text = config_path.read_text(encoding="utf-8")
    if config_path.suffix == ".json":
        return json.loads(text)
    data = tomllib.loads(text)
    if config_path.name == "pyproject.toml":
        return data.get("tool", {}).get("relglob")
    return data


def find_config_file(start_dir: Path) -> Path | None:
    """
    Look for a config file in `start_dir` and then each of its parents. A
    `pyproject.toml` only counts if it has a `[tool.relglob]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for name in _CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file() and _has_settings(candidate):
                return candidate
    return None


def _has_settings(config_path: Path) -> bool:
    if config_path.name != "pyproject.toml":
        return True
    try:
        return _read_settings(config_path) is not None
    except (tomllib.TOMLDecodeError, UnicodeDecodeError, OSError):
        return False


def load_config(config_path: Path) -> GlobsConfig:
    """
    Load a `GlobsConfig` from a TOML or JSON file. Raises `ValueError` if the
    `globs` key is missing or not a list of strings.
    """
    data = _read_settings(config_path)
    if data is None:
        raise ValueError(f"{config_path}: no [tool.relglob] table")
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a table of settings")

    config = _parse_config_data(cast(dict[str, Any], data), config_path.resolve().parent)
    log.debug("Loaded %d glob(s) from %s", len(config.globs), config_path)
    return config


def _string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in cast(list[Any], value)):
        raise ValueError(f"'{key}' must be a list of strings")
    return cast(list[str], value)


def _parse_config_data(data: dict[str, Any], root: Path) -> GlobsConfig:
    mapped: dict[str, Any] = {}
    for key, value in data.items():
        snake_key = key.replace("-", "_")
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = value

    if "globs" not in mapped:
        raise ValueError("Missing 'globs' list")
    mapped["globs"] = _string_list("globs", mapped["globs"])
    for key in ("filter_entry", "filter_post"):
        if mapped.get(key) is not None:
            mapped[key] = _string_list(key, mapped[key])
    if mapped.get("case_sensitive") is not None and not isinstance(mapped["case_sensitive"], bool):
        raise ValueError("'case_sensitive' must be a boolean")

    return GlobsConfig(root=root, **mapped)


def resolve_config(config: GlobsConfig) -> tuple[list[Path], list[Path]]:
    """
    Resolve all globs of `config` relative to its root. Returns `(paths, filtered)`
    as `match_paths()` does. Filters are matched case insensitively unless the
    config asks for case sensitivity.
    """
    matchers = build_matchers(config.globs, config.root, config.case_sensitive)
    filter_case = bool(config.case_sensitive)
    pre = build_glob_sets(config.filter_entry, filter_case)
    post = build_glob_sets(config.filter_post, filter_case)
    return match_paths(matchers, pre, post)
