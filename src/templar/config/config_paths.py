# src/templar/config/config_paths.py


from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from templar.logs import get_app_logger
from templar.utils import anchor_path, expand_paths, sorted_paths

from .config_errors import InvalidPathsError
from .config_types import PathSet


NO_PATHS_MSG = "No paths provided."
BAD_SHAPE_MSG = (
    "No paths provided. Expected list of strings"
    " or object with 'include' and optional 'exclude' keys."
)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def make_path_set(
    include: Iterable[Path],
    exclude: Iterable[Path] = (),
) -> PathSet:
    """Expand include/exclude paths and compute the resolved file set.

    resolved = expand(include) - expand(exclude), sorted by path string.
    """
    logger = get_app_logger()
    include = tuple(include)
    exclude = tuple(exclude)

    for path in include:
        if not path.exists():
            logger.debug("Include path does not exist: %s", path)

    excluded = set(expand_paths(exclude))
    resolved = sorted_paths(p for p in expand_paths(include) if p not in excluded)
    logger.trace(
        f"[make_path_set] {len(include)} include(s), {len(exclude)} exclude(s)"
        f" → {len(resolved)} file(s)"
    )
    return PathSet(include=include, exclude=exclude, resolved=resolved)


def _paths_from_list(raw: Sequence[str], relative_base: Path) -> PathSet:
    if not raw:
        raise InvalidPathsError(NO_PATHS_MSG)
    return make_path_set(anchor_path(p, relative_base) for p in raw)


def _paths_from_mapping(raw: dict[str, Any], relative_base: Path) -> PathSet:
    include = raw["include"]
    exclude = raw.get("exclude", [])
    if not _is_str_list(include) or not _is_str_list(exclude):
        raise InvalidPathsError(BAD_SHAPE_MSG)
    if not include:
        raise InvalidPathsError(NO_PATHS_MSG)
    return make_path_set(
        (anchor_path(p, relative_base) for p in include),
        (anchor_path(p, relative_base) for p in exclude),
    )


def resolve_paths(raw: Any, relative_base: Path) -> PathSet:
    """Resolve a path specification into a PathSet.

    Accepted forms:
      - ["src/", "lib/file.swift"]                  → includes only
      - {"include": [...], "exclude": [...]}        → exclude is optional

    Raises:
        InvalidPathsError: empty list, empty include, or any other shape.
    """
    if _is_str_list(raw):
        return _paths_from_list(raw, relative_base)
    if isinstance(raw, dict) and "include" in raw:
        return _paths_from_mapping(raw, relative_base)
    raise InvalidPathsError(BAD_SHAPE_MSG)
