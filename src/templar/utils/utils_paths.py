# src/templar/utils/utils_paths.py

import os
from collections.abc import Iterable
from pathlib import Path


def anchor_path(raw: str | Path, relative_base: Path) -> Path:
    """Turn a user-provided path into a normalized absolute path.

    Relative paths are anchored to `relative_base`; `~` is expanded.
    `..` segments are collapsed lexically (symlinks are not resolved).
    """
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path(relative_base).expanduser() / path
    return Path(os.path.normpath(path.absolute()))


def expand_path(path: Path) -> list[Path]:
    """Expand a path into the files it stands for.

    - a directory → every file beneath it, recursively, dot-files included;
      directory symlinks are not followed
    - anything else (file or missing path) → the path itself
    """
    if not path.is_dir():
        return [path]

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(path):
        dirnames.sort()
        files.extend(Path(dirpath) / name for name in sorted(filenames))
    return files


def expand_paths(paths: Iterable[Path]) -> list[Path]:
    """Expand every path in order (see `expand_path`)."""
    expanded: list[Path] = []
    for path in paths:
        expanded.extend(expand_path(path))
    return expanded


def sorted_paths(paths: Iterable[Path]) -> tuple[Path, ...]:
    """Deduplicate and sort by path string for deterministic output."""
    return tuple(sorted(set(paths), key=str))


def shorten_path_for_display(
    path: Path | str,
    *,
    cwd: Path | None = None,
    config_dir: Path | None = None,
) -> str:
    """Shorten an absolute path for display purposes.

    Tries to make the path relative to cwd first, then config_dir, and picks
    the shortest result. If neither works, returns the absolute path.
    """
    path_obj = Path(path)

    candidates: list[str] = []
    for base in (cwd, config_dir):
        if base is None:
            continue
        try:
            candidates.append(str(path_obj.relative_to(base)) or ".")
        except ValueError:
            continue

    if candidates:
        return min(candidates, key=len)
    return str(path_obj)
