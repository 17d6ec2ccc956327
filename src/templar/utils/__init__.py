# src/templar/utils/__init__.py

from .utils_files import load_yaml
from .utils_paths import (
    anchor_path,
    expand_path,
    expand_paths,
    shorten_path_for_display,
    sorted_paths,
)


__all__ = [  # noqa: RUF022
    # utils_files
    "load_yaml",
    # utils_paths
    "anchor_path",
    "expand_path",
    "expand_paths",
    "shorten_path_for_display",
    "sorted_paths",
]
