# tests/utils/__init__.py

from .constants import DEFAULT_TEST_LOG_LEVEL
from .factories import (
    FakeOpener,
    FakeProject,
    make_tree,
    make_xcodeproj,
    write_config_file,
)
from .patching import patch_everywhere


__all__ = [  # noqa: RUF022
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    # factories
    "FakeOpener",
    "FakeProject",
    "make_tree",
    "make_xcodeproj",
    "write_config_file",
    # patching
    "patch_everywhere",
]
