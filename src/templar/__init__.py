# src/templar/__init__.py

"""Templar: resolve code-generation configurations.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                     → CLI entrypoint
    - load_and_resolve_config()  → Decode, validate and resolve a config file
    - resolve_config()           → Resolve an already decoded document
    - configuration_from_paths() → Build a Configuration without a document
"""

from .cli import main
from .config import (
    ConfigError,
    Configuration,
    InvalidCacheBasePathError,
    InvalidFormatError,
    InvalidOutputError,
    InvalidPathsError,
    InvalidSourcesError,
    InvalidTemplatesError,
    LinkDescriptor,
    OutputDescriptor,
    PathSet,
    PathsSource,
    ProjectDescriptor,
    ProjectsSource,
    Source,
    TargetDescriptor,
    configuration_from_paths,
    default_cache_base_path,
    find_config,
    load_and_resolve_config,
    load_config,
    make_path_set,
    resolve_config,
    resolve_paths,
    validate_config,
)
from .logs import get_app_logger
from .meta import PROGRAM_DISPLAY, PROGRAM_PACKAGE, __version__
from .project_handle import (
    ProjectHandle,
    ProjectOpener,
    ProjectOpenError,
    XcodeProject,
    open_xcode_project,
)


__all__ = [  # noqa: RUF022
    # cli
    "main",
    # config
    "ConfigError",
    "Configuration",
    "InvalidCacheBasePathError",
    "InvalidFormatError",
    "InvalidOutputError",
    "InvalidPathsError",
    "InvalidSourcesError",
    "InvalidTemplatesError",
    "LinkDescriptor",
    "OutputDescriptor",
    "PathSet",
    "PathsSource",
    "ProjectDescriptor",
    "ProjectsSource",
    "Source",
    "TargetDescriptor",
    "configuration_from_paths",
    "default_cache_base_path",
    "find_config",
    "load_and_resolve_config",
    "load_config",
    "make_path_set",
    "resolve_config",
    "resolve_paths",
    "validate_config",
    # logs
    "get_app_logger",
    # meta
    "PROGRAM_DISPLAY",
    "PROGRAM_PACKAGE",
    "__version__",
    # project_handle
    "ProjectHandle",
    "ProjectOpenError",
    "ProjectOpener",
    "XcodeProject",
    "open_xcode_project",
]
