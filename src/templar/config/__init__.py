# src/templar/config/__init__.py

"""Configuration handling for templar.

This module provides configuration discovery, decoding, validation, and
resolution into an immutable Configuration.
"""

from .config_errors import (
    ConfigError,
    InvalidCacheBasePathError,
    InvalidFormatError,
    InvalidOutputError,
    InvalidPathsError,
    InvalidSourcesError,
    InvalidTemplatesError,
)
from .config_loader import (
    can_run_configless,
    find_config,
    load_and_resolve_config,
    load_config,
)
from .config_output import parse_link, parse_output
from .config_paths import make_path_set, resolve_paths
from .config_projects import (
    build_dependency_graph,
    check_circular_dependencies,
    dependency_order,
    parse_project,
    parse_target,
    resolve_projects,
)
from .config_resolve import (
    configuration_from_paths,
    default_cache_base_path,
    resolve_cache_base_path,
    resolve_config,
    resolve_source,
    resolve_templates,
)
from .config_types import (
    Configuration,
    LinkConfig,
    LinkDescriptor,
    OutputConfig,
    OutputDescriptor,
    PathsConfig,
    PathSet,
    PathsSource,
    ProjectConfig,
    ProjectDescriptor,
    ProjectsSource,
    RootConfig,
    Source,
    SourceKind,
    TargetConfig,
    TargetDescriptor,
)
from .config_validate import validate_config


__all__ = [  # noqa: RUF022
    # config_errors
    "ConfigError",
    "InvalidCacheBasePathError",
    "InvalidFormatError",
    "InvalidOutputError",
    "InvalidPathsError",
    "InvalidSourcesError",
    "InvalidTemplatesError",
    # config_loader
    "can_run_configless",
    "find_config",
    "load_and_resolve_config",
    "load_config",
    # config_output
    "parse_link",
    "parse_output",
    # config_paths
    "make_path_set",
    "resolve_paths",
    # config_projects
    "build_dependency_graph",
    "check_circular_dependencies",
    "dependency_order",
    "parse_project",
    "parse_target",
    "resolve_projects",
    # config_resolve
    "configuration_from_paths",
    "default_cache_base_path",
    "resolve_cache_base_path",
    "resolve_config",
    "resolve_source",
    "resolve_templates",
    # config_types
    "Configuration",
    "LinkConfig",
    "LinkDescriptor",
    "OutputConfig",
    "OutputDescriptor",
    "PathsConfig",
    "PathSet",
    "PathsSource",
    "ProjectConfig",
    "ProjectDescriptor",
    "ProjectsSource",
    "RootConfig",
    "Source",
    "SourceKind",
    "TargetConfig",
    "TargetDescriptor",
    # config_validate
    "validate_config",
]
