# src/templar/config/config_resolve.py


import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from templar.constants import DEFAULT_ENV_CACHE_DIR, DEFAULT_ENV_XDG_CACHE_HOME
from templar.logs import get_app_logger
from templar.meta import PROGRAM_CONFIG, PROGRAM_ENV
from templar.project_handle import ProjectOpener, open_xcode_project
from templar.utils import anchor_path

from .config_errors import (
    InvalidCacheBasePathError,
    InvalidFormatError,
    InvalidPathsError,
    InvalidSourcesError,
    InvalidTemplatesError,
)
from .config_output import parse_output
from .config_paths import resolve_paths
from .config_projects import resolve_projects
from .config_types import (
    Configuration,
    OutputDescriptor,
    PathSet,
    PathsSource,
    ProjectsSource,
    Source,
)


# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def default_cache_base_path() -> Path:
    """Process-wide default cache location.

    Precedence: TEMPLAR_CACHE_DIR → $XDG_CACHE_HOME/templar → ~/.cache/templar
    """
    env_cache = os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_CACHE_DIR}")
    if env_cache:
        return Path(env_cache).expanduser().absolute()

    xdg_cache = os.getenv(DEFAULT_ENV_XDG_CACHE_HOME)
    if xdg_cache:
        return Path(xdg_cache).expanduser().absolute() / PROGRAM_CONFIG

    return Path.home() / ".cache" / PROGRAM_CONFIG


def _project_declarations(raw: Any) -> list[dict[str, Any]] | None:
    if isinstance(raw, dict):
        return [raw]
    if isinstance(raw, list) and all(isinstance(p, dict) for p in raw):
        return list(raw)
    return None


def _string_list(raw: Any, key: str) -> tuple[str, ...]:
    logger = get_app_logger()
    if raw is None:
        return ()
    if isinstance(raw, list) and all(isinstance(v, str) for v in raw):
        return tuple(raw)
    logger.warning("Ignoring '%s': expected a list of strings.", key)
    return ()


# --------------------------------------------------------------------------- #
# source
# --------------------------------------------------------------------------- #


def resolve_source(
    raw: Mapping[str, Any],
    relative_base: Path,
    *,
    open_project: ProjectOpener = open_xcode_project,
) -> Source:
    """Decide between a project-based source and a flat path source.

    `project` (object or list of objects) takes precedence over `sources`.

    Raises:
        InvalidSourcesError: neither key usable, or either branch failed.
        ProjectOpenError: a declared project file could not be opened.
    """
    logger = get_app_logger()

    declarations = _project_declarations(raw.get("project"))
    if declarations is not None:
        logger.trace(f"[resolve_source] {len(declarations)} project declaration(s)")
        return ProjectsSource(
            projects=resolve_projects(
                declarations,
                relative_base,
                open_project=open_project,
            )
        )

    if "project" in raw:
        logger.warning("Ignoring 'project': expected an object or array of objects.")

    if "sources" in raw:
        logger.trace("[resolve_source] Resolving flat sources")
        try:
            return PathsSource(paths=resolve_paths(raw["sources"], relative_base))
        except InvalidPathsError as e:
            raise InvalidSourcesError(e.message) from e

    xmsg = "'sources' or 'project' key are missing."
    raise InvalidSourcesError(xmsg)


# --------------------------------------------------------------------------- #
# configuration
# --------------------------------------------------------------------------- #


def resolve_templates(raw: Mapping[str, Any], relative_base: Path) -> PathSet:
    if "templates" not in raw:
        xmsg = "'templates' key is missing."
        raise InvalidTemplatesError(xmsg)
    try:
        templates = resolve_paths(raw["templates"], relative_base)
    except InvalidPathsError as e:
        raise InvalidTemplatesError(e.message) from e
    if templates.is_empty:
        xmsg = "No templates provided."
        raise InvalidTemplatesError(xmsg)
    return templates


def resolve_cache_base_path(raw: Mapping[str, Any], relative_base: Path) -> Path:
    if "cacheBasePath" not in raw:
        return default_cache_base_path()
    value: Any = raw["cacheBasePath"]
    if not isinstance(value, str):
        xmsg = "'cacheBasePath' key is not a string."
        raise InvalidCacheBasePathError(xmsg)
    return anchor_path(value, relative_base)


def resolve_config(
    raw: Any,
    relative_base: Path,
    *,
    open_project: ProjectOpener = open_xcode_project,
) -> Configuration:
    """Resolve a decoded configuration document into a Configuration.

    Resolution order: source, templates, force-parse, output, cacheBasePath,
    args. The first failure aborts; nothing is partially resolved.

    Raises:
        InvalidFormatError: the document is not a mapping.
        ConfigError subclasses: see the individual resolvers.
        ProjectOpenError: a declared project file could not be opened.
    """
    logger = get_app_logger()
    if not isinstance(raw, dict):
        xmsg = "Expected dictionary."
        raise InvalidFormatError(xmsg)

    relative_base = anchor_path(relative_base, Path.cwd())
    logger.trace(f"[resolve_config] Resolving relative to {relative_base}")

    source = resolve_source(raw, relative_base, open_project=open_project)
    if source.is_empty:
        xmsg = "No sources provided."
        raise InvalidSourcesError(xmsg)

    templates = resolve_templates(raw, relative_base)
    force_parse = _string_list(raw.get("force-parse"), "force-parse")
    output = parse_output(raw.get("output"), relative_base, open_project=open_project)
    cache_base_path = resolve_cache_base_path(raw, relative_base)

    args: Any = raw.get("args", {})
    if not isinstance(args, dict):
        logger.warning("Ignoring 'args': expected an object.")
        args = {}

    logger.debug(
        "Resolved configuration: %s source, %d template(s), output %s",
        source.kind,
        len(templates),
        output.path,
    )
    return Configuration(
        source=source,
        templates=templates,
        output=output,
        cache_base_path=cache_base_path,
        force_parse=force_parse,
        args=dict(args),
    )


def configuration_from_paths(
    sources: PathSet,
    templates: PathSet,
    output: OutputDescriptor | Path,
    *,
    cache_base_path: Path | None = None,
    force_parse: Iterable[str] = (),
    args: Mapping[str, Any] | None = None,
) -> Configuration:
    """Build a Configuration directly, without a document (no checks).

    A bare `output` path becomes an unlinked OutputDescriptor.
    """
    if isinstance(output, Path):
        output = OutputDescriptor(path=output, raw=str(output))
    return Configuration(
        source=PathsSource(paths=sources),
        templates=templates,
        output=output,
        cache_base_path=(
            cache_base_path if cache_base_path is not None else default_cache_base_path()
        ),
        force_parse=tuple(force_parse),
        args=dict(args or {}),
    )
