# src/templar/config/config_projects.py
"""Project declarations and the dependency graph between them.

Without `dependencies` anywhere, every declaration is parsed on its own.
With them, every declaration needs a unique name; the graph is checked for
cycles from every name, then descriptors are built dependency-first so each
name maps to exactly one fully populated, immutable ProjectDescriptor.
"""

from collections.abc import Iterator, Sequence
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Any

from templar.logs import get_app_logger
from templar.project_handle import ProjectOpener, open_xcode_project
from templar.utils import anchor_path, expand_paths, sorted_paths

from .config_errors import InvalidSourcesError
from .config_output import parse_output
from .config_types import ProjectDescriptor, TargetDescriptor


class _Visit(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


# ---------------------------------------------------------------------------
# single declarations
# ---------------------------------------------------------------------------


def parse_target(raw: Any) -> TargetDescriptor:
    """Parse one `target` object. `module` defaults to the target name."""
    name: Any = raw.get("name") if isinstance(raw, dict) else None
    if not isinstance(name, str) or not name:
        xmsg = "Target name is not provided. Expected string."
        raise InvalidSourcesError(xmsg)

    module: Any = raw.get("module")
    if not isinstance(module, str):
        module = name
    return TargetDescriptor(name=name, module=module)


def _targets_from_raw(raw: Any) -> tuple[TargetDescriptor, ...]:
    if isinstance(raw, dict):
        return (parse_target(raw),)
    if isinstance(raw, list) and all(isinstance(t, dict) for t in raw):
        if not raw:
            xmsg = "No targets provided."
            raise InvalidSourcesError(xmsg)
        return tuple(parse_target(t) for t in raw)
    xmsg = "'target' key is missing. Expected object or array of objects."
    raise InvalidSourcesError(xmsg)


def parse_project(
    raw: dict[str, Any],
    relative_base: Path,
    *,
    open_project: ProjectOpener = open_xcode_project,
) -> ProjectDescriptor:
    """Parse one project declaration (without dependencies or output).

    Raises:
        InvalidSourcesError: missing `file`, missing or empty `target`.
        ProjectOpenError: the project file could not be opened (unchanged).
    """
    logger = get_app_logger()

    file: Any = raw.get("file")
    if not isinstance(file, str):
        xmsg = "Project file path is not provided. Expected string."
        raise InvalidSourcesError(xmsg)

    targets = _targets_from_raw(raw.get("target"))

    raw_exclude: Any = raw.get("exclude", [])
    if not isinstance(raw_exclude, list):
        logger.warning("Ignoring non-list 'exclude' in project %s.", file)
        raw_exclude = []
    exclude = sorted_paths(
        expand_paths(
            anchor_path(p, relative_base) for p in raw_exclude if isinstance(p, str)
        )
    )

    path = anchor_path(file, relative_base)
    handle = open_project(path)

    name: Any = raw.get("name", "")
    if not isinstance(name, str):
        name = ""

    logger.trace(
        f"[parse_project] {path.name}: {len(targets)} target(s),"
        f" {len(exclude)} excluded file(s)"
    )
    return ProjectDescriptor(
        handle=handle,
        path=path,
        root=path.parent,
        targets=targets,
        exclude=exclude,
        name=name,
    )


# ---------------------------------------------------------------------------
# dependency graph
# ---------------------------------------------------------------------------


def _dependency_names(raw: dict[str, Any]) -> list[str]:
    deps: Any = raw.get("dependencies")
    if deps is None:
        return []
    if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
        name = raw.get("name")
        xmsg = (
            f"Dependencies of {name} must be a list of project names."
            if isinstance(name, str)
            else "Dependencies must be a list of project names."
        )
        raise InvalidSourcesError(xmsg)
    return list(deps)


def _walk_dependencies(
    root: str,
    dependencies: dict[str, list[str]],
    state: dict[str, _Visit],
) -> Iterator[str]:
    """Yield names reachable from `root` in post-order (dependencies first).

    `state` is shared by the caller across roots; names already DONE are not
    yielded again. Iterative so long dependency chains cannot exhaust the
    interpreter's recursion limit.

    Raises:
        InvalidSourcesError: a dependency is reached again while still
            in progress; the message names the project that depends on it.
    """
    if state.get(root, _Visit.UNVISITED) is _Visit.DONE:
        return

    state[root] = _Visit.IN_PROGRESS
    stack: list[tuple[str, Iterator[str]]] = [
        (root, iter(dependencies.get(root, []))),
    ]
    while stack:
        name, pending = stack[-1]
        for dep in pending:
            dep_state = state.get(dep, _Visit.UNVISITED)
            if dep_state is _Visit.DONE:
                continue
            if dep_state is _Visit.IN_PROGRESS:
                xmsg = f"Circular dependencies found for the {name}."
                raise InvalidSourcesError(xmsg)
            state[dep] = _Visit.IN_PROGRESS
            stack.append((dep, iter(dependencies.get(dep, []))))
            break
        else:
            stack.pop()
            state[name] = _Visit.DONE
            yield name


def check_circular_dependencies(
    names: Sequence[str],
    dependencies: dict[str, list[str]],
) -> None:
    """Fail on the first cycle, walking from every name with fresh state."""
    for name in names:
        for _ in _walk_dependencies(name, dependencies, {}):
            pass


def dependency_order(
    names: Sequence[str],
    dependencies: dict[str, list[str]],
) -> list[str]:
    """All names (plus unknown dependencies) ordered dependencies-first."""
    state: dict[str, _Visit] = {}
    ordered: list[str] = []
    for name in names:
        ordered.extend(_walk_dependencies(name, dependencies, state))
    return ordered


def _check_dependency_names(raw_projects: Sequence[dict[str, Any]]) -> list[str]:
    names = [p.get("name") for p in raw_projects]
    if not all(isinstance(n, str) and n for n in names):
        xmsg = (
            "In order to use dependencies all project configurations"
            " should contain name property."
        )
        raise InvalidSourcesError(xmsg)
    if len(set(names)) != len(names):
        xmsg = (
            "In order to use dependencies all project configurations"
            " should use unique name."
        )
        raise InvalidSourcesError(xmsg)
    return [str(n) for n in names]


def build_dependency_graph(
    raw_projects: Sequence[dict[str, Any]],
    relative_base: Path,
    *,
    open_project: ProjectOpener = open_xcode_project,
) -> tuple[ProjectDescriptor, ...]:
    """Resolve named projects with their dependencies attached.

    Returns descriptors in declaration order. Dependency lists keep the
    declared order; names that match no project are dropped with a warning.
    A project's own `output` is resolved here, with links defaulting to the
    declaring project.
    """
    logger = get_app_logger()
    names = _check_dependency_names(raw_projects)
    dependencies = {
        name: _dependency_names(raw)
        for name, raw in zip(names, raw_projects, strict=True)
    }

    declared: dict[str, ProjectDescriptor] = {}
    raw_by_name: dict[str, dict[str, Any]] = {}
    for name, raw in zip(names, raw_projects, strict=True):
        project = parse_project(raw, relative_base, open_project=open_project)
        # first declaration wins
        declared.setdefault(name, project)
        raw_by_name.setdefault(name, raw)

    check_circular_dependencies(names, dependencies)
    logger.trace(f"[build_dependency_graph] {len(names)} project(s), no cycles")

    resolved: dict[str, ProjectDescriptor] = {}
    for name in dependency_order(names, dependencies):
        base = declared.get(name)
        if base is None:
            continue

        attached: list[ProjectDescriptor] = []
        for dep in dependencies[name]:
            if dep in resolved:
                attached.append(resolved[dep])
            else:
                logger.warning(
                    "Project %s depends on unknown project %s; ignoring it.",
                    name,
                    dep,
                )

        output = None
        raw_output: Any = raw_by_name[name].get("output")
        if raw_output is not None:
            output = parse_output(
                raw_output,
                relative_base,
                project=base,
                open_project=open_project,
            )

        resolved[name] = replace(
            base,
            dependencies=tuple(attached),
            output=output,
        )

    return tuple(resolved[name] for name in names)


# ---------------------------------------------------------------------------
# entry point
# ---------------------------------------------------------------------------


def _warn_duplicate_names(projects: Sequence[ProjectDescriptor]) -> None:
    logger = get_app_logger()
    seen: set[str] = set()
    for project in projects:
        if not project.name:
            continue
        if project.name in seen:
            logger.warning(
                "Project name %r is declared more than once.",
                project.name,
            )
        seen.add(project.name)


def resolve_projects(
    raw_projects: Sequence[dict[str, Any]],
    relative_base: Path,
    *,
    open_project: ProjectOpener = open_xcode_project,
) -> tuple[ProjectDescriptor, ...]:
    """Resolve a list of project declarations.

    The dependency graph is built only when at least one declaration carries
    a `dependencies` key; otherwise each declaration stands alone and any
    per-project `output` is ignored.

    Raises:
        InvalidSourcesError: empty list, malformed declaration, missing or
            duplicate names (dependency mode), circular dependencies.
        ProjectOpenError: a declared project file could not be opened.
    """
    logger = get_app_logger()
    if not raw_projects:
        xmsg = "No projects provided."
        raise InvalidSourcesError(xmsg)

    if any("dependencies" in raw for raw in raw_projects):
        logger.trace("[resolve_projects] Dependencies declared; building graph")
        return build_dependency_graph(
            raw_projects,
            relative_base,
            open_project=open_project,
        )

    projects = tuple(
        parse_project(raw, relative_base, open_project=open_project)
        for raw in raw_projects
    )
    for raw, project in zip(raw_projects, projects, strict=True):
        if "output" in raw:
            logger.warning(
                "Ignoring 'output' of project %s: per-project outputs"
                " only apply when dependencies are declared.",
                project.path.name,
            )
    _warn_duplicate_names(projects)
    return projects
