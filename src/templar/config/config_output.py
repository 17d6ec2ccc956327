# src/templar/config/config_output.py


from pathlib import Path
from typing import Any

from templar.logs import get_app_logger
from templar.project_handle import (
    ProjectOpener,
    ProjectOpenError,
    open_xcode_project,
)
from templar.utils import anchor_path

from .config_errors import InvalidOutputError
from .config_types import LinkDescriptor, OutputDescriptor, ProjectDescriptor


def _warn_unknown_link_members(link: LinkDescriptor) -> None:
    logger = get_app_logger()
    handle = link.project
    if link.target not in handle.target_names:
        logger.warning(
            "Link target %r is not declared in %s; files will not be wired to it.",
            link.target,
            link.project_path.name,
        )
    if link.group is not None and link.group not in handle.group_names:
        logger.warning(
            "Link group %r is not declared in %s.",
            link.group,
            link.project_path.name,
        )


def parse_link(
    raw: dict[str, Any],
    relative_base: Path,
    *,
    project: ProjectDescriptor | None = None,
    open_project: ProjectOpener = open_xcode_project,
) -> LinkDescriptor | None:
    """Resolve a `link` object into a LinkDescriptor.

    Without a `project` key the link borrows the handle and root of `project`
    (the declaring project). A linked project that cannot be opened degrades
    to no link (returns None) with a warning.

    Raises:
        InvalidOutputError: `project` missing with nothing to borrow, or
            `target` missing.
    """
    logger = get_app_logger()
    project_file: Any = raw.get("project")
    target: Any = raw.get("target")
    group: Any = raw.get("group")

    if not isinstance(project_file, str) and project is None:
        xmsg = "No project file path provided."
        raise InvalidOutputError(xmsg)
    if not isinstance(target, str):
        xmsg = "No target name provided."
        raise InvalidOutputError(xmsg)
    if group is not None and not isinstance(group, str):
        logger.warning("Ignoring non-string link group: %r", group)
        group = None

    if not isinstance(project_file, str) and project is not None:
        # borrowed from the declaring project, never reopened
        logger.trace(f"[parse_link] Borrowing project handle from {project.path}")
        link = LinkDescriptor(
            project=project.handle,
            project_path=project.root,
            target=target,
            group=group,
        )
        _warn_unknown_link_members(link)
        return link

    project_path = anchor_path(str(project_file), relative_base)
    try:
        handle = open_project(project_path)
    except ProjectOpenError as e:
        logger.warning(
            "Could not open linked project %s; output will not be linked: %s",
            project_path,
            e,
        )
        return None

    link = LinkDescriptor(
        project=handle,
        project_path=project_path,
        target=target,
        group=group,
    )
    _warn_unknown_link_members(link)
    return link


def parse_output(
    raw: Any,
    relative_base: Path,
    *,
    project: ProjectDescriptor | None = None,
    open_project: ProjectOpener = open_xcode_project,
) -> OutputDescriptor:
    """Resolve an output declaration.

    Accepted forms:
      - "out/"                                   → path, no link
      - {"path": "out/", "link": {...}}          → link is optional

    Raises:
        InvalidOutputError: not a string or object, or object without `path`.
    """
    logger = get_app_logger()
    logger.trace(f"[parse_output] Resolving {type(raw).__name__}")

    if isinstance(raw, str):
        return OutputDescriptor(path=anchor_path(raw, relative_base), raw=raw)

    if not isinstance(raw, dict):
        xmsg = "'output' key is missing or is not a string or object."
        raise InvalidOutputError(xmsg)

    raw_path: Any = raw.get("path")
    if not isinstance(raw_path, str):
        xmsg = "No path provided."
        raise InvalidOutputError(xmsg)

    link: LinkDescriptor | None = None
    raw_link: Any = raw.get("link")
    if isinstance(raw_link, dict):
        link = parse_link(
            raw_link,
            relative_base,
            project=project,
            open_project=open_project,
        )
    elif raw_link is not None:
        logger.warning("Ignoring 'link' for output %s: expected an object.", raw_path)

    return OutputDescriptor(
        path=anchor_path(raw_path, relative_base),
        link=link,
        raw=raw_path,
    )
