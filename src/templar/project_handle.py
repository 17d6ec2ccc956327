# src/templar/project_handle.py
"""Read-only handles on IDE project files.

The resolver only needs to know that a project opens and, for output
linking, which targets and groups it declares. Xcode projects are bundles
(`Foo.xcodeproj/`) whose object graph lives in `project.pbxproj`.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .constants import XCODE_PBXPROJ_NAME, XCODE_PROJECT_SUFFIX
from .logs import get_app_logger


# Object headers look like:  0123456789ABCDEF01234567 /* MyApp */ = {isa = PBXNativeTarget;
_OBJECT_HEADER = re.compile(
    r"^\s*[0-9A-Fa-f]{24}\s*/\*\s*(?P<name>.+?)\s*\*/\s*=\s*\{\s*isa\s*=\s*(?P<isa>\w+);",
    re.MULTILINE,
)

_TARGET_ISAS = frozenset(
    {"PBXNativeTarget", "PBXAggregateTarget", "PBXLegacyTarget"},
)
_GROUP_ISAS = frozenset({"PBXGroup", "PBXVariantGroup", "XCVersionGroup"})


class ProjectOpenError(OSError):
    """A project file could not be opened or read."""


class ProjectHandle(Protocol):
    """What the resolver and the downstream generator need from a project."""

    path: Path

    @property
    def target_names(self) -> tuple[str, ...]: ...

    @property
    def group_names(self) -> tuple[str, ...]: ...


ProjectOpener = Callable[[Path], ProjectHandle]


@dataclass(frozen=True)
class XcodeProject:
    """An opened `.xcodeproj` bundle."""

    path: Path
    target_names: tuple[str, ...]
    group_names: tuple[str, ...]

    def has_target(self, name: str) -> bool:
        return name in self.target_names

    def has_group(self, name: str) -> bool:
        return name in self.group_names


def _scan_objects(text: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    targets: list[str] = []
    groups: list[str] = []
    for match in _OBJECT_HEADER.finditer(text):
        isa = match.group("isa")
        name = match.group("name")
        if isa in _TARGET_ISAS and name not in targets:
            targets.append(name)
        elif isa in _GROUP_ISAS and name not in groups:
            groups.append(name)
    return tuple(targets), tuple(groups)


def open_xcode_project(path: Path) -> XcodeProject:
    """Open an Xcode project bundle read-only.

    Raises:
        ProjectOpenError: the bundle or its `project.pbxproj` is missing or
            unreadable.
    """
    logger = get_app_logger()
    logger.trace(f"[open_xcode_project] Opening {path}")
    if path.suffix != XCODE_PROJECT_SUFFIX:
        logger.debug("Project path %s does not end in %s", path, XCODE_PROJECT_SUFFIX)

    if not path.is_dir():
        xmsg = f"Project file not found: {path}"
        raise ProjectOpenError(xmsg)

    pbxproj = path / XCODE_PBXPROJ_NAME
    try:
        text = pbxproj.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        xmsg = f"Could not read project file {pbxproj}: {e.strerror or e}"
        raise ProjectOpenError(xmsg) from e

    targets, groups = _scan_objects(text)
    logger.trace(
        f"[open_xcode_project] {path.name}: {len(targets)} target(s),"
        f" {len(groups)} group(s)"
    )
    return XcodeProject(path=path, target_names=targets, group_names=groups)
