# src/templar/config/config_types.py


import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, TypedDict

from typing_extensions import NotRequired

from templar.project_handle import ProjectHandle


SourceKind = Literal["projects", "sources"]


# --------------------------------------------------------------------------- #
# raw document shapes (as written by the user)
# --------------------------------------------------------------------------- #


class PathsConfig(TypedDict):
    include: list[str]
    exclude: NotRequired[list[str]]


class TargetConfig(TypedDict):
    name: str
    module: NotRequired[str]


class LinkConfig(TypedDict):
    target: str
    project: NotRequired[str]  # optional when borrowing a declared project
    group: NotRequired[str]


class OutputConfig(TypedDict):
    path: str
    link: NotRequired[LinkConfig]


class ProjectConfig(TypedDict):
    file: str
    target: TargetConfig | list[TargetConfig]
    exclude: NotRequired[list[str]]
    name: NotRequired[str]
    dependencies: NotRequired[list[str]]
    output: NotRequired[str | OutputConfig]  # only applied with dependencies


class RootConfig(TypedDict, total=False):
    sources: list[str] | PathsConfig
    project: ProjectConfig | list[ProjectConfig]
    templates: list[str] | PathsConfig
    output: str | OutputConfig
    cacheBasePath: str  # noqa: N815
    # "force-parse" is not a valid identifier; validated by name in config_validate
    args: dict[str, Any]


# --------------------------------------------------------------------------- #
# resolved model
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class PathSet:
    """Include/exclude declaration plus its expanded, sorted file set."""

    include: tuple[Path, ...]
    exclude: tuple[Path, ...] = ()
    resolved: tuple[Path, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.resolved

    def __len__(self) -> int:
        return len(self.resolved)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.resolved)


@dataclass(frozen=True)
class TargetDescriptor:
    name: str
    module: str


@dataclass(frozen=True, eq=False)
class LinkDescriptor:
    """Where generated files get registered inside a project."""

    project: ProjectHandle
    project_path: Path
    target: str
    group: str | None = None


@dataclass(frozen=True, eq=False)
class OutputDescriptor:
    path: Path
    link: LinkDescriptor | None = None
    # as declared; keeps the trailing separator that Path() drops
    raw: str = field(default="", compare=False, repr=False)

    @property
    def is_directory(self) -> bool:
        if self.path.exists():
            return self.path.is_dir()
        if self.raw.endswith(("/", os.sep)):
            return True
        return self.path.suffix == ""


@dataclass(frozen=True, eq=False)
class ProjectDescriptor:
    """One project declaration, with its dependencies attached.

    Descriptors are built dependency-first, so `dependencies` holds the very
    instances found in the resolved project list.
    """

    handle: ProjectHandle
    path: Path
    root: Path
    targets: tuple[TargetDescriptor, ...]
    exclude: tuple[Path, ...] = ()
    name: str = ""
    output: OutputDescriptor | None = None
    dependencies: tuple["ProjectDescriptor", ...] = ()


@dataclass(frozen=True, eq=False)
class ProjectsSource:
    projects: tuple[ProjectDescriptor, ...]

    kind: SourceKind = field(default="projects", init=False)

    @property
    def is_empty(self) -> bool:
        return not self.projects


@dataclass(frozen=True)
class PathsSource:
    paths: PathSet

    kind: SourceKind = field(default="sources", init=False)

    @property
    def is_empty(self) -> bool:
        return self.paths.is_empty


Source = ProjectsSource | PathsSource


@dataclass(frozen=True, eq=False)
class Configuration:
    """Everything the generator needs, fully validated."""

    source: Source
    templates: PathSet
    output: OutputDescriptor
    cache_base_path: Path
    force_parse: tuple[str, ...] = ()
    args: dict[str, Any] = field(default_factory=dict)
