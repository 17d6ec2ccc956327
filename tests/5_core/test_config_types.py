# tests/5_core/test_config_types.py
"""Behavior of the resolved configuration model."""

import dataclasses
from pathlib import Path

import pytest

import templar.config as mod_config
from tests.utils import FakeProject


def test_path_set_is_immutable(tmp_path: Path) -> None:
    # --- setup ---
    paths = mod_config.PathSet(include=(tmp_path,), resolved=(tmp_path / "a",))

    # --- execute and verify ---
    with pytest.raises(dataclasses.FrozenInstanceError):
        paths.resolved = ()  # type: ignore[misc]
    assert len(paths) == 1
    assert list(paths) == [tmp_path / "a"]
    assert not paths.is_empty
    assert mod_config.PathSet(include=()).is_empty


def test_source_kinds(tmp_path: Path) -> None:
    # --- setup ---
    handle = FakeProject(path=tmp_path / "A.xcodeproj")
    project = mod_config.ProjectDescriptor(
        handle=handle,
        path=handle.path,
        root=tmp_path,
        targets=(mod_config.TargetDescriptor("A", "A"),),
    )

    # --- execute ---
    projects = mod_config.ProjectsSource(projects=(project,))
    paths = mod_config.PathsSource(paths=mod_config.PathSet(include=()))

    # --- verify ---
    assert projects.kind == "projects"
    assert not projects.is_empty
    assert mod_config.ProjectsSource(projects=()).is_empty
    assert paths.kind == "sources"
    assert paths.is_empty


def test_project_descriptors_compare_by_identity(tmp_path: Path) -> None:
    # --- setup ---
    handle = FakeProject(path=tmp_path / "A.xcodeproj")
    fields = {
        "handle": handle,
        "path": handle.path,
        "root": tmp_path,
        "targets": (mod_config.TargetDescriptor("A", "A"),),
    }

    # --- execute ---
    first = mod_config.ProjectDescriptor(**fields)
    second = mod_config.ProjectDescriptor(**fields)

    # --- verify ---
    assert first == first  # noqa: PLR0124
    assert first != second


def test_output_keeps_declared_text(tmp_path: Path) -> None:
    # --- execute ---
    output = mod_config.OutputDescriptor(path=tmp_path / "out", raw="out/")

    # --- verify ---
    assert output.is_directory
    assert "raw" not in repr(output)
