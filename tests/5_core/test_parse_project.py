# tests/5_core/test_parse_project.py
"""Tests for single project declarations (templar.config.config_projects)."""

from pathlib import Path

import pytest

import templar.config as mod_config
import templar.project_handle as mod_project_handle
from tests.utils import FakeOpener, make_tree, make_xcodeproj


def test_single_target_object(tmp_path: Path) -> None:
    # --- setup ---
    opener = FakeOpener()

    # --- execute ---
    project = mod_config.parse_project(
        {"file": "App.xcodeproj", "target": {"name": "App"}},
        tmp_path,
        open_project=opener,
    )

    # --- verify ---
    assert project.path == tmp_path / "App.xcodeproj"
    assert project.root == tmp_path
    assert project.targets == (mod_config.TargetDescriptor("App", "App"),)
    assert project.name == ""
    assert project.exclude == ()
    assert project.dependencies == ()
    assert project.output is None
    assert opener.opened == [tmp_path / "App.xcodeproj"]
    assert project.handle.path == tmp_path / "App.xcodeproj"


def test_target_list_keeps_order(tmp_path: Path) -> None:
    # --- execute ---
    project = mod_config.parse_project(
        {
            "file": "App.xcodeproj",
            "name": "App",
            "target": [{"name": "App"}, {"name": "AppTests", "module": "Tests"}],
        },
        tmp_path,
        open_project=FakeOpener(),
    )

    # --- verify ---
    assert [t.name for t in project.targets] == ["App", "AppTests"]
    assert project.targets[1].module == "Tests"
    assert project.name == "App"


def test_exclude_is_expanded(tmp_path: Path) -> None:
    # --- setup ---
    make_tree(tmp_path, ["Sources/Gen/a.swift", "Sources/Gen/b.swift", "Sources/c.swift"])

    # --- execute ---
    project = mod_config.parse_project(
        {
            "file": "App.xcodeproj",
            "target": {"name": "App"},
            "exclude": ["Sources/Gen"],
        },
        tmp_path,
        open_project=FakeOpener(),
    )

    # --- verify ---
    assert project.exclude == (
        tmp_path / "Sources/Gen/a.swift",
        tmp_path / "Sources/Gen/b.swift",
    )


def test_opens_real_project_bundle(tmp_path: Path) -> None:
    # --- setup ---
    make_xcodeproj(tmp_path / "ios", "App", targets=["App", "Widget"])

    # --- execute ---
    project = mod_config.parse_project(
        {"file": "ios/App.xcodeproj", "target": {"name": "Widget"}},
        tmp_path,
    )

    # --- verify ---
    assert project.root == tmp_path / "ios"
    assert project.handle.target_names == ("App", "Widget")


def test_unopenable_project_propagates(tmp_path: Path) -> None:
    # --- execute and verify ---
    with pytest.raises(mod_project_handle.ProjectOpenError, match="not found"):
        mod_config.parse_project(
            {"file": "Missing.xcodeproj", "target": {"name": "App"}},
            tmp_path,
        )


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        (
            {"target": {"name": "App"}},
            "Project file path is not provided. Expected string.",
        ),
        (
            {"file": 1, "target": {"name": "App"}},
            "Project file path is not provided. Expected string.",
        ),
        (
            {"file": "App.xcodeproj"},
            "'target' key is missing. Expected object or array of objects.",
        ),
        (
            {"file": "App.xcodeproj", "target": "App"},
            "'target' key is missing. Expected object or array of objects.",
        ),
        (
            {"file": "App.xcodeproj", "target": []},
            "No targets provided.",
        ),
        (
            {"file": "App.xcodeproj", "target": [{"name": "App"}, {}]},
            "Target name is not provided. Expected string.",
        ),
    ],
)
def test_malformed_declarations_fail(
    raw: dict[str, object],
    message: str,
    tmp_path: Path,
) -> None:
    # --- setup ---
    opener = FakeOpener()

    # --- execute and verify ---
    with pytest.raises(mod_config.InvalidSourcesError) as exc_info:
        mod_config.parse_project(raw, tmp_path, open_project=opener)
    assert exc_info.value.message == message
    # declarations are checked before the project is opened
    assert opener.opened == []
