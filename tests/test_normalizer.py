"""Tests for project normalization."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from contextgen.config import IngestionSettings
from contextgen.normalizer import (
    EmptyProjectError,
    IngestionCancelledError,
    IngestionLimitError,
    RunBudget,
    is_builtin_ignored,
    normalize_mapping,
    normalize_project,
)
from tests._fixtures.repo_builder import RepoBuilder


def test_builtin_ignores_drop_tooling_and_env_files(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/app.ts": "export const app = 1\n",
            "node_modules/react/index.js": "module.exports = {}\n",
            ".git/config": "[core]\n",
            "dist/bundle.js": "console.log(1)\n",
            ".env": "SECRET=1\n",
            ".env.local": "SECRET=2\n",
            "package-lock.json": "{}\n",
        }
    )

    project = repo_builder.normalize()

    assert project.files == ("src/app.ts",)
    assert project.folders == ("src",)
    assert project.content("src/app.ts") == "export const app = 1\n"


def test_gitignore_and_configured_excludes_are_applied(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".gitignore": "secrets/\n*.log\n!keep.log\n",
            "secrets/key.txt": "hunter2\n",
            "debug.log": "noise\n",
            "keep.log": "signal\n",
            "app.ts": "export {}\n",
            "sandbox/scratch.ts": "export {}\n",
        }
    )

    project = repo_builder.normalize(IngestionSettings(exclude_paths=("sandbox/",)))

    assert project.files == (".gitignore", "app.ts", "keep.log")
    assert "secrets" not in project.folders
    assert "sandbox" not in project.folders
    # Unknown extensions are listed but never read.
    assert "keep.log" not in project.file_map
    assert "app.ts" in project.file_map


def test_oversized_files_are_skipped(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"big.ts": "x" * 100, "small.ts": "y"})

    project = repo_builder.normalize(IngestionSettings(max_file_bytes=10))

    assert project.files == ("small.ts",)


def test_file_count_cap_raises(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.ts": "1", "b.ts": "2", "c.ts": "3"})

    with pytest.raises(IngestionLimitError, match="maximum of 2 files"):
        repo_builder.normalize(IngestionSettings(max_files=2))


def test_total_size_cap_raises(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.ts": "x" * 40, "b.ts": "x" * 40})

    with pytest.raises(IngestionLimitError, match="total size"):
        repo_builder.normalize(IngestionSettings(max_total_bytes=50))


def test_empty_project_raises(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"node_modules/left-pad/index.js": "module.exports = 1\n"})

    with pytest.raises(EmptyProjectError):
        repo_builder.normalize()


def test_undecodable_files_are_listed_without_content(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"index.ts": "export {}\n"})
    (repo_builder.path() / "data.json").write_bytes(b"\xff\xfe\x00\x01")

    project = repo_builder.normalize()

    assert "data.json" in project.files
    assert "data.json" not in project.file_map


def test_missing_and_non_directory_roots(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        normalize_project(tmp_path / "absent", settings=IngestionSettings())

    target = tmp_path / "file.txt"
    target.write_text("hi", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        normalize_project(target, settings=IngestionSettings())


def test_cancel_event_stops_normalization(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"index.ts": "export {}\n"})
    event = threading.Event()
    event.set()

    with pytest.raises(IngestionCancelledError, match="cancelled"):
        normalize_project(
            repo_builder.path(),
            settings=IngestionSettings(),
            budget=RunBudget.start(cancel_event=event),
        )


def test_expired_deadline_reports_timeout() -> None:
    budget = RunBudget(deadline=time.monotonic() - 1)

    with pytest.raises(IngestionCancelledError, match="timed out during scan"):
        budget.check("scan")


def test_unbounded_budget_never_raises() -> None:
    RunBudget.start().check("render")


def test_normalize_mapping_is_order_independent() -> None:
    first = normalize_mapping(
        ["./src/b.ts", "src\\a.ts", "README.md"],
        None,
        {"src/a.ts": "a", "./src/b.ts": "b", "ghost.ts": "boo"},
    )
    second = normalize_mapping(
        ["README.md", "src/a.ts", "src/b.ts"],
        None,
        {"src/b.ts": "b", "src/a.ts": "a"},
    )

    assert first.files == second.files
    assert first.folders == second.folders
    assert dict(first.file_map) == dict(second.file_map)
    assert first.files == ("README.md", "src/a.ts", "src/b.ts")
    assert first.folders == ("src",)
    assert "ghost.ts" not in first.file_map


def test_normalize_mapping_applies_ignore_rules() -> None:
    project = normalize_mapping(
        ["node_modules/x/index.js", "app/page.tsx", "tmp/scratch.ts"],
        ["node_modules", "app", "tmp"],
        settings=IngestionSettings(exclude_paths=("tmp/",)),
    )

    assert project.files == ("app/page.tsx",)
    assert project.folders == ("app",)


def test_normalize_mapping_without_files_raises() -> None:
    with pytest.raises(EmptyProjectError):
        normalize_mapping([".git/HEAD"])


def test_builtin_ignore_matches_segments_only() -> None:
    assert is_builtin_ignored("web/node_modules/react/index.js")
    assert is_builtin_ignored("Dist/app.js")
    assert not is_builtin_ignored("src/distance.ts")
    assert not is_builtin_ignored("src/environment.ts")


def test_mapping_text_with_lone_surrogates_is_listed_without_content() -> None:
    project = normalize_mapping(
        ["index.js", "app.js"],
        None,
        {"index.js": "a\ud800b", "app.js": "export {}\n"},
    )

    assert project.files == ("app.js", "index.js")
    assert "index.js" not in project.file_map
    assert project.file_map["app.js"] == "export {}\n"
