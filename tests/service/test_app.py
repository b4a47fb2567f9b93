"""Tests for the FastAPI service mode."""

from __future__ import annotations

import json

from fastapi.testclient import TestClient

from contextgen.context.schema import ENGINE_VERSION
from contextgen.pipeline import Pipeline
from contextgen.service import create_app
from tests._fixtures.projects import BLOG, SAAS, project


class _RecordingPipeline(Pipeline):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[dict[str, object]] = []

    def analyze_mapping(self, files, folders=None, file_map=None, **kwargs):
        self.calls.append({"files": list(files), **kwargs})
        return super().analyze_mapping(files, folders, file_map, **kwargs)


def test_health_reports_version() -> None:
    client = TestClient(create_app())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": ENGINE_VERSION}


def test_analyze_returns_every_output() -> None:
    pipeline = _RecordingPipeline()
    client = TestClient(create_app(lambda: pipeline))

    response = client.post("/analyze", json={**project(BLOG), "repoName": "acme-blog"})

    assert response.status_code == 200
    body = response.json()
    assert list(body) == ["context", "json", "markdown", "prompt", "summary"]
    assert body["context"] == json.loads(body["json"])
    assert body["context"]["project"]["name"] == "acme-blog"
    assert body["markdown"].startswith("# Project Context\n\n**Project:** acme-blog\n")
    assert body["prompt"].endswith(body["json"])
    assert pipeline.calls[0]["repo_name"] == "acme-blog"
    assert pipeline.calls[0]["files"] == list(BLOG)


def test_analyze_accepts_snake_case_fields() -> None:
    client = TestClient(create_app())

    response = client.post(
        "/analyze",
        json={"files": list(SAAS), "file_map": dict(SAAS), "repo_name": "acme-app"},
    )

    assert response.status_code == 200
    assert response.json()["context"]["project"]["auth_required"] is True


def test_empty_project_is_unprocessable() -> None:
    client = TestClient(create_app())

    response = client.post("/analyze", json={"files": [], "fileMap": {}})

    assert response.status_code == 422
    assert "detail" in response.json()


def test_missing_files_field_is_rejected() -> None:
    client = TestClient(create_app())

    response = client.post("/analyze", json={"fileMap": {"a.md": "x"}})

    assert response.status_code == 422


def test_analyze_tolerates_unencodable_file_text() -> None:
    client = TestClient(create_app())

    response = client.post(
        "/analyze",
        content='{"files": ["index.js"], "fileMap": {"index.js": "a\\ud800b"}}',
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json()["context"]["capabilities"] == []
