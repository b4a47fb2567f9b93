"""Helper utilities for constructing temporary projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from contextgen.config import IngestionSettings
from contextgen.models import NormalizedProject, ScanResult
from contextgen.normalizer import normalize_project
from contextgen.scanner import scan_project


class RepoBuilder:
    """Utility for writing files into a throwaway project and re-normalizing it."""

    def __init__(self, tmp_path: Path, name: str = "repo") -> None:
        self.root = tmp_path / name
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def normalize(self, settings: IngestionSettings | None = None) -> NormalizedProject:
        """Return a fresh NormalizedProject of the project contents."""
        return normalize_project(self.root, settings=settings or IngestionSettings())

    def scan(self) -> ScanResult:
        return scan_project(self.normalize())

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["RepoBuilder"]
