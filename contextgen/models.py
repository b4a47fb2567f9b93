"""Core data models shared across contextgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


def _freeze_mapping(value: Mapping[str, str]) -> Mapping[str, str]:
    if isinstance(value, MappingProxyType):
        return value
    return MappingProxyType(dict(value))


@dataclass(frozen=True)
class NormalizedProject:
    """Capped, ignore-filtered view of a project tree.

    ``files`` and ``folders`` are POSIX-style relative paths in sorted order;
    ``file_map`` holds the text contents of the files that were small enough
    and textual enough to read.
    """

    files: Tuple[str, ...]
    folders: Tuple[str, ...]
    file_map: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "folders", tuple(self.folders))
        object.__setattr__(self, "file_map", _freeze_mapping(self.file_map))

    def content(self, path: str) -> str:
        """Return the captured text of ``path`` or an empty string."""
        return self.file_map.get(path, "")


@dataclass(frozen=True)
class StructureFlags:
    """Coarse folder-role detection."""

    has_src: bool = False
    has_public: bool = False
    has_components: bool = False
    has_pages: bool = False
    has_services: bool = False
    has_controllers: bool = False
    has_models: bool = False


@dataclass(frozen=True)
class ScanResult:
    """Technology and structure detection derived from a NormalizedProject."""

    languages: Tuple[str, ...]
    frameworks: Tuple[str, ...]
    entry_points: Tuple[str, ...]
    config_files: Tuple[str, ...]
    dependencies: Mapping[str, str]
    structure: StructureFlags

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", _freeze_mapping(self.dependencies))

    def has_dependency(self, name: str) -> bool:
        """True when ``name`` (or, for an npm scope, any package in it) is declared."""
        if name in self.dependencies:
            return True
        if name.startswith("@") and "/" not in name:
            prefix = f"{name}/"
            return any(dep.startswith(prefix) for dep in self.dependencies)
        return False

    def dependency_version(self, name: str) -> Optional[str]:
        return self.dependencies.get(name)


@dataclass(frozen=True)
class ProjectOverview:
    """Coarse, human-oriented summary of the scan."""

    stack: str
    framework: str
    entry_point: str
    project_type: str
    description: str
    folder_structure: Tuple[str, ...]
    key_dependencies: Tuple[str, ...]


__all__ = [
    "NormalizedProject",
    "ProjectOverview",
    "ScanResult",
    "StructureFlags",
]
