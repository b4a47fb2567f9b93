"""Shared helper utilities for analyzer implementations."""

from __future__ import annotations

import json
import re
import tomllib
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

# Path helpers


def any_path_contains(paths: Iterable[str], needles: Sequence[str]) -> bool:
    """True when any path contains any of ``needles`` (case-sensitive)."""
    return any(needle in path for path in paths for needle in needles)


def first_path_containing(paths: Iterable[str], needle: str) -> Optional[str]:
    for path in paths:
        if needle in path:
            return path
    return None


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def extension(path: str) -> str:
    """Return the lowercase extension of ``path`` including the dot, or ''."""
    name = basename(path)
    index = name.rfind(".")
    if index <= 0:
        return ""
    return name[index:].lower()


# Node.js dependency helpers


def parse_package_json(text: str) -> Dict[str, object]:
    """Return the parsed package.json contents or an empty dict."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return {}
    if isinstance(data, dict):
        return data
    return {}


def node_dependencies(package: Mapping[str, object]) -> Dict[str, str]:
    """Merge ``dependencies`` and ``devDependencies`` (dev entries win on clashes)."""
    merged: Dict[str, str] = {}
    for key in ("dependencies", "devDependencies"):
        deps = package.get(key)
        if not isinstance(deps, dict):
            continue
        for name, version in deps.items():
            merged[str(name)] = str(version) if version is not None else "*"
    return merged


def select_manifest(paths: Sequence[str], filename: str) -> Optional[str]:
    """Prefer the root manifest, else the shallowest match in path order."""
    if filename in paths:
        return filename
    matches = [path for path in paths if basename(path) == filename]
    if not matches:
        return None
    return min(matches, key=lambda path: (path.count("/"), path))


# Python dependency helpers

_REQUIREMENT_SPLIT = re.compile(r"[<>=!~;\[\s]")


def _split_requirement(spec: str) -> tuple[str, str]:
    name = _REQUIREMENT_SPLIT.split(spec, 1)[0].strip()
    version = spec[len(name):].strip() or "*"
    return name, version


def parse_requirements(text: str) -> Dict[str, str]:
    packages: Dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.split("#", 1)[0].strip()
        if not stripped or stripped.startswith("-"):
            continue
        name, version = _split_requirement(stripped)
        if name:
            packages[name.lower()] = version
    return packages


def parse_pyproject(text: str) -> Dict[str, str]:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError:
        return {}

    dependencies: List[object] = []
    project = data.get("project")
    if isinstance(project, dict):
        dependencies.extend(project.get("dependencies", []) or [])
        optional = project.get("optional-dependencies", {}) or {}
        for values in optional.values():
            dependencies.extend(values or [])

    packages: Dict[str, str] = {}
    tool = data.get("tool")
    poetry = tool.get("poetry", {}) if isinstance(tool, dict) else {}
    if isinstance(poetry, dict):
        for name, version in (poetry.get("dependencies", {}) or {}).items():
            if name.lower() != "python":
                packages[name.lower()] = version if isinstance(version, str) else "*"

    for dep in dependencies:
        if not isinstance(dep, str):
            continue
        name, version = _split_requirement(dep)
        if name and name.lower() != "python":
            packages[name.lower()] = version
    return packages


__all__ = [
    "any_path_contains",
    "basename",
    "extension",
    "first_path_containing",
    "node_dependencies",
    "parse_package_json",
    "parse_pyproject",
    "parse_requirements",
    "select_manifest",
]
