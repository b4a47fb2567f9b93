"""Coarse technology and folder-role detection over a NormalizedProject."""

from __future__ import annotations

from typing import Dict, List

from .analyzers.utils import (
    basename,
    extension,
    node_dependencies,
    parse_package_json,
    parse_pyproject,
    parse_requirements,
    select_manifest,
)
from .logging import get_logger
from .models import NormalizedProject, ProjectOverview, ScanResult, StructureFlags

logger = get_logger("scanner")

LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    ".js": "JavaScript",
    ".ts": "TypeScript",
    ".jsx": "JavaScript (React)",
    ".tsx": "TypeScript (React)",
    ".py": "Python",
    ".java": "Java",
    ".go": "Go",
    ".rs": "Rust",
    ".php": "PHP",
    ".rb": "Ruby",
    ".cs": "C#",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".dart": "Dart",
}

# Substring of the lowercased path -> framework label.
FRAMEWORK_MARKERS = (
    ("next.config", "Next.js"),
    ("vite.config", "Vite"),
    ("webpack.config", "Webpack"),
    ("angular.json", "Angular"),
    ("vue.config", "Vue.js"),
    ("svelte.config", "Svelte"),
    ("pom.xml", "Maven"),
    ("build.gradle", "Gradle"),
    ("requirements.txt", "Python (pip)"),
    ("go.mod", "Go Modules"),
    ("cargo.toml", "Cargo"),
)

CONFIG_MARKERS = (
    "package.json",
    "tsconfig.json",
    "jsconfig.json",
    "pom.xml",
    "build.gradle",
    "requirements.txt",
    "pyproject.toml",
    "go.mod",
    "cargo.toml",
    "composer.json",
    "dockerfile",
    "docker-compose",
)

_ROOT_ENTRY_POINTS = {
    "index.js",
    "index.ts",
    "main.js",
    "main.ts",
    "app.jsx",
    "app.tsx",
    "server.js",
    "server.ts",
    "main.py",
    "app.py",
}
_NESTED_ENTRY_SUFFIXES = ("/index.js", "/index.ts", "/main.js", "/main.ts", "/__main__.py")

_FOLDER_ROLES = (
    ("src", "has_src"),
    ("public", "has_public"),
    ("component", "has_components"),
    ("page", "has_pages"),
    ("service", "has_services"),
    ("controller", "has_controllers"),
    ("model", "has_models"),
)

_FOLDER_NOISE = ("node_modules", ".git", "dist", "build")
_TOOLING_DEPENDENCIES = ("webpack", "vite", "eslint", "prettier", "typescript", "@types")


def _unique(items: List[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def _is_entry_point(lower: str) -> bool:
    return lower in _ROOT_ENTRY_POINTS or lower.endswith(_NESTED_ENTRY_SUFFIXES)


def _collect_dependencies(normalized: NormalizedProject) -> Dict[str, str]:
    dependencies: Dict[str, str] = {}

    package_path = select_manifest(normalized.files, "package.json")
    if package_path is not None:
        package = parse_package_json(normalized.content(package_path))
        if not package and normalized.content(package_path):
            logger.debug("Could not parse %s", package_path)
        dependencies.update(node_dependencies(package))

    requirements_path = select_manifest(normalized.files, "requirements.txt")
    if requirements_path is not None:
        for name, version in parse_requirements(normalized.content(requirements_path)).items():
            dependencies.setdefault(name, version)

    pyproject_path = select_manifest(normalized.files, "pyproject.toml")
    if pyproject_path is not None:
        for name, version in parse_pyproject(normalized.content(pyproject_path)).items():
            dependencies.setdefault(name, version)

    return dependencies


def scan_project(normalized: NormalizedProject) -> ScanResult:
    """Detect languages, frameworks, entry points, manifests and folder roles."""
    languages: List[str] = []
    frameworks: List[str] = []
    entry_points: List[str] = []
    config_files: List[str] = []

    for path in normalized.files:
        language = LANGUAGE_BY_EXTENSION.get(extension(path))
        if language:
            languages.append(language)

        lower = path.lower()
        for marker, label in FRAMEWORK_MARKERS:
            if marker in lower:
                frameworks.append(label)
        if _is_entry_point(lower):
            entry_points.append(path)
        if any(marker in basename(lower) for marker in CONFIG_MARKERS):
            config_files.append(path)

    roles = {attribute: False for _, attribute in _FOLDER_ROLES}
    for folder in normalized.folders:
        lower = folder.lower()
        for needle, attribute in _FOLDER_ROLES:
            if needle in lower:
                roles[attribute] = True

    result = ScanResult(
        languages=_unique(languages),
        frameworks=_unique(frameworks),
        entry_points=_unique(entry_points),
        config_files=_unique(config_files),
        dependencies=_collect_dependencies(normalized),
        structure=StructureFlags(**roles),
    )
    logger.debug(
        "Scan found languages=%s frameworks=%s dependencies=%d",
        list(result.languages),
        list(result.frameworks),
        len(result.dependencies),
    )
    return result


def _detect_framework(scan: ScanResult) -> str:
    if scan.frameworks:
        return scan.frameworks[0]
    for dependency, label in (
        ("react", "React"),
        ("vue", "Vue.js"),
        ("angular", "Angular"),
        ("express", "Express.js"),
        ("fastapi", "FastAPI"),
        ("django", "Django"),
        ("flask", "Flask"),
    ):
        if dependency in scan.dependencies:
            return label
    return "Not detected"


def _project_type(scan: ScanResult) -> str:
    structure = scan.structure
    if structure.has_components and structure.has_pages:
        return "Web Application"
    if structure.has_controllers and structure.has_services:
        return "Backend API"
    if structure.has_components:
        return "Frontend Library"
    if "express" in scan.dependencies or "fastify" in scan.dependencies:
        return "Backend Service"
    return "Application"


def _describe(scan: ScanResult, project_type: str, framework: str) -> str:
    parts = [f"This appears to be a {project_type.lower()}"]
    if framework != "Not detected":
        parts.append(f"built with {framework}")
    if scan.languages:
        parts.append(f"using {' and '.join(scan.languages)}")
    if scan.structure.has_components:
        parts.append("with a component-based architecture")
    if scan.structure.has_services:
        parts.append("including service layer")
    return ", ".join(parts) + "."


def summarize_project(scan: ScanResult, normalized: NormalizedProject) -> ProjectOverview:
    """Build the human-oriented overview used for stack and structure fields."""
    if "TypeScript" in scan.languages or "JavaScript" in scan.languages:
        stack = "JavaScript/TypeScript"
    elif scan.languages:
        stack = scan.languages[0]
    else:
        stack = "Unknown"

    framework = _detect_framework(scan)
    project_type = _project_type(scan)

    folders = [
        folder
        for folder in normalized.folders
        if not any(noise in folder.lower() for noise in _FOLDER_NOISE)
    ][:20]
    key_dependencies = [
        name
        for name in scan.dependencies
        if not any(tool in name.lower() for tool in _TOOLING_DEPENDENCIES)
    ][:10]

    return ProjectOverview(
        stack=stack,
        framework=framework,
        entry_point=scan.entry_points[0] if scan.entry_points else "Not identified",
        project_type=project_type,
        description=_describe(scan, project_type, framework),
        folder_structure=tuple(folders),
        key_dependencies=tuple(key_dependencies),
    )


__all__ = ["LANGUAGE_BY_EXTENSION", "scan_project", "summarize_project"]
