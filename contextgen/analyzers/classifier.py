"""Heuristic folder-name classifier, kept as a secondary signal source.

Its intent vocabulary (inform/sell/operate/engage/automate) is independent of
the rule engine's, and the two can disagree on the same project. The pipeline
takes the final domain and type from it and the internal report shows it;
blueprint selection never sees it.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models import NormalizedProject, ScanResult
from .blueprints import Complexity, ProjectDomain, ProjectIntent, ProjectType, Statefulness
from .utils import any_path_contains


@dataclass(frozen=True)
class ProjectClassification:
    intent: ProjectIntent
    domain: ProjectDomain
    project_type: ProjectType
    complexity: Complexity
    statefulness: Statefulness
    auth_required: bool
    seo_relevant: bool


def _detect_intent(scan: ScanResult, normalized: NormalizedProject) -> ProjectIntent:
    files, folders = normalized.files, normalized.folders
    if "Python (pip)" in scan.frameworks or any_path_contains(files, ("script", "bot")):
        return "automate"
    if (
        scan.has_dependency("stripe")
        or scan.has_dependency("paypal")
        or any_path_contains(folders, ("cart", "checkout"))
    ):
        return "sell"
    if (
        scan.structure.has_services
        or scan.structure.has_controllers
        or any_path_contains(folders, ("api", "service"))
    ):
        return "operate"
    if any_path_contains(folders, ("blog", "post", "article")):
        return "inform"
    if any_path_contains(files, ("landing", "hero")) or (
        "Next.js" in scan.frameworks and len(folders) < 5
    ):
        return "sell"
    return "engage"


def _detect_domain(scan: ScanResult, normalized: NormalizedProject) -> ProjectDomain:
    folders = normalized.folders
    if any_path_contains(folders, ("admin", "internal")):
        return "internal"
    if scan.structure.has_controllers and not scan.structure.has_components:
        return "tool"
    if any_path_contains(folders, ("content", "blog")):
        return "content"
    if scan.structure.has_components and scan.structure.has_pages:
        return "product"
    return "service"


def _detect_project_type(scan: ScanResult, normalized: NormalizedProject) -> ProjectType:
    structure = scan.structure
    folders = normalized.folders
    if structure.has_controllers and not structure.has_components:
        return "api"
    if len(normalized.files) < 10 and (
        "Python" in scan.languages or "JavaScript" in scan.languages
    ):
        return "script"
    if any_path_contains(folders, ("docs", "documentation")) or any_path_contains(
        scan.config_files, ("mkdocs", "docusaurus")
    ):
        return "docs"
    if any_path_contains(folders, ("dashboard",)) or (
        structure.has_services and structure.has_components
    ):
        return "dashboard"
    if any_path_contains(folders, ("cart", "checkout", "product")):
        return "ecommerce"
    if any_path_contains(folders, ("portfolio", "project")) and len(folders) < 8:
        return "portfolio"
    if any_path_contains(folders, ("blog", "post", "article")):
        return "blog"
    if structure.has_services and structure.has_controllers and structure.has_components:
        return "saas"
    return "landing"


def _detect_complexity(scan: ScanResult, normalized: NormalizedProject) -> Complexity:
    file_count = len(normalized.files)
    folder_count = len(normalized.folders)
    dependency_count = len(scan.dependencies)
    if file_count > 100 or folder_count > 20 or dependency_count > 30:
        return "high"
    if file_count < 20 or folder_count < 5 or dependency_count < 5:
        return "low"
    return "medium"


def _detect_statefulness(scan: ScanResult, normalized: NormalizedProject) -> Statefulness:
    folders = normalized.folders
    if (
        scan.has_dependency("socket.io")
        or scan.has_dependency("ws")
        or any_path_contains(folders, ("websocket", "realtime"))
    ):
        return "realtime"
    if (
        scan.structure.has_services
        or scan.structure.has_controllers
        or scan.has_dependency("redux")
        or scan.has_dependency("zustand")
        or any_path_contains(folders, ("api", "database"))
    ):
        return "dynamic"
    return "static"


def _detect_auth(scan: ScanResult, normalized: NormalizedProject) -> bool:
    return any(
        scan.has_dependency(name) for name in ("next-auth", "@clerk", "firebase", "auth0")
    ) or any_path_contains(normalized.folders, ("auth", "login", "user"))


def _detect_seo_relevance(scan: ScanResult, normalized: NormalizedProject) -> bool:
    if any_path_contains(normalized.folders, ("blog", "post", "article")):
        return True
    if (
        scan.has_dependency("next-seo")
        or scan.has_dependency("react-helmet")
        or any_path_contains(normalized.files, ("sitemap", "robots"))
    ):
        return True
    return "Next.js" in scan.frameworks and len(normalized.folders) < 8


def classify_project(scan: ScanResult, normalized: NormalizedProject) -> ProjectClassification:
    return ProjectClassification(
        intent=_detect_intent(scan, normalized),
        domain=_detect_domain(scan, normalized),
        project_type=_detect_project_type(scan, normalized),
        complexity=_detect_complexity(scan, normalized),
        statefulness=_detect_statefulness(scan, normalized),
        auth_required=_detect_auth(scan, normalized),
        seo_relevant=_detect_seo_relevance(scan, normalized),
    )


__all__ = ["ProjectClassification", "classify_project"]
