"""Signal collection: boolean/enum observations derived from paths and scan results."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, Tuple

from ..models import NormalizedProject, ScanResult
from .utils import any_path_contains

MutationFrequency = Literal["low", "medium", "high"]

_ROUTE_FILE_MARKERS = ("page.tsx", "page.ts", "index.tsx", "index.ts", "route.ts", "route.tsx")
_ROUTE_SEGMENT = re.compile(r"(?:app|pages|src)/([^/]+)")
_EDITORIAL_MARKERS = ("post", "article", "blog")


@dataclass(frozen=True)
class ProjectSignals:
    """Higher-level observations used by every scoring subsystem."""

    repo_name: str
    routes: Tuple[str, ...]
    dynamic_routes: bool
    auth_lib_present: bool
    auth_usage_detected: bool
    has_primary_cta: bool
    has_dashboard_ui: bool
    has_editorial_flow: bool
    has_checkout: bool
    has_projects: bool
    has_blog_posts: bool
    page_count: int
    content_mutation_frequency: MutationFrequency
    seo_heavy: bool
    app_state: bool
    one_page: bool
    personal_identity: bool


def extract_route(path: str) -> Optional[str]:
    """Return the first routed segment of ``path`` or ``index`` for index files."""
    match = _ROUTE_SEGMENT.search(path)
    if match:
        return match.group(1)
    if "index" in path:
        return "index"
    return None


def _collect_routes(files: Sequence[str]) -> List[str]:
    routes: List[str] = []
    for path in files:
        if any(marker in path for marker in _ROUTE_FILE_MARKERS):
            route = extract_route(path)
            if route:
                routes.append(route)
    return routes


def _has_any_dependency(scan: ScanResult, names: Sequence[str]) -> bool:
    return any(scan.has_dependency(name) for name in names)


def collect_signals(
    scan: ScanResult,
    normalized: NormalizedProject,
    repo_name: str | None = None,
) -> ProjectSignals:
    """Derive ProjectSignals from a scan; absent evidence always yields False."""
    files = normalized.files
    folders = normalized.folders

    routes = _collect_routes(files)
    dynamic_routes = any(
        "[" in path and "]" in path and ("page" in path or "route" in path) for path in files
    )

    auth_lib_present = _has_any_dependency(
        scan, ("next-auth", "@clerk", "firebase", "auth0")
    ) or any_path_contains(folders, ("auth",))
    auth_usage_detected = any(
        "auth" in path and ("api" in path or "middleware" in path) for path in files
    ) or any_path_contains(files, ("login", "signin", "signup"))

    has_primary_cta = (
        any_path_contains(files, ("cta", "button", "call-to-action"))
        or any_path_contains(folders, ("cta",))
        or any_path_contains(files, ("contact", "form"))
    )

    has_dashboard_ui = (
        any_path_contains(folders, ("dashboard",))
        or any_path_contains(files, ("dashboard",))
        or (scan.structure.has_services and scan.structure.has_controllers)
    )

    editorial_location = any_path_contains(folders, _EDITORIAL_MARKERS) or any_path_contains(
        files, _EDITORIAL_MARKERS
    )
    has_editorial_flow = (
        dynamic_routes
        and editorial_location
        and any_path_contains(files, ("slug", "[id]", "[slug]"))
    )

    has_checkout = any_path_contains(folders, ("checkout", "cart", "payment")) or any_path_contains(
        files, ("checkout", "cart", "stripe", "paypal")
    )
    has_projects = any_path_contains(folders, ("project", "portfolio", "work")) or any_path_contains(
        files, ("project", "portfolio")
    )
    has_blog_posts = any_path_contains(folders, _EDITORIAL_MARKERS) and any_path_contains(
        files, ("md", "mdx", "content")
    )

    page_count = len(routes) or sum(1 for path in files if "page." in path or "index." in path)

    mutation: MutationFrequency = "low"
    if has_editorial_flow and has_blog_posts:
        mutation = "high"
    elif has_blog_posts or any_path_contains(folders, ("content",)):
        mutation = "medium"

    seo_heavy = _has_any_dependency(scan, ("next-seo", "react-helmet")) or any_path_contains(
        files, ("sitemap", "robots", "metadata")
    )
    app_state = _has_any_dependency(scan, ("redux", "zustand", "recoil")) or any_path_contains(
        folders, ("store", "state")
    )
    one_page = page_count <= 3 and not dynamic_routes

    lowered_name = (repo_name or "").lower()
    personal_identity = (
        any(marker in lowered_name for marker in ("portfolio", "personal", "landing"))
        or any_path_contains(folders, ("about", "bio"))
        or any_path_contains(files, ("about", "bio"))
    )

    return ProjectSignals(
        repo_name=repo_name or "unknown",
        routes=tuple(routes),
        dynamic_routes=dynamic_routes,
        auth_lib_present=auth_lib_present,
        auth_usage_detected=auth_usage_detected,
        has_primary_cta=has_primary_cta,
        has_dashboard_ui=has_dashboard_ui,
        has_editorial_flow=has_editorial_flow,
        has_checkout=has_checkout,
        has_projects=has_projects,
        has_blog_posts=has_blog_posts,
        page_count=page_count,
        content_mutation_frequency=mutation,
        seo_heavy=seo_heavy,
        app_state=app_state,
        one_page=one_page,
        personal_identity=personal_identity,
    )


__all__ = ["MutationFrequency", "ProjectSignals", "collect_signals", "extract_route"]
