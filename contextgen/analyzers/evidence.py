"""Evidence graph: flat, uninterpreted facts about a project.

Every field is one explicit expression over dependency names, path substrings
or small content checks. No field reads another field's value, except
aggregate counters at the end that only count facts already collected.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Literal, Optional, Sequence

from ..models import NormalizedProject, ScanResult
from .signals import ProjectSignals
from .utils import any_path_contains, first_path_containing

NavigationModel = Literal["one-page", "multi-page", "hybrid"]


@dataclass(frozen=True)
class EvidenceGraph:
    # Framework & stack
    has_nextjs: bool = False
    has_react: bool = False
    has_vue: bool = False
    has_angular: bool = False
    has_svelte: bool = False
    has_pages_router: bool = False
    has_app_router: bool = False
    has_static_export: bool = False

    # Architecture
    has_backend: bool = False
    has_database: bool = False
    has_api_routes: bool = False
    has_server_components: bool = False
    has_client_components: bool = False

    # Auth
    has_auth: bool = False
    auth_provider: Optional[str] = None
    auth_library_detected: bool = False
    auth_usage_detected: bool = False

    # State & data
    has_state_management: bool = False
    state_library: Optional[str] = None
    has_global_state: bool = False
    has_local_storage: bool = False

    # Content & CMS
    has_cms: bool = False
    cms_type: Optional[str] = None
    has_blog_structure: bool = False
    has_content_folder: bool = False
    has_markdown_files: bool = False

    # SEO & metadata
    has_seo_files: bool = False
    has_head_metadata: bool = False
    has_open_graph: bool = False
    has_sitemap: bool = False
    has_robots_txt: bool = False

    # Routing
    navigation_model: NavigationModel = "multi-page"
    has_dynamic_routes: bool = False
    route_count: int = 0

    # UI & styling
    styling_framework: Optional[str] = None
    has_tailwind: bool = False
    has_css_modules: bool = False
    has_styled_components: bool = False

    # Deployment
    deployment_platform: Optional[str] = None
    has_netlify_config: bool = False
    has_vercel_config: bool = False
    has_docker: bool = False

    # E-commerce
    has_checkout: bool = False
    has_cart: bool = False
    has_products: bool = False
    payment_provider: Optional[str] = None

    # Dashboard & admin
    has_dashboard: bool = False
    has_admin_panel: bool = False
    has_crud: bool = False

    # Developer tools
    has_typescript: bool = False
    has_tests: bool = False
    has_linting: bool = False
    has_build_tools: bool = False

    # Complexity indicators
    number_of_routes: int = 0
    number_of_integrations: int = 0
    number_of_external_services: int = 0
    dependency_count: int = 0

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def _first_dependency(scan: ScanResult, table: Sequence[tuple[Sequence[str], str]]) -> Optional[str]:
    for names, label in table:
        if any(scan.has_dependency(name) for name in names):
            return label
    return None


def _any_content(normalized: NormalizedProject, needles: Sequence[str]) -> bool:
    return any(
        needle in text for text in normalized.file_map.values() for needle in needles
    )


def _has_use_client(text: str) -> bool:
    return "'use client'" in text or '"use client"' in text


def _count_integrations(names: Iterable[str]) -> int:
    markers = ("api", "sdk", "client", "@")
    return sum(1 for name in names if any(marker in name for marker in markers))


_AUTH_PROVIDERS = (
    (("@clerk/nextjs", "@clerk/clerk-sdk-node"), "clerk"),
    (("next-auth",), "next-auth"),
    (("firebase", "firebase/auth"), "firebase"),
    (("auth0", "auth0-react"), "auth0"),
)
_STATE_LIBRARIES = (
    (("redux",), "redux"),
    (("zustand",), "zustand"),
    (("recoil",), "recoil"),
    (("jotai",), "jotai"),
    (("mobx",), "mobx"),
)
_CMS_TYPES = (
    (("contentful",), "contentful"),
    (("@sanity/client", "sanity"), "sanity"),
    (("strapi",), "strapi"),
    (("ghost",), "ghost"),
    (("@prismicio/client",), "prismic"),
)
_PAYMENT_PROVIDERS = (
    (("stripe", "@stripe/stripe-js"), "stripe"),
    (("paypal",), "paypal"),
)
_DATABASE_DEPENDENCIES = ("prisma", "mongoose", "typeorm", "sequelize")
_BACKEND_DEPENDENCIES = ("express", "fastify", "koa")


def build_evidence_graph(
    scan: ScanResult,
    normalized: NormalizedProject,
    signals: ProjectSignals,
) -> EvidenceGraph:
    files = normalized.files
    folders = normalized.folders

    def dep(*names: str) -> bool:
        return any(scan.has_dependency(name) for name in names)

    has_nextjs = "Next.js" in scan.frameworks or dep("next")
    has_react = dep("react") or any("React" in language for language in scan.languages)
    has_app_router = any("app/" in path and "page." in path for path in files)

    has_static_export = False
    next_config = first_path_containing(files, "next.config")
    if next_config is not None:
        config_text = normalized.content(next_config)
        has_static_export = "output:" in config_text and "export" in config_text

    app_texts = [normalized.content(path) for path in files if "app/" in path]

    auth_provider = _first_dependency(scan, _AUTH_PROVIDERS)
    state_library = _first_dependency(scan, _STATE_LIBRARIES)
    cms_type = _first_dependency(scan, _CMS_TYPES)
    payment_provider = _first_dependency(scan, _PAYMENT_PROVIDERS)

    has_tailwind = dep("tailwindcss") or any_path_contains(files, ("tailwind.config",))
    has_css_modules = any(path.endswith(".module.css") for path in files)
    has_styled_components = dep("styled-components")
    if has_tailwind:
        styling_framework: Optional[str] = "tailwindcss"
    elif has_styled_components:
        styling_framework = "styled-components"
    elif has_css_modules:
        styling_framework = "css-modules"
    else:
        styling_framework = None

    has_netlify_config = any_path_contains(files, ("netlify",))
    has_vercel_config = any_path_contains(files, ("vercel.json",))
    has_docker = any("dockerfile" in path.lower() or "docker-compose" in path for path in files)
    if has_netlify_config:
        deployment_platform: Optional[str] = "netlify"
    elif has_vercel_config:
        deployment_platform = "vercel"
    elif has_docker:
        deployment_platform = "docker"
    else:
        deployment_platform = None

    if signals.one_page:
        navigation_model: NavigationModel = "one-page"
    elif signals.dynamic_routes:
        navigation_model = "hybrid"
    else:
        navigation_model = "multi-page"

    seo_dependency = dep("next-seo", "react-helmet")
    external_services = sum(
        1
        for value in (auth_provider, cms_type, payment_provider, deployment_platform)
        if value is not None
    )

    return EvidenceGraph(
        has_nextjs=has_nextjs,
        has_react=has_react,
        has_vue=dep("vue") or "Vue.js" in scan.frameworks,
        has_angular=dep("angular", "@angular") or "Angular" in scan.frameworks,
        has_svelte=dep("svelte") or "Svelte" in scan.frameworks,
        has_pages_router=any(
            "pages/" in path and ("index" in path or "_app" in path) for path in files
        ),
        has_app_router=has_app_router,
        has_static_export=has_static_export,
        has_backend=(
            scan.structure.has_controllers
            or scan.structure.has_services
            or dep(*_BACKEND_DEPENDENCIES)
        ),
        has_database=dep(*_DATABASE_DEPENDENCIES) or any_path_contains(files, ("database", "db")),
        has_api_routes=any_path_contains(files, ("api/", "routes/")),
        has_server_components=has_app_router
        and any(not _has_use_client(text) for text in app_texts),
        has_client_components=any_path_contains(files, ("client",))
        or any(_has_use_client(text) for text in normalized.file_map.values()),
        has_auth=auth_provider is not None or signals.auth_lib_present,
        auth_provider=auth_provider,
        auth_library_detected=signals.auth_lib_present,
        auth_usage_detected=signals.auth_usage_detected,
        has_state_management=state_library is not None or signals.app_state,
        state_library=state_library,
        has_global_state=state_library is not None or signals.app_state,
        has_local_storage=_any_content(normalized, ("localStorage", "sessionStorage")),
        has_cms=cms_type is not None or signals.has_blog_posts,
        cms_type=cms_type,
        has_blog_structure=signals.has_blog_posts or signals.has_editorial_flow,
        has_content_folder=any_path_contains(folders, ("content", "posts", "blog")),
        has_markdown_files=any(path.endswith((".md", ".mdx")) for path in files),
        has_seo_files=signals.seo_heavy or any_path_contains(files, ("sitemap", "robots")),
        has_head_metadata=_any_content(normalized, ("metadata", "<head", "Head"))
        or seo_dependency,
        has_open_graph=_any_content(normalized, ("opengraph", "openGraph", "og:"))
        or seo_dependency,
        has_sitemap=any_path_contains(files, ("sitemap",)),
        has_robots_txt=any_path_contains(files, ("robots",)),
        navigation_model=navigation_model,
        has_dynamic_routes=signals.dynamic_routes,
        route_count=signals.page_count,
        styling_framework=styling_framework,
        has_tailwind=has_tailwind,
        has_css_modules=has_css_modules,
        has_styled_components=has_styled_components,
        deployment_platform=deployment_platform,
        has_netlify_config=has_netlify_config,
        has_vercel_config=has_vercel_config,
        has_docker=has_docker,
        has_checkout=signals.has_checkout,
        has_cart=any_path_contains(folders, ("cart",)) or any_path_contains(files, ("cart",)),
        has_products=any_path_contains(folders, ("product",))
        or any_path_contains(files, ("product",)),
        payment_provider=payment_provider,
        has_dashboard=signals.has_dashboard_ui,
        has_admin_panel=any_path_contains(folders, ("admin",))
        or any_path_contains(files, ("admin",)),
        has_crud=any_path_contains(folders, ("crud",)) or scan.structure.has_controllers,
        has_typescript="TypeScript" in scan.languages,
        has_tests=dep("jest", "vitest", "@testing-library", "pytest")
        or any_path_contains(files, ("test", "spec")),
        has_linting=dep("eslint", "prettier"),
        has_build_tools=dep("webpack", "vite")
        or any("Vite" in name or "Webpack" in name for name in scan.frameworks),
        number_of_routes=signals.page_count,
        number_of_integrations=_count_integrations(scan.dependencies),
        number_of_external_services=external_services,
        dependency_count=len(scan.dependencies),
    )


__all__ = ["EvidenceGraph", "NavigationModel", "build_evidence_graph"]
