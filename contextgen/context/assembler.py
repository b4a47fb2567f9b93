"""Context assembler: merges every stage output into the CanonicalContext."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..analyzers.blueprints import Blueprint
from ..analyzers.confidence import confidence_level
from ..analyzers.evidence import EvidenceGraph
from ..analyzers.rules import RuleResult
from ..models import ProjectOverview, ScanResult
from .proposal import Proposal
from .schema import (
    ENGINE_NAME,
    ENGINE_VERSION,
    AudienceInfo,
    AuthInfo,
    CanonicalContext,
    CmsInfo,
    DatabaseInfo,
    EngineInfo,
    FrameworkInfo,
    ProjectInfo,
    ProposalInfo,
    SourceInfo,
    StructureInfo,
    TechnicalStack,
)
from .scope import ScopeDefinition

_UI_LIBRARIES = (
    (("@radix-ui",), "Radix UI"),
    (("@headlessui/react", "@headlessui"), "Headless UI"),
    (("material-ui", "@mui"), "Material UI"),
    (("antd",), "Ant Design"),
)
_ANIMATION_LIBRARIES = (
    (("framer-motion",), "Framer Motion"),
    (("gsap",), "GSAP"),
    (("react-spring", "@react-spring/web"), "React Spring"),
)
_I18N_LIBRARIES = ("next-intl", "react-i18next", "i18n", "i18next")
_DATABASE_NAMES = (("prisma", "Prisma"), ("mongoose", "MongoDB"), ("typeorm", "TypeORM"))
_ORM_NAMES = (("prisma", "Prisma"), ("typeorm", "TypeORM"), ("sequelize", "Sequelize"))


def _labels(scan: ScanResult, table: Sequence[Tuple[Sequence[str], str]]) -> Tuple[str, ...]:
    return tuple(
        label for names, label in table if any(scan.has_dependency(name) for name in names)
    )


def _first_label(scan: ScanResult, table: Sequence[Tuple[str, str]]) -> Optional[str]:
    for name, label in table:
        if scan.has_dependency(name):
            return label
    return None


def _framework_version(scan: ScanResult, evidence: EvidenceGraph) -> Optional[str]:
    if evidence.has_nextjs:
        return scan.dependency_version("next")
    if evidence.has_react:
        return scan.dependency_version("react")
    return None


def _languages(scan: ScanResult, evidence: EvidenceGraph) -> Tuple[str, ...]:
    languages: List[str] = []
    if evidence.has_typescript:
        languages.append("TypeScript")
    if "JavaScript" in scan.languages:
        languages.append("JavaScript")
    languages.extend(language for language in scan.languages if "React" not in language)
    return tuple(dict.fromkeys(languages))


def _styling(evidence: EvidenceGraph) -> Tuple[str, ...]:
    styling: List[str] = []
    if evidence.has_tailwind:
        styling.append("Tailwind CSS")
    if evidence.has_css_modules:
        styling.append("CSS Modules")
    if evidence.has_styled_components:
        styling.append("Styled Components")
    return tuple(styling)


def build_capabilities(scan: ScanResult, evidence: EvidenceGraph) -> Tuple[str, ...]:
    table = (
        (evidence.has_seo_files, "SEO-optimized pages"),
        (evidence.has_blog_structure, "Content publishing"),
        (evidence.has_dynamic_routes, "Dynamic routing"),
        (evidence.has_cms, "Content management"),
        (evidence.has_checkout, "E-commerce transactions"),
        (evidence.has_dashboard, "Data visualization"),
        (evidence.has_auth, "User authentication"),
        (evidence.has_state_management, "State management"),
        (any(scan.has_dependency(name) for name in _I18N_LIBRARIES), "Internationalization"),
        (evidence.has_static_export, "Static site generation"),
        (evidence.has_app_router, "Server components"),
    )
    return tuple(label for present, label in table if present)


def build_limitations(evidence: EvidenceGraph) -> Tuple[str, ...]:
    table = (
        (not evidence.has_backend, "No backend logic"),
        (not evidence.has_database, "No persistent data storage"),
        (not evidence.has_auth, "No user authentication"),
        (evidence.has_static_export, "No real-time features"),
        (not evidence.has_api_routes, "No API endpoints"),
    )
    return tuple(label for present, label in table if present)


def build_risk_flags(evidence: EvidenceGraph, rules: RuleResult) -> Tuple[str, ...]:
    table = (
        (
            rules.complexity == "high" and not evidence.has_tests,
            "High complexity without test coverage",
        ),
        (
            evidence.has_auth and not evidence.auth_usage_detected,
            "Auth library present but not actively used",
        ),
        (
            evidence.has_database and not evidence.has_backend,
            "Database detected without backend infrastructure",
        ),
        (
            evidence.has_checkout and evidence.payment_provider is None,
            "Checkout flow without payment provider detected",
        ),
    )
    return tuple(label for present, label in table if present)


def _technical_stack(
    scan: ScanResult, overview: ProjectOverview, evidence: EvidenceGraph
) -> TechnicalStack:
    auth = (
        AuthInfo(provider=evidence.auth_provider, library=evidence.auth_provider)
        if evidence.has_auth
        else None
    )
    database = (
        DatabaseInfo(
            name=_first_label(scan, _DATABASE_NAMES),
            orm=_first_label(scan, _ORM_NAMES),
        )
        if evidence.has_database
        else None
    )
    cms = CmsInfo(name=evidence.cms_type, type=evidence.cms_type) if evidence.has_cms else None

    return TechnicalStack(
        framework=FrameworkInfo(name=overview.framework, version=_framework_version(scan, evidence)),
        language=_languages(scan, evidence),
        styling=_styling(evidence),
        ui_libraries=_labels(scan, _UI_LIBRARIES),
        animation=_labels(scan, _ANIMATION_LIBRARIES),
        state_management=(evidence.state_library,) if evidence.state_library else (),
        auth=auth,
        database=database,
        cms=cms,
        deployment=evidence.deployment_platform,
    )


def assemble_context(
    *,
    scan: ScanResult,
    overview: ProjectOverview,
    evidence: EvidenceGraph,
    rules: RuleResult,
    blueprint: Blueprint,
    scope: ScopeDefinition,
    proposal: Proposal,
    confidence: float,
    repo_name: Optional[str] = None,
) -> CanonicalContext:
    """Merge the stage outputs; canonical project fields come from the rule engine."""
    level = confidence_level(confidence)

    return CanonicalContext(
        engine=EngineInfo(
            name=ENGINE_NAME,
            version=ENGINE_VERSION,
            mode="deterministic",
            confidence_level=level,
            analysis_type="static",
        ),
        project=ProjectInfo(
            name=repo_name or "unknown",
            repository_type=rules.repository_type,
            blueprint=blueprint.name,
            intent=rules.intent.lower(),
            complexity=rules.complexity,
            statefulness=rules.statefulness,
            seo_relevant=rules.seo_relevant,
            auth_required=rules.auth_required,
        ),
        audience=AudienceInfo(primary=proposal.audience, technical_level=proposal.technical_level),
        proposal=ProposalInfo(
            what_it_is=scope.what_it_is,
            what_it_does=scope.what_it_does,
            what_it_does_not_do=scope.what_it_does_not_do,
            core_value_proposition=proposal.core_value_proposition,
        ),
        technical_stack=_technical_stack(scan, overview, evidence),
        structure=StructureInfo(
            routing_model=evidence.navigation_model,
            folder_structure=overview.folder_structure,
            entry_point=overview.entry_point,
        ),
        capabilities=build_capabilities(scan, evidence),
        limitations=build_limitations(evidence),
        excluded_concepts=scope.excluded_concepts,
        risk_flags=build_risk_flags(evidence, rules),
        source=SourceInfo(method="static-analysis", confidence=level),
    )


__all__ = [
    "assemble_context",
    "build_capabilities",
    "build_limitations",
    "build_risk_flags",
]
