"""Catalog of project archetypes ("blueprints") and classification vocabulary."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping, Tuple

ProjectIntent = Literal["inform", "sell", "operate", "engage", "automate"]
ProjectDomain = Literal["content", "product", "service", "internal", "tool"]
ProjectType = Literal[
    "landing", "blog", "saas", "dashboard", "docs", "portfolio", "api", "script", "ecommerce"
]
Complexity = Literal["low", "medium", "high"]
Statefulness = Literal["static", "dynamic", "realtime"]


@dataclass(frozen=True)
class BlueprintStructure:
    pages: Tuple[str, ...] = ()
    entities: Tuple[str, ...] = ()
    systems: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BlueprintOutput:
    """Output flags that fence the allowed scope of a blueprint."""

    content_driven: bool = False
    seo_critical: bool = False
    dynamic_rendering: bool = False
    single_page: bool = False
    cta_driven: bool = False
    stateful: bool = False
    auth_required: bool = False
    seo_irrelevant: bool = False
    data_heavy: bool = False
    realtime_optional: bool = False
    personal_brand: bool = False
    simple_structure: bool = False
    developer_audience: bool = False
    search_critical: bool = False
    transactional: bool = False
    payment_critical: bool = False
    internal: bool = False
    security_critical: bool = False
    no_ui: bool = False
    contract_critical: bool = False
    execution_based: bool = False
    observability_needed: bool = False


@dataclass(frozen=True)
class Blueprint:
    name: str
    description: str
    when_to_use: Tuple[str, ...]
    objective: str
    structure: BlueprintStructure
    core_flows: Tuple[str, ...]
    risks: Tuple[str, ...]
    output: BlueprintOutput = field(default_factory=BlueprintOutput)


_CATALOG: Tuple[Blueprint, ...] = (
    Blueprint(
        name="ContentSiteBlueprint",
        description="Blogs, institutional sites, content portals, SEO-first",
        when_to_use=("Blogs", "Institutional sites", "Content portals", "SEO-first"),
        objective="Inform, educate, position",
        structure=BlueprintStructure(
            pages=("home", "article", "category", "about", "contact"),
            entities=("post", "author", "category"),
            systems=("content rendering", "navigation", "metadata"),
        ),
        core_flows=("Discovery → reading → retention", "Indexing → ranking → traffic"),
        risks=("Weak content", "Overengineering", "Poorly configured SEO"),
        output=BlueprintOutput(content_driven=True, seo_critical=True, dynamic_rendering=False),
    ),
    Blueprint(
        name="LandingCROBlueprint",
        description="Idea validation, unique product, lead capture, direct sales",
        when_to_use=("Idea validation", "Unique product", "Lead capture", "Direct sales"),
        objective="Convert",
        structure=BlueprintStructure(
            pages=("hero", "value proposition", "social proof", "cta", "form"),
            systems=("conversion tracking", "form handling"),
        ),
        core_flows=("Visit → scroll → click → submit",),
        risks=("Generic content", "Confusing CTA", "Too many sections"),
        output=BlueprintOutput(single_page=True, cta_driven=True),
    ),
    Blueprint(
        name="SaaSAppBlueprint",
        description="Recurring product, logged-in users, plans / billing",
        when_to_use=("Recurring product", "Logged-in users", "Plans / billing"),
        objective="Operate a system",
        structure=BlueprintStructure(
            pages=("auth", "dashboard", "settings", "billing"),
            entities=("user", "subscription", "plan"),
            systems=("authentication", "user state", "payment processing"),
        ),
        core_flows=(
            "Signup → onboarding → usage → retention",
            "Login → action → feedback",
        ),
        risks=("Complex UX", "Missing onboarding", "Poorly designed auth"),
        output=BlueprintOutput(stateful=True, auth_required=True, seo_irrelevant=True),
    ),
    Blueprint(
        name="DashboardBlueprint",
        description="Data visualization, administrative panels, analytics",
        when_to_use=("Data visualization", "Administrative panels", "Analytics"),
        objective="Decision making",
        structure=BlueprintStructure(
            pages=("dashboard", "reports", "settings"),
            entities=("chart", "kpi", "metric"),
            systems=("data visualization", "filtering", "export"),
        ),
        core_flows=("Load → filter → analyze",),
        risks=("Visual clutter", "Data without context"),
        output=BlueprintOutput(data_heavy=True, realtime_optional=True),
    ),
    Blueprint(
        name="PortfolioBlueprint",
        description=(
            "Developer portfolio - showcases projects, technical skills and professional positioning"
        ),
        when_to_use=(
            "Public-facing developer portfolio",
            "Project showcase with visual assets",
            "Professional positioning site",
            "Technical competence demonstration",
        ),
        objective=(
            "Demonstrate technical competence, project experience and professional positioning"
        ),
        structure=BlueprintStructure(
            pages=("hero", "about", "projects", "skills", "contact"),
            entities=("project", "skill", "case-study"),
            systems=("project showcase", "contact form", "multilingual content"),
        ),
        core_flows=(
            "Visit → scan → trust → contact",
            "Project discovery → technical review → professional assessment",
        ),
        risks=("Excessive animation", "Empty text", "Weak project presentation"),
        output=BlueprintOutput(personal_brand=True, simple_structure=True, seo_critical=True),
    ),
    Blueprint(
        name="DocumentationBlueprint",
        description="APIs, SDKs, technical tools",
        when_to_use=("APIs", "SDKs", "Technical tools"),
        objective="Explain and reduce support",
        structure=BlueprintStructure(
            pages=("sidebar", "content", "search"),
            entities=("doc", "version", "example"),
            systems=("versioning", "code blocks", "search"),
        ),
        core_flows=("Search → read → implement",),
        risks=("Outdated docs", "Missing examples"),
        output=BlueprintOutput(developer_audience=True, search_critical=True),
    ),
    Blueprint(
        name="EcommerceBlueprint",
        description="Product sales, catalog, checkout",
        when_to_use=("Product sales", "Catalog", "Checkout"),
        objective="Sell with confidence",
        structure=BlueprintStructure(
            pages=("product list", "product page", "cart", "checkout"),
            entities=("product", "cart", "order"),
            systems=("payment processing", "inventory", "shipping"),
        ),
        core_flows=("Browse → select → pay",),
        risks=("Complex checkout", "Lack of trust"),
        output=BlueprintOutput(transactional=True, payment_critical=True),
    ),
    Blueprint(
        name="InternalToolBlueprint",
        description="Internal systems, administrative tools",
        when_to_use=("Internal systems", "Administrative tools"),
        objective="Operational efficiency",
        structure=BlueprintStructure(
            pages=("dashboard", "crud", "settings"),
            entities=("record", "user", "permission"),
            systems=("permissions", "logs", "audit"),
        ),
        core_flows=("Login → task → complete",),
        risks=("Missing access control", "Neglected UX"),
        output=BlueprintOutput(internal=True, security_critical=True),
    ),
    Blueprint(
        name="APIServiceBlueprint",
        description="Backend-only, integrations, services",
        when_to_use=("Backend-only", "Integrations", "Services"),
        objective="Provide functionality",
        structure=BlueprintStructure(
            entities=("endpoint", "auth", "rate limit"),
            systems=("routing", "authentication", "rate limiting", "documentation"),
        ),
        core_flows=("Request → process → response",),
        risks=("Breaking changes", "Missing versioning"),
        output=BlueprintOutput(no_ui=True, contract_critical=True),
    ),
    Blueprint(
        name="AutomationScriptBlueprint",
        description="Scripts, bots, automation",
        when_to_use=("Scripts", "Bots", "Automation"),
        objective="Automate tasks",
        structure=BlueprintStructure(
            entities=("trigger", "logic", "output"),
            systems=("execution", "logging", "error handling"),
        ),
        core_flows=("Execute → finish",),
        risks=("Missing logs", "Silent failure"),
        output=BlueprintOutput(execution_based=True, observability_needed=True),
    ),
)

BLUEPRINTS: Mapping[str, Blueprint] = MappingProxyType({bp.name: bp for bp in _CATALOG})

DEFAULT_BLUEPRINT = "LandingCROBlueprint"

BLUEPRINT_FOR_TYPE: Mapping[str, str] = MappingProxyType(
    {
        "blog": "ContentSiteBlueprint",
        "landing": "LandingCROBlueprint",
        "saas": "SaaSAppBlueprint",
        "dashboard": "DashboardBlueprint",
        "portfolio": "PortfolioBlueprint",
        "docs": "DocumentationBlueprint",
        "ecommerce": "EcommerceBlueprint",
        "api": "APIServiceBlueprint",
        "script": "AutomationScriptBlueprint",
    }
)


def get_blueprint(name: str) -> Blueprint:
    """Look up a blueprint by name, falling back to the landing archetype."""
    return BLUEPRINTS.get(name) or BLUEPRINTS[DEFAULT_BLUEPRINT]


__all__ = [
    "BLUEPRINTS",
    "BLUEPRINT_FOR_TYPE",
    "Blueprint",
    "BlueprintOutput",
    "BlueprintStructure",
    "Complexity",
    "DEFAULT_BLUEPRINT",
    "ProjectDomain",
    "ProjectIntent",
    "ProjectType",
    "Statefulness",
    "get_blueprint",
]
