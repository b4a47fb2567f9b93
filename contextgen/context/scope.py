"""Scope definition: what a project is, does, does not do, and must not be assumed to do.

Every bullet is gated by a single evidence (or blueprint output) boolean. The
tables are purely additive and evaluated in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from ..analyzers.blueprints import Blueprint
from ..analyzers.evidence import EvidenceGraph
from ..analyzers.rules import RepositoryType

_Gate = Callable[[EvidenceGraph, Blueprint], bool]


@dataclass(frozen=True)
class ScopeDefinition:
    what_it_is: Tuple[str, ...]
    what_it_does: Tuple[str, ...]
    what_it_does_not_do: Tuple[str, ...]
    excluded_concepts: Tuple[str, ...]


@dataclass(frozen=True)
class ScopeRule:
    when: _Gate
    what_it_is: Tuple[str, ...] = ()
    what_it_does: Tuple[str, ...] = ()
    what_it_does_not_do: Tuple[str, ...] = ()
    excluded_concepts: Tuple[str, ...] = ()


IDENTITY_BY_REPOSITORY_TYPE: Dict[str, Tuple[str, str]] = {
    "static": ("Static website", "Client-side rendered application"),
    "frontend": ("Frontend application", "Client-side application"),
    "backend": ("Backend service", "Server-side application"),
    "fullstack": ("Full-stack application", "Client and server application"),
}

SCOPE_RULES: Tuple[ScopeRule, ...] = (
    # What it is
    ScopeRule(lambda e, b: e.has_nextjs, what_it_is=("Next.js application",)),
    ScopeRule(lambda e, b: e.has_react, what_it_is=("React-based application",)),
    ScopeRule(lambda e, b: e.has_static_export, what_it_is=("Statically exported application",)),
    ScopeRule(lambda e, b: e.has_blog_structure, what_it_is=("Content-focused website",)),
    ScopeRule(lambda e, b: e.has_seo_files, what_it_is=("SEO-optimized website",)),
    ScopeRule(lambda e, b: b.output.personal_brand, what_it_is=("Personal portfolio showcase",)),
    # What it does
    ScopeRule(
        lambda e, b: e.has_seo_files,
        what_it_does=("SEO optimization", "Search engine indexing"),
    ),
    ScopeRule(
        lambda e, b: e.has_blog_structure,
        what_it_does=("Content publishing", "Blog/article management"),
    ),
    ScopeRule(lambda e, b: e.has_dynamic_routes, what_it_does=("Dynamic routing",)),
    ScopeRule(lambda e, b: e.has_cms, what_it_does=("Content management",)),
    ScopeRule(
        lambda e, b: e.has_checkout,
        what_it_does=("E-commerce transactions", "Payment processing"),
    ),
    ScopeRule(
        lambda e, b: e.has_dashboard,
        what_it_does=("Data visualization", "User dashboard"),
    ),
    ScopeRule(
        lambda e, b: e.has_auth,
        what_it_does=("User authentication", "User management"),
    ),
    ScopeRule(lambda e, b: e.has_state_management, what_it_does=("State management",)),
    # What it does not do
    ScopeRule(
        lambda e, b: not e.has_backend,
        what_it_does_not_do=("Backend business logic", "Server-side processing"),
        excluded_concepts=("Backend APIs", "Server-side rendering (beyond static generation)"),
    ),
    ScopeRule(
        lambda e, b: not e.has_database,
        what_it_does_not_do=("Database operations", "Persistent data storage"),
        excluded_concepts=("Database queries", "Data persistence"),
    ),
    ScopeRule(
        lambda e, b: not e.has_auth,
        what_it_does_not_do=("User authentication", "User sessions", "Protected routes"),
        excluded_concepts=("Authentication flows", "User accounts", "Login/logout"),
    ),
    ScopeRule(
        lambda e, b: not e.has_dashboard,
        what_it_does_not_do=("User dashboards", "Admin panels"),
        excluded_concepts=("Dashboard UI", "Admin interfaces"),
    ),
    ScopeRule(
        lambda e, b: not e.has_checkout,
        what_it_does_not_do=("E-commerce transactions", "Payment processing"),
        excluded_concepts=("Checkout flows", "Payment systems"),
    ),
    ScopeRule(
        lambda e, b: not e.has_state_management and not e.has_database,
        what_it_does_not_do=("Persistent user sessions", "Global state management"),
    ),
    ScopeRule(
        lambda e, b: e.has_static_export,
        what_it_does_not_do=("Real-time features", "Dynamic server-side rendering"),
        excluded_concepts=("WebSockets", "Real-time updates"),
    ),
    ScopeRule(
        lambda e, b: not e.has_api_routes,
        what_it_does_not_do=("API endpoints",),
        excluded_concepts=("REST APIs", "GraphQL"),
    ),
    # Blueprint fences
    ScopeRule(
        lambda e, b: b.output.no_ui,
        what_it_does_not_do=("User interfaces",),
        excluded_concepts=("Frontend components",),
    ),
    ScopeRule(
        lambda e, b: b.output.seo_irrelevant,
        what_it_does_not_do=("SEO optimization",),
        excluded_concepts=("Metadata management",),
    ),
)

# Never assumed, whatever the evidence says.
ALWAYS_EXCLUDED: Tuple[str, ...] = (
    "Microservices architecture",
    "Serverless functions (unless explicitly detected)",
    "Background jobs (unless explicitly detected)",
    "Message queues (unless explicitly detected)",
)


def _unique(items: List[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def generate_scope_definition(
    evidence: EvidenceGraph,
    blueprint: Blueprint,
    repository_type: RepositoryType,
) -> ScopeDefinition:
    what_it_is: List[str] = list(
        IDENTITY_BY_REPOSITORY_TYPE.get(repository_type, IDENTITY_BY_REPOSITORY_TYPE["fullstack"])
    )
    what_it_does: List[str] = []
    does_not: List[str] = []
    excluded: List[str] = []

    for rule in SCOPE_RULES:
        if not rule.when(evidence, blueprint):
            continue
        what_it_is.extend(rule.what_it_is)
        what_it_does.extend(rule.what_it_does)
        does_not.extend(rule.what_it_does_not_do)
        excluded.extend(rule.excluded_concepts)

    excluded.extend(ALWAYS_EXCLUDED)

    return ScopeDefinition(
        what_it_is=tuple(what_it_is),
        what_it_does=tuple(what_it_does),
        what_it_does_not_do=tuple(does_not),
        excluded_concepts=_unique(excluded),
    )


__all__ = ["ALWAYS_EXCLUDED", "SCOPE_RULES", "ScopeDefinition", "generate_scope_definition"]
