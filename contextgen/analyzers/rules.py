"""Rule engine: independent derivation of the canonical project fields.

Operates on the EvidenceGraph only. Each derivation appends a reasoning line
that is kept for debugging and never reaches the public projection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from .evidence import EvidenceGraph
from .intent import IntentName

RepositoryType = Literal["frontend", "backend", "fullstack", "static"]
RuleComplexity = Literal["low", "medium", "high"]
RuleStatefulness = Literal["stateless", "stateful"]


@dataclass(frozen=True)
class RuleResult:
    repository_type: RepositoryType
    intent: IntentName
    complexity: RuleComplexity
    statefulness: RuleStatefulness
    seo_relevant: bool
    auth_required: bool
    reasoning: Tuple[str, ...] = ()


def _js(value: bool) -> str:
    return "true" if value else "false"


def determine_repository_type(evidence: EvidenceGraph) -> RepositoryType:
    if evidence.has_backend:
        return "fullstack" if evidence.has_database else "backend"
    if evidence.has_nextjs or evidence.has_react or evidence.has_vue:
        if evidence.has_static_export or (
            not evidence.has_api_routes and not evidence.has_database
        ):
            return "static"
        return "frontend"
    return "static"


def determine_intent(evidence: EvidenceGraph) -> IntentName:
    if evidence.has_checkout or evidence.has_products:
        return "CONVERT"
    if evidence.has_dashboard and evidence.has_auth:
        return "OPERATE"
    if evidence.has_seo_files and evidence.has_blog_structure:
        return "INFORM"
    return "PRESENT"


def complexity_score(evidence: EvidenceGraph) -> int:
    return (
        evidence.number_of_routes
        + evidence.number_of_integrations
        + evidence.number_of_external_services
    )


def determine_complexity(evidence: EvidenceGraph) -> RuleComplexity:
    value = complexity_score(evidence)
    if value <= 5:
        return "low"
    if value <= 10:
        return "medium"
    return "high"


def determine_statefulness(evidence: EvidenceGraph) -> RuleStatefulness:
    if evidence.has_database or evidence.has_global_state:
        return "stateful"
    return "stateless"


def apply_rules(evidence: EvidenceGraph) -> RuleResult:
    repository_type = determine_repository_type(evidence)
    intent = determine_intent(evidence)
    complexity = determine_complexity(evidence)
    statefulness = determine_statefulness(evidence)
    seo_relevant = evidence.has_head_metadata and evidence.has_open_graph
    auth_required = evidence.auth_library_detected or evidence.auth_usage_detected

    reasoning = (
        f"Repository type: {repository_type} (backend: {_js(evidence.has_backend)}, "
        f"database: {_js(evidence.has_database)}, "
        f"static_export: {_js(evidence.has_static_export)})",
        f"Intent: {intent} (checkout: {_js(evidence.has_checkout)}, "
        f"dashboard: {_js(evidence.has_dashboard)}, "
        f"seo+blog: {_js(evidence.has_seo_files and evidence.has_blog_structure)})",
        f"Complexity: {complexity} (score: {complexity_score(evidence)} = "
        f"routes: {evidence.number_of_routes} + "
        f"integrations: {evidence.number_of_integrations} + "
        f"services: {evidence.number_of_external_services})",
        f"Statefulness: {statefulness} (database: {_js(evidence.has_database)}, "
        f"global_state: {_js(evidence.has_global_state)})",
        f"SEO relevant: {_js(seo_relevant)} (head_metadata: {_js(evidence.has_head_metadata)}, "
        f"open_graph: {_js(evidence.has_open_graph)})",
        f"Auth required: {_js(auth_required)} "
        f"(auth_library: {_js(evidence.auth_library_detected)}, "
        f"auth_usage: {_js(evidence.auth_usage_detected)})",
    )

    return RuleResult(
        repository_type=repository_type,
        intent=intent,
        complexity=complexity,
        statefulness=statefulness,
        seo_relevant=seo_relevant,
        auth_required=auth_required,
        reasoning=reasoning,
    )


__all__ = [
    "RepositoryType",
    "RuleResult",
    "apply_rules",
    "complexity_score",
    "determine_complexity",
    "determine_intent",
    "determine_repository_type",
    "determine_statefulness",
]
