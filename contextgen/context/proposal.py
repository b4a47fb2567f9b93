"""Proposal generator: audience, technical level and one value-proposition sentence.

Every sentence is picked from a fixed template keyed by (intent, blueprint,
evidence). Nothing here is free-form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..analyzers.blueprints import Blueprint
from ..analyzers.evidence import EvidenceGraph
from ..analyzers.rules import RuleResult
from .schema import AudienceName, Level


@dataclass(frozen=True)
class Proposal:
    audience: AudienceName
    technical_level: Level
    core_value_proposition: str


_DEVELOPER_BLUEPRINTS = ("DocumentationBlueprint", "APIServiceBlueprint")


def _audience(blueprint: Blueprint, intent: str, rules: RuleResult) -> tuple[AudienceName, Level]:
    if blueprint.name in _DEVELOPER_BLUEPRINTS:
        return "developers", "high"
    if blueprint.name == "InternalToolBlueprint":
        return "internal", "medium"
    if blueprint.name == "EcommerceBlueprint" or intent == "CONVERT":
        return "customers", "low"
    return "end-users", rules.complexity


def _portfolio_stack(evidence: EvidenceGraph) -> List[str]:
    stack: List[str] = []
    if evidence.has_nextjs:
        stack.append("Next.js")
    if evidence.has_typescript:
        stack.append("TypeScript")
    if evidence.has_react:
        stack.append("React")
    if evidence.has_tailwind:
        stack.append("Tailwind CSS")
    return stack


def _inform(evidence: EvidenceGraph, statefulness: str) -> str:
    if evidence.has_blog_structure and evidence.has_seo_files:
        return (
            f"Deliver structured, indexable content using a {statefulness} architecture, "
            "focused on discoverability, performance and clarity."
        )
    if evidence.has_cms:
        return (
            f"Provide content management and delivery through a {statefulness} system "
            "optimized for content creators and consumers."
        )
    return (
        f"Present information through a {statefulness} architecture "
        "designed for clarity and accessibility."
    )


def _present(evidence: EvidenceGraph, statefulness: str) -> str:
    if evidence.has_products and not evidence.has_checkout:
        return (
            f"Showcase products and services through a {statefulness} presentation layer "
            "focused on visual appeal and information clarity."
        )
    return (
        f"Present value proposition through a {statefulness} interface "
        "designed for immediate comprehension and engagement."
    )


def _portfolio(evidence: EvidenceGraph) -> str:
    stack = _portfolio_stack(evidence)
    using = f" using {', '.join(stack)}" if stack else ""
    kind = "frontend" if evidence.has_nextjs else "web"
    return (
        f"Position the developer as a competent {kind} professional through clear "
        f"presentation of projects, code structure{using}, modern tooling and content clarity."
    )


def _convert(evidence: EvidenceGraph, statefulness: str) -> str:
    if evidence.has_checkout:
        return (
            f"Enable e-commerce transactions through a {statefulness} platform "
            "focused on conversion, trust, and transaction completion."
        )
    return (
        f"Drive conversions through a {statefulness} system "
        "optimized for lead capture, engagement, and action completion."
    )


def _operate(evidence: EvidenceGraph, statefulness: str) -> str:
    if evidence.has_dashboard and evidence.has_auth:
        return (
            f"Operate a {statefulness} system with authenticated user workflows, "
            "data management, and interactive functionality."
        )
    if evidence.has_backend and not evidence.has_dashboard:
        return (
            f"Provide backend functionality through a {statefulness} service architecture "
            "focused on API delivery and business logic."
        )
    return (
        f"Deliver operational capabilities through a {statefulness} application "
        "designed for user interaction and system management."
    )


def _deployment_suffix(evidence: EvidenceGraph) -> str:
    if evidence.has_static_export:
        return " Deployed as static assets for maximum performance and scalability."
    if evidence.has_nextjs and evidence.has_app_router:
        return " Built with Next.js App Router for optimal performance and developer experience."
    return ""


def generate_proposal(
    evidence: EvidenceGraph,
    blueprint: Blueprint,
    intent: str,
    rules: RuleResult,
) -> Proposal:
    """Pick the proposal template for the final (upper-case) intent."""
    audience, level = _audience(blueprint, intent, rules)
    statefulness = rules.statefulness

    if intent == "INFORM":
        sentence = _inform(evidence, statefulness)
    elif intent == "PRESENT" and blueprint.name == "PortfolioBlueprint":
        audience = "developers"
        if evidence.has_nextjs and evidence.has_typescript:
            level = "high"
        elif evidence.has_react:
            level = "medium"
        else:
            level = "low"
        sentence = _portfolio(evidence)
    elif intent == "PRESENT":
        sentence = _present(evidence, statefulness)
    elif intent == "CONVERT":
        sentence = _convert(evidence, statefulness)
    else:
        sentence = _operate(evidence, statefulness)

    return Proposal(
        audience=audience,
        technical_level=level,
        core_value_proposition=sentence + _deployment_suffix(evidence),
    )


__all__ = ["Proposal", "generate_proposal"]
