from __future__ import annotations

from contextgen.analyzers.blueprints import get_blueprint
from contextgen.analyzers.evidence import EvidenceGraph
from contextgen.analyzers.rules import apply_rules
from contextgen.context.proposal import generate_proposal


def _proposal(evidence: EvidenceGraph, blueprint: str, intent: str):
    return generate_proposal(evidence, get_blueprint(blueprint), intent, apply_rules(evidence))


def test_content_site_proposal() -> None:
    evidence = EvidenceGraph(
        has_nextjs=True,
        has_app_router=True,
        has_blog_structure=True,
        has_seo_files=True,
    )

    proposal = _proposal(evidence, "ContentSiteBlueprint", "INFORM")

    assert proposal.audience == "end-users"
    assert proposal.technical_level == "low"
    assert proposal.core_value_proposition == (
        "Deliver structured, indexable content using a stateless architecture, "
        "focused on discoverability, performance and clarity. "
        "Built with Next.js App Router for optimal performance and developer experience."
    )


def test_portfolio_targets_developers() -> None:
    evidence = EvidenceGraph(has_nextjs=True, has_typescript=True, has_react=True)

    proposal = _proposal(evidence, "PortfolioBlueprint", "PRESENT")

    assert proposal.audience == "developers"
    assert proposal.technical_level == "high"
    assert proposal.core_value_proposition.startswith(
        "Position the developer as a competent frontend professional"
    )
    assert "using Next.js, TypeScript, React" in proposal.core_value_proposition


def test_react_portfolio_is_medium_level() -> None:
    proposal = _proposal(EvidenceGraph(has_react=True), "PortfolioBlueprint", "PRESENT")

    assert proposal.technical_level == "medium"
    assert "competent web professional" in proposal.core_value_proposition


def test_commerce_proposal() -> None:
    evidence = EvidenceGraph(has_checkout=True, has_static_export=True)

    proposal = _proposal(evidence, "EcommerceBlueprint", "CONVERT")

    assert proposal.audience == "customers"
    assert proposal.technical_level == "low"
    assert proposal.core_value_proposition.startswith("Enable e-commerce transactions")
    assert proposal.core_value_proposition.endswith(
        "Deployed as static assets for maximum performance and scalability."
    )


def test_developer_blueprints() -> None:
    api = _proposal(EvidenceGraph(has_backend=True), "APIServiceBlueprint", "OPERATE")
    internal = _proposal(EvidenceGraph(), "InternalToolBlueprint", "OPERATE")

    assert (api.audience, api.technical_level) == ("developers", "high")
    assert api.core_value_proposition.startswith("Provide backend functionality")
    assert (internal.audience, internal.technical_level) == ("internal", "medium")


def test_operational_proposal_mentions_authenticated_workflows() -> None:
    evidence = EvidenceGraph(has_dashboard=True, has_auth=True, has_global_state=True)

    proposal = _proposal(evidence, "SaaSAppBlueprint", "OPERATE")

    assert proposal.core_value_proposition.startswith(
        "Operate a stateful system with authenticated user workflows"
    )


def test_present_products_without_checkout() -> None:
    proposal = _proposal(EvidenceGraph(has_products=True), "LandingCROBlueprint", "PRESENT")

    assert proposal.core_value_proposition.startswith("Showcase products and services")
