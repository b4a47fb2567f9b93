from __future__ import annotations

from contextgen.analyzers.blueprints import get_blueprint
from contextgen.analyzers.evidence import EvidenceGraph
from contextgen.context.scope import ALWAYS_EXCLUDED, generate_scope_definition


def test_static_content_site_scope() -> None:
    evidence = EvidenceGraph(
        has_nextjs=True,
        has_react=True,
        has_blog_structure=True,
        has_seo_files=True,
    )

    scope = generate_scope_definition(evidence, get_blueprint("ContentSiteBlueprint"), "static")

    assert scope.what_it_is == (
        "Static website",
        "Client-side rendered application",
        "Next.js application",
        "React-based application",
        "Content-focused website",
        "SEO-optimized website",
    )
    assert scope.what_it_does == (
        "SEO optimization",
        "Search engine indexing",
        "Content publishing",
        "Blog/article management",
    )
    assert "Backend business logic" in scope.what_it_does_not_do
    assert "Payment systems" in scope.excluded_concepts
    assert "Authentication flows" in scope.excluded_concepts
    assert scope.excluded_concepts[-len(ALWAYS_EXCLUDED):] == ALWAYS_EXCLUDED
    assert len(set(scope.excluded_concepts)) == len(scope.excluded_concepts)


def test_detected_features_are_never_excluded() -> None:
    evidence = EvidenceGraph(has_checkout=True, has_auth=True, has_dashboard=True)

    scope = generate_scope_definition(evidence, get_blueprint("EcommerceBlueprint"), "static")

    assert "Payment processing" in scope.what_it_does
    assert "User authentication" in scope.what_it_does
    assert "Payment systems" not in scope.excluded_concepts
    assert "Checkout flows" not in scope.excluded_concepts
    assert "Authentication flows" not in scope.excluded_concepts
    assert "Dashboard UI" not in scope.excluded_concepts


def test_portfolio_identity() -> None:
    scope = generate_scope_definition(EvidenceGraph(), get_blueprint("PortfolioBlueprint"), "static")

    assert "Personal portfolio showcase" in scope.what_it_is


def test_blueprint_fences() -> None:
    api = generate_scope_definition(
        EvidenceGraph(has_backend=True, has_api_routes=True),
        get_blueprint("APIServiceBlueprint"),
        "backend",
    )
    saas = generate_scope_definition(EvidenceGraph(), get_blueprint("SaaSAppBlueprint"), "frontend")

    assert api.what_it_is[:2] == ("Backend service", "Server-side application")
    assert "Frontend components" in api.excluded_concepts
    assert "REST APIs" not in api.excluded_concepts
    assert "Metadata management" in saas.excluded_concepts
    assert saas.what_it_is[0] == "Frontend application"


def test_static_export_excludes_realtime() -> None:
    scope = generate_scope_definition(
        EvidenceGraph(has_static_export=True), get_blueprint("LandingCROBlueprint"), "static"
    )

    assert "Statically exported application" in scope.what_it_is
    assert "WebSockets" in scope.excluded_concepts
    assert "Real-time features" in scope.what_it_does_not_do
