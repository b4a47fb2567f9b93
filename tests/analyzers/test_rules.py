from __future__ import annotations

import pytest

from contextgen.analyzers.evidence import EvidenceGraph
from contextgen.analyzers.rules import (
    apply_rules,
    determine_complexity,
    determine_intent,
    determine_repository_type,
    determine_statefulness,
)


@pytest.mark.parametrize(
    ("evidence", "expected"),
    [
        (EvidenceGraph(has_backend=True, has_database=True), "fullstack"),
        (EvidenceGraph(has_backend=True), "backend"),
        (EvidenceGraph(has_nextjs=True, has_static_export=True, has_api_routes=True), "static"),
        (EvidenceGraph(has_nextjs=True, has_api_routes=True), "frontend"),
        (EvidenceGraph(has_react=True, has_database=True), "frontend"),
        (EvidenceGraph(has_vue=True), "static"),
        (EvidenceGraph(), "static"),
    ],
)
def test_repository_type(evidence: EvidenceGraph, expected: str) -> None:
    assert determine_repository_type(evidence) == expected


@pytest.mark.parametrize(
    ("evidence", "expected"),
    [
        (EvidenceGraph(has_checkout=True, has_dashboard=True, has_auth=True), "CONVERT"),
        (EvidenceGraph(has_products=True), "CONVERT"),
        (EvidenceGraph(has_dashboard=True, has_auth=True), "OPERATE"),
        (EvidenceGraph(has_dashboard=True), "PRESENT"),
        (EvidenceGraph(has_seo_files=True, has_blog_structure=True), "INFORM"),
        (EvidenceGraph(has_seo_files=True), "PRESENT"),
    ],
)
def test_intent_priority(evidence: EvidenceGraph, expected: str) -> None:
    assert determine_intent(evidence) == expected


@pytest.mark.parametrize(
    ("routes", "integrations", "services", "expected"),
    [(5, 0, 0, "low"), (3, 2, 1, "medium"), (10, 0, 0, "medium"), (8, 2, 1, "high")],
)
def test_complexity_thresholds(routes: int, integrations: int, services: int, expected: str) -> None:
    evidence = EvidenceGraph(
        number_of_routes=routes,
        number_of_integrations=integrations,
        number_of_external_services=services,
    )

    assert determine_complexity(evidence) == expected


def test_statefulness() -> None:
    assert determine_statefulness(EvidenceGraph()) == "stateless"
    assert determine_statefulness(EvidenceGraph(has_database=True)) == "stateful"
    assert determine_statefulness(EvidenceGraph(has_global_state=True)) == "stateful"


def test_apply_rules_derives_every_field_with_reasoning() -> None:
    evidence = EvidenceGraph(
        has_nextjs=True,
        has_head_metadata=True,
        has_open_graph=True,
        auth_usage_detected=True,
    )

    result = apply_rules(evidence)

    assert result.repository_type == "static"
    assert result.intent == "PRESENT"
    assert result.complexity == "low"
    assert result.statefulness == "stateless"
    assert result.seo_relevant is True
    assert result.auth_required is True
    assert len(result.reasoning) == 6
    assert result.reasoning[0] == (
        "Repository type: static (backend: false, database: false, static_export: false)"
    )
    assert result.reasoning[5] == "Auth required: true (auth_library: false, auth_usage: true)"


def test_seo_requires_metadata_and_open_graph() -> None:
    assert apply_rules(EvidenceGraph(has_head_metadata=True)).seo_relevant is False
